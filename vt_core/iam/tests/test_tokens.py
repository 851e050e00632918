# vt_core/iam/tests/test_tokens.py
import pytest
from django.contrib.auth import get_user_model

from vt_core.iam.models import Role
from vt_core.iam.tokens import SiteAccessToken, SiteClaimsUser

pytestmark = pytest.mark.django_db


def test_token_carries_site_claims(make_user, site_north, site_south):
    user = make_user(Role.PHARMACIST, primary_site=site_north, assigned_sites=[site_south], first_name="Paula")
    token = SiteAccessToken.for_user(user)

    assert int(token["user_id"]) == user.id
    assert token["role"] == "pharmacist"
    assert token["primary_site_id"] == site_north.id
    assert token["assigned_site_ids"] == [site_south.id]

    claims_user = SiteClaimsUser(token)
    assert claims_user.id == user.id
    assert claims_user.email == user.email
    assert claims_user.assigned_site_ids == (site_south.id,)
    assert claims_user.is_authenticated


def test_superuser_token_is_admin():
    su = get_user_model().objects.create_superuser(username="root", email="root@example.com", password="x")
    token = SiteAccessToken.for_user(su)
    assert token["role"] == "admin"
    assert token["primary_site_id"] is None
    assert token["assigned_site_ids"] == []
