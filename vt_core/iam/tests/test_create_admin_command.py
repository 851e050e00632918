# vt_core/iam/tests/test_create_admin_command.py
import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from vt_core.iam.models import Role

pytestmark = pytest.mark.django_db


def test_create_admin_is_idempotent():
    call_command("create_admin", email="Boss@Example.com", password="Adm1n-pass")
    call_command("create_admin", email="boss@example.com", password="ignored-pass")

    users = get_user_model().objects.filter(email="boss@example.com")
    assert users.count() == 1

    user = users.get()
    assert user.vt_profile.role == Role.ADMIN
    assert user.check_password("Adm1n-pass")


def test_create_admin_promotes_existing_user(nurse_user):
    call_command("create_admin", email="nurse@example.com", password="whatever-1")

    nurse_user.vt_profile.refresh_from_db()
    assert nurse_user.vt_profile.role == Role.ADMIN
