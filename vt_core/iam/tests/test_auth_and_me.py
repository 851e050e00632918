# vt_core/iam/tests/test_auth_and_me.py
import pytest
from rest_framework.test import APIClient

from vt_core.iam.models import Role

pytestmark = pytest.mark.django_db


def test_me_requires_auth(anon_client):
    res = anon_client.get("/api/me/")
    assert res.status_code == 401


def test_login_sets_http_only_cookie_and_returns_token(nurse_user, settings):
    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": "NURSE@example.com", "password": "Pass@12345"}, format="json")
    assert res.status_code == 200, res.json()

    body = res.json()
    assert body["access_token"]
    assert body["user"]["email"] == "nurse@example.com"
    assert body["user"]["role"] == Role.NURSE

    cookie_name = settings.SIMPLE_JWT["AUTH_COOKIE"]
    assert cookie_name in res.cookies
    assert res.cookies[cookie_name]["httponly"]

    # the cookie alone authenticates follow-up requests
    me = c.get("/api/v1/me/")
    assert me.status_code == 200
    assert me.json()["user"]["id"] == nurse_user.id


def test_login_unknown_email(anon_client):
    res = anon_client.post("/api/v1/auth/login/", {"email": "ghost@example.com", "password": "whatever1"}, format="json")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "user_not_found"


def test_login_wrong_password(anon_client, nurse_user):
    res = anon_client.post("/api/v1/auth/login/", {"email": "nurse@example.com", "password": "nope-nope"}, format="json")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "invalid_password"


def test_login_disabled_account(anon_client, nurse_user):
    nurse_user.is_active = False
    nurse_user.save()
    res = anon_client.post("/api/v1/auth/login/", {"email": "nurse@example.com", "password": "Pass@12345"}, format="json")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "account_disabled"


def test_stale_cookie_does_not_block_login(nurse_user, settings):
    c = APIClient()
    c.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]] = "expired-or-garbage"
    res = c.post("/api/v1/auth/login/", {"email": "nurse@example.com", "password": "Pass@12345"}, format="json")
    assert res.status_code == 200


def test_logout_clears_cookie(settings):
    c = APIClient()
    res = c.post("/api/v1/auth/logout/")
    assert res.status_code == 200
    assert res.json() == {"detail": "logged out"}
    assert res.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]].value == ""


def test_me_reports_claims_and_scope(nurse_client, nurse_user, site_north):
    res = nurse_client.get("/api/v1/me/")
    assert res.status_code == 200
    assert res.json() == {
        "user": {
            "id": nurse_user.id,
            "email": "nurse@example.com",
            "name": "Nina Nurse",
            "role": "nurse",
            "primary_site_id": site_north.id,
            "assigned_site_ids": [],
        },
        "scope": {"all_sites": False, "site_ids": [site_north.id]},
    }


def test_me_for_admin_is_unrestricted(admin_client):
    body = admin_client.get("/api/v1/me/").json()
    assert body["user"]["role"] == "admin"
    assert body["scope"] == {"all_sites": True, "site_ids": []}


def test_legacy_prefix_serves_same_api(admin_client):
    assert admin_client.get("/api/me/").status_code == 200
