# vt_core/tests/helpers.py
from rest_framework.test import APIClient

from vt_core.iam.tokens import SiteAccessToken


def bearer(user):
    """Authorization header carrying a real access token for `user`."""
    return {"HTTP_AUTHORIZATION": f"Bearer {SiteAccessToken.for_user(user)}"}


def client_for(user) -> APIClient:
    """
    APIClient authenticated with a real token, so CookieOrHeaderJWTAuthentication
    and the claim-based scope run exactly as in production.
    """
    c = APIClient()
    c.credentials(**bearer(user))
    return c
