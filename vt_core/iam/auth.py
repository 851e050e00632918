# vt_core/iam/auth.py

from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication


class CookieOrHeaderJWTAuthentication(JWTStatelessUserAuthentication):
    """
    Authenticate using:
      1) HttpOnly cookie containing the access token (browser clients)
      2) Authorization: Bearer <access> (API clients)

    A credential that is present but invalid (expired, bad signature,
    malformed) is always a 401; it never degrades to anonymous.

    The resulting request.user is a SiteClaimsUser built from the token
    claims, so no user row is loaded per request.
    """

    def authenticate(self, request):
        # 1) Prefer cookie
        cookie_name = settings.SIMPLE_JWT.get("AUTH_COOKIE", "vt_access")
        raw_token = request.COOKIES.get(cookie_name)
        if raw_token:
            validated_token = self.get_validated_token(raw_token)
            return self.get_user(validated_token), validated_token

        # 2) Authorization header
        return super().authenticate(request)
