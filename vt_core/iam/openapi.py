# vt_core/iam/openapi.py
from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class SiteJWTScheme(OpenApiAuthenticationExtension):
    """Lets Swagger's Authorize button drive CookieOrHeaderJWTAuthentication."""

    target_class = "vt_core.iam.auth.CookieOrHeaderJWTAuthentication"
    name = "BearerOrCookieJWT"

    def get_security_definition(self, auto_schema):
        cookie = settings.SIMPLE_JWT.get("AUTH_COOKIE", "vt_access")
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": (
                "Access token from POST /auth/login/. Browsers get it as the "
                f"HttpOnly `{cookie}` cookie; other clients send `Authorization: Bearer <token>`."
            ),
        }
