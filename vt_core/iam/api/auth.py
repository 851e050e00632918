# vt_core/iam/api/auth.py
from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from vt_core.iam.api.serializers import (
    DetailResponseSerializer,
    LoginRequestSerializer,
    LoginResponseSerializer,
    UserSerializer,
)
from vt_core.iam.services.identity import IdentityService


def _cookie_options() -> dict:
    """Cookie name and attributes, all driven by SIMPLE_JWT."""
    cfg = settings.SIMPLE_JWT
    lifetime = cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(days=1))
    if isinstance(lifetime, timedelta):
        lifetime = lifetime.total_seconds()
    return {
        "key": cfg.get("AUTH_COOKIE", "vt_access"),
        "max_age": int(lifetime),
        "httponly": bool(cfg.get("AUTH_COOKIE_HTTP_ONLY", True)),
        "secure": bool(cfg.get("AUTH_COOKIE_SECURE", False)),
        "samesite": cfg.get("AUTH_COOKIE_SAMESITE", "Lax"),
        "path": "/",
    }


def _set_auth_cookie(response: Response, *, access: str) -> None:
    response.set_cookie(value=access, **_cookie_options())


def _clear_auth_cookie(response: Response) -> None:
    opts = _cookie_options()
    response.delete_cookie(opts["key"], path=opts["path"], samesite=opts["samesite"])


class LoginView(APIView):
    # A stale cookie must not block a fresh login.
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = IdentityService.authenticate(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )
        access = str(IdentityService.issue_access_token(user))

        res = Response(
            {"user": UserSerializer(user).data, "access_token": access},
            status=status.HTTP_200_OK,
        )
        _set_auth_cookie(res, access=access)
        return res


class LogoutView(APIView):
    # Clearing the cookie must work even when the token already expired.
    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        request=None,
        responses={200: DetailResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        res = Response({"detail": "logged out"}, status=status.HTTP_200_OK)
        _clear_auth_cookie(res)
        return res
