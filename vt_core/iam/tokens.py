# vt_core/iam/tokens.py
from __future__ import annotations

from django.utils.functional import cached_property
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from vt_core.common.permissions import ROLE_ADMIN


class SiteAccessToken(AccessToken):
    """
    Access token carrying the identity snapshot the API needs per request:
    email, display name, role and site assignment.

    Claims are a snapshot taken at login; role or site changes apply on the
    next login (or when the token expires).
    """

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)

        profile = getattr(user, "vt_profile", None)
        if getattr(user, "is_superuser", False):
            role = ROLE_ADMIN
        else:
            role = profile.role if profile is not None else ""

        token["email"] = user.email
        token["name"] = user.get_full_name()
        token["role"] = role
        token["primary_site_id"] = profile.primary_site_id if profile is not None else None
        token["assigned_site_ids"] = (
            sorted(profile.assigned_sites.values_list("id", flat=True)) if profile is not None else []
        )
        return token


class SiteClaimsUser(TokenUser):
    """
    Stateless request.user built from a validated SiteAccessToken
    (SIMPLE_JWT["TOKEN_USER_CLASS"]). No database hit per request.
    """

    @cached_property
    def id(self):
        return int(self.token[api_settings.USER_ID_CLAIM])

    @cached_property
    def pk(self):
        return self.id

    @cached_property
    def email(self) -> str:
        return self.token.get("email", "") or ""

    @cached_property
    def name(self) -> str:
        return self.token.get("name", "") or ""

    @cached_property
    def role(self) -> str:
        return self.token.get("role", "") or ""

    @cached_property
    def primary_site_id(self) -> int | None:
        value = self.token.get("primary_site_id")
        return int(value) if value is not None else None

    @cached_property
    def assigned_site_ids(self) -> tuple[int, ...]:
        return tuple(int(v) for v in self.token.get("assigned_site_ids") or ())

    def __str__(self) -> str:
        return f"SiteClaimsUser {self.id} ({self.email})"
