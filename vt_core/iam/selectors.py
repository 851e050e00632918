# vt_core/iam/selectors.py
from __future__ import annotations

from typing import Any, Mapping

from django.contrib.auth import get_user_model
from django.db.models import CharField, QuerySet, Value
from django.db.models.functions import Concat

from vt_core.common.errors import NotFoundError
from vt_core.common.filters import filter_queryset
from vt_core.common.ordering import apply_ordering
from vt_core.iam.filters import UserFilter
from vt_core.iam.scope import SiteScope
from vt_core.sites.selectors import site_by_id

User = get_user_model()

USER_ORDERING = {
    "name": "full_name",
    "email": "email",
    "role": "vt_profile__role",
    "primary_site": "vt_profile__primary_site__name",
    "created_at": "vt_profile__created_at",
}
USER_DEFAULT_ORDERING = ("-vt_profile__created_at", "-id")

# A user is visible when either their primary site or one of their assigned sites is in scope.
USER_SITE_FIELDS = ("vt_profile__primary_site_id", "vt_profile__assigned_sites__id")


def _base_qs() -> QuerySet:
    return (
        User.objects.filter(vt_profile__isnull=False)
        .select_related("vt_profile", "vt_profile__primary_site")
        .prefetch_related("vt_profile__assigned_sites")
        .annotate(full_name=Concat("first_name", Value(" "), "last_name", output_field=CharField()))
    )


def users_for_scope(*, scope: SiteScope, params: Mapping[str, Any] | None = None) -> QuerySet:
    params = params or {}
    qs = scope.filter(_base_qs(), *USER_SITE_FIELDS)
    qs = filter_queryset(UserFilter, params, qs)
    return apply_ordering(qs, params.get("ordering"), USER_ORDERING, default=USER_DEFAULT_ORDERING)


def user_by_id(*, scope: SiteScope, user_id: int):
    user = scope.filter(_base_qs(), *USER_SITE_FIELDS).filter(id=user_id).first()
    if user is None:
        raise NotFoundError("User not found.")
    return user


def users_for_site(*, scope: SiteScope, site_id: int) -> QuerySet:
    """Users whose primary site is `site_id` or who are assigned to it."""
    site = site_by_id(scope=scope, site_id=site_id)
    return filter_queryset(UserFilter, {"site": site.id}, _base_qs()).order_by("first_name", "last_name", "id")


def user_by_email(email: str):
    return User.objects.filter(email__iexact=(email or "").strip()).select_related("vt_profile").first()
