# vt_core/iam/services/users.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from vt_core.common.errors import DuplicateError, InvalidInputError, NothingToUpdateError
from vt_core.common.patch import UNSET, Patch, Unset
from vt_core.iam.models import Role, UserProfile
from vt_core.iam.scope import SiteScope
from vt_core.iam.selectors import user_by_id
from vt_core.sites.models import Site

logger = logging.getLogger(__name__)

User = get_user_model()

DUPLICATE_EMAIL_MSG = "An account with this email already exists. Please use a different email."


@dataclass(frozen=True)
class UserPatch(Patch):
    email: str | Unset = UNSET
    password: str | Unset = UNSET
    first_name: str | Unset = UNSET
    last_name: str | Unset = UNSET
    role: str | Unset = UNSET
    primary_site_id: int | None | Unset = UNSET
    assigned_site_ids: list[int] | Unset = UNSET
    is_active: bool | Unset = UNSET


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _ensure_email_free(email: str, *, exclude_user_id: int | None = None) -> None:
    qs = User.objects.filter(email__iexact=email) | User.objects.filter(username__iexact=email)
    if exclude_user_id is not None:
        qs = qs.exclude(id=exclude_user_id)
    if qs.exists():
        raise DuplicateError(DUPLICATE_EMAIL_MSG, details={"email": email})


def _load_sites(site_ids: Iterable[int], field: str) -> list[Site]:
    wanted = {int(s) for s in site_ids}
    sites = list(Site.objects.filter(id__in=wanted))
    missing = wanted - {s.id for s in sites}
    if missing:
        raise InvalidInputError("Unknown site id(s).", details={field: sorted(missing)})
    return sites


def _require_primary_site(role: str, primary_site_id: int | None) -> None:
    if role != Role.ADMIN and primary_site_id is None:
        raise InvalidInputError(
            "Non-admin users must have a primary site.",
            details={"primary_site_id": "This field is required for non-admin roles."},
        )


class UserService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: str,
        primary_site_id: int | None = None,
        assigned_site_ids: Iterable[int] = (),
        is_active: bool = True,
    ):
        email = _normalize_email(email)
        _ensure_email_free(email)
        _require_primary_site(role, primary_site_id)

        primary_site = _load_sites([primary_site_id], "primary_site_id")[0] if primary_site_id is not None else None
        assigned = _load_sites(assigned_site_ids or (), "assigned_site_ids")

        try:
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                is_active=is_active,
            )
        except IntegrityError:
            raise DuplicateError(DUPLICATE_EMAIL_MSG, details={"email": email})

        profile = UserProfile.objects.create(user=user, role=role, primary_site=primary_site)
        profile.assigned_sites.set(assigned)

        logger.info("user.created id=%s role=%s", user.id, role)
        return user

    @staticmethod
    @transaction.atomic
    def update(*, scope: SiteScope, user_id: int, patch: UserPatch):
        changes = patch.changes()
        if not changes:
            raise NothingToUpdateError()

        user = user_by_id(scope=scope, user_id=user_id)
        user = User.objects.select_for_update().get(id=user.id)
        profile = UserProfile.objects.select_for_update().get(user=user)

        if "email" in changes:
            email = _normalize_email(changes["email"])
            _ensure_email_free(email, exclude_user_id=user.id)
            user.email = email
            user.username = email

        if "password" in changes:
            user.set_password(changes["password"])

        for field in ("first_name", "last_name"):
            if field in changes:
                setattr(user, field, changes[field].strip())

        if "is_active" in changes:
            user.is_active = changes["is_active"]

        if "role" in changes:
            profile.role = changes["role"]

        if "primary_site_id" in changes:
            site_id = changes["primary_site_id"]
            profile.primary_site = _load_sites([site_id], "primary_site_id")[0] if site_id is not None else None

        _require_primary_site(profile.role, profile.primary_site_id)

        try:
            user.save()
        except IntegrityError:
            raise DuplicateError(DUPLICATE_EMAIL_MSG, details={"email": user.email})
        profile.save()

        if "assigned_site_ids" in changes:
            profile.assigned_sites.set(_load_sites(changes["assigned_site_ids"] or (), "assigned_site_ids"))

        # password is never logged, only the fact that it changed
        logger.info("user.updated id=%s fields=%s", user.id, sorted(changes))
        return user_by_id(scope=scope, user_id=user.id)

    @staticmethod
    @transaction.atomic
    def delete(*, scope: SiteScope, user_id: int, actor_user_id: int | None = None) -> None:
        """Hard delete. Activities recorded by the user are kept with user=NULL."""
        if actor_user_id is not None and int(actor_user_id) == int(user_id):
            raise InvalidInputError("You cannot delete your own account.")

        user = user_by_id(scope=scope, user_id=user_id)
        User.objects.filter(id=user.id).delete()
        logger.info("user.deleted id=%s", user_id)
