# vt_core/sites/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from vt_core.common.errors import DuplicateError, InUseError, NothingToUpdateError
from vt_core.common.patch import UNSET, Patch, Unset
from vt_core.iam.scope import SiteScope
from vt_core.sites.models import Site
from vt_core.sites.selectors import site_by_id

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MSG = "A site with this name already exists."


@dataclass(frozen=True)
class SitePatch(Patch):
    name: str | Unset = UNSET
    address: str | Unset = UNSET
    city: str | Unset = UNSET
    state: str | Unset = UNSET
    zip: str | Unset = UNSET
    is_active: bool | Unset = UNSET


class SiteService:
    @staticmethod
    def _ensure_unique_name(name: str, *, exclude_id: int | None = None) -> None:
        qs = Site.objects.filter(name__iexact=name)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        if qs.exists():
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": name})

    @staticmethod
    @transaction.atomic
    def create(
        *,
        name: str,
        address: str = "",
        city: str = "",
        state: str = "",
        zip: str = "",
        is_active: bool = True,
    ) -> Site:
        name = name.strip()
        SiteService._ensure_unique_name(name)

        try:
            site = Site.objects.create(
                name=name,
                address=address or "",
                city=city or "",
                state=state or "",
                zip=zip or "",
                is_active=is_active,
            )
        except IntegrityError:
            # name uniqueness is enforced by constraint; surface readable error
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": name})

        logger.info("site.created id=%s", site.id)
        return site

    @staticmethod
    @transaction.atomic
    def update(*, scope: SiteScope, site_id: int, patch: SitePatch) -> Site:
        changes = patch.changes()
        if not changes:
            raise NothingToUpdateError()

        site = site_by_id(scope=scope, site_id=site_id)
        site = Site.objects.select_for_update().get(id=site.id)

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            SiteService._ensure_unique_name(changes["name"], exclude_id=site.id)

        for field, value in changes.items():
            setattr(site, field, value)

        try:
            site.save(update_fields=[*changes.keys(), "updated_at"])
        except IntegrityError:
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": site.name})

        logger.info("site.updated id=%s fields=%s", site.id, sorted(changes))
        return site

    @staticmethod
    @transaction.atomic
    def delete(*, scope: SiteScope, site_id: int) -> None:
        """
        Deletes the site and (cascade) its buildings.

        Blocked while any user has it as primary site or any patient belongs
        to it; in that case nothing is mutated.
        """
        site = site_by_id(scope=scope, site_id=site_id)

        users = site.primary_users.count()
        patients = site.patients.count()
        if users or patients:
            raise InUseError(
                "Site is still referenced by users or patients and cannot be deleted.",
                details={"users": users, "patients": patients},
            )

        try:
            site.delete()
        except ProtectedError as exc:
            raise InUseError(
                "Site is still referenced and cannot be deleted.",
                details={"protected": len(exc.protected_objects)},
            )

        logger.info("site.deleted id=%s", site_id)
