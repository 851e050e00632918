# vt_core/buildings/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction

from vt_core.buildings.models import Building
from vt_core.buildings.selectors import building_by_id
from vt_core.common.errors import DuplicateError, InUseError, InvalidInputError, NothingToUpdateError
from vt_core.common.patch import UNSET, Patch, Unset
from vt_core.iam.scope import SiteScope
from vt_core.sites.models import Site

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MSG = "A building with this name already exists at this site."


@dataclass(frozen=True)
class BuildingPatch(Patch):
    name: str | Unset = UNSET
    site_id: int | Unset = UNSET
    is_active: bool | Unset = UNSET


def _site_in_scope(scope: SiteScope, site_id: int) -> Site:
    site = scope.filter(Site.objects.all(), "id").filter(id=site_id).first()
    if site is None:
        raise InvalidInputError("Site not found.", details={"site_id": "Site not found."})
    return site


class BuildingService:
    @staticmethod
    @transaction.atomic
    def create(*, scope: SiteScope, site_id: int, name: str, is_active: bool = True) -> Building:
        site = _site_in_scope(scope, site_id)
        name = name.strip()

        if Building.objects.filter(site=site, name__iexact=name).exists():
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": name, "site_id": site.id})

        try:
            building = Building.objects.create(site=site, name=name, is_active=is_active)
        except IntegrityError:
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": name, "site_id": site.id})

        logger.info("building.created id=%s site_id=%s", building.id, site.id)
        return building

    @staticmethod
    @transaction.atomic
    def update(*, scope: SiteScope, building_id: int, patch: BuildingPatch) -> Building:
        changes = patch.changes()
        if not changes:
            raise NothingToUpdateError()

        building = building_by_id(scope=scope, building_id=building_id)
        building = Building.objects.select_for_update().select_related("site").get(id=building.id)

        if "site_id" in changes and changes["site_id"] != building.site_id:
            site = _site_in_scope(scope, changes["site_id"])
            # patients reference the building and must stay on the same site
            if building.patients.exists():
                raise InUseError(
                    "Building has patients and cannot be moved to another site.",
                    details={"patients": building.patients.count()},
                )
            building.site = site

        if "name" in changes:
            changes["name"] = changes["name"].strip()
            building.name = changes["name"]

        if "is_active" in changes:
            building.is_active = changes["is_active"]

        clash = Building.objects.filter(site_id=building.site_id, name__iexact=building.name).exclude(id=building.id)
        if clash.exists():
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": building.name, "site_id": building.site_id})

        try:
            building.save()
        except IntegrityError:
            raise DuplicateError(DUPLICATE_NAME_MSG, details={"name": building.name, "site_id": building.site_id})

        logger.info("building.updated id=%s fields=%s", building.id, sorted(changes))
        return building

    @staticmethod
    @transaction.atomic
    def delete(*, scope: SiteScope, building_id: int) -> None:
        """Deletes the building; patients in it keep their site and lose the building."""
        building = building_by_id(scope=scope, building_id=building_id)
        building.delete()
        logger.info("building.deleted id=%s", building_id)
