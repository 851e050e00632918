# vt_core/patients/services.py
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass

from django.db import transaction

from vt_core.buildings.models import Building
from vt_core.common.errors import InvalidInputError, NotFoundError, NothingToUpdateError
from vt_core.common.patch import UNSET, Patch, Unset
from vt_core.iam.scope import SiteScope
from vt_core.patients.models import Patient
from vt_core.patients.selectors import patient_by_id
from vt_core.sites.models import Site

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatientPatch(Patch):
    first_name: str | Unset = UNSET
    last_name: str | Unset = UNSET
    birthdate: datetime.date | None | Unset = UNSET
    gender: str | Unset = UNSET
    phone_number: str | Unset = UNSET
    contact_name: str | Unset = UNSET
    contact_phone_number: str | Unset = UNSET
    insurance: str | Unset = UNSET
    is_active: bool | Unset = UNSET
    site_id: int | Unset = UNSET
    building_id: int | None | Unset = UNSET


def _visible_site(scope: SiteScope, site_id: int) -> Site:
    # a non-admin cannot place a patient on a site outside their scope
    site = Site.objects.filter(id=site_id).first() if scope.allows(site_id) else None
    if site is None:
        raise NotFoundError("Site not found.")
    return site


def _building_for_site(building_id: int | None, site: Site) -> Building | None:
    if building_id is None:
        return None
    building = Building.objects.filter(id=building_id).first()
    if building is None or building.site_id != site.id:
        raise InvalidInputError(
            "Building does not belong to the patient's site.",
            details={"building_id": building_id, "site_id": site.id},
        )
    return building


class PatientService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        scope: SiteScope,
        first_name: str,
        last_name: str,
        site_id: int,
        building_id: int | None = None,
        birthdate=None,
        gender: str = "",
        phone_number: str = "",
        contact_name: str = "",
        contact_phone_number: str = "",
        insurance: str = "",
        is_active: bool = True,
    ) -> Patient:
        site = _visible_site(scope, site_id)
        building = _building_for_site(building_id, site)

        patient = Patient.objects.create(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            birthdate=birthdate,
            gender=gender or "",
            phone_number=phone_number or "",
            contact_name=contact_name or "",
            contact_phone_number=contact_phone_number or "",
            insurance=insurance or "",
            is_active=is_active,
            site=site,
            building=building,
        )

        logger.info("patient.created id=%s site_id=%s", patient.id, site.id)
        return patient_by_id(scope=scope, patient_id=patient.id)

    @staticmethod
    @transaction.atomic
    def update(*, scope: SiteScope, patient_id: int, patch: PatientPatch) -> Patient:
        changes = patch.changes()
        if not changes:
            raise NothingToUpdateError()

        patient = patient_by_id(scope=scope, patient_id=patient_id)
        patient = Patient.objects.select_for_update().get(id=patient.id)

        site_changes = {k: changes.pop(k) for k in ("site_id", "building_id") if k in changes}

        if "site_id" in site_changes and site_changes["site_id"] != patient.site_id:
            patient.site = _visible_site(scope, site_changes["site_id"])
            # the old building belongs to the old site
            if "building_id" not in site_changes and patient.building_id is not None:
                patient.building = None

        if "building_id" in site_changes:
            patient.building = _building_for_site(site_changes["building_id"], patient.site)

        for field in ("first_name", "last_name"):
            if field in changes:
                changes[field] = changes[field].strip()

        for field, value in changes.items():
            setattr(patient, field, value)

        patient.save()

        logger.info("patient.updated id=%s fields=%s", patient.id, sorted([*changes, *site_changes]))
        return patient_by_id(scope=scope, patient_id=patient.id)

    @staticmethod
    @transaction.atomic
    def delete(*, scope: SiteScope, patient_id: int) -> None:
        """Hard delete; activities and medical records go with the patient."""
        patient = patient_by_id(scope=scope, patient_id=patient_id)
        Patient.objects.filter(id=patient.id).delete()
        logger.info("patient.deleted id=%s", patient_id)
