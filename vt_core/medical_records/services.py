# vt_core/medical_records/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from vt_core.common.errors import NothingToUpdateError
from vt_core.common.patch import UNSET, Patch, Unset
from vt_core.iam.scope import SiteScope
from vt_core.medical_records.models import FLAG_FIELDS, MedicalRecord
from vt_core.medical_records.selectors import medical_record_by_id
from vt_core.patients.selectors import patient_by_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MedicalRecordPatch(Patch):
    patient_id: int | Unset = UNSET
    records_reviewed: bool | Unset = UNSET
    bp_at_goal: bool | Unset = UNSET
    hospital_visit_since_last_review: bool | Unset = UNSET
    a1c_at_goal: bool | Unset = UNSET
    benzodiazepines: bool | Unset = UNSET
    antipsychotics: bool | Unset = UNSET
    opioids: bool | Unset = UNSET
    fall_since_last_visit: bool | Unset = UNSET


class MedicalRecordService:
    @staticmethod
    @transaction.atomic
    def create(*, scope: SiteScope, patient_id: int, **flags) -> MedicalRecord:
        patient = patient_by_id(scope=scope, patient_id=patient_id)
        record = MedicalRecord.objects.create(
            patient=patient,
            **{name: bool(flags.get(name, False)) for name in FLAG_FIELDS},
        )
        logger.info("medical_record.created id=%s patient_id=%s", record.id, patient.id)
        return medical_record_by_id(scope=scope, record_id=record.id)

    @staticmethod
    @transaction.atomic
    def update(*, scope: SiteScope, record_id: int, patch: MedicalRecordPatch) -> MedicalRecord:
        changes = patch.changes()
        if not changes:
            raise NothingToUpdateError()

        record = medical_record_by_id(scope=scope, record_id=record_id)
        record = MedicalRecord.objects.select_for_update().get(id=record.id)

        if "patient_id" in changes:
            record.patient = patient_by_id(scope=scope, patient_id=changes.pop("patient_id"))

        for field, value in changes.items():
            setattr(record, field, value)
        record.save()

        logger.info("medical_record.updated id=%s fields=%s", record.id, sorted(patch.changes()))
        return medical_record_by_id(scope=scope, record_id=record.id)

    @staticmethod
    @transaction.atomic
    def delete(*, scope: SiteScope, record_id: int) -> None:
        record = medical_record_by_id(scope=scope, record_id=record_id)
        MedicalRecord.objects.filter(id=record.id).delete()
        logger.info("medical_record.deleted id=%s", record_id)
