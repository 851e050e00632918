# vt_core/medical_records/selectors.py
from __future__ import annotations

from typing import Any, Mapping

from django.db.models import QuerySet

from vt_core.common.errors import NotFoundError
from vt_core.common.filters import filter_queryset
from vt_core.common.ordering import apply_ordering
from vt_core.iam.scope import SiteScope
from vt_core.medical_records.filters import MedicalRecordFilter
from vt_core.medical_records.models import MedicalRecord
from vt_core.patients.selectors import patient_by_id

MEDICAL_RECORD_ORDERING = {
    "patient_name": "patient__last_name",
    "created_at": "created_at",
    "updated_at": "updated_at",
}
NEWEST_FIRST = ("-created_at", "-id")


def _base_qs(scope: SiteScope) -> QuerySet[MedicalRecord]:
    qs = MedicalRecord.objects.select_related("patient", "patient__site")
    return scope.filter(qs, "patient__site_id")


def medical_records_for_scope(*, scope: SiteScope, params: Mapping[str, Any] | None = None) -> QuerySet[MedicalRecord]:
    params = params or {}
    qs = filter_queryset(MedicalRecordFilter, params, _base_qs(scope))
    return apply_ordering(qs, params.get("ordering"), MEDICAL_RECORD_ORDERING)


def medical_record_by_id(*, scope: SiteScope, record_id: int) -> MedicalRecord:
    record = _base_qs(scope).filter(id=record_id).first()
    if record is None:
        raise NotFoundError("Medical record not found.")
    return record


def medical_records_for_patient(*, scope: SiteScope, patient_id: int) -> QuerySet[MedicalRecord]:
    patient = patient_by_id(scope=scope, patient_id=patient_id)
    return _base_qs(scope).filter(patient=patient).order_by(*NEWEST_FIRST)


def latest_medical_record(*, scope: SiteScope, patient_id: int) -> MedicalRecord:
    """Newest record by created_at (id breaks ties); 404 when the patient has none."""
    record = medical_records_for_patient(scope=scope, patient_id=patient_id).first()
    if record is None:
        raise NotFoundError("No medical record for this patient.")
    return record
