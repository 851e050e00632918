# vt_core/patients/selectors.py
from __future__ import annotations

from typing import Any, Mapping

from django.db.models import CharField, QuerySet, Value
from django.db.models.functions import Concat

from vt_core.common.errors import NotFoundError
from vt_core.common.filters import filter_queryset
from vt_core.common.ordering import apply_ordering
from vt_core.iam.scope import SiteScope
from vt_core.patients.filters import PatientFilter
from vt_core.patients.models import Patient
from vt_core.sites.selectors import site_by_id

PATIENT_ORDERING = {
    "name": "full_name",
    "first_name": "first_name",
    "last_name": "last_name",
    "birthdate": "birthdate",
    "site_name": "site__name",
    "building_name": "building__name",
    "is_active": "is_active",
    "created_at": "created_at",
    "updated_at": "updated_at",
}


def _base_qs(scope: SiteScope) -> QuerySet[Patient]:
    qs = Patient.objects.select_related("site", "building").annotate(
        full_name=Concat("first_name", Value(" "), "last_name", output_field=CharField())
    )
    return scope.filter(qs, "site_id")


def patients_for_scope(*, scope: SiteScope, params: Mapping[str, Any] | None = None) -> QuerySet[Patient]:
    params = params or {}
    qs = filter_queryset(PatientFilter, params, _base_qs(scope))
    return apply_ordering(qs, params.get("ordering"), PATIENT_ORDERING)


def patient_by_id(*, scope: SiteScope, patient_id: int) -> Patient:
    """Absent and out-of-scope are the same answer: NotFoundError."""
    patient = _base_qs(scope).filter(id=patient_id).first()
    if patient is None:
        raise NotFoundError("Patient not found.")
    return patient


def patients_for_site(*, scope: SiteScope, site_id: int) -> QuerySet[Patient]:
    site = site_by_id(scope=scope, site_id=site_id)
    return _base_qs(scope).filter(site=site).order_by("last_name", "first_name", "id")


def visible_patient_ids(*, scope: SiteScope, patient_ids) -> list[int]:
    return list(scope.filter(Patient.objects.filter(id__in=patient_ids), "site_id").values_list("id", flat=True))
