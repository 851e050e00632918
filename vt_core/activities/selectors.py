# vt_core/activities/selectors.py
from __future__ import annotations

from typing import Any, Iterable, Mapping

from django.db.models import CharField, QuerySet, Value
from django.db.models.functions import Concat

from vt_core.activities.filters import ActivityFilter
from vt_core.activities.models import Activity
from vt_core.common.errors import NotFoundError
from vt_core.common.filters import filter_queryset
from vt_core.common.ordering import apply_ordering
from vt_core.iam.scope import SiteScope
from vt_core.patients.selectors import patient_by_id, visible_patient_ids

ACTIVITY_ORDERING = {
    "patient_name": "patient_name",
    "activity_type": "activity_type",
    "site_name": "patient__site__name",
    "pharm_flag": "pharm_flag",
    "service_datetime": "service_datetime",
    "duration_minutes": "duration_minutes",
    "created_at": "created_at",
}
TIMELINE_ORDERING = ("-service_datetime", "-id")


def _base_qs(scope: SiteScope) -> QuerySet[Activity]:
    qs = Activity.objects.select_related("patient", "patient__site", "patient__building", "user").annotate(
        patient_name=Concat("patient__first_name", Value(" "), "patient__last_name", output_field=CharField())
    )
    return scope.filter(qs, "patient__site_id")


def activities_for_scope(*, scope: SiteScope, params: Mapping[str, Any] | None = None) -> QuerySet[Activity]:
    params = params or {}
    qs = filter_queryset(ActivityFilter, params, _base_qs(scope))
    return apply_ordering(qs, params.get("ordering"), ACTIVITY_ORDERING)


def activity_by_id(*, scope: SiteScope, activity_id: int) -> Activity:
    activity = _base_qs(scope).filter(id=activity_id).first()
    if activity is None:
        raise NotFoundError("Activity not found.")
    return activity


def activities_for_patient(*, scope: SiteScope, patient_id: int) -> QuerySet[Activity]:
    patient = patient_by_id(scope=scope, patient_id=patient_id)
    return _base_qs(scope).filter(patient=patient).order_by(*TIMELINE_ORDERING)


def activities_for_patients(*, scope: SiteScope, patient_ids: Iterable[int]) -> dict[int, list[Activity]]:
    """
    Activities grouped by patient for every requested patient in scope.

    Patients outside scope (or absent) are left out of the result; visible
    patients without activities map to an empty list.
    """
    visible = visible_patient_ids(scope=scope, patient_ids=set(patient_ids))
    grouped: dict[int, list[Activity]] = {pid: [] for pid in sorted(visible)}
    if not grouped:
        return grouped

    for activity in _base_qs(scope).filter(patient_id__in=grouped.keys()).order_by(*TIMELINE_ORDERING):
        grouped[activity.patient_id].append(activity)
    return grouped
