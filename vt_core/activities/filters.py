# vt_core/activities/filters.py
from __future__ import annotations

import django_filters
from django.db.models import Q

from vt_core.activities.models import Activity
from vt_core.common.filters import BOOL_CHOICES, ChoiceOrAllFilter, IdOrAllFilter, TextOrAllFilter


class ActivityFilter(django_filters.FilterSet):
    """Expects the `patient_name` annotation (see activities.selectors)."""
    search = django_filters.CharFilter(method="filter_search")
    activity_type = TextOrAllFilter(field_name="activity_type", lookup_expr="iexact")
    site = IdOrAllFilter(field_name="patient__site_id")
    building = IdOrAllFilter(field_name="patient__building_id")
    pharm_flag = ChoiceOrAllFilter(choices=BOOL_CHOICES, method="filter_pharm_flag")
    patient = IdOrAllFilter(field_name="patient_id")

    class Meta:
        model = Activity
        fields = []

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        cond = (
            Q(patient_name__icontains=term)
            | Q(activity_type__icontains=term)
            | Q(notes__icontains=term)
        )
        if term.isdigit():
            cond |= Q(id=int(term))
        return queryset.filter(cond)

    def filter_pharm_flag(self, queryset, name, value):
        return queryset.filter(pharm_flag=(value == "true"))
