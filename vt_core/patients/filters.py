# vt_core/patients/filters.py
from __future__ import annotations

import django_filters
from django.db.models import Q

from vt_core.common.filters import STATUS_CHOICES, ActiveStatusFilterMixin, ChoiceOrAllFilter, IdOrAllFilter
from vt_core.patients.models import Patient


class PatientFilter(ActiveStatusFilterMixin, django_filters.FilterSet):
    """
    Expects the queryset to carry the `full_name` annotation
    (see patients.selectors).
    """
    search = django_filters.CharFilter(method="filter_search")
    status = ChoiceOrAllFilter(choices=STATUS_CHOICES, method="filter_status")
    site = IdOrAllFilter(field_name="site_id")
    building = IdOrAllFilter(field_name="building_id")

    class Meta:
        model = Patient
        fields = []

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        cond = Q(first_name__icontains=term) | Q(last_name__icontains=term) | Q(full_name__icontains=term)
        if term.isdigit():
            cond |= Q(id=int(term))
        return queryset.filter(cond)
