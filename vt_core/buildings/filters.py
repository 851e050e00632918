# vt_core/buildings/filters.py
from __future__ import annotations

import django_filters

from vt_core.buildings.models import Building
from vt_core.common.filters import STATUS_CHOICES, ActiveStatusFilterMixin, ChoiceOrAllFilter, IdOrAllFilter


class BuildingFilter(ActiveStatusFilterMixin, django_filters.FilterSet):
    search = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    site = IdOrAllFilter(field_name="site_id")
    status = ChoiceOrAllFilter(choices=STATUS_CHOICES, method="filter_status")

    class Meta:
        model = Building
        fields = []
