# vt_core/sites/filters.py
from __future__ import annotations

import django_filters
from django.db.models import Q

from vt_core.common.filters import STATUS_CHOICES, ActiveStatusFilterMixin, ChoiceOrAllFilter
from vt_core.sites.models import Site


class SiteFilter(ActiveStatusFilterMixin, django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    status = ChoiceOrAllFilter(choices=STATUS_CHOICES, method="filter_status")

    class Meta:
        model = Site
        fields = []

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(Q(name__icontains=term) | Q(city__icontains=term))
