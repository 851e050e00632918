# vt_core/iam/filters.py
from __future__ import annotations

import django_filters
from django.contrib.auth import get_user_model
from django.db.models import Q

from vt_core.common.filters import ChoiceOrAllFilter, IdOrAllFilter
from vt_core.iam.models import Role


class UserFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    role = ChoiceOrAllFilter(choices=Role.choices, field_name="vt_profile__role")
    site = IdOrAllFilter(method="filter_site")

    class Meta:
        model = get_user_model()
        fields = []

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        cond = Q(full_name__icontains=term) | Q(email__icontains=term)
        if term.isdigit():
            cond |= Q(id=int(term))
        return queryset.filter(cond)

    def filter_site(self, queryset, name, value):
        # primary OR assigned
        return queryset.filter(
            Q(vt_profile__primary_site_id=value) | Q(vt_profile__assigned_sites__id=value)
        ).distinct()
