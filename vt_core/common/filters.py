# vt_core/common/filters.py
from __future__ import annotations

from typing import Mapping

import django_filters
from django import forms
from django.db.models import QuerySet

from vt_core.common.errors import InvalidInputError

# Query value meaning "do not filter on this field".
ALL = "all"

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
STATUS_CHOICES = ((STATUS_ACTIVE, "Active"), (STATUS_INACTIVE, "Inactive"))

BOOL_CHOICES = (("true", "true"), ("false", "false"))


def _is_all(value) -> bool:
    return isinstance(value, str) and value.strip().lower() == ALL


class IdOrAllField(forms.IntegerField):
    def to_python(self, value):
        if _is_all(value):
            return None
        return super().to_python(value)


class ChoiceOrAllField(forms.ChoiceField):
    def to_python(self, value):
        if _is_all(value):
            return ""
        return super().to_python(value).strip().lower()


class TextOrAllField(forms.CharField):
    def to_python(self, value):
        if _is_all(value):
            return ""
        return super().to_python(value)


class IdOrAllFilter(django_filters.Filter):
    """Exact match on an integer id; `all` or empty disables the filter, garbage is a 400."""
    field_class = IdOrAllField


class ChoiceOrAllFilter(django_filters.Filter):
    field_class = ChoiceOrAllField


class TextOrAllFilter(django_filters.Filter):
    field_class = TextOrAllField


class ActiveStatusFilterMixin:
    def filter_status(self, queryset, name, value):
        return queryset.filter(is_active=(value == STATUS_ACTIVE))


def filter_queryset(filterset_class: type[django_filters.FilterSet], params: Mapping | None, queryset: QuerySet) -> QuerySet:
    """
    Run a FilterSet over `queryset`; invalid structured values become a 400
    carrying the per-field form errors.
    """
    fs = filterset_class(data=params or {}, queryset=queryset)
    if not fs.is_valid():
        details = {field: [str(m) for m in messages] for field, messages in fs.errors.items()}
        raise InvalidInputError("Invalid filter parameters.", details=details)
    return fs.qs
