# vt_core/medical_records/filters.py
from __future__ import annotations

import django_filters

from vt_core.common.filters import IdOrAllFilter
from vt_core.medical_records.models import MedicalRecord


class MedicalRecordFilter(django_filters.FilterSet):
    patient = IdOrAllFilter(field_name="patient_id")
    site = IdOrAllFilter(field_name="patient__site_id")

    class Meta:
        model = MedicalRecord
        fields = []
