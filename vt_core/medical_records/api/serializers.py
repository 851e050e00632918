# vt_core/medical_records/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.medical_records.models import FLAG_FIELDS, MedicalRecord


class MedicalRecordSerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    patient_name = serializers.CharField(source="patient.display_name", read_only=True)
    site_id = serializers.IntegerField(source="patient.site_id", read_only=True)

    class Meta:
        model = MedicalRecord
        fields = ["id", "patient_id", "patient_name", "site_id", *FLAG_FIELDS, "created_at", "updated_at"]
        read_only_fields = fields


class MedicalRecordCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1)
    records_reviewed = serializers.BooleanField(required=False, default=False)
    bp_at_goal = serializers.BooleanField(required=False, default=False)
    hospital_visit_since_last_review = serializers.BooleanField(required=False, default=False)
    a1c_at_goal = serializers.BooleanField(required=False, default=False)
    benzodiazepines = serializers.BooleanField(required=False, default=False)
    antipsychotics = serializers.BooleanField(required=False, default=False)
    opioids = serializers.BooleanField(required=False, default=False)
    fall_since_last_visit = serializers.BooleanField(required=False, default=False)


class MedicalRecordUpdateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1, required=False)
    records_reviewed = serializers.BooleanField(required=False)
    bp_at_goal = serializers.BooleanField(required=False)
    hospital_visit_since_last_review = serializers.BooleanField(required=False)
    a1c_at_goal = serializers.BooleanField(required=False)
    benzodiazepines = serializers.BooleanField(required=False)
    antipsychotics = serializers.BooleanField(required=False)
    opioids = serializers.BooleanField(required=False)
    fall_since_last_visit = serializers.BooleanField(required=False)
