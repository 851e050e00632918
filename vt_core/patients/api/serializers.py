# vt_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.patients.models import Gender, Patient


class PatientSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()
    site_id = serializers.IntegerField(read_only=True)
    site_name = serializers.CharField(source="site.name", read_only=True)
    building_id = serializers.IntegerField(read_only=True, allow_null=True)
    building_name = serializers.SerializerMethodField()

    class Meta:
        model = Patient
        fields = [
            "id",
            "name",
            "first_name",
            "last_name",
            "birthdate",
            "gender",
            "phone_number",
            "contact_name",
            "contact_phone_number",
            "insurance",
            "is_active",
            "site_id",
            "site_name",
            "building_id",
            "building_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_name(self, obj) -> str:
        return obj.display_name

    def get_building_name(self, obj) -> str | None:
        return obj.building.name if obj.building_id else None


class PatientCreateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=128)
    last_name = serializers.CharField(max_length=128)
    site_id = serializers.IntegerField(min_value=1)
    building_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    birthdate = serializers.DateField(required=False, allow_null=True)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    contact_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    contact_phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    insurance = serializers.CharField(max_length=255, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False, default=True)


class PatientUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=128, required=False)
    last_name = serializers.CharField(max_length=128, required=False)
    site_id = serializers.IntegerField(min_value=1, required=False)
    building_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    birthdate = serializers.DateField(required=False, allow_null=True)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    contact_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    contact_phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)
    insurance = serializers.CharField(max_length=255, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
