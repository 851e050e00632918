# vt_core/activities/api/serializers.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from rest_framework import serializers

from vt_core.activities.models import Activity


class MinutesField(serializers.DecimalField):
    def validate_precision(self, value):
        # extra fractional digits round half-up instead of failing
        if value.as_tuple().exponent < -self.decimal_places and value.adjusted() < self.max_whole_digits:
            value = value.quantize(Decimal(1).scaleb(-self.decimal_places), rounding=self.rounding)
        return super().validate_precision(value)


def _duration_field(**kwargs):
    return MinutesField(
        max_digits=7,
        decimal_places=2,
        min_value=Decimal("0"),
        coerce_to_string=False,
        rounding=ROUND_HALF_UP,
        **kwargs,
    )


class ActivitySerializer(serializers.ModelSerializer):
    patient_id = serializers.IntegerField(read_only=True)
    patient_name = serializers.SerializerMethodField()
    site_id = serializers.IntegerField(source="patient.site_id", read_only=True)
    site_name = serializers.CharField(source="patient.site.name", read_only=True)
    building_name = serializers.SerializerMethodField()
    user_id = serializers.IntegerField(read_only=True, allow_null=True)
    user_initials = serializers.SerializerMethodField()
    duration_minutes = _duration_field(read_only=True)

    class Meta:
        model = Activity
        fields = [
            "id",
            "patient_id",
            "patient_name",
            "site_id",
            "site_name",
            "building_name",
            "user_id",
            "user_initials",
            "activity_type",
            "pharm_flag",
            "notes",
            "service_datetime",
            "service_endtime",
            "duration_minutes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_patient_name(self, obj) -> str:
        return obj.patient.display_name

    def get_building_name(self, obj) -> str | None:
        building = obj.patient.building
        return building.name if building else None

    def get_user_initials(self, obj) -> str | None:
        user = obj.user
        if user is None:
            return None
        initials = f"{user.first_name[:1]}{user.last_name[:1]}".upper()
        return initials or (user.email[:1].upper() if user.email else None)


class ActivityCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1)
    activity_type = serializers.CharField(max_length=64)
    duration_minutes = _duration_field(required=False, default=Decimal("0"))
    pharm_flag = serializers.BooleanField(required=False, default=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    service_datetime = serializers.DateTimeField(required=False, allow_null=True)
    service_endtime = serializers.DateTimeField(required=False, allow_null=True)


class ActivityUpdateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField(min_value=1, required=False)
    activity_type = serializers.CharField(max_length=64, required=False)
    duration_minutes = _duration_field(required=False)
    pharm_flag = serializers.BooleanField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    service_datetime = serializers.DateTimeField(required=False)
    service_endtime = serializers.DateTimeField(required=False, allow_null=True)


class ActivityBatchRequestSerializer(serializers.Serializer):
    patient_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)
