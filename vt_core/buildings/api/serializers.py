# vt_core/buildings/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.buildings.models import Building


class BuildingSerializer(serializers.ModelSerializer):
    site_id = serializers.IntegerField(read_only=True)
    site_name = serializers.CharField(source="site.name", read_only=True)

    class Meta:
        model = Building
        fields = [
            "id",
            "name",
            "site_id",
            "site_name",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BuildingCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    site_id = serializers.IntegerField(min_value=1)
    is_active = serializers.BooleanField(required=False, default=True)


class BuildingUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    site_id = serializers.IntegerField(min_value=1, required=False)
    is_active = serializers.BooleanField(required=False)
