# vt_core/sites/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vt_core.buildings.models import Building
from vt_core.sites.models import Site


class SiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Site
        fields = [
            "id",
            "name",
            "address",
            "city",
            "state",
            "zip",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SiteCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    city = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    state = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    zip = serializers.CharField(max_length=16, required=False, allow_blank=True, default="")
    is_active = serializers.BooleanField(required=False, default=True)


class SiteUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PUT/PATCH). Only keys present in the body are applied.
    """
    name = serializers.CharField(max_length=255, required=False)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=128, required=False, allow_blank=True)
    state = serializers.CharField(max_length=64, required=False, allow_blank=True)
    zip = serializers.CharField(max_length=16, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class SiteBuildingSerializer(serializers.ModelSerializer):
    class Meta:
        model = Building
        fields = ["id", "name", "is_active"]
        read_only_fields = fields


class SiteWithBuildingsSerializer(serializers.ModelSerializer):
    buildings = SiteBuildingSerializer(many=True, read_only=True)

    class Meta:
        model = Site
        fields = ["id", "name", "city", "state", "is_active", "buildings"]
        read_only_fields = fields
