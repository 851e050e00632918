# vt_core/iam/api/serializers.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from vt_core.iam.models import Role

User = get_user_model()


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


class SiteRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    """
    Read shape for users. Profile-derived fields are flattened; site names
    are joined in for display only.
    """
    name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    primary_site_id = serializers.SerializerMethodField()
    primary_site_name = serializers.SerializerMethodField()
    assigned_sites = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "name",
            "role",
            "primary_site_id",
            "primary_site_name",
            "assigned_sites",
            "is_active",
            "last_login",
            "date_joined",
        ]
        read_only_fields = fields

    @staticmethod
    def _profile(obj):
        return getattr(obj, "vt_profile", None)

    def get_name(self, obj) -> str:
        return obj.get_full_name()

    def get_role(self, obj) -> str | None:
        if obj.is_superuser:
            return Role.ADMIN.value
        profile = self._profile(obj)
        return profile.role if profile else None

    def get_primary_site_id(self, obj) -> int | None:
        profile = self._profile(obj)
        return profile.primary_site_id if profile else None

    def get_primary_site_name(self, obj) -> str | None:
        profile = self._profile(obj)
        if profile is None or profile.primary_site is None:
            return None
        return profile.primary_site.name

    @extend_schema_field(SiteRefSerializer(many=True))
    def get_assigned_sites(self, obj) -> list[dict]:
        profile = self._profile(obj)
        if profile is None:
            return []
        return [{"id": s.id, "name": s.name} for s in profile.assigned_sites.all()]


class UserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, trim_whitespace=False, write_only=True)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    role = serializers.ChoiceField(choices=Role.choices)
    primary_site_id = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    assigned_site_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, default=list
    )
    is_active = serializers.BooleanField(required=False, default=True)


class UserUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PUT/PATCH). Only keys present in the body are applied.
    """
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=8, trim_whitespace=False, write_only=True, required=False)
    first_name = serializers.CharField(max_length=150, required=False)
    last_name = serializers.CharField(max_length=150, required=False)
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    primary_site_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    assigned_site_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)
    is_active = serializers.BooleanField(required=False)

    def to_internal_value(self, data):
        # `new_password` is accepted as an alias of `password`
        if hasattr(data, "get") and "new_password" in data and "password" not in data:
            data = data.copy()
            data["password"] = data.get("new_password")
        return super().to_internal_value(data)


class MeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.CharField()
    name = serializers.CharField()
    role = serializers.CharField()
    primary_site_id = serializers.IntegerField(allow_null=True)
    assigned_site_ids = serializers.ListField(child=serializers.IntegerField())


class ScopeSerializer(serializers.Serializer):
    all_sites = serializers.BooleanField()
    site_ids = serializers.ListField(child=serializers.IntegerField())


class MeResponseSerializer(serializers.Serializer):
    user = MeSerializer()
    scope = ScopeSerializer()


class LoginResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    access_token = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
