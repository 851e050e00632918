# vt_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from vt_core.iam.models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "role", "primary_site", "created_at", "updated_at")
    list_filter = ("role", "primary_site")
    search_fields = ("user__username", "user__email", "user__first_name", "user__last_name")
    filter_horizontal = ("assigned_sites",)
    raw_id_fields = ("user",)
    ordering = ("-created_at",)
