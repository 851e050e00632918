# vt_core/buildings/admin.py
from django.contrib import admin

from vt_core.buildings.models import Building


@admin.register(Building)
class BuildingAdmin(admin.ModelAdmin):
    list_display = ("name", "site", "is_active", "created_at")
    list_filter = ("site", "is_active")
    search_fields = ("name", "site__name")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("site__name", "name")
