# vt_core/sites/admin.py
from django.contrib import admin

from vt_core.sites.models import Site


@admin.register(Site)
class SiteAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "state", "is_active", "created_at")
    list_filter = ("is_active", "state")
    search_fields = ("name", "city")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
