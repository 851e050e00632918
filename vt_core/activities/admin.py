# vt_core/activities/admin.py
from django.contrib import admin

from vt_core.activities.models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "patient",
        "activity_type",
        "duration_minutes",
        "pharm_flag",
        "service_datetime",
        "user",
    )
    list_filter = ("activity_type", "pharm_flag", "patient__site")
    search_fields = ("patient__first_name", "patient__last_name", "activity_type", "notes")
    raw_id_fields = ("patient", "user")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-service_datetime",)
