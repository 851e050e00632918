# vt_core/patients/admin.py
from django.contrib import admin

from vt_core.patients.models import Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "last_name",
        "first_name",
        "birthdate",
        "gender",
        "site",
        "building",
        "is_active",
        "created_at",
    )
    list_filter = ("site", "is_active", "gender")
    search_fields = ("first_name", "last_name", "phone_number", "insurance")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
