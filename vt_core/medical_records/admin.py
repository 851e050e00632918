# vt_core/medical_records/admin.py
from django.contrib import admin

from vt_core.medical_records.models import FLAG_FIELDS, MedicalRecord


@admin.register(MedicalRecord)
class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ("id", "patient", *FLAG_FIELDS, "created_at")
    list_filter = ("records_reviewed", "opioids", "fall_since_last_visit")
    raw_id_fields = ("patient",)
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
