# vt_core/medical_records/models.py
from __future__ import annotations

from django.db import models

from vt_core.common.models import TimeStampedModel
from vt_core.patients.models import Patient

FLAG_FIELDS = (
    "records_reviewed",
    "bp_at_goal",
    "hospital_visit_since_last_review",
    "a1c_at_goal",
    "benzodiazepines",
    "antipsychotics",
    "opioids",
    "fall_since_last_visit",
)


class MedicalRecord(TimeStampedModel):
    """A review snapshot for a patient; the newest by created_at is the current one."""
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="medical_records")

    records_reviewed = models.BooleanField(default=False)
    bp_at_goal = models.BooleanField(default=False)
    hospital_visit_since_last_review = models.BooleanField(default=False)
    a1c_at_goal = models.BooleanField(default=False)
    benzodiazepines = models.BooleanField(default=False)
    antipsychotics = models.BooleanField(default=False)
    opioids = models.BooleanField(default=False)
    fall_since_last_visit = models.BooleanField(default=False)

    class Meta:
        db_table = "medical_records_medical_record"
        indexes = [
            models.Index(fields=["patient", "created_at"], name="idx_medrec_patient_created"),
        ]

    def __str__(self) -> str:
        return f"MedicalRecord {self.id} for patient {self.patient_id}"
