# vt_core/activities/models.py
from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from vt_core.common.models import TimeStampedModel
from vt_core.patients.models import Patient


class Activity(TimeStampedModel):
    """
    A logged unit of care time against a patient.

    The site is always the patient's site; it is read through the join and
    never stored here.
    """
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name="activities")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="vt_activities",
        null=True,
        blank=True,
    )

    activity_type = models.CharField(max_length=64, db_index=True)
    pharm_flag = models.BooleanField(default=False)
    notes = models.TextField(blank=True, default="")

    service_datetime = models.DateTimeField(default=timezone.now, db_index=True)
    service_endtime = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
    )

    class Meta:
        db_table = "activities_activity"
        indexes = [
            models.Index(fields=["patient", "service_datetime"], name="idx_activity_patient_time"),
        ]

    def __str__(self) -> str:
        return f"{self.activity_type} ({self.duration_minutes} min) for patient {self.patient_id}"
