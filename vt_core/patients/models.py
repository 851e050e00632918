# vt_core/patients/models.py
from __future__ import annotations

from django.db import models

from vt_core.buildings.models import Building
from vt_core.common.models import TimeStampedModel
from vt_core.sites.models import Site


class Gender(models.TextChoices):
    MALE = "M", "Male"
    FEMALE = "F", "Female"
    OTHER = "O", "Other"


class Patient(TimeStampedModel):
    first_name = models.CharField(max_length=128)
    last_name = models.CharField(max_length=128)
    birthdate = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=1, choices=Gender.choices, blank=True, default="")

    phone_number = models.CharField(max_length=32, blank=True, default="")
    contact_name = models.CharField(max_length=255, blank=True, default="")
    contact_phone_number = models.CharField(max_length=32, blank=True, default="")
    insurance = models.CharField(max_length=255, blank=True, default="")

    # business status, not a soft delete
    is_active = models.BooleanField(default=True, db_index=True)

    site = models.ForeignKey(Site, on_delete=models.PROTECT, related_name="patients")
    # when set, must belong to `site`
    building = models.ForeignKey(
        Building,
        on_delete=models.SET_NULL,
        related_name="patients",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["site", "is_active"], name="idx_patient_site_active"),
            models.Index(fields=["last_name", "first_name"], name="idx_patient_name"),
        ]

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return self.display_name
