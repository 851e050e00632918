# vt_core/sites/models.py
from __future__ import annotations

from django.db import models

from vt_core.common.models import TimeStampedModel


class Site(TimeStampedModel):
    """
    A care site (clinic / facility). Root of the access scope: every
    patient, and through patients every activity and medical record,
    belongs to exactly one site.
    """

    name = models.CharField(max_length=255, unique=True)

    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=128, blank=True, default="")
    state = models.CharField(max_length=64, blank=True, default="")
    zip = models.CharField(max_length=16, blank=True, default="")

    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "sites_site"

    def __str__(self) -> str:
        return self.name
