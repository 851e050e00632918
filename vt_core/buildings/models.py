# vt_core/buildings/models.py
from __future__ import annotations

from django.db import models

from vt_core.common.models import TimeStampedModel
from vt_core.sites.models import Site


class Building(TimeStampedModel):
    site = models.ForeignKey(Site, on_delete=models.CASCADE, related_name="buildings")
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "buildings_building"
        constraints = [
            models.UniqueConstraint(fields=["site", "name"], name="uq_building_site_name"),
        ]
        indexes = [
            models.Index(fields=["site", "is_active"], name="idx_building_site_active"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.site_id})"
