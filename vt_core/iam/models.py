# vt_core/iam/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models

from vt_core.common.models import TimeStampedModel


class Role(models.TextChoices):
    ADMIN = "admin", "Admin"
    NURSE = "nurse", "Nurse"
    PHARMACIST = "pharmacist", "Pharmacist"


class UserProfile(TimeStampedModel):
    """
    App-specific identity data hanging off Django's auth user.

    auth_user (name, email, password hash, is_active)
      -> UserProfile (role, primary site, assigned sites)

    The primary site is always part of the user's effective scope, whether
    or not it also appears in assigned_sites.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="vt_profile",
    )
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.NURSE, db_index=True)

    # Required for non-admin roles (enforced in UserService).
    primary_site = models.ForeignKey(
        "sites.Site",
        on_delete=models.PROTECT,
        related_name="primary_users",
        null=True,
        blank=True,
    )
    assigned_sites = models.ManyToManyField(
        "sites.Site",
        related_name="assigned_users",
        blank=True,
    )

    class Meta:
        db_table = "iam_user_profile"

    def __str__(self) -> str:
        return f"UserProfile(user_id={self.user_id}, role={self.role})"
