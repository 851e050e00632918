# vt_core/activities/services.py
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from vt_core.activities.models import Activity
from vt_core.activities.selectors import activity_by_id
from vt_core.common.errors import AuthenticationError, InvalidInputError, NothingToUpdateError
from vt_core.common.patch import UNSET, Patch, Unset
from vt_core.iam.scope import SiteScope
from vt_core.patients.selectors import patient_by_id

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass(frozen=True)
class ActivityPatch(Patch):
    patient_id: int | Unset = UNSET
    activity_type: str | Unset = UNSET
    pharm_flag: bool | Unset = UNSET
    notes: str | Unset = UNSET
    service_datetime: datetime.datetime | Unset = UNSET
    service_endtime: datetime.datetime | None | Unset = UNSET
    duration_minutes: Decimal | Unset = UNSET


def _check_window(start: datetime.datetime, end: datetime.datetime | None) -> None:
    if end is not None and start is not None and end < start:
        raise InvalidInputError(
            "service_endtime cannot be earlier than service_datetime.",
            details={"service_datetime": start.isoformat(), "service_endtime": end.isoformat()},
        )


def _check_duration(duration: Decimal) -> None:
    if duration < 0:
        raise InvalidInputError("duration_minutes must be zero or greater.", details={"duration_minutes": str(duration)})


class ActivityService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        scope: SiteScope,
        actor_id: int,
        patient_id: int,
        activity_type: str,
        duration_minutes: Decimal = Decimal("0"),
        pharm_flag: bool = False,
        notes: str = "",
        service_datetime: datetime.datetime | None = None,
        service_endtime: datetime.datetime | None = None,
    ) -> Activity:
        """
        Record an activity against the authenticated user.

        The actor comes from the verified token, never from the payload. A
        token that outlived its account is rejected.
        """
        actor = User.objects.filter(id=actor_id, is_active=True).first()
        if actor is None:
            raise AuthenticationError("Your account no longer exists.", code="user_not_found")

        patient = patient_by_id(scope=scope, patient_id=patient_id)

        start = service_datetime or timezone.now()
        _check_window(start, service_endtime)
        _check_duration(duration_minutes)

        activity = Activity.objects.create(
            patient=patient,
            user=actor,
            activity_type=activity_type.strip(),
            pharm_flag=pharm_flag,
            notes=notes or "",
            service_datetime=start,
            service_endtime=service_endtime,
            duration_minutes=duration_minutes,
        )

        logger.info(
            "activity.created id=%s patient_id=%s user_id=%s minutes=%s",
            activity.id,
            patient.id,
            actor.id,
            activity.duration_minutes,
        )
        return activity_by_id(scope=scope, activity_id=activity.id)

    @staticmethod
    @transaction.atomic
    def update(*, scope: SiteScope, activity_id: int, patch: ActivityPatch) -> Activity:
        changes = patch.changes()
        if not changes:
            raise NothingToUpdateError()

        activity = activity_by_id(scope=scope, activity_id=activity_id)
        activity = Activity.objects.select_for_update().get(id=activity.id)

        if "patient_id" in changes:
            activity.patient = patient_by_id(scope=scope, patient_id=changes.pop("patient_id"))
        if "activity_type" in changes:
            changes["activity_type"] = changes["activity_type"].strip()
        if "duration_minutes" in changes:
            _check_duration(changes["duration_minutes"])

        for field, value in changes.items():
            setattr(activity, field, value)

        # checked against the merged row, so patching one end alone is covered
        _check_window(activity.service_datetime, activity.service_endtime)

        activity.save()

        logger.info("activity.updated id=%s fields=%s", activity.id, sorted(patch.changes()))
        return activity_by_id(scope=scope, activity_id=activity.id)

    @staticmethod
    @transaction.atomic
    def delete(*, scope: SiteScope, activity_id: int) -> None:
        activity = activity_by_id(scope=scope, activity_id=activity_id)
        Activity.objects.filter(id=activity.id).delete()
        logger.info("activity.deleted id=%s", activity_id)
