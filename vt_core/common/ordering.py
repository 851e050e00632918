# vt_core/common/ordering.py
from __future__ import annotations

from typing import Mapping

from django.db.models import QuerySet

DEFAULT_ORDERING: tuple[str, ...] = ("-created_at", "-id")


def apply_ordering(
    qs: QuerySet,
    raw: str | None,
    allowed: Mapping[str, str],
    *,
    default: tuple[str, ...] = DEFAULT_ORDERING,
) -> QuerySet:
    """
    ?ordering=<key> or ?ordering=-<key>, where <key> is a client-facing name
    looked up in `allowed` (key -> ORM path or annotation).

    Unknown keys are ignored and fall back to `default`; id is always the
    final tie-breaker so pages stay stable.
    """
    key = (raw or "").strip()
    descending = key.startswith("-")
    column = allowed.get(key.lstrip("-"))

    if not column:
        return qs.order_by(*default)

    return qs.order_by(f"-{column}" if descending else column, "-id" if descending else "id")
