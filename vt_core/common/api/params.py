from __future__ import annotations

from rest_framework.exceptions import ValidationError


def parse_id(value, field_name: str = "id") -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError({field_name: "Invalid id."})
    if parsed < 1:
        raise ValidationError({field_name: "Invalid id."})
    return parsed
