# vt_core/common/patch.py
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


class Unset:
    """Marker type for "field not present in the payload"."""

    _instance: "Unset | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset()


@dataclass(frozen=True)
class Patch:
    """
    Base for explicit partial-update payloads.

    Subclasses declare every patchable field with default UNSET. Presence is
    decided by identity with UNSET, never by truthiness, so False, 0 and ""
    are real updates.
    """

    @classmethod
    def from_data(cls, data: Mapping[str, Any]):
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    def changes(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def has(self, name: str) -> bool:
        return getattr(self, name, UNSET) is not UNSET
