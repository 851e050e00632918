# vt_core/common/spectacular_hooks.py
from __future__ import annotations

PRIMARY_PREFIX = "/api/v1/"
ALIAS_PREFIX = "/api/"


def _is_alias(path: str) -> bool:
    return path.startswith(ALIAS_PREFIX) and not path.startswith(PRIMARY_PREFIX)


def preprocess_exclude_legacy_api(endpoints):
    """
    Every route is mounted under /api/v1/ and again under the /api/ alias.
    Only the versioned copy goes into the schema, otherwise operationIds
    collide (list2, retrieve2, ...).
    """
    return [endpoint for endpoint in endpoints if not _is_alias(endpoint[0])]
