# vt_core/common/logging.py
from __future__ import annotations

import logging
from threading import local

_request_context = local()


def set_request_id(request_id: str | None) -> None:
    _request_context.request_id = request_id


def get_request_id() -> str | None:
    return getattr(_request_context, "request_id", None)


class RequestIdFilter(logging.Filter):
    """Injects the current request id (or '-') into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
