# vt_core/tests/test_request_id_logging.py
import logging

import pytest

from vt_core.common.logging import RequestIdFilter, get_request_id, set_request_id

pytestmark = pytest.mark.django_db


def test_filter_stamps_current_request_id():
    record = logging.LogRecord("vt_core", logging.INFO, __file__, 1, "msg", None, None)

    set_request_id("abc123")
    try:
        RequestIdFilter().filter(record)
    finally:
        set_request_id(None)

    assert record.request_id == "abc123"


def test_filter_falls_back_to_dash():
    record = logging.LogRecord("vt_core", logging.INFO, __file__, 1, "msg", None, None)
    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def test_request_id_is_cleared_after_response(admin_client):
    admin_client.get("/api/v1/sites/", HTTP_X_REQUEST_ID="req-1")
    assert get_request_id() is None
