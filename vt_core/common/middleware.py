# vt_core/common/middleware.py
from __future__ import annotations

import re

from django.utils.deprecation import MiddlewareMixin

from vt_core.common.api.exceptions import ensure_request_id
from vt_core.common.logging import set_request_id

# Inbound ids are echoed into logs and headers; keep them boring.
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIdMiddleware(MiddlewareMixin):
    """
    Assigns every request a request_id.

    Behavior:
      - Honours an inbound X-Request-Id when it looks sane, otherwise generates one.
      - Exposes it as request.request_id (the error envelope reuses it).
      - Makes it visible to log records via RequestIdFilter.
      - Echoes it back in the X-Request-Id response header.
    """

    REQUEST_ID_META_KEY = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-Id"

    def process_request(self, request):
        inbound = request.META.get(self.REQUEST_ID_META_KEY, "")
        if inbound and _SAFE_REQUEST_ID.match(inbound):
            request.request_id = inbound
        rid = ensure_request_id(request)
        set_request_id(rid)
        return None

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[self.RESPONSE_HEADER] = rid
        set_request_id(None)
        return response
