# vt_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from vt_core.common.errors import (
    AuthenticationError,
    DomainError,
    DuplicateError,
    InUseError,
    InvalidInputError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Most specific first; NothingToUpdateError rides on InvalidInputError.
DOMAIN_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (InUseError, status.HTTP_409_CONFLICT),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
)

# Headers worth carrying over from DRF's own response (auth challenge, throttling).
_PASSTHROUGH_HEADERS = ("WWW-Authenticate", "Retry-After")


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope.
    Reusable from Django middleware (JsonResponse) and DRF (Response).
    """
    rid = ensure_request_id(request)
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": rid,
        }
    }


def _status_for_domain(exc: DomainError) -> int:
    for klass, http_status in DOMAIN_STATUS:
        if isinstance(exc, klass):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def _django_validation_detail(exc: DjangoValidationError) -> Any:
    if hasattr(exc, "error_dict"):
        return exc.message_dict
    return {"detail": exc.messages[0] if len(exc.messages) == 1 else exc.messages}


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, Http404):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    if isinstance(exc, DomainError):
        return Response(
            build_error_envelope(
                request=request,
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
            status=_status_for_domain(exc),
        )

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(detail=_django_validation_detail(exc))

    response = drf_exception_handler(exc, context)

    # Truly unhandled error: log for operators, never echo internals to the client.
    if response is None:
        view = context.get("view")
        logger.error(
            "Unhandled %s in %s (%s %s)",
            exc.__class__.__name__,
            view.__class__.__name__ if view is not None else "-",
            getattr(request, "method", "-"),
            getattr(request, "path", "-"),
            exc_info=exc,
        )
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message="Unexpected server error.",
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    # DRF standardizes errors into response.data
    data = response.data

    # Message + details rules:
    # 1) {"detail": "..."} -> message=detail, details=None
    # 2) {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) otherwise -> message="Request failed.", details=data
    message = "Request failed."
    details = data

    if isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None

    headers = {name: response[name] for name in _PASSTHROUGH_HEADERS if response.has_header(name)}

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=details,
        ),
        status=http_status,
        headers=headers,
    )
