"""Uniform error envelope for the HTTP layer.

Every error response has the shape::

    {"type": "validation_error", "errors": [{"code": "...", "detail": "..."}]}

Framework errors (malformed JSON, unknown routes, wrong methods) reach
``api_exception_handler`` through DRF's ``EXCEPTION_HANDLER`` setting.
Domain exceptions are caught in the views, which build the same envelope
with ``error_response``.
"""

from __future__ import annotations

from typing import Any, Iterable

import structlog
from rest_framework import status as http_status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

_TYPE_BY_STATUS = {
    http_status.HTTP_400_BAD_REQUEST: "validation_error",
    http_status.HTTP_401_UNAUTHORIZED: "authentication_error",
    http_status.HTTP_403_FORBIDDEN: "permission_error",
    http_status.HTTP_404_NOT_FOUND: "not_found",
    http_status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    http_status.HTTP_409_CONFLICT: "conflict",
}


def _flatten(detail: Any, code: str) -> list[dict[str, str]]:
    """Turn DRF's nested ``detail`` structures into a flat list of errors."""
    if isinstance(detail, dict):
        errors: list[dict[str, str]] = []
        for field, value in detail.items():
            for item in _flatten(value, code):
                if field != "detail":
                    item["detail"] = f"{field}: {item['detail']}"
                errors.append(item)
        return errors
    if isinstance(detail, list):
        return [item for value in detail for item in _flatten(value, code)]
    return [{"code": getattr(detail, "code", code) or code, "detail": str(detail)}]


def error_response(
    status_code: int,
    messages: Iterable[str] | str,
    code: str | None = None,
) -> Response:
    """Build an error ``Response`` in the uniform envelope."""
    error_type = _TYPE_BY_STATUS.get(status_code, "server_error")
    if isinstance(messages, str):
        messages = [messages]
    errors = [{"code": code or error_type, "detail": m} for m in messages]
    return Response({"type": error_type, "errors": errors}, status=status_code)


def api_exception_handler(exc: Exception, context: dict) -> Response | None:
    """DRF exception handler that wraps framework errors in the envelope.

    Returns ``None`` for exceptions DRF does not know about, so they
    propagate as server errors.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    error_type = _TYPE_BY_STATUS.get(response.status_code, "server_error")
    response.data = {
        "type": error_type,
        "errors": _flatten(response.data, error_type),
    }
    logger.warning(
        "api.error",
        status_code=response.status_code,
        error_type=error_type,
        exception=type(exc).__name__,
    )
    return response

