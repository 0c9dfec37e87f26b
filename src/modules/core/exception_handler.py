"""Exception-to-response mapping for the REST API.

``error_response`` is a pure function from an exception to
``(status_code, payload)``; ``api_exception_handler`` plugs it into DRF
through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.

Every error payload has the shape::

    {"error": <category>, "message": <text>, <field>: <message>, ...}

Server-side failures never leak internals: the payload carries a generic
message and the exception is logged with its traceback instead.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import structlog
from django.http import Http404
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import set_rollback

from modules.core.exceptions import (
    INVALID_REQUEST,
    NOT_FOUND,
    SERVICE_ERROR,
    UNEXPECTED_ERROR,
    DomainError,
)

logger = structlog.get_logger(__name__)

UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."


def _detail_message(detail: Any) -> str:
    # DRF details may be a string, a list or a dict of lists.
    if isinstance(detail, dict):
        detail = next(iter(detail.values()), "")
    if isinstance(detail, (list, tuple)):
        detail = detail[0] if detail else ""
    return str(detail)


def error_response(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """Map an exception to the HTTP status and JSON payload of the response."""
    if isinstance(exc, DomainError):
        payload: Dict[str, Any] = dict(exc.errors)
        payload["error"] = exc.category
        payload["message"] = exc.message
        return exc.status_code, payload

    if isinstance(exc, Http404):
        return 404, {"error": NOT_FOUND, "message": "Resource not found."}

    if isinstance(exc, APIException):
        if exc.status_code >= 500:
            return exc.status_code, {"error": SERVICE_ERROR, "message": UNEXPECTED_MESSAGE}
        return exc.status_code, {
            "error": INVALID_REQUEST,
            "message": _detail_message(exc.detail),
        }

    return 500, {"error": UNEXPECTED_ERROR, "message": UNEXPECTED_MESSAGE}


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF hook: render ``exc`` with ``error_response`` and log it."""
    status_code, payload = error_response(exc)

    view = context.get("view")
    log = logger.bind(
        view=type(view).__name__ if view is not None else None,
        status_code=status_code,
        error=payload["error"],
    )
    if status_code >= 500:
        log.error("api.request_failed", exc_info=exc)
    else:
        log.warning("api.request_rejected", message=payload["message"])

    set_rollback()
    return Response(payload, status=status_code)
