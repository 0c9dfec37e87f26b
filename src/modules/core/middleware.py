import re
import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up verbatim in log lines and response headers.
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Probed by load balancers on every tick; kept out of the info stream.
_QUIET_PATHS = frozenset({"/health"})

logger = structlog.get_logger(__name__)


def _request_id(request: HttpRequest) -> str:
    candidate = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Bind a correlation ID and the request line into the log context.

    The ID comes from the ``X-Request-ID`` header when it is a short token
    of letters, digits, ``.``, ``_`` or ``-``; otherwise a UUID4 is issued.
    Every event logged while the request is served (``price.created``,
    ``price.resolved``, ``api.request_rejected`` ...) carries
    ``correlation_id``, ``method`` and ``path``, so the middleware itself
    emits a single ``request_completed`` line with the outcome.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = _request_id(request)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        match = request.resolver_match
        event = dict(
            status_code=response.status_code,
            view=match.view_name if match else None,
            duration_ms=duration_ms,
        )
        if response.status_code >= 500:
            logger.error("request_completed", **event)
        elif response.status_code >= 400:
            logger.warning("request_completed", **event)
        elif request.path in _QUIET_PATHS:
            logger.debug("request_completed", **event)
        else:
            logger.info("request_completed", **event)

        response[REQUEST_ID_HEADER] = cid
        return response
