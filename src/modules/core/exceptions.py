"""Base class for errors that the API renders as structured payloads.

Domain modules subclass ``DomainError`` and set ``status_code``,
``category`` and ``default_message``.  ``modules.core.exception_handler``
turns any of them into ``{"error": ..., "message": ..., **errors}``.
"""

from __future__ import annotations

from typing import Dict, Optional

INVALID_REQUEST = "Invalid Request"
NOT_FOUND = "Not Found"
SERVICE_ERROR = "Service Error"
UNEXPECTED_ERROR = "Unexpected Error"


class DomainError(Exception):
    status_code = 500
    category = SERVICE_ERROR
    default_message = "The service failed to process the request."

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors: Dict[str, str] = dict(errors or {})
        super().__init__(self.message)
