"""Price domain exceptions.

Raised by the Service Layer and the API boundary when a request cannot be
honoured.  Each class carries the HTTP status and the stable ``error``
category; ``modules.core.exception_handler`` renders them.
"""

from __future__ import annotations

from typing import Dict, Optional

from modules.core.exceptions import INVALID_REQUEST, NOT_FOUND, DomainError


class PriceError(DomainError):
    """Base class for every failure of the price API."""


class PriceValidationError(PriceError):
    """Input failed validation; ``errors`` maps each offending field to a message."""

    status_code = 400
    category = INVALID_REQUEST
    default_message = "One or more fields are invalid"

    def __init__(
        self,
        errors: Optional[Dict[str, str]] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message, errors)


class InvalidPriceParameters(PriceValidationError):
    """Query or path parameters (``productId``, ``brandId``, ``id``) are invalid."""

    default_message = "The request contains invalid parameters."


class InvalidPriceDate(PriceValidationError):
    """The ``date`` query parameter is not an ISO-8601 local date-time."""

    default_message = (
        "Invalid date format. Please use the ISO 8601 format: YYYY-MM-DDTHH:MM:SS"
    )


class PriceNotFound(PriceError):
    """No price matches the lookup (resolve query or delete target)."""

    status_code = 404
    category = NOT_FOUND
    default_message = "No prices found for the given product, brand and date."


class PriceAlreadyExists(PriceError):
    """A price with the same product, brand and start date is already stored."""

    status_code = 400
    category = INVALID_REQUEST
    default_message = "The price for this product, brand, and date already exists."


class PriceStorageError(PriceError):
    """The datastore failed; the original error is chained as ``__cause__``."""

    default_message = "Error saving the price. Please try again later."
