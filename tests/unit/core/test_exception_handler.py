"""Unit tests for the exception-to-response mapping."""

from __future__ import annotations

import pytest
from django.http import Http404
from rest_framework.exceptions import MethodNotAllowed, ParseError

from modules.core.exception_handler import (
    UNEXPECTED_MESSAGE,
    api_exception_handler,
    error_response,
)
from modules.prices.exceptions import (
    InvalidPriceDate,
    InvalidPriceParameters,
    PriceAlreadyExists,
    PriceNotFound,
    PriceStorageError,
    PriceValidationError,
)

pytestmark = pytest.mark.unit


class TestDomainErrors:
    def test_field_validation_lists_every_field(self):
        exc = PriceValidationError(
            {"brandId": "brandId must not be null", "startDate": "startDate must not be null"}
        )
        assert error_response(exc) == (
            400,
            {
                "error": "Invalid Request",
                "message": "One or more fields are invalid",
                "brandId": "brandId must not be null",
                "startDate": "startDate must not be null",
            },
        )

    def test_invalid_parameters(self):
        status, payload = error_response(InvalidPriceParameters({"productId": "bad"}))
        assert status == 400
        assert payload["message"] == "The request contains invalid parameters."
        assert payload["productId"] == "bad"

    def test_invalid_date_has_fixed_message(self):
        status, payload = error_response(InvalidPriceDate())
        assert status == 400
        assert payload == {
            "error": "Invalid Request",
            "message": "Invalid date format. Please use the ISO 8601 format: YYYY-MM-DDTHH:MM:SS",
        }

    def test_not_found(self):
        assert error_response(PriceNotFound()) == (
            404,
            {
                "error": "Not Found",
                "message": "No prices found for the given product, brand and date.",
            },
        )

    def test_duplicate(self):
        status, payload = error_response(PriceAlreadyExists())
        assert status == 400
        assert payload["message"] == "The price for this product, brand, and date already exists."

    def test_storage_error_is_server_error(self):
        status, payload = error_response(PriceStorageError())
        assert status == 500
        assert payload["error"] == "Service Error"

    def test_field_named_like_envelope_key_cannot_override_it(self):
        _, payload = error_response(PriceValidationError({"message": "oops"}))
        assert payload["message"] == "One or more fields are invalid"


class TestFrameworkAndUnexpectedErrors:
    def test_parse_error(self):
        status, payload = error_response(ParseError("JSON parse error"))
        assert status == 400
        assert payload == {"error": "Invalid Request", "message": "JSON parse error"}

    def test_method_not_allowed(self):
        status, payload = error_response(MethodNotAllowed("PUT"))
        assert status == 405
        assert payload["error"] == "Invalid Request"

    def test_http404(self):
        assert error_response(Http404())[0] == 404

    def test_unexpected_error_hides_details(self):
        status, payload = error_response(RuntimeError("secret connection string"))
        assert status == 500
        assert payload == {"error": "Unexpected Error", "message": UNEXPECTED_MESSAGE}


class TestApiExceptionHandler:
    def test_returns_drf_response(self):
        response = api_exception_handler(PriceNotFound(), {"view": None})
        assert response.status_code == 404
        assert response.data["error"] == "Not Found"
