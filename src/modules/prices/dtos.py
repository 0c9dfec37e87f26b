"""Price DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  They are the
contract between the API layer (DRF views) and the Service layer.  DTOs are
immutable (``frozen=True``) and accept the external camelCase names
(``productId``, ``startDate`` ...) as aliases.

- ``CreatePriceDTO``: input for price creation.
- ``PriceQueryDTO``: ``productId``/``brandId`` of an applicable-price lookup.

``field_errors`` and ``parse_price_date`` turn raw input problems into the
domain exceptions of ``exceptions.py``.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from modules.prices.exceptions import InvalidPriceDate

# ISO-8601 local date-time: seconds and fraction optional, no offset.
_LOCAL_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?$"
)
_CURRENCY_RE = re.compile(r"[A-Z]{3}")

# Range of the integer columns of the prices table.
INT_MIN = -2_147_483_648
INT_MAX = 2_147_483_647

_NULL_ERROR_TYPES = {"missing", "none_required"}


def parse_price_date(value: str | None) -> datetime:
    """Parse an ISO-8601 local date-time such as ``2020-06-14T10:00:00``.

    Raises:
        InvalidPriceDate: if ``value`` is missing, carries an offset or
            is not a valid calendar date-time.
    """
    if not value or not _LOCAL_DATETIME_RE.match(value.strip()):
        raise InvalidPriceDate()
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidPriceDate() from exc


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Flatten a pydantic ``ValidationError`` into ``{field: message}``.

    Keys are the external (alias) names.  Missing and null values get a
    uniform "must not be null" message; the first error per field wins.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        if field in errors:
            continue
        if error["type"] in _NULL_ERROR_TYPES or error.get("input", ...) is None:
            errors[field] = f"{field} must not be null"
        elif error["type"] == "value_error":
            errors[field] = str(error["ctx"]["error"])
        else:
            errors[field] = f"{field}: {error['msg']}"
    return errors


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreatePriceDTO(BaseModel):
    """Immutable DTO for price creation requests.

    Validates:
    - ``brand_id``, ``product_id`` and ``price_list`` are integers >= 1.
    - every integer fits the 32-bit columns it is stored in.
    - ``start_date`` / ``end_date`` are local date-times and the window
      is not empty (``end_date`` after ``start_date``).
    - ``price`` is a Decimal greater than zero with at most two decimals.
    - ``currency`` is a 3-letter uppercase ISO 4217 code.

    Every violation is reported, not only the first one.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    brand_id: int = Field(alias="brandId")
    product_id: int = Field(alias="productId")
    start_date: datetime = Field(alias="startDate")
    end_date: datetime = Field(alias="endDate")
    price_list: int = Field(alias="priceList")
    priority: int
    price: Decimal = Field(max_digits=10, decimal_places=2)
    currency: str

    @field_validator("brand_id")
    @classmethod
    def brand_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("brandId must be greater than 0")
        return v

    @field_validator("product_id")
    @classmethod
    def product_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("productId must be greater than 0")
        return v

    @field_validator("price_list")
    @classmethod
    def price_list_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("priceList must be greater than 0")
        return v

    @field_validator("brand_id", "product_id", "price_list", "priority")
    @classmethod
    def must_fit_integer_column(cls, v: int, info: ValidationInfo) -> int:
        if not INT_MIN <= v <= INT_MAX:
            name = cls.model_fields[info.field_name].alias or info.field_name
            raise ValueError(f"{name} must be between {INT_MIN} and {INT_MAX}")
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def dates_must_be_local(cls, v: datetime) -> datetime:
        if v.tzinfo is not None:
            raise ValueError("Dates must be local date-times without a UTC offset")
        return v

    @field_validator("end_date")
    @classmethod
    def end_must_follow_start(cls, v: datetime, info: ValidationInfo) -> datetime:
        start = info.data.get("start_date")
        if start is not None and v <= start:
            raise ValueError("endDate must be after startDate")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_from_float_repr(cls, v):
        # JSON numbers arrive as floats; 49.99 must stay 49.99, not its binary expansion.
        if isinstance(v, float):
            return Decimal(repr(v))
        return v

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("price must be greater than 0")
        return v

    @field_validator("currency")
    @classmethod
    def currency_must_be_iso_code(cls, v: str) -> str:
        if not _CURRENCY_RE.fullmatch(v):
            raise ValueError("currency must be a 3-letter ISO 4217 code")
        return v


class PriceQueryDTO(BaseModel):
    """Immutable DTO for the ``productId``/``brandId`` of a price lookup."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: int = Field(alias="productId", ge=1)
    brand_id: int = Field(alias="brandId", ge=1)
