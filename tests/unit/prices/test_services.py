"""Unit tests for PriceService.

Covers:
- get_applicable_prices: ordering pass-through, not found.
- create_price: happy path, duplicate pre-check, lost insert race, storage failure.
- delete_price: happy path, not found.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.db import DatabaseError, IntegrityError

from modules.prices.dtos import CreatePriceDTO
from modules.prices.exceptions import (
    PriceAlreadyExists,
    PriceNotFound,
    PriceStorageError,
)
from modules.prices.models import Price
from modules.prices.services import PriceService

pytestmark = pytest.mark.unit

AT = datetime(2020, 6, 14, 16, 0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return PriceService(repository=mock_repo)


def _dto(**overrides) -> CreatePriceDTO:
    defaults = {
        "brand_id": 1,
        "product_id": 99999,
        "start_date": datetime(2021, 1, 1, 0, 0),
        "end_date": datetime(2021, 1, 2, 0, 0),
        "price_list": 2,
        "priority": 0,
        "price": Decimal("49.99"),
        "currency": "USD",
    }
    defaults.update(overrides)
    return CreatePriceDTO(**defaults)


def _price(priority: int, amount: str) -> Price:
    return Price(
        id=priority + 1,
        brand_id=1,
        product_id=35455,
        start_date=datetime(2020, 6, 14),
        end_date=datetime(2020, 12, 31),
        price_list=1,
        priority=priority,
        price=Decimal(amount),
        currency="EUR",
    )


# ===========================================================================
# get_applicable_prices
# ===========================================================================


class TestGetApplicablePrices:
    def test_returns_repository_matches(self, service, mock_repo):
        matches = [_price(1, "25.45"), _price(0, "35.50")]
        mock_repo.find_applicable.return_value = matches

        result = service.get_applicable_prices(35455, 1, AT)

        assert result == matches
        mock_repo.find_applicable.assert_called_once_with(35455, 1, AT)

    def test_empty_result_raises_not_found(self, service, mock_repo):
        mock_repo.find_applicable.return_value = []

        with pytest.raises(PriceNotFound, match="No prices found"):
            service.get_applicable_prices(35455, 1, AT)


# ===========================================================================
# create_price
# ===========================================================================


class TestCreatePrice:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_product_brand_and_start_date.return_value = None
        mock_repo.save.side_effect = lambda p: p

        price = service.create_price(_dto())

        assert price.product_id == 99999
        assert price.price == Decimal("49.99")
        assert price.currency == "USD"
        mock_repo.get_by_product_brand_and_start_date.assert_called_once_with(
            99999, 1, datetime(2021, 1, 1, 0, 0)
        )
        mock_repo.save.assert_called_once()

    def test_duplicate_raises_without_saving(self, service, mock_repo):
        mock_repo.get_by_product_brand_and_start_date.return_value = _price(0, "35.50")

        with pytest.raises(PriceAlreadyExists, match="already exists"):
            service.create_price(_dto())

        mock_repo.save.assert_not_called()

    def test_lost_insert_race_reported_as_duplicate(self, service, mock_repo):
        mock_repo.get_by_product_brand_and_start_date.return_value = None
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        with pytest.raises(PriceAlreadyExists) as excinfo:
            service.create_price(_dto())

        assert isinstance(excinfo.value.__cause__, IntegrityError)

    def test_storage_failure_wraps_cause(self, service, mock_repo):
        mock_repo.get_by_product_brand_and_start_date.return_value = None
        mock_repo.save.side_effect = DatabaseError("disk I/O error")

        with pytest.raises(PriceStorageError) as excinfo:
            service.create_price(_dto())

        assert isinstance(excinfo.value.__cause__, DatabaseError)
        assert "disk" not in excinfo.value.message


# ===========================================================================
# delete_price
# ===========================================================================


class TestDeletePrice:
    def test_success(self, service, mock_repo):
        mock_repo.delete.return_value = True

        service.delete_price(7)

        mock_repo.delete.assert_called_once_with(7)

    def test_not_found_raises(self, service, mock_repo):
        mock_repo.delete.return_value = False

        with pytest.raises(PriceNotFound, match="Price 7 not found"):
            service.delete_price(7)
