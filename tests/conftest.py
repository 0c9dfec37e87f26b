from datetime import datetime
from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.prices.models import Price


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def reference_prices():
    """The four overlapping windows of product 35455 / brand 1."""
    rows = [
        (datetime(2020, 6, 14, 0, 0), datetime(2020, 12, 31, 23, 59), 1, 0, "35.50"),
        (datetime(2020, 6, 14, 15, 0), datetime(2020, 6, 14, 18, 30), 2, 1, "25.45"),
        (datetime(2020, 6, 15, 0, 0), datetime(2020, 6, 15, 11, 0), 3, 1, "30.50"),
        (datetime(2020, 6, 15, 16, 0), datetime(2020, 12, 31, 23, 59), 4, 1, "38.95"),
    ]
    return [
        Price.objects.create(
            brand_id=1,
            product_id=35455,
            start_date=start,
            end_date=end,
            price_list=price_list,
            priority=priority,
            price=Decimal(amount),
            currency="EUR",
        )
        for start, end, price_list, priority, amount in rows
    ]
