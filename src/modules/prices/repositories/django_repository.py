"""Django ORM implementation of the Price repository.

Satisfies ``IPriceRepository`` using Django's QuerySet API.  Look-ups
follow the Null Object pattern: they return ``None``/``[]``/``False``
instead of raising, and the Service Layer decides how to translate a
missing entity into a domain error.  Database errors propagate unchanged.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import structlog
from django.db import transaction

from modules.prices.models import Price
from modules.prices.repositories.interfaces import IPriceRepository

logger = structlog.get_logger(__name__)


class PriceDjangoRepository(IPriceRepository):
    """Concrete Price repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Price]:
        """Retrieve a price by primary key, ``None`` when absent."""
        return Price.objects.filter(id=id).first()

    def find_applicable(
        self, product_id: int, brand_id: int, at: datetime
    ) -> List[Price]:
        queryset = Price.objects.filter(
            product_id=product_id,
            brand_id=brand_id,
            start_date__lte=at,
            end_date__gte=at,
        ).order_by("-priority", "-start_date", "id")
        return list(queryset)

    def get_by_product_brand_and_start_date(
        self, product_id: int, brand_id: int, start_date: datetime
    ) -> Optional[Price]:
        return Price.objects.filter(
            product_id=product_id,
            brand_id=brand_id,
            start_date=start_date,
        ).first()

    @transaction.atomic
    def save(self, entity: Price) -> Price:
        """Persist (create or update) a price."""
        entity.save()
        logger.info(
            "price.saved",
            price_id=entity.id,
            product_id=entity.product_id,
            brand_id=entity.brand_id,
        )
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Hard-delete a price by ID.

        Returns ``True`` if a row was removed, ``False`` if none matched.
        """
        deleted, _ = Price.objects.filter(id=id).delete()
        if deleted:
            logger.info("price.hard_deleted", price_id=id)
        return bool(deleted)
