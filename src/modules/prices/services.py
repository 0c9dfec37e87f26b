"""Price service layer (Use Cases).

Orchestrates the price rules, delegating persistence to the injected
``IPriceRepository``.

Rules enforced here:
- Applicable price: the matching window with the highest priority wins.
- A price for the same product, brand and start date may exist only once.
- Deleting an unknown price is reported, not silently ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

import structlog
from django.db import DatabaseError, IntegrityError, transaction

from modules.prices.exceptions import (
    PriceAlreadyExists,
    PriceNotFound,
    PriceStorageError,
)
from modules.prices.models import Price

if TYPE_CHECKING:
    from modules.prices.dtos import CreatePriceDTO
    from modules.prices.repositories.interfaces import IPriceRepository

logger = structlog.get_logger(__name__)


class PriceService:
    """Application service for Price use-cases.

    Receives an ``IPriceRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IPriceRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_price(self, dto: CreatePriceDTO) -> Price:
        """Store a new price unless its ``(product, brand, start)`` key is taken.

        The look-up and the insert share one transaction; the unique
        constraint on the table catches writers that race past the look-up.

        Raises:
            PriceAlreadyExists: if a price with the same key is stored.
            PriceStorageError: if the datastore rejects the write.
        """
        log = logger.bind(
            product_id=dto.product_id,
            brand_id=dto.brand_id,
            start_date=dto.start_date.isoformat(),
        )

        existing = self._repo.get_by_product_brand_and_start_date(
            dto.product_id, dto.brand_id, dto.start_date
        )
        if existing:
            log.warning("price.duplicate", existing_price_id=existing.id)
            raise PriceAlreadyExists()

        price = Price(
            brand_id=dto.brand_id,
            product_id=dto.product_id,
            start_date=dto.start_date,
            end_date=dto.end_date,
            price_list=dto.price_list,
            priority=dto.priority,
            price=dto.price,
            currency=dto.currency,
        )
        try:
            price = self._repo.save(price)
        except IntegrityError as exc:
            log.warning("price.duplicate_on_insert", error=str(exc))
            raise PriceAlreadyExists() from exc
        except DatabaseError as exc:
            log.error("price.storage_error", error=str(exc))
            raise PriceStorageError() from exc

        log.info("price.created", price_id=price.id)
        return price

    @transaction.atomic
    def delete_price(self, id: int) -> None:
        """Permanently remove a price.

        Raises:
            PriceNotFound: if no price has this ID.
        """
        if not self._repo.delete(id):
            logger.warning("price.delete_not_found", price_id=id)
            raise PriceNotFound(f"Price {id} not found.")
        logger.info("price.deleted", price_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_applicable_prices(
        self, product_id: int, brand_id: int, at: datetime
    ) -> List[Price]:
        """Return every price valid at ``at``, highest priority first.

        Raises:
            PriceNotFound: if no window for the product and brand contains ``at``.
        """
        log = logger.bind(product_id=product_id, brand_id=brand_id, at=at.isoformat())
        prices = self._repo.find_applicable(product_id, brand_id, at)
        if not prices:
            log.warning("price.not_found")
            raise PriceNotFound()
        log.info("price.resolved", matches=len(prices), price_id=prices[0].id)
        return prices
