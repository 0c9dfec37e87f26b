"""Price repository interface.

Extends ``IRepository[Price]`` with the two look-ups the price rules need:
the applicable-window range query and the duplicate-window equality query.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.prices.models import Price


class IPriceRepository(IRepository["Price"]):
    """Repository contract for the Price aggregate."""

    @abstractmethod
    def find_applicable(
        self, product_id: int, brand_id: int, at: datetime
    ) -> List[Price]:
        """Prices for ``product_id``/``brand_id`` whose window contains ``at``.

        Both window ends are inclusive.  Results are ordered by ``priority``
        descending, so the first element is the applicable price.
        """

    @abstractmethod
    def get_by_product_brand_and_start_date(
        self, product_id: int, brand_id: int, start_date: datetime
    ) -> Optional[Price]:
        """Retrieve the price starting exactly at ``start_date``, if any."""
