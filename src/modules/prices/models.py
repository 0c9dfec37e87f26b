"""Price model: a priced offer for a product/brand over a time window.

Rules implemented at the database level:
- ``(product_id, brand_id, start_date)`` is unique.
- ``price`` is strictly positive; ``brand_id``, ``product_id`` and
  ``price_list`` are at least 1.

Field validation for API input lives in ``dtos.py``; the constraints here
are the last line that keeps concurrent writers honest.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator, RegexValidator
from django.db import models

CURRENCY_VALIDATOR = RegexValidator(
    regex=r"\A[A-Z]{3}\Z",
    message="Currency must be a 3-letter ISO 4217 code.",
)


class Price(models.Model):
    """A price record valid for ``[start_date, end_date]`` (both inclusive).

    When several windows overlap, the record with the highest ``priority``
    is the applicable one.
    """

    id = models.BigAutoField(primary_key=True)
    brand_id = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    product_id = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    price_list = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    priority = models.IntegerField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    currency = models.CharField(max_length=3, validators=[CURRENCY_VALIDATOR])

    class Meta:
        db_table = "prices"
        ordering = ["-priority", "-start_date", "id"]
        indexes = [
            models.Index(
                fields=["product_id", "brand_id", "start_date", "end_date"],
                name="prices_lookup_idx",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["product_id", "brand_id", "start_date"],
                name="prices_product_brand_start_uniq",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="prices_price_positive",
            ),
        ]

    def __str__(self) -> str:
        return (
            f"{self.product_id}/{self.brand_id} {self.price} {self.currency} "
            f"[{self.start_date:%Y-%m-%dT%H:%M:%S} .. {self.end_date:%Y-%m-%dT%H:%M:%S}]"
            f" p{self.priority}"
        )
