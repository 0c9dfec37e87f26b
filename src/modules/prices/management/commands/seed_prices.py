from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.prices.models import Price

# (brand_id, start, end, price_list, product_id, priority, price, currency)
REFERENCE_PRICES = [
    (1, datetime(2020, 6, 14, 0, 0), datetime(2020, 12, 31, 23, 59), 1, 35455, 0, Decimal("35.50"), "EUR"),
    (1, datetime(2020, 6, 14, 15, 0), datetime(2020, 6, 14, 18, 30), 2, 35455, 1, Decimal("25.45"), "EUR"),
    (1, datetime(2020, 6, 15, 0, 0), datetime(2020, 6, 15, 11, 0), 3, 35455, 1, Decimal("30.50"), "EUR"),
    (1, datetime(2020, 6, 15, 16, 0), datetime(2020, 12, 31, 23, 59), 4, 35455, 1, Decimal("38.95"), "EUR"),
]


class Command(BaseCommand):
    help = "Seed the database with the reference price windows for product 35455."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every stored price before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            deleted, _ = Price.objects.all().delete()
            self.stdout.write(f"Removed {deleted} existing prices.")

        created = 0
        for brand_id, start, end, price_list, product_id, priority, amount, currency in REFERENCE_PRICES:
            _, was_created = Price.objects.get_or_create(
                product_id=product_id,
                brand_id=brand_id,
                start_date=start,
                defaults={
                    "end_date": end,
                    "price_list": price_list,
                    "priority": priority,
                    "price": amount,
                    "currency": currency,
                },
            )
            created += int(was_created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: created={created}, "
                f"skipped={len(REFERENCE_PRICES) - created}"
            )
        )
