from __future__ import annotations

from datetime import time
from decimal import Decimal

from django.core.management.base import BaseCommand  # type: ignore
from django.db import transaction  # type: ignore

from apps.inventory.models import PricingUnit

# Signal Hill Motel: one standard room type sold as a morning and a night rate.
DEFAULT_UNITS = [
    {
        "room_type": "Standard Room",
        "morning_base_price": Decimal("85.00"),
        "night_base_price": Decimal("75.00"),
        "current_price": Decimal("83.00"),
        "pricing_period": PricingUnit.PricingPeriod.MORNING,
        "period_start": time(6, 0),
        "period_end": time(18, 0),
    },
    {
        "room_type": "Standard Room",
        "morning_base_price": Decimal("85.00"),
        "night_base_price": Decimal("75.00"),
        "current_price": Decimal("76.00"),
        "pricing_period": PricingUnit.PricingPeriod.NIGHT,
        "period_start": time(18, 0),
        "period_end": time(6, 0),
    },
]


class Command(BaseCommand):
    help = "Creates the default pricing units if they do not exist yet"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("--rooms", type=int, default=15, help="Rooms per unit")

    def handle(self, *args, **options):  # type: ignore
        rooms = options["rooms"]
        created = 0
        with transaction.atomic():
            for unit_fields in DEFAULT_UNITS:
                _, was_created = PricingUnit.objects.get_or_create(
                    room_type=unit_fields["room_type"],
                    pricing_period=unit_fields["pricing_period"],
                    defaults={**unit_fields, "available_count": rooms, "total_count": rooms},
                )
                created += int(was_created)
        self.stdout.write(self.style.SUCCESS(f"Created {created} pricing units"))
