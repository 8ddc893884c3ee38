from __future__ import annotations

from django.core.management.base import BaseCommand  # type: ignore

from apps.holds.services import HoldManager
from apps.pricing.scheduler import RecomputeScheduler


class Command(BaseCommand):
    help = "Runs the hold expiry sweep and the price recompute sweep once"

    def add_arguments(self, parser):  # type: ignore
        parser.add_argument("--skip-holds", action="store_true", help="Do not expire holds")
        parser.add_argument("--skip-prices", action="store_true", help="Do not recompute prices")

    def handle(self, *args, **options):  # type: ignore
        if not options["skip_holds"]:
            result = HoldManager().expire_sweep()
            self.stdout.write(
                f"Holds: {result['expired']} expired, {result['reclaimed']} rooms reclaimed, "
                f"{result['failed']} failed"
            )
        if not options["skip_prices"]:
            result = RecomputeScheduler().run_sweep()
            self.stdout.write(
                f"Prices: {result['updated']} updated, {result['unchanged']} unchanged, "
                f"{result['failed']} failed"
            )
        self.stdout.write(self.style.SUCCESS("Sweeps finished"))
