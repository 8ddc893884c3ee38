"""Periodic recompute of unit prices."""

from __future__ import annotations

import logging
import random
import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.inventory.ledger import InventoryLedger
from apps.inventory.models import PricingUnit, period_for

from .models import PriceChange
from .price_model import RandomSource, compute_price
from .profiles import PricingProfile, get_profile

logger = logging.getLogger(__name__)


_random_sources: dict[object, random.Random] = {}
_random_sources_lock = threading.Lock()


def default_random_source() -> random.Random:
    """
    Process-wide random source for PRICING_RANDOM_SEED.

    The generator is seeded once per configured seed and shared by every
    scheduler, so successive sweeps keep drawing from the same stream.
    """
    seed = getattr(settings, "PRICING_RANDOM_SEED", None)
    with _random_sources_lock:
        rng = _random_sources.get(seed)
        if rng is None:
            rng = _random_sources[seed] = random.Random(seed)
    return rng


class RecomputeScheduler:
    """
    Recomputes the price of every active unit once per sweep.

    The sweep is triggered from outside (Celery beat, the `run_sweeps`
    command or a test); the scheduler only owns the clock and the random
    source it prices with. A price is written when it moved by at least
    `min_delta`, otherwise the unit is left untouched.
    """

    def __init__(
        self,
        ledger: InventoryLedger | None = None,
        profile: PricingProfile | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], datetime] | None = None,
        min_delta=None,
        current_period_only: bool | None = None,
    ):
        self.clock = clock or timezone.now
        self.ledger = ledger or InventoryLedger(clock=self.clock)
        self.profile = profile or get_profile()
        self.rng = rng or default_random_source()
        if min_delta is None:
            min_delta = getattr(settings, "PRICING_MIN_DELTA", "1")
        self.min_delta = Decimal(str(min_delta))
        if current_period_only is None:
            current_period_only = getattr(settings, "PRICING_RECOMPUTE_CURRENT_PERIOD_ONLY", False)
        self.current_period_only = current_period_only

    def run_sweep(self) -> dict[str, int]:
        now = self.clock()
        period = period_for(now) if self.current_period_only else None
        units = self.ledger.list_active_units(pricing_period=period)

        updated = unchanged = failed = 0
        for unit in units:
            try:
                if self.recompute_unit(unit, now):
                    updated += 1
                else:
                    unchanged += 1
            except Exception as e:
                failed += 1
                logger.error(f"Error recomputing price for unit {unit.id}: {e}", exc_info=True)

        logger.info(
            f"Recompute sweep finished: {updated} updated, {unchanged} unchanged, {failed} failed"
        )
        return {"updated": updated, "unchanged": unchanged, "failed": failed}

    def recompute_unit(self, unit: PricingUnit, now: datetime) -> bool:
        local = timezone.localtime(now)
        quote = compute_price(
            base_price=unit.base_price,
            day_of_week=local.weekday(),
            occupancy=unit.occupancy,
            hour=local.hour,
            previous_price=unit.current_price,
            traffic=unit.demand_signal,
            rng=self.rng,
            profile=self.profile,
        )

        if abs(quote.delta) < self.min_delta:
            return False

        with self.ledger.unit_transaction(unit.id):
            if not self.ledger.update_price(unit.id, quote.new_price, now):
                return False
            PriceChange.objects.create(
                unit_id=unit.id,
                source=PriceChange.Source.RECOMPUTE,
                old_price=unit.current_price,
                new_price=quote.new_price,
                reason=f"bucket {quote.bucket}, occupancy {unit.occupancy:.2f}, traffic {unit.demand_signal}",
            )
            self.ledger.consume_demand(unit.id, unit.demand_signal)

        logger.info(f"{unit.room_type} ({unit.pricing_period}): ${unit.current_price} → ${quote.new_price}")
        return True
