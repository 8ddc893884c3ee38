"""Read-only pricing status report."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from django.utils import timezone  # type: ignore

from apps.inventory.ledger import InventoryLedger
from apps.inventory.models import period_for

from .price_model import MidpointRandom, compute_price
from .profiles import PricingProfile, get_profile


def pricing_status(
    ledger: InventoryLedger | None = None,
    profile: PricingProfile | None = None,
    clock: Callable[[], datetime] | None = None,
) -> dict:
    """
    Snapshot of every active unit with the price the model would set now.

    The preview uses the middle of the volatility band so repeated reads
    agree with each other; nothing is written.
    """
    clock = clock or timezone.now
    ledger = ledger or InventoryLedger(clock=clock)
    profile = profile or get_profile()

    now = clock()
    local = timezone.localtime(now)
    bucket = profile.bucket_for(local.weekday())
    rng = MidpointRandom()

    units = []
    for unit in ledger.list_active_units():
        quote = compute_price(
            base_price=unit.base_price,
            day_of_week=local.weekday(),
            occupancy=unit.occupancy,
            hour=local.hour,
            previous_price=unit.current_price,
            traffic=unit.demand_signal,
            rng=rng,
            profile=profile,
        )
        units.append(
            {
                "id": unit.id,
                "room_type": unit.room_type,
                "pricing_period": unit.pricing_period,
                "base_price": unit.base_price,
                "current_price": unit.current_price,
                "preview_price": quote.new_price,
                "preview_delta": quote.delta,
                "factors": quote.factors,
                "available_count": unit.available_count,
                "total_count": unit.total_count,
                "occupancy": round(unit.occupancy, 4),
                "demand_signal": unit.demand_signal,
                "last_price_update": unit.last_price_update,
            }
        )

    return {
        "timestamp": now,
        "profile": profile.name,
        "current_period": period_for(now),
        "day_of_week": local.strftime("%A"),
        "bucket": bucket.name,
        "min_price": bucket.bounds.floor,
        "max_price": bucket.bounds.ceiling,
        "units": units,
    }
