"""
Price Model

Pure nightly-rate computation. Given a base price, the calendar day, the
unit's occupancy, the hour, the previous price, the current traffic and a
random source, returns the new price clamped to the day's bounds.

No I/O and no shared state: the scheduler, the pricing status read and the
tests all call the same function with their own random source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from shared.domain.base import ValueObject

from .profiles import STANDARD_PROFILE, PriceBounds, PricingProfile


class RandomSource(Protocol):
    """Anything with `uniform(a, b)`; `random.Random` qualifies."""

    def uniform(self, a: float, b: float) -> float: ...


class MidpointRandom:
    """Random source that always lands in the middle of the range."""

    def uniform(self, a: float, b: float) -> float:
        return (a + b) / 2


@dataclass(frozen=True)
class PriceQuote(ValueObject):
    new_price: Decimal
    delta: Decimal
    bucket: str
    bounds: PriceBounds
    raw_price: Decimal
    factors: dict[str, float] = field(default_factory=dict, hash=False)


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_price(
    base_price,
    day_of_week: int,
    occupancy: float,
    hour: int,
    previous_price,
    traffic: int,
    rng: RandomSource,
    profile: PricingProfile = STANDARD_PROFILE,
) -> PriceQuote:
    """
    Compute the next nightly price for one unit.

    Args:
        base_price: Base price of the unit's pricing period
        day_of_week: Weekday of the stay, Monday=0 .. Sunday=6
        occupancy: Share of the unit's rooms already taken, 0..1
        hour: Local hour of day, 0..23
        previous_price: Price currently on the unit (None when unpriced)
        traffic: Viewers recorded since the last recompute
        rng: Source of the volatility draw
        profile: Tables and combination rule to apply

    Returns:
        PriceQuote with the clamped, rounded price and the delta against
        `previous_price`
    """
    base = _as_decimal(base_price)
    previous = _as_decimal(previous_price) if previous_price is not None else None
    bucket = profile.bucket_for(day_of_week)

    volatility = profile.volatility
    factors = {
        "occupancy": bucket.occupancy_multiplier(occupancy),
        "time_of_day": profile.time_multiplier(hour),
        "traffic": profile.traffic_multiplier(traffic),
        "volatility": rng.uniform(1 - volatility, 1 + volatility) if volatility else 1.0,
        "momentum": profile.momentum.multiplier(previous, base),
    }

    raw_price = profile.combiner.combine(base, factors)
    new_price = profile.quantize(bucket.bounds.clamp(raw_price))
    delta = new_price - previous if previous is not None else Decimal("0.00")

    return PriceQuote(
        new_price=new_price,
        delta=delta,
        bucket=bucket.name,
        bounds=bucket.bounds,
        raw_price=raw_price,
        factors=factors,
    )
