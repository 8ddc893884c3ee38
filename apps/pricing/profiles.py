"""
Pricing Profiles

A profile bundles every table the price model reads: day buckets with
their bounds and occupancy curves, time-of-day bands, the traffic step
function, the volatility band, the momentum rule and the rule that
combines the factors. Historical formula variants are profiles, not
separate code paths; the active one is picked by `PRICING_PROFILE`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from shared.domain.base import ValueObject

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


@dataclass(frozen=True)
class PriceBounds(ValueObject):
    """Inclusive [floor, ceiling] a nightly price must stay within."""

    floor: Decimal
    ceiling: Decimal

    def __post_init__(self):
        if self.floor > self.ceiling:
            raise ValueError(f"Price floor {self.floor} is above ceiling {self.ceiling}")

    def clamp(self, price: Decimal) -> Decimal:
        return min(max(price, self.floor), self.ceiling)

    def contains(self, price: Decimal) -> bool:
        return self.floor <= price <= self.ceiling

    def __str__(self):
        return f"[{self.floor}, {self.ceiling}]"


@dataclass(frozen=True)
class DayBucket(ValueObject):
    """
    Days sharing the same bounds and demand curve.

    `occupancy_steps` is checked top-down: the first (threshold, multiplier)
    pair whose threshold the occupancy reaches wins, otherwise
    `low_occupancy_multiplier` applies.
    """

    name: str
    days: frozenset[int]
    bounds: PriceBounds
    occupancy_steps: tuple[tuple[float, float], ...]
    low_occupancy_multiplier: float

    def occupancy_multiplier(self, occupancy: float) -> float:
        for threshold, multiplier in self.occupancy_steps:
            if occupancy >= threshold:
                return multiplier
        return self.low_occupancy_multiplier


@dataclass(frozen=True)
class TimeBand(ValueObject):
    name: str
    hours: frozenset[int]
    multiplier: float


@dataclass(frozen=True)
class MomentumRule(ValueObject):
    """Nudges the price back toward base once it drifted past a ratio."""

    upper_ratio: float = 1.10
    lower_ratio: float = 0.90
    damp_down: float = 0.98
    damp_up: float = 1.02

    def multiplier(self, previous_price: Decimal | None, base_price: Decimal) -> float:
        if not previous_price or base_price <= 0:
            return 1.0
        ratio = float(previous_price / base_price)
        if ratio > self.upper_ratio:
            return self.damp_down
        if ratio < self.lower_ratio:
            return self.damp_up
        return 1.0


class MultiplicativeCombiner:
    """Canonical rule: base price times every factor."""

    name = "multiplicative"

    def combine(self, base_price: Decimal, factors: Mapping[str, float]) -> Decimal:
        multiplier = 1.0
        for value in factors.values():
            multiplier *= value
        return base_price * Decimal(str(round(multiplier, 8)))


@dataclass(frozen=True)
class WeightedSumCombiner:
    """Base price scaled by the weighted sum of each factor's deviation from 1."""

    weights: Mapping[str, float] = field(default_factory=dict)
    name: str = "weighted_sum"

    def combine(self, base_price: Decimal, factors: Mapping[str, float]) -> Decimal:
        adjustment = sum(self.weights.get(key, 1.0) * (value - 1.0) for key, value in factors.items())
        return base_price * Decimal(str(round(1.0 + adjustment, 8)))


@dataclass(frozen=True)
class PricingProfile:
    name: str
    buckets: tuple[DayBucket, ...]
    time_bands: tuple[TimeBand, ...]
    # (minimum viewers, multiplier), highest threshold first
    traffic_steps: tuple[tuple[int, float], ...]
    volatility: float = 0.03
    momentum: MomentumRule = field(default_factory=MomentumRule)
    combiner: MultiplicativeCombiner | WeightedSumCombiner = field(default_factory=MultiplicativeCombiner)
    price_quantum: Decimal = Decimal("1")

    def bucket_for(self, day_of_week: int) -> DayBucket:
        for bucket in self.buckets:
            if day_of_week in bucket.days:
                return bucket
        raise ValueError(f"Profile {self.name} has no bucket for weekday {day_of_week}")

    def bounds_for(self, day_of_week: int) -> PriceBounds:
        return self.bucket_for(day_of_week).bounds

    def time_multiplier(self, hour: int) -> float:
        for band in self.time_bands:
            if hour in band.hours:
                return band.multiplier
        return 1.0

    def traffic_multiplier(self, viewers: int) -> float:
        for threshold, multiplier in self.traffic_steps:
            if viewers >= threshold:
                return multiplier
        return 1.0

    def quantize(self, price: Decimal) -> Decimal:
        steps = (price / self.price_quantum).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return (steps * self.price_quantum).quantize(Decimal("0.01"))


# Sunday through Thursday sell slowly; Friday and Saturday fill up.
WEEKDAY_BUCKET = DayBucket(
    name="A",
    days=frozenset({SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY}),
    bounds=PriceBounds(Decimal("75"), Decimal("99")),
    occupancy_steps=((0.90, 1.10), (0.75, 1.05), (0.50, 1.00), (0.25, 0.95)),
    low_occupancy_multiplier=0.85,
)

WEEKEND_BUCKET = DayBucket(
    name="B",
    days=frozenset({FRIDAY, SATURDAY}),
    bounds=PriceBounds(Decimal("80"), Decimal("99")),
    occupancy_steps=((0.90, 1.20), (0.75, 1.12), (0.50, 1.05), (0.25, 1.00)),
    low_occupancy_multiplier=0.97,
)

TIME_BANDS = (
    TimeBand("morning_planning", frozenset(range(7, 10)), 0.97),
    TimeBand("afternoon_peak", frozenset(range(14, 17)), 1.05),
    TimeBand("evening_same_day", frozenset(range(18, 21)), 1.08),
    TimeBand("late_night_urgency", frozenset({23, 0, 1}), 0.93),
)

# 5-15 concurrent viewers is the neutral band.
TRAFFIC_STEPS = ((26, 1.10), (16, 1.05), (5, 1.00), (0, 0.97))

STANDARD_PROFILE = PricingProfile(
    name="standard",
    buckets=(WEEKDAY_BUCKET, WEEKEND_BUCKET),
    time_bands=TIME_BANDS,
    traffic_steps=TRAFFIC_STEPS,
)

WEIGHTED_PROFILE = PricingProfile(
    name="weighted",
    buckets=(WEEKDAY_BUCKET, WEEKEND_BUCKET),
    time_bands=TIME_BANDS,
    traffic_steps=TRAFFIC_STEPS,
    combiner=WeightedSumCombiner(
        weights={
            "occupancy": 1.0,
            "time_of_day": 0.6,
            "traffic": 0.8,
            "volatility": 1.0,
            "momentum": 1.0,
        }
    ),
)

PROFILES: dict[str, PricingProfile] = {
    STANDARD_PROFILE.name: STANDARD_PROFILE,
    WEIGHTED_PROFILE.name: WEIGHTED_PROFILE,
}


def get_profile(name: str | None = None, *, volatility: float | None = None) -> PricingProfile:
    """Look up a registered profile, defaulting to the configured one."""

    if name is None or volatility is None:
        from django.conf import settings  # type: ignore

        name = name or getattr(settings, "PRICING_PROFILE", STANDARD_PROFILE.name)
        if volatility is None:
            volatility = getattr(settings, "PRICING_VOLATILITY", None)

    try:
        profile = PROFILES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown pricing profile {name!r}; choose from {sorted(PROFILES)}") from exc

    if volatility is not None and volatility != profile.volatility:
        profile = replace(profile, volatility=float(volatility))
    return profile
