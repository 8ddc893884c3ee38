"""Unit tests for the nightly price computation."""

from __future__ import annotations

import random
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from apps.pricing.price_model import MidpointRandom, compute_price
from apps.pricing.profiles import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    STANDARD_PROFILE,
    SUNDAY,
    TUESDAY,
    WEIGHTED_PROFILE,
    get_profile,
)

BASE = Decimal("86.00")
NEUTRAL_TRAFFIC = 10


class PriceModelTests(SimpleTestCase):
    """Covers bounds, calendar buckets and the individual demand factors."""

    def test_busy_saturday_afternoon_hits_the_ceiling(self) -> None:
        quote = compute_price(
            base_price=BASE,
            day_of_week=SATURDAY,
            occupancy=0.95,
            hour=15,
            previous_price=BASE,
            traffic=NEUTRAL_TRAFFIC,
            rng=random.Random(1),
        )

        self.assertEqual(quote.bucket, "B")
        self.assertEqual(quote.new_price, Decimal("99.00"))
        self.assertEqual(quote.delta, Decimal("13.00"))
        self.assertGreater(quote.raw_price, Decimal("99"))

    def test_empty_monday_morning_falls_to_the_floor(self) -> None:
        quote = compute_price(
            base_price=BASE,
            day_of_week=MONDAY,
            occupancy=0.10,
            hour=9,
            previous_price=BASE,
            traffic=NEUTRAL_TRAFFIC,
            rng=random.Random(1),
        )

        self.assertEqual(quote.bucket, "A")
        self.assertEqual(quote.new_price, Decimal("75.00"))
        self.assertLess(quote.raw_price, Decimal("75"))

    def test_price_always_within_day_bounds(self) -> None:
        rng = random.Random(7)
        for day in range(7):
            bounds = STANDARD_PROFILE.bounds_for(day)
            for hour in range(24):
                for occupancy in (0.0, 0.3, 0.6, 0.8, 0.95, 1.0):
                    for traffic in (0, 10, 20, 40):
                        for previous in (None, Decimal("60"), BASE, Decimal("120")):
                            quote = compute_price(BASE, day, occupancy, hour, previous, traffic, rng)
                            self.assertTrue(
                                bounds.floor <= quote.new_price <= bounds.ceiling,
                                f"{quote.new_price} outside {bounds} on day {day} at {hour}:00",
                            )
                            self.assertEqual(quote.new_price, quote.new_price.quantize(Decimal("1")))

    def test_weighted_profile_respects_bounds(self) -> None:
        rng = random.Random(11)
        for day in range(7):
            bounds = WEIGHTED_PROFILE.bounds_for(day)
            for hour in range(24):
                for occupancy in (0.0, 0.5, 1.0):
                    quote = compute_price(BASE, day, occupancy, hour, BASE, 30, rng, profile=WEIGHTED_PROFILE)
                    self.assertTrue(bounds.contains(quote.new_price))

    def test_same_seed_gives_same_prices(self) -> None:
        def run(seed: int) -> list[Decimal]:
            rng = random.Random(seed)
            return [
                compute_price(BASE, TUESDAY, 0.6, hour, BASE, NEUTRAL_TRAFFIC, rng).raw_price
                for hour in range(24)
            ]

        self.assertEqual(run(42), run(42))

    def test_quiet_weekday_without_volatility_keeps_base(self) -> None:
        profile = get_profile("standard", volatility=0)

        quote = compute_price(BASE, TUESDAY, 0.6, 12, BASE, NEUTRAL_TRAFFIC, MidpointRandom(), profile)

        self.assertEqual(quote.new_price, Decimal("86.00"))
        self.assertEqual(quote.delta, Decimal("0.00"))
        self.assertEqual(quote.factors["volatility"], 1.0)

    def test_first_price_has_zero_delta_and_no_momentum(self) -> None:
        quote = compute_price(BASE, TUESDAY, 0.6, 12, None, NEUTRAL_TRAFFIC, MidpointRandom())

        self.assertEqual(quote.delta, Decimal("0.00"))
        self.assertEqual(quote.factors["momentum"], 1.0)

    def test_momentum_pulls_drifted_price_back(self) -> None:
        high = compute_price(BASE, TUESDAY, 0.6, 12, Decimal("99"), NEUTRAL_TRAFFIC, MidpointRandom())
        low = compute_price(BASE, TUESDAY, 0.6, 12, Decimal("75"), NEUTRAL_TRAFFIC, MidpointRandom())

        self.assertEqual(high.factors["momentum"], 0.98)
        self.assertEqual(low.factors["momentum"], 1.02)

    def test_traffic_steps(self) -> None:
        self.assertEqual(STANDARD_PROFILE.traffic_multiplier(0), 0.97)
        self.assertEqual(STANDARD_PROFILE.traffic_multiplier(5), 1.00)
        self.assertEqual(STANDARD_PROFILE.traffic_multiplier(15), 1.00)
        self.assertEqual(STANDARD_PROFILE.traffic_multiplier(16), 1.05)
        self.assertEqual(STANDARD_PROFILE.traffic_multiplier(26), 1.10)

    def test_time_bands(self) -> None:
        self.assertEqual(STANDARD_PROFILE.time_multiplier(8), 0.97)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(12), 1.0)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(19), 1.08)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(1), 0.93)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(23), 0.93)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(2), 1.0)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(10), 1.0)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(17), 1.0)
        self.assertEqual(STANDARD_PROFILE.time_multiplier(21), 1.0)

    def test_friday_and_saturday_share_the_weekend_bucket(self) -> None:
        self.assertEqual(STANDARD_PROFILE.bucket_for(FRIDAY).name, "B")
        self.assertEqual(STANDARD_PROFILE.bucket_for(SATURDAY).name, "B")
        self.assertEqual(STANDARD_PROFILE.bucket_for(SUNDAY).name, "A")
        self.assertEqual(STANDARD_PROFILE.bounds_for(SUNDAY).floor, Decimal("75"))
        self.assertEqual(STANDARD_PROFILE.bounds_for(FRIDAY).floor, Decimal("80"))

    def test_half_dollar_rounds_up(self) -> None:
        self.assertEqual(STANDARD_PROFILE.quantize(Decimal("82.5")), Decimal("83.00"))
        self.assertEqual(STANDARD_PROFILE.quantize(Decimal("82.49")), Decimal("82.00"))


class ProfileLookupTests(SimpleTestCase):
    @override_settings(PRICING_PROFILE="weighted", PRICING_VOLATILITY=0.05)
    def test_reads_configured_profile(self) -> None:
        profile = get_profile()

        self.assertEqual(profile.name, "weighted")
        self.assertEqual(profile.volatility, 0.05)

    def test_unknown_profile_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            get_profile("surge", volatility=0.03)
