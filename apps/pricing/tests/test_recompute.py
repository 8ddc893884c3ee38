"""Tests for the recompute sweep and the admin price override."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.inventory.ledger import InventoryLedger
from apps.inventory.models import PricingUnit
from apps.pricing.models import PriceChange
from apps.pricing.override import OverrideGate
from apps.pricing.scheduler import RecomputeScheduler, default_random_source
from apps.pricing.status import pricing_status
from apps.pricing.tasks import run_recompute_sweep
from shared.domain.exceptions import NotFoundError, TransientError, ValidationError

LOCAL = ZoneInfo("America/Los_Angeles")
SATURDAY_AFTERNOON = datetime(2026, 10, 17, 15, 0, tzinfo=LOCAL)


def fixed_clock(moment: datetime):
    return lambda: moment


def create_unit(**overrides) -> PricingUnit:
    fields = {
        "room_type": "Standard Room",
        "morning_base_price": Decimal("86.00"),
        "night_base_price": Decimal("80.00"),
        "current_price": Decimal("86.00"),
        "available_count": 1,
        "total_count": 20,
        "pricing_period": PricingUnit.PricingPeriod.MORNING,
        "demand_signal": 10,
        "last_price_update": SATURDAY_AFTERNOON - timedelta(hours=1),
    }
    fields.update(overrides)
    return PricingUnit.objects.create(**fields)


class FailingLedger(InventoryLedger):
    """Ledger whose price writes fail for one unit."""

    def __init__(self, failing_unit_id: int, **kwargs):
        super().__init__(**kwargs)
        self.failing_unit_id = failing_unit_id

    def update_price(self, unit_id, price, timestamp):  # type: ignore
        if unit_id == self.failing_unit_id:
            raise TransientError("database unavailable")
        return super().update_price(unit_id, price, timestamp)


class RecomputeSchedulerTests(TestCase):
    """Covers the write policy, stale writes and per-unit fault isolation."""

    def _scheduler(self, moment: datetime = SATURDAY_AFTERNOON, **kwargs) -> RecomputeScheduler:
        kwargs.setdefault("rng", random.Random(3))
        kwargs.setdefault("min_delta", "1")
        kwargs.setdefault("current_period_only", False)
        return RecomputeScheduler(clock=fixed_clock(moment), **kwargs)

    def test_sweep_writes_new_price_and_logs_change(self) -> None:
        unit = create_unit()

        result = self._scheduler().run_sweep()

        self.assertEqual(result, {"updated": 1, "unchanged": 0, "failed": 0})
        unit.refresh_from_db()
        self.assertEqual(unit.current_price, Decimal("99.00"))
        self.assertEqual(unit.last_price_update, SATURDAY_AFTERNOON)
        self.assertEqual(unit.demand_signal, 0)
        change = PriceChange.objects.get(unit=unit)
        self.assertEqual(change.source, PriceChange.Source.RECOMPUTE)
        self.assertEqual(change.old_price, Decimal("86.00"))
        self.assertEqual(change.new_price, Decimal("99.00"))

    def test_small_move_is_not_written(self) -> None:
        unit = create_unit(current_price=Decimal("99.00"))
        stamped = unit.last_price_update

        result = self._scheduler().run_sweep()

        self.assertEqual(result, {"updated": 0, "unchanged": 1, "failed": 0})
        unit.refresh_from_db()
        self.assertEqual(unit.current_price, Decimal("99.00"))
        self.assertEqual(unit.last_price_update, stamped)
        self.assertEqual(unit.demand_signal, 10)
        self.assertFalse(PriceChange.objects.exists())

    def test_stale_sweep_never_overwrites_newer_price(self) -> None:
        unit = create_unit(last_price_update=SATURDAY_AFTERNOON + timedelta(minutes=5))

        result = self._scheduler().run_sweep()

        self.assertEqual(result["updated"], 0)
        unit.refresh_from_db()
        self.assertEqual(unit.current_price, Decimal("86.00"))
        self.assertFalse(PriceChange.objects.exists())

    def test_failing_unit_does_not_stop_the_sweep(self) -> None:
        broken = create_unit()
        healthy = create_unit(room_type="Double Room")
        ledger = FailingLedger(broken.id, clock=fixed_clock(SATURDAY_AFTERNOON))

        result = self._scheduler(ledger=ledger).run_sweep()

        self.assertEqual(result, {"updated": 1, "unchanged": 0, "failed": 1})
        broken.refresh_from_db()
        healthy.refresh_from_db()
        self.assertEqual(broken.current_price, Decimal("86.00"))
        self.assertEqual(healthy.current_price, Decimal("99.00"))

    def test_inactive_units_are_skipped(self) -> None:
        unit = create_unit(status=PricingUnit.Status.INACTIVE)

        result = self._scheduler().run_sweep()

        self.assertEqual(result, {"updated": 0, "unchanged": 0, "failed": 0})
        unit.refresh_from_db()
        self.assertEqual(unit.current_price, Decimal("86.00"))

    def test_current_period_only_leaves_other_period_alone(self) -> None:
        morning = create_unit()
        night = create_unit(pricing_period=PricingUnit.PricingPeriod.NIGHT)

        result = self._scheduler(current_period_only=True).run_sweep()

        self.assertEqual(result, {"updated": 1, "unchanged": 0, "failed": 0})
        morning.refresh_from_db()
        night.refresh_from_db()
        self.assertEqual(morning.current_price, Decimal("99.00"))
        self.assertEqual(night.current_price, Decimal("86.00"))

    def test_views_recorded_during_the_sweep_survive(self) -> None:
        unit = create_unit()
        scheduler = self._scheduler()
        InventoryLedger().record_views([unit.id])  # lands after the sweep read the unit

        scheduler.recompute_unit(unit, SATURDAY_AFTERNOON)

        unit.refresh_from_db()
        self.assertEqual(unit.demand_signal, 1)

    def test_task_reports_counts(self) -> None:
        create_unit(status=PricingUnit.Status.INACTIVE)

        result = run_recompute_sweep()

        self.assertEqual(result, {"updated": 0, "unchanged": 0, "failed": 0})


class RandomSourceTests(SimpleTestCase):
    """Covers the shared volatility stream used by scheduled sweeps."""

    @override_settings(PRICING_RANDOM_SEED="volatility-stream")
    def test_schedulers_share_one_seeded_stream(self) -> None:
        schedulers = [RecomputeScheduler(clock=fixed_clock(SATURDAY_AFTERNOON)) for _ in range(3)]

        draws = [scheduler.rng.uniform(0.97, 1.03) for scheduler in schedulers]

        self.assertIs(schedulers[0].rng, schedulers[2].rng)
        self.assertEqual(len(set(draws)), 3)

    @override_settings(PRICING_RANDOM_SEED="replayable-seed")
    def test_seeded_stream_replays_from_the_seed(self) -> None:
        rng = default_random_source()
        expected = random.Random("replayable-seed")

        self.assertEqual(
            [rng.random() for _ in range(3)],
            [expected.random() for _ in range(3)],
        )

    def test_each_seed_gets_its_own_stream(self) -> None:
        with self.settings(PRICING_RANDOM_SEED="first-seed"):
            first = default_random_source()
        with self.settings(PRICING_RANDOM_SEED="second-seed"):
            second = default_random_source()

        self.assertIsNot(first, second)


class OverrideGateTests(TestCase):
    """Covers bounds checks on overrides and their interplay with the sweep."""

    def setUp(self) -> None:
        self.unit = create_unit()
        self.gate = OverrideGate(clock=fixed_clock(SATURDAY_AFTERNOON))

    def test_override_inside_bounds_is_written(self) -> None:
        unit = self.gate.override_price(self.unit.id, "95", "Festival weekend")

        self.assertEqual(unit.current_price, Decimal("95.00"))
        self.assertEqual(unit.last_price_update, SATURDAY_AFTERNOON)
        change = PriceChange.objects.get(unit=self.unit)
        self.assertEqual(change.source, PriceChange.Source.OVERRIDE)
        self.assertEqual(change.old_price, Decimal("86.00"))
        self.assertEqual(change.new_price, Decimal("95.00"))
        self.assertEqual(change.reason, "Festival weekend")

    def test_override_below_weekend_floor_is_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.gate.override_price(self.unit.id, Decimal("60"), "Clearance")

        self.assertEqual(ctx.exception.code, "out_of_bounds")
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.current_price, Decimal("86.00"))
        self.assertFalse(PriceChange.objects.exists())

    def test_weekday_floor_applies_on_monday(self) -> None:
        gate = OverrideGate(clock=fixed_clock(datetime(2026, 10, 19, 10, 0, tzinfo=LOCAL)))

        unit = gate.override_price(self.unit.id, "77", "Slow week")

        self.assertEqual(unit.current_price, Decimal("77.00"))
        with self.assertRaises(ValidationError):
            self.gate.override_price(self.unit.id, "77", "Slow week")

    def test_malformed_input_is_rejected(self) -> None:
        for price, reason in ((None, "x"), ("", "x"), ("abc", "x"), ("NaN", "x"), ("Infinity", "x"), ("90", "  ")):
            with self.assertRaises(ValidationError):
                self.gate.override_price(self.unit.id, price, reason)

    def test_unknown_or_inactive_unit_is_not_found(self) -> None:
        inactive = create_unit(status=PricingUnit.Status.INACTIVE)

        with self.assertRaises(NotFoundError):
            self.gate.override_price(999_999, "90", "x")
        with self.assertRaises(NotFoundError):
            self.gate.override_price(inactive.id, "90", "x")

    def test_sweep_stamped_before_override_is_discarded(self) -> None:
        later = SATURDAY_AFTERNOON + timedelta(minutes=10)
        OverrideGate(clock=fixed_clock(later)).override_price(self.unit.id, "95", "Manager call")

        result = RecomputeScheduler(
            clock=fixed_clock(SATURDAY_AFTERNOON),
            rng=random.Random(3),
            min_delta="1",
            current_period_only=False,
        ).run_sweep()

        self.assertEqual(result["updated"], 0)
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.current_price, Decimal("95.00"))


class PricingAPITests(APITestCase):
    def setUp(self) -> None:
        self.unit = create_unit()

    def test_override_endpoint_returns_updated_unit(self) -> None:
        url = reverse("pricing-override", args=[self.unit.id])

        response = self.client.post(url, {"price": "95", "reason": "Concert"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["current_price"], "95.00")

    def test_override_endpoint_rejects_out_of_bounds_price(self) -> None:
        url = reverse("pricing-override", args=[self.unit.id])

        response = self.client.post(url, {"price": "60", "reason": "Clearance"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "out_of_bounds")

    def test_override_endpoint_requires_reason(self) -> None:
        url = reverse("pricing-override", args=[self.unit.id])

        response = self.client.post(url, {"price": "90"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_override_endpoint_unknown_unit(self) -> None:
        url = reverse("pricing-override", args=[999_999])

        response = self.client.post(url, {"price": "90", "reason": "x"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")

    def test_status_endpoint_lists_active_units(self) -> None:
        create_unit(status=PricingUnit.Status.INACTIVE)

        response = self.client.get(reverse("pricing-status"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["units"]), 1)
        self.assertIn(response.data["bucket"], ("A", "B"))
        self.assertEqual(response.data["max_price"], "99.00")

    def test_status_preview_does_not_write(self) -> None:
        report = pricing_status(clock=fixed_clock(SATURDAY_AFTERNOON))

        self.assertEqual(report["bucket"], "B")
        self.assertEqual(report["min_price"], Decimal("80"))
        self.assertEqual(report["current_period"], PricingUnit.PricingPeriod.MORNING)
        self.assertEqual(report["units"][0]["preview_price"], Decimal("99.00"))
        self.unit.refresh_from_db()
        self.assertEqual(self.unit.current_price, Decimal("86.00"))

    def test_history_lists_changes_newest_first(self) -> None:
        self.client.post(
            reverse("pricing-override", args=[self.unit.id]),
            {"price": "95", "reason": "Concert"},
            format="json",
        )
        self.client.post(
            reverse("pricing-override", args=[self.unit.id]),
            {"price": "90", "reason": "Concert over"},
            format="json",
        )

        response = self.client.get(reverse("pricing-history", args=[self.unit.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry["new_price"] for entry in response.data], ["90.00", "95.00"])
        self.assertEqual(response.data[0]["old_price"], "95.00")
        self.assertEqual(response.data[0]["source"], PriceChange.Source.OVERRIDE)
        self.assertEqual(response.data[0]["reason"], "Concert over")
        self.assertEqual(response.data[0]["unit"], self.unit.id)

    def test_history_respects_limit(self) -> None:
        for price in ("91", "92", "93"):
            self.client.post(
                reverse("pricing-override", args=[self.unit.id]),
                {"price": price, "reason": "Step"},
                format="json",
            )

        response = self.client.get(reverse("pricing-history", args=[self.unit.id]), {"limit": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["new_price"], "93.00")

    def test_history_unknown_unit(self) -> None:
        response = self.client.get(reverse("pricing-history", args=[999_999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")
