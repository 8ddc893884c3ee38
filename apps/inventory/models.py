"""Inventory domain models.

A pricing unit is a room type sold for one pricing period (morning or
night). Units are provisioned once and mutated continuously by the
recompute sweep, price overrides and holds; the core never deletes them.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

MORNING_STARTS = time(6, 0)
NIGHT_STARTS = time(18, 0)


class PricingUnit(models.Model):
    """Bookable room type with its own price and availability count."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    class PricingPeriod(models.TextChoices):
        MORNING = "morning", _("Morning (06:00-18:00)")
        NIGHT = "night", _("Night (18:00-06:00)")

    room_type = models.CharField(max_length=100, default="Standard")
    morning_base_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("100.00"))
    night_base_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("75.00"))
    current_price = models.DecimalField(max_digits=10, decimal_places=2)
    available_count = models.PositiveIntegerField()
    total_count = models.PositiveIntegerField()
    pricing_period = models.CharField(
        max_length=20,
        choices=PricingPeriod.choices,
        default=PricingPeriod.MORNING,
    )
    period_start = models.TimeField(default=MORNING_STARTS)
    period_end = models.TimeField(default=NIGHT_STARTS)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    last_price_update = models.DateTimeField(default=timezone.now)
    demand_signal = models.PositiveIntegerField(
        default=0,
        help_text=_("Views recorded since the last recompute; used as the traffic proxy."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Pricing unit")
        verbose_name_plural = _("Pricing units")
        ordering = ["current_price", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(available_count__lte=models.F("total_count")),
                name="unit_available_within_total",
            ),
            models.CheckConstraint(
                condition=models.Q(total_count__gt=0),
                name="unit_total_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "pricing_period"], name="unit_status_period_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room_type} ({self.pricing_period})"

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def base_price(self) -> Decimal:
        """Base price of the unit's own pricing period."""
        if self.pricing_period == self.PricingPeriod.MORNING:
            return self.morning_base_price
        return self.night_base_price

    @property
    def occupancy(self) -> float:
        return occupancy_fraction(self.available_count, self.total_count)


def occupancy_fraction(available_count: int, total_count: int) -> float:
    """Share of capacity currently taken, clamped to [0, 1]."""
    if total_count <= 0:
        return 0.0
    taken = (total_count - available_count) / total_count
    return min(max(taken, 0.0), 1.0)


def period_for(moment: datetime | None = None) -> str:
    """Pricing period label for a moment in the motel's local time."""
    local = timezone.localtime(moment or timezone.now())
    if MORNING_STARTS <= local.time() < NIGHT_STARTS:
        return PricingUnit.PricingPeriod.MORNING
    return PricingUnit.PricingPeriod.NIGHT
