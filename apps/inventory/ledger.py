"""
Inventory Ledger

This is the CRITICAL boundary for preventing overbooking and stale prices.
Every mutation of a pricing unit MUST go through this ledger.

Strategy (Defense in Depth):
1. In-process serialization: one lock per unit, never one global lock
2. Conditional updates: UPDATE ... WHERE available_count > 0 with F() expressions
3. Database constraints: available_count <= total_count check constraint
"""

from __future__ import annotations

import functools
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Iterator

from django.db import DatabaseError, transaction  # type: ignore
from django.db.models import DateTimeField, F, Q, Value  # type: ignore
from django.db.models.functions import Greatest  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import NotFoundError, TransientError

from .models import PricingUnit

logger = logging.getLogger(__name__)


class UnitLockRegistry:
    """Hands out one re-entrant lock per pricing unit."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.RLock] = {}

    def get(self, unit_id: int) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(unit_id)
            if lock is None:
                lock = self._locks[unit_id] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, unit_id: int) -> Iterator[None]:
        with self.get(unit_id):
            yield


unit_locks = UnitLockRegistry()


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _translate_db_errors(method):
    """Re-raise database failures as TransientError."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            raise TransientError(f"Inventory storage failed during {method.__name__}: {exc}") from exc

    return wrapper


class InventoryLedger:
    """
    Atomic read-check-mutate operations over pricing units.

    Usage:
        ledger = InventoryLedger()

        # Reserve one room (exactly one concurrent caller wins the last room)
        if not ledger.try_decrement_availability(unit_id):
            raise ConflictError()

        # Multi-step work that must not interleave with other writers of the unit
        with ledger.unit_transaction(unit_id):
            unit = ledger.get_unit(unit_id, for_update=True)
            ...
    """

    def __init__(self, clock: Callable[[], datetime] | None = None, locks: UnitLockRegistry | None = None):
        self.clock = clock or timezone.now
        self.locks = locks or unit_locks

    @contextmanager
    def unit_transaction(self, unit_id: int) -> Iterator[None]:
        """Serialize a block of work against every other writer of one unit."""
        with self.locks.hold(unit_id), transaction.atomic():
            yield

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @_translate_db_errors
    def get_unit(self, unit_id: int, *, for_update: bool = False) -> PricingUnit:
        queryset = PricingUnit.objects.filter(pk=unit_id)
        if for_update:
            queryset = _lock_queryset_if_possible(queryset)
        unit = queryset.first()
        if unit is None:
            raise NotFoundError(f"Pricing unit {unit_id} not found.")
        return unit

    @_translate_db_errors
    def list_active_units(self, *, pricing_period: str | None = None) -> list[PricingUnit]:
        queryset = PricingUnit.objects.filter(status=PricingUnit.Status.ACTIVE)
        if pricing_period:
            queryset = queryset.filter(pricing_period=pricing_period)
        return list(queryset.order_by("current_price", "id"))

    # ------------------------------------------------------------------
    # Price writes
    # ------------------------------------------------------------------

    @_translate_db_errors
    def update_price(self, unit_id: int, price: Decimal, timestamp: datetime) -> bool:
        """
        Write a recomputed price stamped with `timestamp`.

        Returns False without writing when the stored timestamp is newer,
        so a slow sweep never overwrites a later override.
        """
        with self.unit_transaction(unit_id):
            updated = PricingUnit.objects.filter(pk=unit_id).filter(
                Q(last_price_update__lte=timestamp)
            ).update(current_price=price, last_price_update=timestamp)
        if not updated:
            logger.info(f"Skipped stale price write for unit {unit_id} stamped {timestamp.isoformat()}")
        return bool(updated)

    @_translate_db_errors
    def set_price(self, unit_id: int, price: Decimal) -> PricingUnit:
        """Write an explicit price, bypassing the price model."""
        now = self.clock()
        with self.unit_transaction(unit_id):
            updated = PricingUnit.objects.filter(pk=unit_id).update(
                current_price=price,
                last_price_update=Greatest(F("last_price_update"), Value(now, output_field=DateTimeField())),
            )
            if not updated:
                raise NotFoundError(f"Pricing unit {unit_id} not found.")
            return PricingUnit.objects.get(pk=unit_id)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    @_translate_db_errors
    def try_decrement_availability(self, unit_id: int) -> bool:
        """Take one room if any is left. Exactly one caller wins the last room."""
        with self.unit_transaction(unit_id):
            updated = PricingUnit.objects.filter(
                pk=unit_id,
                status=PricingUnit.Status.ACTIVE,
                available_count__gt=0,
            ).update(available_count=F("available_count") - 1)
        return bool(updated)

    @_translate_db_errors
    def increment_availability(self, unit_id: int) -> bool:
        """Give one room back, never beyond total_count."""
        with self.unit_transaction(unit_id):
            updated = PricingUnit.objects.filter(
                pk=unit_id,
                available_count__lt=F("total_count"),
            ).update(available_count=F("available_count") + 1)
        if not updated:
            logger.warning(f"Unit {unit_id} already at full capacity, nothing to reclaim")
        return bool(updated)

    # ------------------------------------------------------------------
    # Demand signal
    # ------------------------------------------------------------------

    @_translate_db_errors
    def record_views(self, unit_ids: Iterable[int]) -> int:
        ids = list(unit_ids)
        if not ids:
            return 0
        return PricingUnit.objects.filter(pk__in=ids).update(demand_signal=F("demand_signal") + 1)

    @_translate_db_errors
    def consume_demand(self, unit_id: int, amount: int) -> bool:
        """Subtract views already priced in, keeping the ones recorded meanwhile."""
        if amount <= 0:
            return False
        with self.unit_transaction(unit_id):
            updated = PricingUnit.objects.filter(
                pk=unit_id,
                demand_signal__gte=amount,
            ).update(demand_signal=F("demand_signal") - amount)
        return bool(updated)
