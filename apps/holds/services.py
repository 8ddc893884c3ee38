"""Domain services for hold workflows."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable

from django.conf import settings  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.inventory.ledger import InventoryLedger
from apps.inventory.models import PricingUnit
from shared.domain.exceptions import ConflictError, NotFoundError, TransientError, ValidationError

from .models import Hold

logger = logging.getLogger(__name__)

Notifier = Callable[[Hold, PricingUnit], None]


def _default_notifier(hold: Hold, unit: PricingUnit) -> None:
    from apps.notifications.services import notify_booking  # Local import to prevent circular dependency

    notify_booking(hold, unit)


class HoldManager:
    """
    Creates, lists and expires holds.

    Every step that touches a unit runs inside the ledger's unit transaction,
    so a hold, the room it takes and the price it locks change together.

    Usage:
        manager = HoldManager()
        hold = manager.create_hold(unit_id, "guest@example.com")
        ...
        manager.expire_sweep()  # from Celery beat
    """

    def __init__(
        self,
        ledger: InventoryLedger | None = None,
        clock: Callable[[], datetime] | None = None,
        notifier: Notifier | None = None,
        hold_duration: timedelta | None = None,
        reclaim_on_expiry: bool | None = None,
    ):
        self.clock = clock or timezone.now
        self.ledger = ledger or InventoryLedger(clock=self.clock)
        self.notifier = notifier or _default_notifier
        if hold_duration is None:
            hold_duration = timedelta(minutes=getattr(settings, "HOLD_DURATION_MINUTES", 30))
        self.hold_duration = hold_duration
        if reclaim_on_expiry is None:
            reclaim_on_expiry = getattr(settings, "HOLD_RECLAIM_ON_EXPIRY", True)
        self.reclaim_on_expiry = reclaim_on_expiry

    def create_hold(
        self,
        unit_id: int,
        customer_identifier: str,
        check_in_date: date | None = None,
    ) -> Hold:
        """
        Reserve one room of a unit at its current price.

        Raises:
            ValidationError: customer missing, or already holding this unit
            NotFoundError: unit absent or inactive
            ConflictError: no rooms left
            TransientError: storage failure
        """
        customer = (customer_identifier or "").strip()
        if not customer:
            raise ValidationError("Field 'customer_identifier' is required.", code="required")

        now = self.clock()
        try:
            with self.ledger.unit_transaction(unit_id):
                unit = self.ledger.get_unit(unit_id, for_update=True)
                if not unit.is_active:
                    raise NotFoundError(f"Pricing unit {unit_id} is not available.")

                already_holding = Hold.objects.filter(
                    unit_id=unit_id,
                    customer_identifier__iexact=customer,
                    status=Hold.Status.ACTIVE,
                    expires_at__gte=now,
                ).exists()
                if already_holding:
                    raise ValidationError(
                        "You already have an active hold for this room.",
                        code="duplicate_hold",
                    )

                if not self.ledger.try_decrement_availability(unit_id):
                    raise ConflictError(f"No rooms left for {unit.room_type} ({unit.pricing_period}).")

                unit.refresh_from_db(fields=["current_price", "available_count"])
                hold = Hold.objects.create(
                    unit=unit,
                    customer_identifier=customer,
                    locked_price=unit.current_price,
                    check_in_date=check_in_date or timezone.localdate(now),
                    status=Hold.Status.ACTIVE,
                    created_at=now,
                    expires_at=now + self.hold_duration,
                )
                transaction.on_commit(lambda: self.notifier(hold, unit), robust=True)
        except DatabaseError as exc:
            raise TransientError(f"Could not store hold for unit {unit_id}: {exc}") from exc

        logger.info(
            f"Hold {hold.pk} created on unit {unit_id} for {customer} at {hold.locked_price}, "
            f"{unit.available_count} rooms left"
        )
        return hold

    def expire_sweep(self) -> dict[str, int]:
        """
        Expire lapsed holds and give their rooms back.

        The status guard makes each hold expire, and reclaim its room,
        exactly once no matter how often the sweep runs.
        """
        now = self.clock()
        lapsed = list(
            Hold.objects.filter(status=Hold.Status.ACTIVE, expires_at__lt=now).values_list("id", "unit_id")
        )

        expired = reclaimed = failed = 0
        for hold_id, unit_id in lapsed:
            try:
                with self.ledger.unit_transaction(unit_id):
                    changed = Hold.objects.filter(pk=hold_id, status=Hold.Status.ACTIVE).update(
                        status=Hold.Status.EXPIRED,
                        status_changed_at=now,
                    )
                    if not changed:
                        continue
                    expired += 1
                    if self.reclaim_on_expiry and self.ledger.increment_availability(unit_id):
                        reclaimed += 1
            except Exception as e:
                failed += 1
                logger.error(f"Error expiring hold {hold_id}: {e}", exc_info=True)

        if expired:
            logger.info(f"Expired {expired} holds, reclaimed {reclaimed} rooms")
        return {"expired": expired, "reclaimed": reclaimed, "failed": failed}

    def cancel_hold(self, hold_id: int, customer_identifier: str | None = None) -> Hold:
        """Cancel an active hold and give its room back."""
        hold = Hold.objects.filter(pk=hold_id).first()
        if hold is None or (
            customer_identifier and hold.customer_identifier.lower() != customer_identifier.strip().lower()
        ):
            raise NotFoundError(f"Hold {hold_id} not found.")

        now = self.clock()
        with self.ledger.unit_transaction(hold.unit_id):
            changed = Hold.objects.filter(
                pk=hold_id,
                status=Hold.Status.ACTIVE,
                expires_at__gte=now,
            ).update(status=Hold.Status.CANCELLED, status_changed_at=now)
            if not changed:
                raise ValidationError("Only active holds can be cancelled.", code="not_active")
            self.ledger.increment_availability(hold.unit_id)

        hold.refresh_from_db()
        logger.info(f"Hold {hold_id} cancelled, room returned to unit {hold.unit_id}")
        return hold

    def list_holds_for(self, customer_identifier: str, *, active_only: bool = False) -> list[Hold]:
        """
        Holds of one customer, soonest expiry first.

        Each hold gets `reported_status` and `seconds_remaining`; a hold past
        its expiry reads as expired even before the sweep has stored that.
        """
        customer = (customer_identifier or "").strip()
        if not customer:
            raise ValidationError("Parameter 'customer' is required.", code="required")

        now = self.clock()
        holds = []
        for hold in Hold.objects.filter(customer_identifier__iexact=customer).select_related("unit"):
            hold.reported_status = hold.status_at(now)
            hold.seconds_remaining_now = hold.seconds_remaining(now)
            if active_only and hold.reported_status != Hold.Status.ACTIVE:
                continue
            holds.append(hold)
        return holds
