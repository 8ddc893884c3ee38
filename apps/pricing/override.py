"""Admin price override."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable

from django.utils import timezone  # type: ignore

from apps.inventory.ledger import InventoryLedger
from apps.inventory.models import PricingUnit
from shared.domain.exceptions import NotFoundError, ValidationError

from .models import PriceChange
from .profiles import PricingProfile, get_profile

logger = logging.getLogger(__name__)


class OverrideGate:
    """Writes an explicit price, held to the same day bounds as the price model."""

    def __init__(
        self,
        ledger: InventoryLedger | None = None,
        profile: PricingProfile | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.clock = clock or timezone.now
        self.ledger = ledger or InventoryLedger(clock=self.clock)
        self.profile = profile or get_profile()

    def override_price(self, unit_id: int, price, reason: str) -> PricingUnit:
        if price is None or price == "":
            raise ValidationError("Field 'price' is required.", code="required")
        if not reason or not str(reason).strip():
            raise ValidationError("Field 'reason' is required.", code="required")

        try:
            amount = Decimal(str(price))
        except InvalidOperation:
            raise ValidationError(f"Price {price!r} is not a number.")
        if not amount.is_finite():
            raise ValidationError(f"Price {price!r} is not a number.")
        amount = amount.quantize(Decimal("0.01"))

        local = timezone.localtime(self.clock())
        bounds = self.profile.bounds_for(local.weekday())
        if not bounds.contains(amount):
            raise ValidationError(
                f"Price {amount} is outside {bounds} allowed on {local.strftime('%A')}.",
                code="out_of_bounds",
            )

        with self.ledger.unit_transaction(unit_id):
            unit = self.ledger.get_unit(unit_id, for_update=True)
            if not unit.is_active:
                raise NotFoundError(f"Pricing unit {unit_id} is not active.")
            updated = self.ledger.set_price(unit_id, amount)
            PriceChange.objects.create(
                unit_id=unit_id,
                source=PriceChange.Source.OVERRIDE,
                old_price=unit.current_price,
                new_price=amount,
                reason=str(reason).strip()[:255],
            )

        logger.info(f"Price override on unit {unit_id}: {unit.current_price} → {amount} ({reason})")
        return updated
