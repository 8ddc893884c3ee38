"""Hold domain models."""

from __future__ import annotations

from datetime import datetime

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Hold(models.Model):
    """Price-locked reservation of one room, valid until `expires_at`."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        EXPIRED = "expired", _("Expired")
        CANCELLED = "cancelled", _("Cancelled")

    unit = models.ForeignKey(
        "inventory.PricingUnit",
        on_delete=models.PROTECT,
        related_name="holds",
    )
    customer_identifier = models.CharField(max_length=255)
    locked_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Unit price at the moment the hold was created."),
    )
    check_in_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()
    status_changed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Hold")
        verbose_name_plural = _("Holds")
        ordering = ["expires_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(expires_at__gt=models.F("created_at")),
                name="hold_expires_after_creation",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "expires_at"], name="hold_status_expires_idx"),
            models.Index(fields=["customer_identifier", "status"], name="hold_customer_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Hold #{self.pk} on unit {self.unit_id} for {self.customer_identifier}"

    def is_lapsed(self, now: datetime | None = None) -> bool:
        """Active on paper but past its expiry."""
        return self.status == self.Status.ACTIVE and (now or timezone.now()) > self.expires_at

    def status_at(self, now: datetime | None = None) -> str:
        if self.is_lapsed(now):
            return self.Status.EXPIRED
        return self.status

    def seconds_remaining(self, now: datetime | None = None) -> int:
        if self.status_at(now) != self.Status.ACTIVE:
            return 0
        return max(int((self.expires_at - (now or timezone.now())).total_seconds()), 0)
