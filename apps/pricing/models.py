"""Pricing audit models."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class PriceChange(models.Model):
    """One price write on a unit, from the recompute sweep or an override."""

    class Source(models.TextChoices):
        RECOMPUTE = "recompute", _("Recompute sweep")
        OVERRIDE = "override", _("Manual override")

    unit = models.ForeignKey(
        "inventory.PricingUnit",
        on_delete=models.PROTECT,
        related_name="price_changes",
    )
    source = models.CharField(max_length=20, choices=Source.choices)
    old_price = models.DecimalField(max_digits=10, decimal_places=2)
    new_price = models.DecimalField(max_digits=10, decimal_places=2)
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Price change")
        verbose_name_plural = _("Price changes")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["unit", "created_at"], name="price_change_unit_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.unit_id}: {self.old_price} -> {self.new_price} ({self.source})"
