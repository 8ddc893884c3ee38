"""Admin registration for pricing units."""

from __future__ import annotations

from django.contrib import admin

from .models import PricingUnit


@admin.register(PricingUnit)
class PricingUnitAdmin(admin.ModelAdmin):
    list_display = (
        "room_type",
        "pricing_period",
        "status",
        "current_price",
        "available_count",
        "total_count",
        "demand_signal",
        "last_price_update",
    )
    list_filter = ("status", "pricing_period")
    search_fields = ("room_type",)

    def get_readonly_fields(self, request, obj=None):  # type: ignore
        if obj is None:
            return ("demand_signal", "last_price_update", "created_at")
        # Price and availability of a live unit only move through the ledger.
        return (
            "current_price",
            "available_count",
            "total_count",
            "demand_signal",
            "last_price_update",
            "created_at",
        )
