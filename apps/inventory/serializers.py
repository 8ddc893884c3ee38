"""Serializers for the inventory domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import PricingUnit


class PricingUnitSerializer(serializers.ModelSerializer):
    """Public view of a unit with its live price."""

    base_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    occupancy = serializers.FloatField(read_only=True)

    class Meta:
        model = PricingUnit
        fields = [
            "id",
            "room_type",
            "pricing_period",
            "period_start",
            "period_end",
            "base_price",
            "morning_base_price",
            "night_base_price",
            "current_price",
            "available_count",
            "total_count",
            "occupancy",
            "status",
            "demand_signal",
            "last_price_update",
        ]
        read_only_fields = fields
