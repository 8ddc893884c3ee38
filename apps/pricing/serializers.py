"""Serializers for the pricing domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import PriceChange


class PriceOverrideSerializer(serializers.Serializer):
    """Admin override payload; bounds are checked by the override gate."""

    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    reason = serializers.CharField(max_length=255)


class PriceChangeSerializer(serializers.ModelSerializer):
    class Meta:
        model = PriceChange
        fields = ["id", "unit", "source", "old_price", "new_price", "reason", "created_at"]
        read_only_fields = fields


class UnitPricingStatusSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    room_type = serializers.CharField()
    pricing_period = serializers.CharField()
    base_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    current_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    preview_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    preview_delta = serializers.DecimalField(max_digits=10, decimal_places=2)
    factors = serializers.DictField(child=serializers.FloatField())
    available_count = serializers.IntegerField()
    total_count = serializers.IntegerField()
    occupancy = serializers.FloatField()
    demand_signal = serializers.IntegerField()
    last_price_update = serializers.DateTimeField()


class PricingStatusSerializer(serializers.Serializer):
    timestamp = serializers.DateTimeField()
    profile = serializers.CharField()
    current_period = serializers.CharField()
    day_of_week = serializers.CharField()
    bucket = serializers.CharField()
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    units = UnitPricingStatusSerializer(many=True)
