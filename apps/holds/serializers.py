"""Serializers for the hold domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Hold


class HoldCreateSerializer(serializers.Serializer):
    """Payload for placing a hold; availability is checked by the hold manager."""

    unit_id = serializers.IntegerField(min_value=1)
    customer_identifier = serializers.CharField(max_length=255)
    check_in_date = serializers.DateField(required=False)


class HoldSerializer(serializers.ModelSerializer):
    """Hold as the customer sees it, with expiry applied at read time."""

    unit_id = serializers.ReadOnlyField(source="unit.id")
    room_type = serializers.ReadOnlyField(source="unit.room_type")
    pricing_period = serializers.ReadOnlyField(source="unit.pricing_period")
    status = serializers.SerializerMethodField()
    seconds_remaining = serializers.SerializerMethodField()

    class Meta:
        model = Hold
        fields = [
            "id",
            "unit_id",
            "room_type",
            "pricing_period",
            "customer_identifier",
            "locked_price",
            "check_in_date",
            "status",
            "seconds_remaining",
            "created_at",
            "expires_at",
        ]
        read_only_fields = fields

    def get_status(self, obj: Hold) -> str:
        return getattr(obj, "reported_status", None) or obj.status_at()

    def get_seconds_remaining(self, obj: Hold) -> int:
        remaining = getattr(obj, "seconds_remaining_now", None)
        if remaining is None:
            remaining = obj.seconds_remaining()
        return remaining
