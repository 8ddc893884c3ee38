"""API views for the pricing domain."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.inventory.ledger import InventoryLedger
from apps.inventory.serializers import PricingUnitSerializer

from .models import PriceChange
from .override import OverrideGate
from .serializers import PriceChangeSerializer, PriceOverrideSerializer, PricingStatusSerializer
from .status import pricing_status

HISTORY_DEFAULT_LIMIT = 50
HISTORY_MAX_LIMIT = 200


class PricingStatusView(APIView):
    """Current prices with the price the model would set right now."""

    def get(self, request):  # type: ignore
        serializer = PricingStatusSerializer(pricing_status())
        return Response(serializer.data)


class PriceOverrideView(APIView):
    """Set a unit's price by hand, within today's bounds."""

    def post(self, request, unit_id: int):  # type: ignore
        serializer = PriceOverrideSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        unit = OverrideGate().override_price(
            unit_id,
            serializer.validated_data["price"],
            serializer.validated_data["reason"],
        )
        return Response(PricingUnitSerializer(unit).data, status=status.HTTP_200_OK)


class PriceHistoryView(APIView):
    """Latest price changes of one unit, newest first."""

    def get(self, request, unit_id: int):  # type: ignore
        unit = InventoryLedger().get_unit(unit_id)
        try:
            limit = int(request.query_params.get("limit", HISTORY_DEFAULT_LIMIT))
        except ValueError:
            limit = HISTORY_DEFAULT_LIMIT
        limit = min(max(limit, 1), HISTORY_MAX_LIMIT)

        changes = PriceChange.objects.filter(unit=unit)[:limit]
        return Response(PriceChangeSerializer(changes, many=True).data)
