"""API views for the inventory domain."""

from __future__ import annotations

from django.http import JsonResponse  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .ledger import InventoryLedger
from .models import PricingUnit, period_for
from .serializers import PricingUnitSerializer


class PricingUnitViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Units on sale.

    The list shows active units of the current pricing period, cheapest
    first, and counts one view per listed unit as demand for the next
    recompute.
    """

    serializer_class = PricingUnitSerializer
    queryset = PricingUnit.objects.filter(status=PricingUnit.Status.ACTIVE)

    def list(self, request, *args, **kwargs):  # type: ignore
        ledger = InventoryLedger()
        period = request.query_params.get("period") or period_for()
        units = ledger.list_active_units(pricing_period=period)
        ledger.record_views(unit.id for unit in units)
        return Response(self.get_serializer(units, many=True).data)


def health_check(request):
    return JsonResponse(
        {
            "status": "OK",
            "timestamp": timezone.now().isoformat(),
            "service": "Room Dynamic Pricing API",
        }
    )
