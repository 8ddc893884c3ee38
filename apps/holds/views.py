"""API views for the hold domain."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from .serializers import HoldCreateSerializer, HoldSerializer
from .services import HoldManager


class HoldViewSet(viewsets.ViewSet):
    """Place a hold on a unit, or list a customer's holds."""

    def list(self, request):  # type: ignore
        active_only = request.query_params.get("active", "").lower() in ("1", "true", "yes")
        holds = HoldManager().list_holds_for(
            request.query_params.get("customer", ""),
            active_only=active_only,
        )
        return Response(HoldSerializer(holds, many=True).data)

    def create(self, request):  # type: ignore
        serializer = HoldCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        hold = HoldManager().create_hold(
            serializer.validated_data["unit_id"],
            serializer.validated_data["customer_identifier"],
            serializer.validated_data.get("check_in_date"),
        )
        return Response(HoldSerializer(hold).data, status=status.HTTP_201_CREATED)
