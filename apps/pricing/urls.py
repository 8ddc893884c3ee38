"""URL routing for the pricing domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PriceHistoryView, PriceOverrideView, PricingStatusView

urlpatterns = [
    path("status/", PricingStatusView.as_view(), name="pricing-status"),
    path("units/<int:unit_id>/override/", PriceOverrideView.as_view(), name="pricing-override"),
    path("units/<int:unit_id>/history/", PriceHistoryView.as_view(), name="pricing-history"),
]
