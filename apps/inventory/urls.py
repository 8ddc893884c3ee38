"""URL routing for the inventory domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import PricingUnitViewSet

router = DefaultRouter()
router.register(r"", PricingUnitViewSet, basename="unit")

urlpatterns = [
    path("", include(router.urls)),
]
