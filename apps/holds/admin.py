"""Admin registration for holds."""

from __future__ import annotations

from django.contrib import admin, messages

from shared.domain.exceptions import DomainError

from .models import Hold
from .services import HoldManager


@admin.register(Hold)
class HoldAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "unit",
        "customer_identifier",
        "locked_price",
        "status",
        "check_in_date",
        "created_at",
        "expires_at",
    )
    list_filter = ("status", "check_in_date")
    search_fields = ("customer_identifier", "unit__room_type")
    readonly_fields = (
        "unit",
        "customer_identifier",
        "locked_price",
        "status",
        "created_at",
        "expires_at",
        "status_changed_at",
    )
    actions = ["cancel_holds"]

    def has_add_permission(self, request):  # type: ignore
        # Holds only come from HoldManager so availability stays in step.
        return False

    @admin.action(description="Cancel selected holds and return their rooms")
    def cancel_holds(self, request, queryset):  # type: ignore
        manager = HoldManager()
        cancelled = 0
        for hold in queryset.filter(status=Hold.Status.ACTIVE):
            try:
                manager.cancel_hold(hold.pk)
                cancelled += 1
            except DomainError as exc:
                self.message_user(request, f"Hold {hold.pk}: {exc.detail}", level=messages.WARNING)
        self.message_user(request, f"Cancelled {cancelled} holds.")
