"""Admin registration for pricing."""

from __future__ import annotations

from django.contrib import admin

from .models import PriceChange


@admin.register(PriceChange)
class PriceChangeAdmin(admin.ModelAdmin):
    list_display = ("unit", "source", "old_price", "new_price", "reason", "created_at")
    list_filter = ("source", "created_at")
    search_fields = ("unit__room_type", "reason")
    readonly_fields = ("unit", "source", "old_price", "new_price", "reason", "created_at")
