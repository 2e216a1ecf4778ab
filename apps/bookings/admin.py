"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "guest",
        "status",
        "check_in",
        "check_out",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out")
    search_fields = ("room__name", "room__property__name", "guest__email")
    readonly_fields = ("created_at", "updated_at")
