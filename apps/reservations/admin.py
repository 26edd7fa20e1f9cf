"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "office",
        "user",
        "status",
        "start_date",
        "end_date",
        "price",
        "created_at",
    )
    list_filter = ("status", "start_date", "end_date")
    search_fields = ("office__title", "user__email")
    readonly_fields = ("price", "created_at", "updated_at")
