"""Reservation domain models."""

from __future__ import annotations

from datetime import date

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.db.models import F, Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ReservationQuerySet(models.QuerySet):
    """Query building blocks of the reservation repository."""

    def active(self):
        return self.filter(status=Reservation.Status.ACTIVE)

    def overlapping(self, start_date: date, end_date: date):
        """Reservations sharing at least one night with ``[start_date, end_date)``."""
        return self.filter(start_date__lt=end_date, end_date__gt=start_date)

    def touching_window(self, from_date: date, to_date: date):
        """Reservations touching ``[from_date, to_date]``, edges included."""
        return self.filter(start_date__lte=to_date, end_date__gte=from_date)

    def for_guest(self, user_id: int):
        return self.filter(user_id=user_id)

    def for_host(self, user_id: int):
        return self.filter(office__owner_id=user_id)


class Reservation(models.Model):
    """A guest's stay in an office from ``start_date`` up to ``end_date``."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        CANCELLED = "cancelled", _("Cancelled")

    office = models.ForeignKey(
        "offices.Office",
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    start_date = models.DateField()
    end_date = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Total price fixed when the reservation is made."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gt=F("start_date")),
                name="reservation_end_after_start",
            ),
        ]
        indexes = [
            models.Index(fields=["office", "status", "start_date", "end_date"], name="reservation_office_window_idx"),
        ]

    def __str__(self) -> str:
        return f"Reservation #{self.pk} of office {self.office_id} ({self.start_date} - {self.end_date})"

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    def cancel(self) -> None:
        self.status = self.Status.CANCELLED
        self.save(update_fields=["status", "updated_at"])
