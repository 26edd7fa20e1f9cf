"""Reservation repository: the guest and host views of reservations."""

from __future__ import annotations

from apps.users.capabilities import Actor, Capability

from .models import Reservation, ReservationQuerySet


def _with_office(queryset: ReservationQuerySet) -> ReservationQuerySet:
    return queryset.select_related("office", "office__featured_image").order_by("id")


def list_guest_reservations(actor: Actor) -> ReservationQuerySet:
    """Reservations made by ``actor``; narrowed further by ``ReservationFilterSet``."""
    actor.require(Capability.RESERVATION_SHOW)
    return _with_office(Reservation.objects.for_guest(actor.user_id))


def list_host_reservations(actor: Actor) -> ReservationQuerySet:
    """Reservations on the offices ``actor`` owns, deleted offices included."""
    actor.require(Capability.RESERVATION_SHOW)
    return _with_office(Reservation.objects.for_host(actor.user_id))
