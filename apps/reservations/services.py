"""Domain services for reservation workflows."""

from __future__ import annotations

from datetime import date

from apps.users.capabilities import Actor

from .application.command_handlers import (
    CancelReservationCommand,
    CancelReservationHandler,
    CreateReservationCommand,
    CreateReservationHandler,
)
from .models import Reservation


def create_reservation(actor: Actor, office_id: int, start_date: date, end_date: date) -> Reservation:
    """Reserve ``office_id`` for ``actor`` from ``start_date`` up to ``end_date``."""
    command = CreateReservationCommand(
        actor=actor,
        office_id=office_id,
        start_date=start_date,
        end_date=end_date,
    )
    return CreateReservationHandler().handle(command)


def cancel_reservation(actor: Actor, reservation_id: int) -> Reservation:
    command = CancelReservationCommand(actor=actor, reservation_id=reservation_id)
    return CancelReservationHandler().handle(command)
