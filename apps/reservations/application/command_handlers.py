"""
Reservation Command Handlers

These are the use cases for the reservation domain.
They orchestrate domain operations within transactions.

Commands:
- CreateReservationCommand: Reserve an office for a date range
- CancelReservationCommand: Cancel an active reservation
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from shared.domain.exceptions import ConcurrentConflict, DomainValidationError, EntityNotFound
from shared.domain.value_objects import DateRange
from shared.infrastructure.locks import DistributedLock, LockTimeout, get_lock_backend
from apps.offices import policies
from apps.offices.models import Office
from apps.reservations.models import Reservation
from apps.reservations.pricing import DiscountMode, calculate_price
from apps.users.capabilities import Actor, Capability

logger = logging.getLogger(__name__)


def office_lock_key(office_id: int) -> str:
    return f"reservation_office_{office_id}"


# ===== Commands =====

@dataclass
class CreateReservationCommand:
    """
    Command to reserve an office

    ``end_date`` is exclusive: the guest leaves on that day and another
    reservation may start on it.
    """
    actor: Actor
    office_id: int
    start_date: date
    end_date: date


@dataclass
class CancelReservationCommand:
    """Command to cancel a reservation (by its guest or the office host)"""
    actor: Actor
    reservation_id: int


# ===== Command Handlers =====

class CreateReservationHandler:
    """
    Handler for CreateReservation command

    This implements the double booking prevention.

    Strategy:
    1. Validate dates and office eligibility (no lock needed)
    2. Acquire the per-office distributed lock (bounded wait)
    3. Start database transaction (atomic)
    4. Look for ACTIVE reservations intersecting [start, end)
    5. Compute price and insert the reservation
    6. Commit transaction
    7. Release the lock (after commit, so the next holder sees the row)
    """

    def __init__(
        self,
        lock: Optional[DistributedLock] = None,
        lock_timeout: Optional[float] = None,
        lock_wait: Optional[float] = None,
        discount_mode: Optional[DiscountMode] = None,
    ):
        self.lock = lock or get_lock_backend()
        self.lock_timeout = lock_timeout if lock_timeout is not None else settings.RESERVATION_LOCK_TIMEOUT
        self.lock_wait = lock_wait if lock_wait is not None else settings.RESERVATION_LOCK_WAIT
        self.discount_mode = discount_mode

    def handle(self, command: CreateReservationCommand) -> Reservation:
        """
        Handle reservation creation

        Returns: The ACTIVE reservation, with its office loaded

        Raises:
            ActionForbidden: actor lacks the reservation.create capability
            DomainValidationError: bad dates, office not bookable, own office,
                or dates already taken
            ConcurrentConflict: the office lock was not acquired in time
        """
        actor = command.actor
        actor.require(Capability.RESERVATION_CREATE)

        logger.info(
            f"Creating reservation for office {command.office_id}, "
            f"user {actor.user_id}, dates {command.start_date} - {command.end_date}"
        )

        self._validate_dates(command.start_date, command.end_date)
        office = self._load_bookable_office(command.office_id, actor)
        dates = DateRange(command.start_date, command.end_date)

        key = office_lock_key(office.pk)
        try:
            with self.lock.acquire(key, timeout=self.lock_timeout, wait=self.lock_wait):
                with transaction.atomic():
                    reservation = self._insert(office, actor, dates)
        except LockTimeout:
            logger.warning(f"Office {office.pk} is locked by another reservation attempt")
            raise ConcurrentConflict(
                "Another reservation for this office is in progress, please retry.",
                retry_after=max(1, int(self.lock_wait)),
            )

        logger.info(f"Reservation {reservation.pk} created for office {office.pk}, price {reservation.price}")
        return reservation

    def _validate_dates(self, start_date: date, end_date: date) -> None:
        tomorrow = timezone.localdate() + timedelta(days=1)
        if start_date <= tomorrow:
            raise DomainValidationError.for_field("start_date", "The start date must be a date after tomorrow.")
        if end_date <= start_date:
            raise DomainValidationError.for_field("end_date", "The end date must be a date after start date.")

    def _load_bookable_office(self, office_id: int, actor: Actor) -> Office:
        office = Office.objects.filter(pk=office_id).first()
        if office is None or not policies.is_bookable(office):
            raise DomainValidationError.for_field("office_id", "Invalid office_id")
        if office.is_owned_by(actor.user_id):
            raise DomainValidationError.for_field("office_id", "You cannot make a reservation on your own office")
        return office

    def _insert(self, office: Office, actor: Actor, dates: DateRange) -> Reservation:
        taken = (
            Reservation.objects.filter(office=office)
            .active()
            .overlapping(dates.start_date, dates.end_date)
            .exists()
        )
        if taken:
            logger.info(f"Office {office.pk} already reserved for {dates}")
            raise DomainValidationError.for_field("office_id", "You cannot make a reservation during this time")

        reservation = Reservation.objects.create(
            office=office,
            user_id=actor.user_id,
            start_date=dates.start_date,
            end_date=dates.end_date,
            status=Reservation.Status.ACTIVE,
            price=calculate_price(office.price_per_day, office.monthly_discount, dates, self.discount_mode),
        )
        reservation.office = office
        return reservation


class CancelReservationHandler:
    """Handler for cancelling a reservation"""

    def handle(self, command: CancelReservationCommand) -> Reservation:
        """Cancel reservation; only ACTIVE ones can be cancelled"""
        actor = command.actor
        actor.require(Capability.RESERVATION_CREATE)

        logger.info(f"Cancelling reservation {command.reservation_id} by user {actor.user_id}")

        with transaction.atomic():
            reservation = (
                Reservation.objects.select_for_update()
                .filter(pk=command.reservation_id)
                .first()
            )
            if reservation is None:
                raise EntityNotFound(f"Reservation {command.reservation_id} not found.")

            office = Office.all_objects.get(pk=reservation.office_id)
            if reservation.user_id != actor.user_id and not office.is_owned_by(actor.user_id):
                raise EntityNotFound(f"Reservation {command.reservation_id} not found.")

            if not reservation.is_active:
                raise DomainValidationError.for_field("status", "Only active reservations can be cancelled.")

            reservation.cancel()

        reservation.office = office
        logger.info(f"Reservation {reservation.pk} cancelled")
        return reservation
