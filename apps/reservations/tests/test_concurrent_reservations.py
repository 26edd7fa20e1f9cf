"""Concurrent reservation attempts on one office."""

from __future__ import annotations

import threading
from datetime import timedelta
from decimal import Decimal

from django.db import connection
from django.test import TransactionTestCase
from django.utils import timezone

from apps.offices.models import Office
from apps.reservations import services
from apps.reservations.models import Reservation
from apps.users.capabilities import Actor
from apps.users.models import User
from shared.domain.exceptions import ConcurrentConflict, DomainValidationError


class ConcurrentReservationTests(TransactionTestCase):
    """Racing bookings of overlapping ranges leave exactly one reservation."""

    attempts = 6

    def setUp(self) -> None:
        host = User.objects.create_user(email="host@example.com", password="HostPass123")
        self.office = Office.objects.create(
            owner=host,
            title="Shared desk",
            description="Quiet open space",
            lat=Decimal("0"),
            lng=Decimal("0"),
            price_per_day=1000,
            approval_status=Office.ApprovalStatus.APPROVED,
        )
        self.guests = [
            User.objects.create_user(email=f"guest{i}@example.com", password="GuestPass123")
            for i in range(self.attempts)
        ]
        self.first_day = timezone.localdate() + timedelta(days=2)

    def _race(self) -> list[object]:
        barrier = threading.Barrier(self.attempts)
        outcomes: list[object] = []
        outcomes_lock = threading.Lock()

        def attempt(index: int) -> None:
            # Every range is four days long and starts at most two days
            # after another, so each pair overlaps.
            start = self.first_day + timedelta(days=index % 3)
            actor = Actor.for_user(self.guests[index])
            try:
                barrier.wait()
                try:
                    outcome: object = services.create_reservation(
                        actor, self.office.id, start, start + timedelta(days=4)
                    )
                except Exception as exc:  # collected and asserted below
                    outcome = exc
                with outcomes_lock:
                    outcomes.append(outcome)
            finally:
                connection.close()

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(self.attempts)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)
        return outcomes

    def test_only_one_of_concurrent_overlapping_reservations_succeeds(self) -> None:
        outcomes = self._race()

        self.assertEqual(len(outcomes), self.attempts)
        created = [o for o in outcomes if isinstance(o, Reservation)]
        rejected = [o for o in outcomes if not isinstance(o, Reservation)]
        self.assertEqual(len(created), 1, outcomes)
        for error in rejected:
            self.assertIsInstance(error, (DomainValidationError, ConcurrentConflict))

        self.assertEqual(Reservation.objects.count(), 1)
        stored = Reservation.objects.get()
        self.assertEqual(stored.pk, created[0].pk)
        self.assertEqual(stored.status, Reservation.Status.ACTIVE)
