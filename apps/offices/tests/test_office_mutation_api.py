"""Tests for office creation, update and deletion by hosts."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.offices.models import Office, Tag
from apps.reservations.models import Reservation
from apps.users.models import User
from apps.users.tokens import scoped_access_token

DISPATCH = "apps.notifications.handlers.dispatch_office_pending_approval"


class OfficeCreateAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(email="host@example.com", password="HostPass123")
        self.wifi = Tag.objects.create(name="wifi")
        self.parking = Tag.objects.create(name="parking")
        self.list_url = reverse("office-list")

    def _payload(self, **extra) -> dict:  # type: ignore
        payload = {
            "title": "Shared desk",
            "description": "Quiet open space",
            "lat": 43.2381,
            "lng": 76.9452,
            "address_line1": "Abay ave. 10",
            "price_per_day": 1000,
            "monthly_discount": 10,
            "tags": [self.wifi.id, self.parking.id],
        }
        payload.update(extra)
        return payload

    def test_host_creates_pending_office_and_admins_are_notified(self) -> None:
        self.client.force_authenticate(self.host)

        with patch(DISPATCH) as dispatch, self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                self.list_url,
                self._payload(approval_status="approved", hidden=False),
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        office = Office.objects.get(pk=response.data["id"])
        self.assertEqual(office.owner, self.host)
        self.assertEqual(office.approval_status, Office.ApprovalStatus.PENDING)
        self.assertEqual(office.lat, Decimal("43.2381000"))
        self.assertEqual(set(office.tags.values_list("name", flat=True)), {"wifi", "parking"})
        self.assertEqual(response.data["user"]["id"], self.host.id)
        dispatch.delay.assert_called_once_with(office.id)

    def test_nothing_is_dispatched_before_commit(self) -> None:
        self.client.force_authenticate(self.host)

        with patch(DISPATCH) as dispatch, self.captureOnCommitCallbacks(execute=False) as callbacks:
            response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(callbacks), 1)
        dispatch.delay.assert_not_called()

    def test_validation_errors_name_the_fields(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(
            self.list_url,
            self._payload(lat=95, lng=-200, price_per_day=99, monthly_discount=91, title=""),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("lat", "lng", "price_per_day", "monthly_discount", "title"):
            self.assertIn(field, response.data)
        self.assertFalse(Office.all_objects.exists())

    def test_unknown_tag_is_rejected(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.post(self.list_url, self._payload(tags=[999]), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("tags", response.data)

    def test_token_without_create_scope_is_forbidden(self) -> None:
        token = scoped_access_token(self.host, ["office.update"])
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Office.all_objects.exists())

    def test_token_with_create_scope_is_allowed(self) -> None:
        token = scoped_access_token(self.host, ["office.create"])
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_anonymous_cannot_create(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class OfficeUpdateAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(email="host@example.com", password="HostPass123")
        self.other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.wifi = Tag.objects.create(name="wifi")
        self.parking = Tag.objects.create(name="parking")
        self.office = Office.objects.create(
            owner=self.host,
            title="Shared desk",
            description="Quiet open space",
            lat=Decimal("43.2381000"),
            lng=Decimal("76.9452000"),
            price_per_day=1000,
            approval_status=Office.ApprovalStatus.APPROVED,
        )
        self.office.tags.add(self.wifi)
        self.url = reverse("office-detail", args=[self.office.id])

    def test_price_change_resets_approval_and_notifies_once(self) -> None:
        self.client.force_authenticate(self.host)

        with patch(DISPATCH) as dispatch, self.captureOnCommitCallbacks(execute=True):
            response = self.client.put(self.url, {"price_per_day": 1500, "title": "Renamed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.office.refresh_from_db()
        self.assertEqual(self.office.approval_status, Office.ApprovalStatus.PENDING)
        self.assertEqual(self.office.price_per_day, 1500)
        self.assertEqual(self.office.title, "Renamed")
        dispatch.delay.assert_called_once_with(self.office.id)

    def test_location_change_resets_approval(self) -> None:
        self.client.force_authenticate(self.host)

        with patch(DISPATCH) as dispatch, self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch(self.url, {"lat": 40.0}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.office.refresh_from_db()
        self.assertEqual(self.office.approval_status, Office.ApprovalStatus.PENDING)
        dispatch.delay.assert_called_once_with(self.office.id)

    def test_same_coordinates_keep_approval(self) -> None:
        self.client.force_authenticate(self.host)

        with patch(DISPATCH) as dispatch, self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch(
                self.url,
                {"lat": 43.2381, "lng": 76.9452, "price_per_day": 1000, "description": "Updated"},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.office.refresh_from_db()
        self.assertEqual(self.office.approval_status, Office.ApprovalStatus.APPROVED)
        self.assertEqual(self.office.description, "Updated")
        dispatch.delay.assert_not_called()

    def test_tags_are_replaced(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.patch(self.url, {"tags": [self.parking.id]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(list(self.office.tags.values_list("name", flat=True)), ["parking"])

    def test_status_and_owner_are_not_mutable(self) -> None:
        self.client.force_authenticate(self.host)

        self.client.patch(self.url, {"approval_status": "rejected", "owner": self.other.id}, format="json")

        self.office.refresh_from_db()
        self.assertEqual(self.office.approval_status, Office.ApprovalStatus.APPROVED)
        self.assertEqual(self.office.owner, self.host)

    def test_featured_image_must_belong_to_office(self) -> None:
        foreign_office = Office.objects.create(
            owner=self.other,
            title="Other",
            description="Other",
            lat=Decimal("0"),
            lng=Decimal("0"),
            price_per_day=1000,
        )
        foreign_image = foreign_office.images.create(path="offices/foreign.png")
        self.client.force_authenticate(self.host)

        response = self.client.patch(self.url, {"featured_image_id": foreign_image.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("featured_image_id", response.data)

    def test_featured_image_of_own_office_is_accepted(self) -> None:
        image = self.office.images.create(path="offices/own.png")
        self.client.force_authenticate(self.host)

        response = self.client.patch(self.url, {"featured_image_id": image.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["featured_image_id"], image.id)

    def test_other_user_cannot_update(self) -> None:
        self.client.force_authenticate(self.other)

        response = self.client.patch(self.url, {"title": "Hijacked"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.office.refresh_from_db()
        self.assertEqual(self.office.title, "Shared desk")

    def test_token_without_update_scope_is_forbidden(self) -> None:
        self.client.force_authenticate(self.host, token=scoped_access_token(self.host, ["office.create"]))

        response = self.client.patch(self.url, {"title": "Renamed"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class OfficeDeleteAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(email="host@example.com", password="HostPass123")
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.office = Office.objects.create(
            owner=self.host,
            title="Shared desk",
            description="Quiet open space",
            lat=Decimal("0"),
            lng=Decimal("0"),
            price_per_day=1000,
            approval_status=Office.ApprovalStatus.APPROVED,
        )
        self.url = reverse("office-detail", args=[self.office.id])

    def _reserve(self, status_: str) -> Reservation:
        start = timezone.localdate() + timedelta(days=3)
        return Reservation.objects.create(
            office=self.office,
            user=self.guest,
            start_date=start,
            end_date=start + timedelta(days=1),
            status=status_,
            price=Decimal("1000"),
        )

    def test_host_soft_deletes_office(self) -> None:
        self._reserve(Reservation.Status.CANCELLED)
        self.client.force_authenticate(self.host)

        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Office.objects.filter(pk=self.office.id).exists())
        self.assertIsNotNone(Office.all_objects.get(pk=self.office.id).deleted_at)

    def test_office_with_active_reservation_cannot_be_deleted(self) -> None:
        self._reserve(Reservation.Status.ACTIVE)
        self.client.force_authenticate(self.host)

        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("office", response.data)
        self.assertTrue(Office.objects.filter(pk=self.office.id).exists())

    def test_other_user_cannot_delete(self) -> None:
        self.client.force_authenticate(self.guest)

        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Office.objects.filter(pk=self.office.id).exists())

    def test_deleting_missing_office_is_not_found(self) -> None:
        self.client.force_authenticate(self.host)

        response = self.client.delete(reverse("office-detail", args=[self.office.id + 100]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
