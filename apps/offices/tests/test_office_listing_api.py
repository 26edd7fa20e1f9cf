"""Tests for the office listing and office details."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.offices.models import Office, Tag
from apps.reservations.models import Reservation
from apps.users.models import User


class OfficeListingAPITests(APITestCase):
    def setUp(self) -> None:
        self.host = User.objects.create_user(email="host@example.com", password="HostPass123", username="Host")
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123", username="Guest")
        self.list_url = reverse("office-list")

    def _office(self, title: str = "Office", **extra) -> Office:  # type: ignore
        fields = {
            "owner": self.host,
            "title": title,
            "description": "Desk space",
            "lat": Decimal("0"),
            "lng": Decimal("0"),
            "price_per_day": 1000,
            "approval_status": Office.ApprovalStatus.APPROVED,
        }
        fields.update(extra)
        return Office.objects.create(**fields)

    def _reserve(self, office: Office, user: User, status_=Reservation.Status.ACTIVE) -> Reservation:
        start = timezone.localdate() + timedelta(days=5)
        return Reservation.objects.create(
            office=office,
            user=user,
            start_date=start,
            end_date=start + timedelta(days=2),
            status=status_,
            price=Decimal("2000"),
        )

    def test_only_approved_visible_offices_are_listed(self) -> None:
        listed = self._office("Listed")
        self._office("Hidden", hidden=True)
        self._office("Pending", approval_status=Office.ApprovalStatus.PENDING)
        deleted = self._office("Deleted")
        deleted.soft_delete()

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data["results"]], [listed.id])

    def test_owner_sees_all_own_offices_when_filtering_by_self(self) -> None:
        listed = self._office("Listed")
        hidden = self._office("Hidden", hidden=True)
        pending = self._office("Pending", approval_status=Office.ApprovalStatus.PENDING)
        self._office("Other host", owner=self.guest)

        self.client.force_authenticate(self.host)
        response = self.client.get(self.list_url, {"user_id": self.host.id})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            [item["id"] for item in response.data["results"]],
            [listed.id, hidden.id, pending.id],
        )

    def test_filtering_by_another_user_shows_only_their_listed_offices(self) -> None:
        listed = self._office("Listed")
        self._office("Hidden", hidden=True)

        self.client.force_authenticate(self.guest)
        response = self.client.get(self.list_url, {"user_id": self.host.id})

        self.assertEqual([item["id"] for item in response.data["results"]], [listed.id])

    def test_visitor_filter_returns_each_office_once(self) -> None:
        visited = self._office("Visited")
        self._office("Not visited")
        self._reserve(visited, self.guest)
        self._reserve(visited, self.guest, Reservation.Status.CANCELLED)

        response = self.client.get(self.list_url, {"visitor_id": self.guest.id})

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["id"], visited.id)

    def test_orders_by_distance_when_coordinates_given(self) -> None:
        far = self._office("Far", lat=Decimal("0"), lng=Decimal("0"))
        near = self._office("Near", lat=Decimal("0"), lng=Decimal("2"))
        middle = self._office("Middle", lat=Decimal("0"), lng=Decimal("1"))

        response = self.client.get(self.list_url, {"lat": "0", "lng": "1.9"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data["results"]], [near.id, middle.id, far.id])
        self.assertAlmostEqual(response.data["results"][0]["distance"], 11.119, places=2)

    def test_orders_by_id_without_coordinates(self) -> None:
        first = self._office("First", lng=Decimal("10"))
        second = self._office("Second", lng=Decimal("1"))

        response = self.client.get(self.list_url, {"lat": "0"})

        self.assertEqual([item["id"] for item in response.data["results"]], [first.id, second.id])
        self.assertIsNone(response.data["results"][0]["distance"])

    def test_listing_includes_relations_and_active_reservation_count(self) -> None:
        office = self._office("With relations")
        tag = Tag.objects.create(name="wifi")
        office.tags.add(tag)
        office.images.create(path="offices/one.png")
        self._reserve(office, self.guest)
        self._reserve(office, self.guest, Reservation.Status.CANCELLED)

        response = self.client.get(self.list_url)

        item = response.data["results"][0]
        self.assertEqual(item["reservations_count"], 1)
        self.assertEqual(item["user"]["id"], self.host.id)
        self.assertEqual([t["name"] for t in item["tags"]], ["wifi"])
        self.assertEqual(item["images"][0]["path"], "offices/one.png")

    def test_listing_is_paginated_by_twenty(self) -> None:
        for index in range(25):
            self._office(f"Office {index}")

        first_page = self.client.get(self.list_url)
        second_page = self.client.get(self.list_url, {"page": 2})

        self.assertEqual(first_page.data["count"], 25)
        self.assertEqual(len(first_page.data["results"]), 20)
        self.assertEqual(len(second_page.data["results"]), 5)

    def test_invalid_coordinates_are_rejected(self) -> None:
        response = self.client.get(self.list_url, {"lat": "91", "lng": "0"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("lat", response.data)

    def test_detail_of_listed_office(self) -> None:
        office = self._office("Listed")

        response = self.client.get(reverse("office-detail", args=[office.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["title"], "Listed")
        self.assertEqual(response.data["reservations_count"], 0)

    def test_hidden_office_detail_only_for_owner(self) -> None:
        office = self._office("Hidden", hidden=True)
        url = reverse("office-detail", args=[office.id])

        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

        self.client.force_authenticate(self.host)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)

    def test_deleted_office_detail_is_not_found(self) -> None:
        office = self._office("Deleted")
        office.soft_delete()

        self.client.force_authenticate(self.host)
        response = self.client.get(reverse("office-detail", args=[office.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_tags_are_listed(self) -> None:
        Tag.objects.create(name="wifi")
        Tag.objects.create(name="parking")

        response = self.client.get(reverse("tag-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([tag["name"] for tag in response.data], ["wifi", "parking"])
