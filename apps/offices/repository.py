"""Office repository: read access to offices for listings and mutations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from apps.users.capabilities import Actor
from shared.domain.exceptions import EntityNotFound
from shared.domain.value_objects import GeoPoint

from . import policies
from .models import Office, OfficeImage, OfficeQuerySet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfficeFilters:
    """Criteria of the public office listing."""

    user_id: Optional[int] = None
    visitor_id: Optional[int] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def origin(self) -> Optional[GeoPoint]:
        if self.lat is None or self.lng is None:
            return None
        return GeoPoint(self.lat, self.lng)


def list_offices(filters: OfficeFilters, viewer: Actor) -> OfficeQuerySet:
    """
    Offices visible to ``viewer`` matching ``filters``.

    Ordered by distance from ``filters.origin`` when both coordinates are
    given, by id otherwise. Each office is annotated with
    ``reservations_count`` (active reservations only) and comes with its
    owner, images and tags loaded.
    """
    qs = policies.visible_offices(Office.objects.all(), viewer, owner_filter=filters.user_id)

    if filters.user_id is not None:
        qs = qs.owned_by(filters.user_id)
    if filters.visitor_id is not None:
        qs = qs.visited_by(filters.visitor_id)

    origin = filters.origin
    if origin is not None:
        qs = qs.nearest_to(origin)
    else:
        qs = qs.order_by("id")

    return qs.with_active_reservations_count().with_listing_relations()


def get_office(office_id: int, viewer: Actor) -> Office:
    """Single office for display; hidden or unapproved ones only for their owner."""
    office = (
        Office.objects.filter(pk=office_id)
        .with_active_reservations_count()
        .with_listing_relations()
        .first()
    )
    if office is None or not policies.can_view(office, viewer):
        raise EntityNotFound(f"Office {office_id} not found.")
    return office


def get_office_for_change(office_id: int) -> Office:
    """Any non-deleted office, whatever its approval state."""
    try:
        return Office.objects.select_related("owner").get(pk=office_id)
    except Office.DoesNotExist:
        raise EntityNotFound(f"Office {office_id} not found.")


def get_image(image_id: int) -> OfficeImage:
    try:
        return OfficeImage.objects.get(pk=image_id)
    except OfficeImage.DoesNotExist:
        raise EntityNotFound(f"Image {image_id} not found.")
