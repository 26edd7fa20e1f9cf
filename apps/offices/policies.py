"""Listing policy: which offices an actor may see, book or manage."""

from __future__ import annotations

from typing import Optional

from apps.users.capabilities import Actor, Capability
from shared.domain.exceptions import ActionForbidden

from .models import Office, OfficeQuerySet


def is_inspecting_own_listings(owner_filter: Optional[int], viewer: Actor) -> bool:
    """True when an authenticated user filters the listing by their own id."""
    return viewer.is_authenticated and owner_filter is not None and owner_filter == viewer.user_id


def visible_offices(queryset: OfficeQuerySet, viewer: Actor, owner_filter: Optional[int] = None) -> OfficeQuerySet:
    """
    Restrict ``queryset`` to the offices ``viewer`` may list.

    Only approved, non-hidden offices are public. A user filtering by
    their own id sees all of their offices whatever their status.
    """
    if is_inspecting_own_listings(owner_filter, viewer):
        return queryset
    return queryset.listed()


def can_view(office: Office, viewer: Actor) -> bool:
    return office.is_listed or office.is_owned_by(viewer.user_id)


def is_bookable(office: Office) -> bool:
    return office.is_listed


def ensure_can_manage(actor: Actor, office: Office, capability: Capability = Capability.OFFICE_UPDATE) -> None:
    """Only the owning host holding ``capability`` may change an office."""
    actor.require(capability)
    if not office.is_owned_by(actor.user_id):
        raise ActionForbidden("This office belongs to another host.")
