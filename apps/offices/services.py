"""Domain services for office and office image mutations."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from apps.users.capabilities import Actor, Capability
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import DomainValidationError

from . import policies
from .events import OfficePendingApproval
from .models import Office, OfficeImage, Tag, quantize_coordinate
from .storage import ImageStorage, get_image_storage

logger = logging.getLogger(__name__)

# Fields a host may set; everything else is controlled by the platform.
MUTABLE_FIELDS = (
    "title",
    "description",
    "lat",
    "lng",
    "address_line1",
    "address_line2",
    "hidden",
    "price_per_day",
    "monthly_discount",
)


def _clean_attributes(data: Mapping[str, Any]) -> dict[str, Any]:
    attributes = {key: data[key] for key in MUTABLE_FIELDS if key in data}
    for coordinate in ("lat", "lng"):
        if attributes.get(coordinate) is not None:
            attributes[coordinate] = quantize_coordinate(attributes[coordinate])
    return attributes


def _tag_ids(tags: Iterable[Any]) -> list[int]:
    return [tag.pk if isinstance(tag, Tag) else int(tag) for tag in tags]


def _ensure_tags_exist(tag_ids: list[int]) -> None:
    found = set(Tag.objects.filter(pk__in=tag_ids).values_list("pk", flat=True))
    missing = sorted(set(tag_ids) - found)
    if missing:
        raise DomainValidationError.for_field("tags", f"Unknown tag ids: {missing}")


def create_office(actor: Actor, data: Mapping[str, Any]) -> Office:
    """
    Create an office for ``actor``.

    The office always starts PENDING and owned by the actor, whatever
    the input says. Insert and tag attachment share one transaction;
    administrators are asked for approval once it commits.
    """
    actor.require(Capability.OFFICE_CREATE)

    attributes = _clean_attributes(data)
    tag_ids = _tag_ids(data.get("tags") or [])
    _ensure_tags_exist(tag_ids)

    with DjangoUnitOfWork() as uow:
        office = Office.objects.create(
            owner_id=actor.user_id,
            approval_status=Office.ApprovalStatus.PENDING,
            **attributes,
        )
        if tag_ids:
            office.tags.add(*tag_ids)
        uow.record(OfficePendingApproval(aggregate_id=office.pk, office_id=office.pk, reason="created"))

    logger.info(f"Office {office.pk} created by user {actor.user_id}, pending approval")
    return office


def update_office(actor: Actor, office: Office, data: Mapping[str, Any]) -> Office:
    """
    Apply a host's changes to ``office``.

    Changing lat, lng or price_per_day sends the office back to PENDING
    and notifies administrators after commit. ``tags``, when given,
    replace the previous tags.
    """
    policies.ensure_can_manage(actor, office)

    attributes = _clean_attributes(data)

    if "featured_image_id" in data:
        featured_image_id = data["featured_image_id"]
        if featured_image_id is not None and not office.images.filter(pk=featured_image_id).exists():
            raise DomainValidationError.for_field(
                "featured_image_id", "The featured image must belong to this office."
            )
        attributes["featured_image_id"] = featured_image_id

    tag_ids: Optional[list[int]] = None
    if data.get("tags") is not None:
        tag_ids = _tag_ids(data["tags"])
        _ensure_tags_exist(tag_ids)

    requires_review = any(
        field in attributes and attributes[field] != getattr(office, field)
        for field in Office.REVIEWED_FIELDS
    )
    if requires_review:
        attributes["approval_status"] = Office.ApprovalStatus.PENDING

    with DjangoUnitOfWork() as uow:
        for field, value in attributes.items():
            setattr(office, field, value)
        office.save()
        if tag_ids is not None:
            office.tags.set(tag_ids)
        if requires_review:
            uow.record(OfficePendingApproval(aggregate_id=office.pk, office_id=office.pk, reason="updated"))

    if requires_review:
        logger.info(f"Office {office.pk} changed location or price, back to pending approval")
    return office


def delete_office(actor: Actor, office: Office) -> None:
    """Soft-delete ``office``; refused while it has active reservations."""
    policies.ensure_can_manage(actor, office)

    if office.reservations.active().exists():
        raise DomainValidationError.for_field("office", "Can not delete an office with active reservations.")

    office.soft_delete()
    logger.info(f"Office {office.pk} deleted by user {actor.user_id}")


def add_image(actor: Actor, office: Office, file, storage: Optional[ImageStorage] = None) -> OfficeImage:  # type: ignore
    """Store ``file`` and attach it to ``office``."""
    policies.ensure_can_manage(actor, office)

    storage = storage or get_image_storage()
    path = storage.store(file)
    image = office.images.create(path=path)
    logger.info(f"Image {image.pk} added to office {office.pk}")
    return image


def delete_image(actor: Actor, office: Office, image: OfficeImage, storage: Optional[ImageStorage] = None) -> None:
    """
    Remove ``image`` from ``office``.

    Refused when the image belongs to another office, is the office's
    only image, or is its featured image.
    """
    policies.ensure_can_manage(actor, office)

    if image.office_id != office.pk:
        raise DomainValidationError.for_field("image", "This image does not belong to the office.")
    if office.images.count() == 1:
        raise DomainValidationError.for_field("image", "Can not delete the only image of an office.")
    if office.featured_image_id == image.pk:
        raise DomainValidationError.for_field("image", "Can not delete the featured image.")

    storage = storage or get_image_storage()
    storage.delete(image.path)
    image.delete()
    logger.info(f"Image {image.path} removed from office {office.pk}")
