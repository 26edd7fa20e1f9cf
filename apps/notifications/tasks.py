"""Celery tasks for notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.offices.models import Office

from .services import notify_admins_office_pending

logger = logging.getLogger(__name__)


@shared_task(name="notifications.dispatch_office_pending_approval")
def dispatch_office_pending_approval(office_id: int) -> int:
    """Ask every listing administrator to review the office; returns how many were notified."""
    try:
        office = Office.all_objects.select_related("owner").get(pk=office_id)
    except Office.DoesNotExist:
        logger.error(f"Office {office_id} not found for approval notification")
        return 0

    notified = notify_admins_office_pending(office)
    logger.info(f"[NOTIFICATION] Office {office.pk} approval request sent to {notified} administrator(s)")
    return notified
