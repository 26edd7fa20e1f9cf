"""Domain event handlers feeding the notification tasks."""

from __future__ import annotations

import logging

from apps.offices.events import OfficePendingApproval

from .tasks import dispatch_office_pending_approval

logger = logging.getLogger(__name__)


def on_office_pending_approval(event: OfficePendingApproval) -> None:
    logger.info(f"Office {event.office_id} pending approval ({event.reason}), notifying administrators")
    dispatch_office_pending_approval.delay(event.office_id)
