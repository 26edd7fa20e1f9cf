"""Notification services for in-app messages and emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from apps.users.models import User

from .models import Notification

if TYPE_CHECKING:  # pragma: no cover
    from apps.offices.models import Office

logger = logging.getLogger(__name__)

OFFICE_PENDING_APPROVAL_TEMPLATE = "notifications/email/office_pending_approval.html"


def send_email_notification(recipient_email: str, subject: str, template_name: str, context: dict) -> bool:
    """
    Send one email rendered from ``template_name``.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        template_name: Django template of the HTML body; the plain text
            part is the same body with tags stripped
        context: Template context

    Returns:
        bool: True when the mail was handed to the email backend
    """
    try:
        html_message = render_to_string(template_name, context)

        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def create_in_app_notification(user: User, title: str, message: str, office: Optional["Office"] = None) -> Notification:
    notification = Notification.objects.create(user=user, office=office, title=title, message=message)
    logger.info(f"In-app notification created for {user.email}: {title}")
    return notification


def notify_admins_office_pending(office: "Office") -> int:
    """
    Tell every active listing administrator that ``office`` awaits approval.

    Returns the number of administrators notified.
    """
    title = f"Office #{office.pk} needs approval"
    message = (
        f"The office \"{office.title}\" by {office.owner.email} is pending approval. "
        f"Price per day: {office.price_per_day}, location: {office.lat}, {office.lng}."
    )

    notified = 0
    for admin in User.objects.admins():
        create_in_app_notification(admin, title, message, office=office)
        send_email_notification(
            recipient_email=admin.email,
            subject=title,
            template_name=OFFICE_PENDING_APPROVAL_TEMPLATE,
            context={"title": title, "office": office},
        )
        notified += 1
    return notified
