"""Notification services for sending hold e-mails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from django.core.mail import get_connection, send_mail  # type: ignore
from django.core.validators import validate_email  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from shared.domain.exceptions import NotificationError

if TYPE_CHECKING:  # pragma: no cover
    from apps.holds.models import Hold
    from apps.inventory.models import PricingUnit

logger = logging.getLogger(__name__)


# ============================================================================
# DISPATCH
# ============================================================================

def notify_booking(hold: "Hold", unit: "PricingUnit") -> None:
    """
    Queue the notifications for a freshly created hold.

    Never raises. Publishing is attempted once, and a broker that cannot be
    reached within CELERY_BROKER_CONNECTION_TIMEOUT is logged and dropped.
    """
    from .tasks import send_hold_notification  # Local import to prevent circular dependency

    try:
        send_hold_notification.apply_async(args=[hold.pk], retry=False)
    except Exception as e:
        logger.error(
            f"[NOTIFICATION] Could not queue notification for hold {hold.pk} "
            f"on {unit.room_type}: {e}",
            exc_info=True,
        )


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def get_notification_connection():
    """Mail connection built from the opaque NOTIFICATION_BACKEND settings."""
    options = {
        key: value
        for key, value in getattr(settings, "NOTIFICATION_BACKEND", {}).items()
        if value is not None
    }
    backend = options.pop("backend", None)
    return get_connection(backend=backend, fail_silently=False, **options)


def send_email_notification(
    recipient_email: str,
    subject: str,
    *,
    html_message: str,
) -> bool:
    """
    Send one e-mail through the notification connection.

    Args:
        recipient_email: Address of the recipient
        subject: Subject line
        html_message: HTML body; the plain text part is derived from it

    Returns:
        bool: True if the message was handed to the mail backend
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            connection=get_notification_connection(),
            fail_silently=False,
        )
    except Exception as e:
        error = NotificationError(f"Failed to send email to {recipient_email}: {e}")
        logger.error(error.detail, exc_info=True)
        return False

    logger.info(f"Email sent successfully to {recipient_email}: {subject}")
    return True


def _is_email(value: str) -> bool:
    try:
        validate_email(value)
    except DjangoValidationError:
        return False
    return True


def send_hold_created_email(hold: "Hold") -> bool:
    """Confirmation to the customer with the locked price and the deadline."""
    if not _is_email(hold.customer_identifier):
        logger.info(f"[NOTIFICATION] Hold {hold.pk}: customer {hold.customer_identifier!r} has no e-mail")
        return False

    property_name = settings.PROPERTY_NAME
    expires_at = timezone.localtime(hold.expires_at).strftime("%H:%M")
    subject = f"Your room at {property_name} is held until {expires_at}"

    html_message = f"""
    <html>
    <body>
        <h2>Your room is on hold</h2>
        <ul>
            <li><strong>Room:</strong> {hold.unit.room_type} ({hold.unit.pricing_period})</li>
            <li><strong>Check-in:</strong> {hold.check_in_date.strftime('%m/%d/%Y')}</li>
            <li><strong>Locked price:</strong> ${hold.locked_price}</li>
            <li><strong>Hold expires at:</strong> {expires_at}</li>
        </ul>

        <p>Show this e-mail at the front desk before the hold expires to keep this price.</p>

        <p>{property_name}</p>
    </body>
    </html>
    """

    return send_email_notification(hold.customer_identifier, subject, html_message=html_message)


def send_hold_alert_to_operator(hold: "Hold") -> bool:
    """Heads-up to the front desk about a new hold."""
    operator_email = getattr(settings, "NOTIFICATION_OPERATOR_EMAIL", "")
    if not operator_email:
        return False

    subject = f"New hold #{hold.pk}: {hold.unit.room_type} at ${hold.locked_price}"
    html_message = f"""
    <html>
    <body>
        <p>New hold from {hold.customer_identifier}.</p>
        <ul>
            <li><strong>Room:</strong> {hold.unit.room_type} ({hold.unit.pricing_period})</li>
            <li><strong>Check-in:</strong> {hold.check_in_date.strftime('%m/%d/%Y')}</li>
            <li><strong>Locked price:</strong> ${hold.locked_price}</li>
            <li><strong>Rooms left:</strong> {hold.unit.available_count}</li>
        </ul>
    </body>
    </html>
    """

    return send_email_notification(operator_email, subject, html_message=html_message)
