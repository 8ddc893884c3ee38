"""Celery tasks for notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import send_hold_alert_to_operator, send_hold_created_email

logger = logging.getLogger(__name__)


@shared_task(name="notifications.send_hold_notification")
def send_hold_notification(hold_id: int) -> bool:
    """Confirmation to the customer and a heads-up to the front desk."""
    from apps.holds.models import Hold

    try:
        hold = Hold.objects.select_related("unit").get(pk=hold_id)
    except Hold.DoesNotExist:
        logger.error(f"Hold {hold_id} not found for notification")
        return False

    sent = send_hold_created_email(hold)
    send_hold_alert_to_operator(hold)

    logger.info(f"[NOTIFICATION] Hold notifications processed: {hold_id} (customer e-mail sent: {sent})")
    return sent
