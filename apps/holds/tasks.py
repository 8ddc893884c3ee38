"""Celery tasks for the hold domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import HoldManager

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled by Celery Beat)
# ============================================================================

@shared_task(name="holds.expire_holds")
def expire_holds() -> dict[str, int]:
    """
    Expire holds whose window has passed and reclaim their rooms.

    Runs every HOLD_EXPIRY_SWEEP_INTERVAL_SECONDS through Celery Beat.

    Returns:
        dict: {"expired": ..., "reclaimed": ..., "failed": ...}
    """
    result = HoldManager().expire_sweep()
    if result["expired"] > 0:
        logger.info(f"Expired {result['expired']} holds")
    return result
