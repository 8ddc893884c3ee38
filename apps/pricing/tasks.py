"""Celery tasks for the pricing domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .scheduler import RecomputeScheduler

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled by Celery Beat)
# ============================================================================

@shared_task(name="pricing.run_recompute_sweep")
def run_recompute_sweep() -> dict[str, int]:
    """
    Recompute prices for every active unit.

    Runs every PRICING_RECOMPUTE_INTERVAL_SECONDS through Celery Beat.

    Returns:
        dict: {"updated": ..., "unchanged": ..., "failed": ...}
    """
    result = RecomputeScheduler().run_sweep()
    if result["failed"]:
        logger.warning(f"Recompute sweep had {result['failed']} failing units")
    return result
