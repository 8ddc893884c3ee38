"""DRF exception handler that renders domain errors."""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    """Map DomainError subclasses to their status code, defer the rest to DRF."""

    if isinstance(exc, DomainError):
        if exc.status_code >= 500:
            view = context.get("view")
            logger.error(
                f"Request failed in {view.__class__.__name__ if view else 'unknown view'}: {exc.detail}",
                exc_info=exc,
            )
        return Response({"detail": exc.detail, "code": exc.code}, status=exc.status_code)

    return exception_handler(exc, context)
