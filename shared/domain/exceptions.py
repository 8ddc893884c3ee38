"""
Domain Errors

Typed failures raised by the pricing and hold services. Each error carries
the HTTP status the request surface maps it to, so views never translate
errors by hand:

- ValidationError: missing field, price outside the day bounds (400)
- NotFoundError: unit absent or inactive (404)
- ConflictError: no remaining availability (409)
- TransientError: persistence call failed (500)
- NotificationError: outbound notification failed; logged, never raised to callers
"""


class DomainError(Exception):
    """Base class for all domain errors"""

    status_code = 500
    default_code = "error"
    default_detail = "Unexpected error."

    def __init__(self, detail: str | None = None, *, code: str | None = None):
        self.detail = detail or self.default_detail
        self.code = code or self.default_code
        super().__init__(self.detail)


class ValidationError(DomainError):
    status_code = 400
    default_code = "invalid"
    default_detail = "Invalid input."


class NotFoundError(DomainError):
    status_code = 404
    default_code = "not_found"
    default_detail = "Not found."


class ConflictError(DomainError):
    status_code = 409
    default_code = "unavailable"
    default_detail = "No rooms left for this unit."


class TransientError(DomainError):
    """Persistence failure that may succeed on retry."""

    status_code = 500
    default_code = "transient"
    default_detail = "Storage temporarily unavailable."


class NotificationError(DomainError):
    default_code = "notification_failed"
    default_detail = "Notification could not be delivered."
