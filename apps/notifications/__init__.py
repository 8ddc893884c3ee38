"""Notifications app package.

Outbound notifications about holds. Delivery is best effort: it runs in a
Celery task after the hold is committed, and failures are logged only.
"""
