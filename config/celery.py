"""Celery application for the motel pricing project.

Reads configuration from Django settings under the `CELERY_` namespace and
autodiscovers tasks from installed apps. The beat schedule that drives the
recompute and hold-expiry sweeps is defined in `config.settings.base` so the
cadences stay configurable through the environment.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("motel_pricing")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
