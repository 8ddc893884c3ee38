"""Test settings.

In-memory SQLite, eager Celery and local-memory mail so the suite runs
without Redis, PostgreSQL or an SMTP server.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
NOTIFICATION_BACKEND = {}
NOTIFICATION_OPERATOR_EMAIL = 'frontdesk@signalhill.test'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

PRICING_PROFILE = 'standard'
PRICING_VOLATILITY = 0.03
PRICING_MIN_DELTA = '1'
PRICING_RANDOM_SEED = None
PRICING_RECOMPUTE_CURRENT_PERIOD_ONLY = False
HOLD_DURATION_MINUTES = 30
HOLD_RECLAIM_ON_EXPIRY = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "root": {"handlers": ["null"], "level": "WARNING"},
}
