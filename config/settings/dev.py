"""Development settings for the motel pricing project.

Debug on, SQLite, hold and price e-mails printed to the console, and a
fixed pricing seed so a local sweep can be reproduced. Do not use these
settings in production!
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
NOTIFICATION_BACKEND = {'backend': 'django.core.mail.backends.console.EmailBackend'}
NOTIFICATION_OPERATOR_EMAIL = os.environ.get('NOTIFICATION_OPERATOR_EMAIL', 'frontdesk@signalhill.local')

PRICING_RANDOM_SEED = os.environ.get('PRICING_RANDOM_SEED', '1234')

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

LOGGING['loggers']['apps']['level'] = os.environ.get('APP_LOG_LEVEL', 'DEBUG')
