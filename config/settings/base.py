"""Base settings for all environments.

This configuration file defines the common settings used in both development
and production environments. It follows Django's standard configuration
structure and integrates third‑party packages such as Django Rest Framework
and Celery. Pricing and hold tuning knobs live at the bottom of the file and
can be overridden through environment variables.
"""

import os
from pathlib import Path

import structlog

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'replace-me-in-production')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = False

ALLOWED_HOSTS: list[str] = os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',')

# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    # Third‑party apps
    'rest_framework',
    'django_filters',
    'corsheaders',
    'drf_spectacular',
    'django_celery_beat',
    # Domain apps
    'apps.inventory',
    'apps.pricing',
    'apps.holds',
    'apps.notifications',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'

# Database
# https://docs.djangoproject.com/en/5.0/ref/settings/#databases

DATABASES = {
    'default': {
        'ENGINE': os.environ.get('DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.environ.get('DB_NAME', BASE_DIR / 'db.sqlite3'),
        'USER': os.environ.get('DB_USER', ''),
        'PASSWORD': os.environ.get('DB_PASSWORD', ''),
        'HOST': os.environ.get('DB_HOST', ''),
        'PORT': os.environ.get('DB_PORT', ''),
    }
}

# Internationalization
# https://docs.djangoproject.com/en/5.0/topics/i18n/

LANGUAGE_CODE = 'en-us'

# Day buckets and time-of-day bands are evaluated in the motel's local time.
TIME_ZONE = os.environ.get('PROPERTY_TIME_ZONE', 'America/Los_Angeles')

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Static files (CSS, JavaScript, Images)
# https://docs.djangoproject.com/en/5.0/howto/static-files/

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STATICFILES_DIRS = []

# WhiteNoise configuration for static files
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

# Email defaults
DEFAULT_FROM_EMAIL = os.environ.get('DEFAULT_FROM_EMAIL', 'no-reply@signalhill.local')

# Django Rest Framework
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
    ],
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'EXCEPTION_HANDLER': 'shared.infrastructure.exception_handler.domain_exception_handler',
}

# Celery configuration (Broker and Result backend handled in environment)
CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', 'redis://localhost:6379/0')
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_RESULT_SERIALIZER = 'json'

# Holds publish their notification inside the request; a dead broker must fail fast
CELERY_BROKER_CONNECTION_TIMEOUT = float(os.environ.get('CELERY_BROKER_CONNECTION_TIMEOUT', '2'))
CELERY_BROKER_TRANSPORT_OPTIONS = {
    'max_retries': 0,
    'socket_connect_timeout': CELERY_BROKER_CONNECTION_TIMEOUT,
    'socket_timeout': float(os.environ.get('CELERY_BROKER_SOCKET_TIMEOUT', '5')),
}
CELERY_REDIS_SOCKET_CONNECT_TIMEOUT = CELERY_BROKER_CONNECTION_TIMEOUT

# CORS settings
CORS_ALLOWED_ORIGINS = os.environ.get(
    'CORS_ALLOWED_ORIGINS',
    'http://localhost:3000,http://localhost:8000,http://127.0.0.1:8000'
).split(',')
CORS_ALLOW_CREDENTIALS = True

# CSRF settings
CSRF_TRUSTED_ORIGINS = os.environ.get(
    'CSRF_TRUSTED_ORIGINS',
    'http://localhost:8000,http://127.0.0.1:8000'
).split(',')

# DRF Spectacular (API docs)
SPECTACULAR_SETTINGS = {
    'TITLE': 'Motel Dynamic Pricing API',
    'DESCRIPTION': 'Nightly rate recomputation and price-locked room holds',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}


def _env_bool(name: str, default: bool) -> bool:
    return os.environ.get(name, str(default)).lower() in ('1', 'true', 'yes')


# ============================================================================
# PRICING
# ============================================================================

# Named profile from apps.pricing.profiles (standard | weighted)
PRICING_PROFILE = os.environ.get('PRICING_PROFILE', 'standard')
# Half-width of the random market fluctuation band (0.03 == ±3%)
PRICING_VOLATILITY = float(os.environ.get('PRICING_VOLATILITY', '0.03'))
# Recompute writes a new price only when it moved at least this much
PRICING_MIN_DELTA = os.environ.get('PRICING_MIN_DELTA', '1')
# Optional fixed seed for the recompute random source
PRICING_RANDOM_SEED = os.environ.get('PRICING_RANDOM_SEED') or None
PRICING_RECOMPUTE_INTERVAL_SECONDS = float(os.environ.get('PRICING_RECOMPUTE_INTERVAL_SECONDS', '120'))
PRICING_RECOMPUTE_CURRENT_PERIOD_ONLY = _env_bool('PRICING_RECOMPUTE_CURRENT_PERIOD_ONLY', False)

# ============================================================================
# HOLDS
# ============================================================================

HOLD_DURATION_MINUTES = int(os.environ.get('HOLD_DURATION_MINUTES', '30'))
HOLD_EXPIRY_SWEEP_INTERVAL_SECONDS = float(os.environ.get('HOLD_EXPIRY_SWEEP_INTERVAL_SECONDS', '60'))
# False reproduces the legacy behaviour where expired holds keep their room
HOLD_RECLAIM_ON_EXPIRY = _env_bool('HOLD_RECLAIM_ON_EXPIRY', True)

# ============================================================================
# NOTIFICATIONS
# ============================================================================

# Opaque transport configuration handed to django.core.mail.get_connection.
NOTIFICATION_BACKEND = {
    'backend': os.environ.get('NOTIFICATION_EMAIL_BACKEND') or None,
    'host': os.environ.get('NOTIFICATION_EMAIL_HOST') or None,
    'port': int(os.environ['NOTIFICATION_EMAIL_PORT']) if os.environ.get('NOTIFICATION_EMAIL_PORT') else None,
    'username': os.environ.get('NOTIFICATION_EMAIL_USER') or None,
    'password': os.environ.get('NOTIFICATION_EMAIL_PASSWORD') or None,
    'use_tls': _env_bool('NOTIFICATION_EMAIL_USE_TLS', False),
}
NOTIFICATION_OPERATOR_EMAIL = os.environ.get('NOTIFICATION_OPERATOR_EMAIL', '')
PROPERTY_NAME = os.environ.get('PROPERTY_NAME', 'Signal Hill Motel')

# ============================================================================
# LOGGING
# ============================================================================

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "structlog.stdlib.ProcessorFormatter",
            "processor": structlog.processors.JSONRenderer(),
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "level": "INFO",
        }
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "apps": {"handlers": ["console"], "level": os.environ.get("APP_LOG_LEVEL", "INFO"), "propagate": False},
        "celery": {"handlers": ["console"], "level": "INFO", "propagate": False},
    },
}

# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

CELERY_BEAT_SCHEDULE = {
    # Recompute nightly rates for every active unit
    "run-recompute-sweep": {
        "task": "pricing.run_recompute_sweep",
        "schedule": PRICING_RECOMPUTE_INTERVAL_SECONDS,
        "options": {"expires": PRICING_RECOMPUTE_INTERVAL_SECONDS * 0.9},
    },
    # Expire stale holds and give their rooms back
    "expire-holds": {
        "task": "holds.expire_holds",
        "schedule": HOLD_EXPIRY_SWEEP_INTERVAL_SECONDS,
        "options": {"expires": HOLD_EXPIRY_SWEEP_INTERVAL_SECONDS * 0.9},
    },
}
