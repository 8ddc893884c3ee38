"""WSGI entry point for the motel pricing API.

Gunicorn serves the units, holds and pricing endpoints from here; the
recompute and hold-expiry sweeps run in Celery, not in the web process.
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.prod')

application = get_wsgi_application()
