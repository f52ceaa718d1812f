"""
WSGI entry point for the tracking API.
Serve from the backend/ directory so `tracking_backend` is importable.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tracking_backend.settings")

application = get_wsgi_application()
