"""
ASGI config for the license server project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "license_server.settings.prod")

application = get_asgi_application()
