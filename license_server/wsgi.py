"""
WSGI config for the license server project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "license_server.settings.prod")

application = get_wsgi_application()
