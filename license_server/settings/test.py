"""
Test settings for the license server.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = False

STORE_TIMEOUT_SECONDS = 5.0

# Use PostgreSQL in CI (from DATABASE_URL), SQLite in-memory for local tests
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    import urllib.parse

    parsed = urllib.parse.urlparse(DATABASE_URL)
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": parsed.path.lstrip("/"),
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "OPTIONS": postgres_options(STORE_TIMEOUT_SECONDS),  # noqa: F405
            "TEST": {
                "NAME": parsed.path.lstrip("/") + "_test",
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

ADMIN_SECRET = "test-secret"
LICENSE_STORE_BACKEND = "django"
STORE_RETRY_ATTEMPTS = 2
STORE_RETRY_BACKOFF_SECONDS = 0.0
TELEMETRY_ENABLED = True

# Run tasks inline
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"

# Disable logging during tests
LOGGING_CONFIG = None
