"""
Celery configuration for background tasks.

Used for usage telemetry and periodic housekeeping.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "license_server.settings.dev")

app = Celery("license_server")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "prune-history-daily": {
        "task": "telemetry.tasks.prune_history_task",
        "schedule": crontab(hour=3, minute=15),
    },
}
