"""
Celery tasks for usage telemetry and housekeeping.
"""
import logging
from datetime import datetime

from license_server.celery import app

logger = logging.getLogger(__name__)


@app.task(ignore_result=True)
def record_session_task(email: str, device_id: str = None, at: str = None):
    """
    Count one session for the customer's day.

    Args:
        email: Customer email
        device_id: Reporting device
        at: ISO timestamp of the session start
    """
    from core.domain.clock import utcnow
    from telemetry.infrastructure.usage_recorder import DailyUsageRecorder

    timestamp = datetime.fromisoformat(at) if at else utcnow()
    DailyUsageRecorder().record_session(email, device_id, timestamp)


@app.task(ignore_result=True)
def record_plugin_use_task(email: str, plugin: str, device_id: str = None, at: str = None):
    """
    Count one plugin use for the customer's day.

    Args:
        email: Customer email
        plugin: Plugin name
        device_id: Reporting device
        at: ISO timestamp of the use
    """
    from core.domain.clock import utcnow
    from telemetry.infrastructure.usage_recorder import DailyUsageRecorder

    timestamp = datetime.fromisoformat(at) if at else utcnow()
    DailyUsageRecorder().record_plugin_use(email, plugin, device_id, timestamp)


@app.task
def prune_history_task(dry_run: bool = False) -> dict:
    """
    Periodic task: drop usage rows and activation events past retention.

    Scheduled daily through Celery beat.
    """
    from asgiref.sync import async_to_sync
    from django.apps import apps
    from django.conf import settings

    from core.application.housekeeping import prune_history

    container = apps.get_app_config("core").container
    report = async_to_sync(prune_history)(
        activation_events=container.activation_events,
        usage_recorder=container.usage_recorder,
        now=container.clock(),
        usage_retention_days=settings.USAGE_RETENTION_DAYS,
        activation_retention_days=settings.ACTIVATION_EVENT_RETENTION_DAYS,
        dry_run=dry_run,
    )
    logger.info("History pruned", extra=report.as_dict())
    return report.as_dict()
