"""
Per-day usage aggregation on the Django ORM.

Runs inside Celery workers; request threads never call it directly.
"""
import logging
from datetime import date, datetime
from typing import Optional

from django.db import transaction

from telemetry.infrastructure.models import DailyUsage

logger = logging.getLogger(__name__)


class DailyUsageRecorder:
    """Upserts DailyUsage rows keyed by (email, UTC day)."""

    def _locked_row(self, email: str, at: datetime) -> DailyUsage:
        # pylint: disable=no-member
        row, _ = DailyUsage.objects.select_for_update().get_or_create(
            email=email.strip().lower(), date=at.date()
        )
        return row

    def record_session(self, email: str, device_id: Optional[str], at: datetime) -> DailyUsage:
        with transaction.atomic():
            row = self._locked_row(email, at)
            row.sessions += 1
            row.device_id = device_id or row.device_id
            row.last_activity = at
            row.save()
        return row

    def record_plugin_use(
        self, email: str, plugin: str, device_id: Optional[str], at: datetime
    ) -> DailyUsage:
        with transaction.atomic():
            row = self._locked_row(email, at)
            plugins = dict(row.plugins or {})
            plugins[plugin] = plugins.get(plugin, 0) + 1
            row.plugins = plugins
            row.total_uses += 1
            row.device_id = device_id or row.device_id
            row.last_activity = at
            row.save()
        return row

    def prune_older_than(self, cutoff: date, dry_run: bool = False) -> int:
        """Delete rows for days before ``cutoff``; returns the row count."""
        queryset = DailyUsage.objects.filter(date__lt=cutoff)
        if dry_run:
            return queryset.count()
        deleted, _ = queryset.delete()
        logger.info("Pruned usage rows", extra={"deleted": deleted, "cutoff": cutoff.isoformat()})
        return deleted
