"""
Django management command to prune usage rows and activation events.

This command should be run periodically (e.g., via cron or Celery beat).
"""

import logging

from asgiref.sync import async_to_sync
from django.apps import apps
from django.conf import settings
from django.core.management.base import BaseCommand

from core.application.housekeeping import prune_history

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to prune history past its retention window."""

    help = "Delete usage rows and activation events older than their retention window"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - count rows without deleting them",
        )
        parser.add_argument(
            "--usage-days",
            type=int,
            default=None,
            help="Override USAGE_RETENTION_DAYS",
        )
        parser.add_argument(
            "--activation-days",
            type=int,
            default=None,
            help="Override ACTIVATION_EVENT_RETENTION_DAYS",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        container = apps.get_app_config("core").container

        report = async_to_sync(prune_history)(
            activation_events=container.activation_events,
            usage_recorder=container.usage_recorder,
            now=container.clock(),
            usage_retention_days=options["usage_days"] or settings.USAGE_RETENTION_DAYS,
            activation_retention_days=(
                options["activation_days"] or settings.ACTIVATION_EVENT_RETENTION_DAYS
            ),
            dry_run=dry_run,
        )

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No rows will be deleted"))

        self.stdout.write(
            f"Usage rows before {report.usage_cutoff.date()}: {report.usage_rows}"
        )
        self.stdout.write(
            f"Activation events before {report.activation_cutoff.date()}: "
            f"{report.activation_events}"
        )
        logger.info("History pruned", extra=report.as_dict())
        if not dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS("Pruning complete"))
