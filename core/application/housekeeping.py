"""
Retention pruning for usage rows and activation events.

Licenses themselves are never pruned.
"""
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta

from asgiref.sync import sync_to_async

logger = logging.getLogger(__name__)


@dataclass
class PruneReport:
    """What a pruning run removed (or would remove on a dry run)."""

    usage_rows: int
    activation_events: int
    usage_cutoff: datetime
    activation_cutoff: datetime
    dry_run: bool

    def as_dict(self) -> dict:
        data = asdict(self)
        data["usage_cutoff"] = self.usage_cutoff.isoformat()
        data["activation_cutoff"] = self.activation_cutoff.isoformat()
        return data


async def prune_history(
    activation_events,
    usage_recorder,
    now: datetime,
    usage_retention_days: int,
    activation_retention_days: int,
    dry_run: bool = False,
) -> PruneReport:
    """
    Delete usage rows and activation events past their retention window.

    Args:
        activation_events: ActivationEventRepository
        usage_recorder: DailyUsageRecorder
        now: Reference time
        usage_retention_days: Days of usage rows to keep
        activation_retention_days: Days of activation events to keep
        dry_run: Count without deleting

    Returns:
        PruneReport
    """
    usage_cutoff = now - timedelta(days=usage_retention_days)
    activation_cutoff = now - timedelta(days=activation_retention_days)

    usage_rows = await sync_to_async(usage_recorder.prune_older_than)(
        usage_cutoff.date(), dry_run=dry_run
    )
    events = await activation_events.prune_older_than(activation_cutoff, dry_run=dry_run)

    return PruneReport(
        usage_rows=usage_rows,
        activation_events=events,
        usage_cutoff=usage_cutoff,
        activation_cutoff=activation_cutoff,
        dry_run=dry_run,
    )
