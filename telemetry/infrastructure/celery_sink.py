"""
Celery-backed telemetry sink.

Events are queued as Celery tasks. If the broker cannot take them the
event is dropped and logged; the calling request is unaffected.
"""
import logging
from datetime import datetime
from typing import Optional

from core.metrics import telemetry_dispatch_failures_total
from telemetry.ports.telemetry_sink import TelemetrySink

logger = logging.getLogger(__name__)


class CeleryTelemetrySink(TelemetrySink):
    """Dispatches usage events to Celery workers."""

    def _dispatch(self, event: str, task, **kwargs) -> bool:
        try:
            # A single publish attempt; the broker connection timeout bounds it
            task.apply_async(kwargs=kwargs, retry=False)
            return True
        except Exception as e:  # pylint: disable=broad-exception-caught
            telemetry_dispatch_failures_total.labels(event=event).inc()
            logger.warning(
                "Dropped telemetry event",
                extra={"event": event, "error": str(e)},
            )
            return False

    def record_session(self, email: str, device_id: Optional[str], at: datetime) -> bool:
        from telemetry.tasks import record_session_task

        return self._dispatch(
            "session",
            record_session_task,
            email=email,
            device_id=device_id,
            at=at.isoformat(),
        )

    def record_plugin_use(
        self, email: str, plugin: str, device_id: Optional[str], at: datetime
    ) -> bool:
        from telemetry.tasks import record_plugin_use_task

        return self._dispatch(
            "plugin",
            record_plugin_use_task,
            email=email,
            plugin=plugin,
            device_id=device_id,
            at=at.isoformat(),
        )
