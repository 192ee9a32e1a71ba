"""
In-process telemetry sinks.
"""
import threading
from datetime import datetime
from typing import List, Optional, Tuple

from telemetry.ports.telemetry_sink import TelemetrySink


class NullTelemetrySink(TelemetrySink):
    """Drops everything. Used when telemetry is disabled."""

    def record_session(self, email: str, device_id: Optional[str], at: datetime) -> bool:
        return False

    def record_plugin_use(
        self, email: str, plugin: str, device_id: Optional[str], at: datetime
    ) -> bool:
        return False


class InMemoryTelemetrySink(TelemetrySink):
    """Keeps events in a list, for tests and local runs."""

    def __init__(self):
        self.events: List[Tuple] = []
        self._lock = threading.Lock()

    def record_session(self, email: str, device_id: Optional[str], at: datetime) -> bool:
        with self._lock:
            self.events.append(("session", email, None, device_id, at))
        return True

    def record_plugin_use(
        self, email: str, plugin: str, device_id: Optional[str], at: datetime
    ) -> bool:
        with self._lock:
            self.events.append(("plugin", email, plugin, device_id, at))
        return True
