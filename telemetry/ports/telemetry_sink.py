"""
Telemetry sink port (interface).

The license core hands usage events to a sink and moves on. A sink must
never raise into the caller and must never block on slow storage.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class TelemetrySink(ABC):
    """Destination for best-effort usage events."""

    @abstractmethod
    def record_session(self, email: str, device_id: Optional[str], at: datetime) -> bool:
        """
        Record that a client session started.

        Returns:
            True if the event was handed off, False if it was dropped
        """
        pass

    @abstractmethod
    def record_plugin_use(
        self, email: str, plugin: str, device_id: Optional[str], at: datetime
    ) -> bool:
        """
        Record one use of a plugin.

        Returns:
            True if the event was handed off, False if it was dropped
        """
        pass
