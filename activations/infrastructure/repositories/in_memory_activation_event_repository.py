"""
In-memory implementation of ActivationEventRepository port.
"""
import threading
from datetime import datetime
from typing import List

from activations.domain.activation_event import ActivationEvent
from activations.ports.activation_event_repository import ActivationEventRepository


class InMemoryActivationEventRepository(ActivationEventRepository):
    """List-backed activation trail."""

    def __init__(self):
        self._events: List[ActivationEvent] = []
        self._lock = threading.Lock()

    async def append(self, event: ActivationEvent) -> ActivationEvent:
        with self._lock:
            self._events.append(event)
        return event

    async def find_by_key(self, key: str) -> List[ActivationEvent]:
        with self._lock:
            events = [event for event in self._events if event.key == key]
        return sorted(events, key=lambda event: event.timestamp, reverse=True)

    async def prune_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        with self._lock:
            old = [event for event in self._events if event.timestamp < cutoff]
            if not dry_run:
                self._events = [event for event in self._events if event.timestamp >= cutoff]
        return len(old)
