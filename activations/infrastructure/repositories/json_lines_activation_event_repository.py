"""
JSON-lines implementation of ActivationEventRepository port.

Companion of the JSON file license store: one event per line, appended
under a process-wide lock. Pruning rewrites the file through an atomic
rename.
"""
import json
import os
import tempfile
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import List

from asgiref.sync import sync_to_async

from activations.domain.activation_event import ActivationEvent
from activations.ports.activation_event_repository import ActivationEventRepository
from core.domain.exceptions import TransientStoreError

_process_lock = threading.Lock()


def _to_line(event: ActivationEvent) -> str:
    return json.dumps(
        {
            "id": str(event.id),
            "key": event.key,
            "email": event.email,
            "device_id": event.device_id,
            "device_name": event.device_name,
            "timestamp": event.timestamp.isoformat(),
        },
        sort_keys=True,
    )


def _from_line(line: str) -> ActivationEvent:
    data = json.loads(line)
    return ActivationEvent(
        id=uuid.UUID(data["id"]),
        key=data["key"],
        email=data["email"],
        device_id=data["device_id"],
        device_name=data.get("device_name"),
        timestamp=datetime.fromisoformat(data["timestamp"]),
    )


class JsonLinesActivationEventRepository(ActivationEventRepository):
    """File-backed activation trail."""

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> List[ActivationEvent]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                return [_from_line(line) for line in fh if line.strip()]
        except FileNotFoundError:
            return []
        except OSError as e:
            raise TransientStoreError(f"Could not read activation log: {e}") from e

    async def append(self, event: ActivationEvent) -> ActivationEvent:
        def _append():
            try:
                with _process_lock:
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                    with self.path.open("a", encoding="utf-8") as fh:
                        fh.write(_to_line(event) + "\n")
            except OSError as e:
                raise TransientStoreError(f"Could not append activation log: {e}") from e
            return event

        return await sync_to_async(_append, thread_sensitive=False)()

    async def find_by_key(self, key: str) -> List[ActivationEvent]:
        def _find():
            events = [event for event in self._read_all() if event.key == key]
            return sorted(events, key=lambda event: event.timestamp, reverse=True)

        return await sync_to_async(_find, thread_sensitive=False)()

    async def prune_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        def _prune():
            with _process_lock:
                events = self._read_all()
                keep = [event for event in events if event.timestamp >= cutoff]
                removed = len(events) - len(keep)
                if dry_run or removed == 0:
                    return removed
                try:
                    fd, tmp_path = tempfile.mkstemp(
                        dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
                    )
                    with os.fdopen(fd, "w", encoding="utf-8") as fh:
                        fh.writelines(_to_line(event) + "\n" for event in keep)
                    os.replace(tmp_path, self.path)
                except OSError as e:
                    raise TransientStoreError(f"Could not rewrite activation log: {e}") from e
                return removed

        return await sync_to_async(_prune, thread_sensitive=False)()
