"""
Per-key mutual exclusion.

Holders of different keys never block each other. Lock objects are
reference counted and dropped once no caller holds or waits on them.
"""
import contextlib
import threading
from typing import Dict, Hashable, Iterator


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class KeyedLock:
    """Registry of locks indexed by key."""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: Dict[Hashable, _Entry] = {}

    def _acquire_entry(self, key: Hashable) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1
            return entry

    def _release_entry(self, key: Hashable, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    @contextlib.contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """
        Hold the lock for one key.

        Usage:
            with keyed_lock.hold(license_key):
                # read, check, write
                pass
        """
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                yield
        finally:
            self._release_entry(key, entry)
