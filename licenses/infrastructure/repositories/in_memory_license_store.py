"""
In-memory implementation of LicenseStore port.

Used by tests and single-process deployments. Nothing survives a restart.
"""
import threading
from typing import Dict, List, Optional

from core.domain.exceptions import DuplicateKeyError, LicenseNotFoundError
from core.infrastructure.keyed_lock import KeyedLock
from licenses.domain.license import License
from licenses.ports.license_store import LicenseMutation, LicenseStore


class InMemoryLicenseStore(LicenseStore):
    """
    Dictionary-backed LicenseStore.

    Per-key updates hold a KeyedLock across read, mutation and write.
    The critical sections contain no awaits, so the store is safe to
    share between threads each running their own event loop.
    """

    def __init__(self):
        self._records: Dict[str, License] = {}
        self._insert_lock = threading.Lock()
        self._locks = KeyedLock()
        self.read_count = 0

    async def put(self, license: License) -> License:
        with self._insert_lock:
            if license.key in self._records:
                raise DuplicateKeyError()
            self._records[license.key] = license
        return license

    async def get(self, key: str) -> License:
        self.read_count += 1
        try:
            return self._records[key]
        except KeyError:
            raise LicenseNotFoundError()

    async def update(self, key: str, mutation: LicenseMutation) -> License:
        with self._locks.hold(key):
            current = self._records.get(key)
            if current is None:
                raise LicenseNotFoundError()
            updated = mutation(current)
            if updated.key != key:
                raise ValueError("Mutation must not change the license key")
            self._records[key] = updated
            return updated

    def _snapshot(self) -> List[License]:
        with self._insert_lock:
            return list(self._records.values())

    async def find_by_email(self, email: str) -> List[License]:
        return [license for license in self._snapshot() if license.is_owned_by(email)]

    async def exists(self, key: str) -> bool:
        return key in self._records

    async def list(self, email: Optional[str] = None) -> List[License]:
        records = self._snapshot()
        if email:
            records = [license for license in records if license.is_owned_by(email)]
        return sorted(records, key=lambda license: license.issued_at, reverse=True)

    async def close(self) -> None:
        with self._insert_lock:
            self._records.clear()
