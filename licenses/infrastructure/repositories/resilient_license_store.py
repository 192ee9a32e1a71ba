"""
LicenseStore decorator adding fail-fast timeouts and bounded retries.
"""
from typing import List, Optional

from core.infrastructure.resilience import StoreGuard
from licenses.domain.license import License
from licenses.ports.license_store import LicenseMutation, LicenseStore


class ResilientLicenseStore(LicenseStore):
    """
    Wraps another LicenseStore.

    Domain errors from the inner store pass through untouched; transient
    failures are retried and then surface as StoreUnavailableError.
    """

    def __init__(self, inner: LicenseStore, guard: Optional[StoreGuard] = None):
        self.inner = inner
        self.guard = guard or StoreGuard()

    async def open(self) -> None:
        await self.guard.call("open", self.inner.open)

    async def close(self) -> None:
        await self.inner.close()

    async def put(self, license: License) -> License:
        return await self.guard.call("put", lambda: self.inner.put(license))

    async def get(self, key: str) -> License:
        return await self.guard.call("get", lambda: self.inner.get(key))

    async def update(self, key: str, mutation: LicenseMutation) -> License:
        return await self.guard.call("update", lambda: self.inner.update(key, mutation))

    async def find_by_email(self, email: str) -> List[License]:
        return await self.guard.call("find_by_email", lambda: self.inner.find_by_email(email))

    async def exists(self, key: str) -> bool:
        return await self.guard.call("exists", lambda: self.inner.exists(key))

    async def list(self, email: Optional[str] = None) -> List[License]:
        return await self.guard.call("list", lambda: self.inner.list(email))
