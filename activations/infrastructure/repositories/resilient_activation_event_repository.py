"""
ActivationEventRepository decorator adding fail-fast timeouts and retries.
"""
from datetime import datetime
from typing import List, Optional

from activations.domain.activation_event import ActivationEvent
from activations.ports.activation_event_repository import ActivationEventRepository
from core.infrastructure.resilience import StoreGuard


class ResilientActivationEventRepository(ActivationEventRepository):
    """Wraps another ActivationEventRepository."""

    def __init__(self, inner: ActivationEventRepository, guard: Optional[StoreGuard] = None):
        self.inner = inner
        self.guard = guard or StoreGuard()

    async def append(self, event: ActivationEvent) -> ActivationEvent:
        return await self.guard.call("append_activation", lambda: self.inner.append(event))

    async def find_by_key(self, key: str) -> List[ActivationEvent]:
        return await self.guard.call("find_activations", lambda: self.inner.find_by_key(key))

    async def prune_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        return await self.guard.call(
            "prune_activations", lambda: self.inner.prune_older_than(cutoff, dry_run)
        )
