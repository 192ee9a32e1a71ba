"""
Activation event repository port (interface).

This defines the contract for the append-only activation audit trail.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from activations.domain.activation_event import ActivationEvent


class ActivationEventRepository(ABC):
    """
    Abstract repository for ActivationEvent records.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    There is no update operation: events are appended and, once old
    enough, pruned.
    """

    @abstractmethod
    async def append(self, event: ActivationEvent) -> ActivationEvent:
        """
        Append an activation event.

        Args:
            event: ActivationEvent to store

        Returns:
            Stored event
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> List[ActivationEvent]:
        """
        Find the activation trail of a license, newest first.

        Args:
            key: License key

        Returns:
            List of ActivationEvent records
        """
        pass

    @abstractmethod
    async def prune_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        """
        Delete events recorded before ``cutoff``.

        Args:
            cutoff: Oldest timestamp to keep
            dry_run: Count without deleting

        Returns:
            Number of events deleted (or that would be deleted)
        """
        pass
