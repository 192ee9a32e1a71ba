"""
License store port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from licenses.domain.license import License

LicenseMutation = Callable[[License], License]


class LicenseStore(ABC):
    """
    Abstract store for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.

    Mutations of one key are serialized by the implementation; different
    keys never wait on each other.
    """

    async def open(self) -> None:
        """Acquire resources. Called once at process start."""

    async def close(self) -> None:
        """Release resources. Called once at process shutdown."""

    @abstractmethod
    async def put(self, license: License) -> License:
        """
        Persist a new license.

        Args:
            license: License entity to store

        Returns:
            Stored license entity

        Raises:
            DuplicateKeyError: If the key already exists
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> License:
        """
        Fetch a license by key.

        Args:
            key: License key

        Returns:
            License entity

        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        pass

    @abstractmethod
    async def update(self, key: str, mutation: LicenseMutation) -> License:
        """
        Apply a mutation to one license atomically.

        The mutation receives the current record while the key is held
        and returns the replacement. Raising from the mutation aborts
        the update without writing.

        Args:
            key: License key
            mutation: Callable mapping the current record to the new one

        Returns:
            Updated license entity

        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> List[License]:
        """
        Find all licenses owned by an email (case-insensitive).

        Args:
            email: Owner email

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a license key is taken.

        Args:
            key: License key

        Returns:
            True if the key exists, False otherwise
        """
        pass

    @abstractmethod
    async def list(self, email: Optional[str] = None) -> List[License]:
        """
        List licenses, newest first.

        Args:
            email: Optional owner email filter

        Returns:
            List of License entities
        """
        pass
