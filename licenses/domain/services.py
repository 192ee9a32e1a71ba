"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from core.domain.exceptions import (
    KeyGenerationError,
    LicenseDisabledError,
    LicenseException,
    LicenseExpiredError,
    LicenseNotActivatedError,
    LicenseNotFoundError,
)
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key

if TYPE_CHECKING:
    from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    def __init__(
        self,
        store: "LicenseStore",
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize generator.

        Args:
            store: License store used for the uniqueness check
            rng: Random source (defaults to the OS random source)
            max_attempts: Candidates tried before giving up
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.rng = rng
        self.max_attempts = max_attempts

    def candidate(self) -> str:
        return generate_license_key(self.rng)

    async def generate(self) -> str:
        """
        Generate a license key that is not yet in the store.

        Returns:
            Unused license key

        Raises:
            KeyGenerationError: If every candidate collided
        """
        for attempt in range(1, self.max_attempts + 1):
            key = self.candidate()
            if not await self.store.exists(key):
                return key
            logger.warning(
                "License key collision",
                extra={"attempt": attempt, "max_attempts": self.max_attempts},
            )

        raise KeyGenerationError(
            f"Could not generate a unique license key after {self.max_attempts} attempts"
        )


@dataclass(frozen=True)
class ValidityResult:
    """Outcome of a validity evaluation."""

    is_valid: bool
    reason: Optional[str] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.is_valid

    @classmethod
    def valid(cls) -> "ValidityResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, error: LicenseException) -> "ValidityResult":
        return cls(is_valid=False, reason=error.code, message=error.message)


class ValidityEvaluator:
    """
    Domain service computing whether a license may be used right now.

    Evaluation is a pure function of the record and the supplied time:
    it never touches a store and never changes the record. Checks run in
    a fixed order and the first failing one is reported.
    """

    @staticmethod
    def evaluate(license: Optional[License], now: datetime) -> ValidityResult:
        """
        Evaluate license validity.

        Args:
            license: License entity, or None when the key is unknown
            now: Evaluation time

        Returns:
            ValidityResult with the first failing reason
        """
        if license is None:
            return ValidityResult.invalid(LicenseNotFoundError())
        if not license.admin_enabled:
            return ValidityResult.invalid(LicenseDisabledError())
        if not license.is_activated:
            return ValidityResult.invalid(LicenseNotActivatedError())
        if license.is_expired(now):
            return ValidityResult.invalid(LicenseExpiredError())
        return ValidityResult.valid()

    @staticmethod
    def is_valid(license: Optional[License], now: datetime) -> bool:
        return ValidityEvaluator.evaluate(license, now).is_valid
