"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional

from core.domain.exceptions import InvalidLicenseTypeError


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def matches(self, other: str) -> bool:
        """Case-insensitive comparison against a raw email string."""
        return self.value.strip().lower() == (other or "").strip().lower()

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True)
class DeviceIdentifier(ValueObject):
    """Caller-supplied opaque device identity."""

    value: str

    def __post_init__(self):
        """Validate device identifier."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Device identifier cannot be empty")
        if len(self.value) > 255:
            raise ValueError("Device identifier too long")

    def __str__(self) -> str:
        """Return identifier as string."""
        return self.value


class LicenseType(Enum):
    """License type value object with its fixed validity duration."""

    TRIAL = "trial"
    MONTHLY = "monthly"
    ANNUAL = "annual"
    LIFETIME = "lifetime"

    @property
    def duration_days(self) -> int:
        """Validity duration in days."""
        return LICENSE_DURATION_DAYS[self]

    @property
    def duration(self) -> timedelta:
        """Validity duration as a timedelta."""
        return timedelta(days=self.duration_days)

    @classmethod
    def parse(cls, value: Optional[str]) -> "LicenseType":
        """
        Parse a wire value. Absent or blank means annual.

        Raises:
            InvalidLicenseTypeError: If the value names no known type
        """
        if value is None or not str(value).strip():
            return cls.ANNUAL
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidLicenseTypeError(
                f"Unknown license type '{value}'. "
                f"Expected one of: {', '.join(t.value for t in cls)}"
            )

    def __str__(self) -> str:
        """Return license type as string."""
        return self.value


LICENSE_DURATION_DAYS = {
    LicenseType.TRIAL: 7,
    LicenseType.MONTHLY: 30,
    LicenseType.ANNUAL: 365,
    LicenseType.LIFETIME: 36500,
}


class ActivationState(Enum):
    """Activation state value object."""

    NOT_ACTIVATED = "not_activated"
    ACTIVATED = "activated"

    def __str__(self) -> str:
        """Return state as string."""
        return self.value
