"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.value_objects import ActivationState, Email, LicenseType

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a license issued to one customer and bound to at most
    one device at a time. This is an immutable value object: every
    state change returns a new instance.
    """

    key: str
    owner_email: Email
    owner_name: str
    license_type: LicenseType
    issued_at: datetime
    expires_at: datetime
    activation_state: ActivationState = ActivationState.NOT_ACTIVATED
    admin_enabled: bool = True
    bound_device_id: Optional[str] = None
    bound_device_name: Optional[str] = None
    activation_count: int = 0
    activated_at: Optional[datetime] = None
    device_released_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if not self.owner_name or len(self.owner_name.strip()) == 0:
            raise ValueError("Owner name cannot be empty")
        if self.expires_at < self.issued_at:
            raise ValueError("Expiration cannot precede issuance")
        if self.activation_count < 0:
            raise ValueError("Activation count cannot be negative")

    @classmethod
    def create(
        cls,
        key: str,
        owner_email: str,
        owner_name: str,
        license_type: LicenseType,
        issued_at: datetime,
    ) -> "License":
        """
        Create a new License entity.

        Args:
            key: Unique license key
            owner_email: Customer email address
            owner_name: Customer name
            license_type: License type, which fixes the validity duration
            issued_at: Issuance time

        Returns:
            License entity instance
        """
        return cls(
            key=key,
            owner_email=Email(owner_email.strip()),
            owner_name=owner_name.strip(),
            license_type=license_type,
            issued_at=issued_at,
            expires_at=issued_at + license_type.duration,
        )

    @property
    def is_activated(self) -> bool:
        return self.activation_state == ActivationState.ACTIVATED

    def is_owned_by(self, email: str) -> bool:
        """Case-insensitive owner check."""
        return self.owner_email.matches(email)

    def is_expired(self, current_time: datetime) -> bool:
        """A license is still usable at the exact expiration instant."""
        return current_time > self.expires_at

    def is_bound_to_other_device(self, device_id: str) -> bool:
        return self.bound_device_id is not None and self.bound_device_id != device_id

    def days_remaining(self, current_time: datetime) -> int:
        """Whole days left, rounded up; zero once expired."""
        seconds = (self.expires_at - current_time).total_seconds()
        if seconds <= 0:
            return 0
        return math.ceil(seconds / SECONDS_PER_DAY)

    def bind_device(
        self,
        device_id: str,
        device_name: Optional[str],
        current_time: datetime,
    ) -> "License":
        """
        Create a new License instance activated on a device.

        Re-binding the device that is already bound keeps the binding
        and only bumps the counters.

        Args:
            device_id: Device identity
            device_name: Optional device label
            current_time: Activation time

        Returns:
            New License instance bound to the device
        """
        if self.is_bound_to_other_device(device_id):
            raise ValueError("License is bound to another device")

        return replace(
            self,
            activation_state=ActivationState.ACTIVATED,
            bound_device_id=device_id,
            bound_device_name=device_name or self.bound_device_name,
            activation_count=self.activation_count + 1,
            activated_at=current_time,
        )

    def with_enabled(self, enabled: bool) -> "License":
        """Create a new License instance with the admin flag set."""
        return replace(self, admin_enabled=bool(enabled))

    def release_device(self, current_time: datetime) -> "License":
        """
        Create a new License instance with the device binding cleared.

        The activation state is left as it is; the next activation
        rebinds the license to the new device.
        """
        return replace(
            self,
            bound_device_id=None,
            bound_device_name=None,
            device_released_at=current_time,
        )
