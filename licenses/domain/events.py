"""
License domain events.

Domain events represent something that happened in the license domain.
Events carry the license key as aggregate id; handlers mask it before
logging.
"""

from dataclasses import dataclass
from datetime import datetime

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseIssued(DomainEvent):
    """Event raised when a license is issued."""

    owner_email: str
    license_type: str
    expires_at: datetime

    def to_dict(self):
        data = super().to_dict()
        data.update(
            {
                "owner_email": self.owner_email,
                "license_type": self.license_type,
                "expires_at": self.expires_at.isoformat(),
            }
        )
        return data


@dataclass(frozen=True)
class LicenseEnabledChanged(DomainEvent):
    """Event raised when an administrator enables or disables a license."""

    enabled: bool

    def to_dict(self):
        data = super().to_dict()
        data["enabled"] = self.enabled
        return data


@dataclass(frozen=True)
class LicenseDeviceReleased(DomainEvent):
    """Event raised when an administrator releases the bound device."""

    previous_device_id: str = ""

    def to_dict(self):
        data = super().to_dict()
        data["previous_device_id"] = self.previous_device_id
        return data
