"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
from dataclasses import dataclass
from datetime import datetime

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseActivated(DomainEvent):
    """Event raised when a license is activated on a device."""

    device_id: str
    activation_count: int
    expires_at: datetime
    new_binding: bool = False

    def to_dict(self):
        data = super().to_dict()
        data.update(
            {
                "device_id": self.device_id,
                "activation_count": self.activation_count,
                "expires_at": self.expires_at.isoformat(),
                "new_binding": self.new_binding,
            }
        )
        return data
