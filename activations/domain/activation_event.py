"""
ActivationEvent domain entity.

Append-only audit record written once per successful activation.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ActivationEvent:
    """
    ActivationEvent domain entity.

    Records are never changed after creation; only age-based pruning
    removes them.
    """

    key: str
    email: str
    device_id: str
    timestamp: datetime
    device_name: Optional[str] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        """Validate activation event."""
        if not self.key:
            raise ValueError("Activation event requires a license key")
        if not self.device_id:
            raise ValueError("Activation event requires a device id")

    @classmethod
    def record(
        cls,
        key: str,
        email: str,
        device_id: str,
        timestamp: datetime,
        device_name: Optional[str] = None,
    ) -> "ActivationEvent":
        """
        Create a new ActivationEvent.

        Args:
            key: License key
            email: Email supplied by the activating client
            device_id: Device identity that was bound
            timestamp: Activation time
            device_name: Optional device label

        Returns:
            ActivationEvent instance
        """
        return cls(
            key=key,
            email=email.strip(),
            device_id=device_id,
            timestamp=timestamp,
            device_name=device_name,
        )
