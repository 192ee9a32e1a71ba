"""
Activation DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from activations.domain.activation_event import ActivationEvent


@dataclass
class ActivateLicenseResponseDTO:
    """DTO for activate license response."""

    validity: bool
    expires_at: datetime
    license_type: str
    days_remaining: int
    device_id: str
    activation_count: int
    message: str = "License activated"


@dataclass
class ActivationEventDTO:
    """DTO for one activation event."""

    id: uuid.UUID
    key: str
    email: str
    device_id: str
    device_name: Optional[str]
    timestamp: datetime

    @classmethod
    def from_entity(cls, event: ActivationEvent) -> "ActivationEventDTO":
        return cls(
            id=event.id,
            key=event.key,
            email=event.email,
            device_id=event.device_id,
            device_name=event.device_name,
            timestamp=event.timestamp,
        )


@dataclass
class ActivationHistoryDTO:
    """DTO for activation history response."""

    key: str
    activations: List[ActivationEventDTO]
