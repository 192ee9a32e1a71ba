"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for the full license record shown to operators."""

    key: str
    email: str
    name: str
    license_type: str
    issued_at: datetime
    expires_at: datetime
    activation_state: str
    enabled: bool
    device_id: Optional[str]
    device_name: Optional[str]
    activation_count: int
    activated_at: Optional[datetime]
    device_released_at: Optional[datetime]
    days_remaining: int

    @classmethod
    def from_entity(cls, license: License, now: datetime) -> "LicenseDTO":
        return cls(
            key=license.key,
            email=str(license.owner_email),
            name=license.owner_name,
            license_type=license.license_type.value,
            issued_at=license.issued_at,
            expires_at=license.expires_at,
            activation_state=license.activation_state.value,
            enabled=license.admin_enabled,
            device_id=license.bound_device_id,
            device_name=license.bound_device_name,
            activation_count=license.activation_count,
            activated_at=license.activated_at,
            device_released_at=license.device_released_at,
            days_remaining=license.days_remaining(now),
        )


@dataclass
class IssuedLicenseDTO:
    """DTO for issue response. The only place a new key is disclosed."""

    key: str
    email: str
    name: str
    license_type: str
    issued_at: datetime
    expires_at: datetime


@dataclass
class VerificationResultDTO:
    """DTO for verify response."""

    validity: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    expires_at: Optional[datetime] = None
    license_type: Optional[str] = None
    days_remaining: Optional[int] = None


@dataclass
class AccessResultDTO:
    """DTO for access check response."""

    access: bool
    reason: Optional[str] = None
    message: Optional[str] = None


@dataclass
class AdminActionResultDTO:
    """DTO for enable/disable and device release confirmations."""

    key: str
    message: str
    license: LicenseDTO


@dataclass
class LicenseListDTO:
    """DTO for operator listing."""

    licenses: List[LicenseDTO]
    total: int
