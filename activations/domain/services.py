"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from datetime import datetime
from typing import Optional

from core.domain.exceptions import (
    DeviceConflictError,
    EmailMismatchError,
    LicenseDisabledError,
    LicenseExpiredError,
)
from licenses.domain.license import License


class DeviceBindingPolicy:
    """
    Domain service deciding whether a device may activate a license.

    Checks run in a fixed order and the first failure is raised:
    email mismatch, disabled, expired, bound to another device. An unknown
    key is reported by the store before the policy runs.
    """

    @staticmethod
    def check(license: License, email: str, device_id: str, now: datetime) -> None:
        """
        Raise the first rule the activation would break.

        Args:
            license: Current license record
            email: Email supplied by the client
            device_id: Device requesting activation
            now: Activation time
        """
        if not license.is_owned_by(email):
            raise EmailMismatchError()
        if not license.admin_enabled:
            raise LicenseDisabledError()
        if license.is_expired(now):
            raise LicenseExpiredError()
        if license.is_bound_to_other_device(device_id):
            raise DeviceConflictError()

    @staticmethod
    def activate(
        license: License,
        email: str,
        device_id: str,
        device_name: Optional[str],
        now: datetime,
    ) -> License:
        """
        Check and bind in one step.

        Returns:
            License bound to ``device_id``; same-device calls keep the binding
        """
        DeviceBindingPolicy.check(license, email, device_id, now)
        return license.bind_device(device_id, device_name, now)
