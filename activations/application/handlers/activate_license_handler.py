"""
ActivateLicenseHandler.

Handler for activating a license on a device.
"""
import logging
from typing import Optional

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivateLicenseResponseDTO
from activations.domain.activation_event import ActivationEvent
from activations.domain.events import LicenseActivated
from activations.domain.services import DeviceBindingPolicy
from activations.ports.activation_event_repository import ActivationEventRepository
from core.application.validation import require_fields
from core.domain.clock import Clock, utcnow
from core.domain.events import EventBus
from core.domain.exceptions import LicenseException, ValidationException
from core.domain.value_objects import DeviceIdentifier
from core.metrics import license_activations_total
from licenses.domain.license_key import mask_key
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)


DEVICE_NAME_MAX_LENGTH = 255


def default_device_name(email: str) -> str:
    return f"PC of {email}"[:DEVICE_NAME_MAX_LENGTH]


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        store: LicenseStore,
        activation_events: ActivationEventRepository,
        event_bus: Optional[EventBus] = None,
        clock: Clock = utcnow,
    ):
        """Initialize handler with the store and the activation trail."""
        self.store = store
        self.activation_events = activation_events
        self.event_bus = event_bus
        self.clock = clock

    async def handle(self, command: ActivateLicenseCommand) -> ActivateLicenseResponseDTO:
        """
        Handle activate license command.

        The binding checks run inside the store's per-key update, so two
        devices racing for a fresh license cannot both win.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivateLicenseResponseDTO with the remaining validity window

        Raises:
            MissingFieldsError: If key, email or deviceId is absent
            LicenseNotFoundError: If the key is unknown
            EmailMismatchError: If the email does not own the license
            LicenseDisabledError: If the license is disabled
            LicenseExpiredError: If the license has expired
            DeviceConflictError: If another device holds the license
        """
        require_fields(key=command.key, email=command.email, deviceId=command.device_id)
        try:
            device = DeviceIdentifier(command.device_id.strip())
        except ValueError as e:
            raise ValidationException(str(e), code="InvalidField")

        key = command.key.strip()
        email = command.email.strip()
        device_name = (command.device_name or "").strip()[:DEVICE_NAME_MAX_LENGTH]
        device_name = device_name or default_device_name(email)
        now = self.clock()
        seen = {}

        def bind(license):
            seen["new_binding"] = license.bound_device_id is None
            return DeviceBindingPolicy.activate(license, email, str(device), device_name, now)

        try:
            license = await self.store.update(key, bind)
        except LicenseException as e:
            license_activations_total.labels(outcome=e.code).inc()
            logger.info(
                "License activation refused",
                extra={"license_key": mask_key(key), "reason": e.code},
            )
            raise

        await self.activation_events.append(
            ActivationEvent.record(
                key=license.key,
                email=email,
                device_id=str(device),
                device_name=device_name,
                timestamp=now,
            )
        )

        license_activations_total.labels(outcome="activated").inc()
        logger.info(
            "License activated",
            extra={
                "license_key": mask_key(license.key),
                "new_binding": seen.get("new_binding", False),
                "activation_count": license.activation_count,
            },
        )

        if self.event_bus:
            await self.event_bus.publish(
                LicenseActivated(
                    aggregate_id=license.key,
                    device_id=str(device),
                    activation_count=license.activation_count,
                    expires_at=license.expires_at,
                    new_binding=seen.get("new_binding", False),
                )
            )

        return ActivateLicenseResponseDTO(
            validity=True,
            expires_at=license.expires_at,
            license_type=license.license_type.value,
            days_remaining=license.days_remaining(now),
            device_id=license.bound_device_id,
            activation_count=license.activation_count,
        )
