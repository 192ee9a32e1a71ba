"""
License admin handlers.

Handlers for enable/disable, device release and operator listing.
Every handler here is guarded by the admin secret.
"""
import logging
from typing import Optional

from core.application.authorization import AdminAuthorizer, requires_admin_secret
from core.application.validation import require_fields
from core.domain.clock import Clock, utcnow
from core.domain.events import EventBus
from licenses.application.commands.release_device import ReleaseDeviceCommand
from licenses.application.commands.set_license_enabled import SetLicenseEnabledCommand
from licenses.application.dto.license_dto import (
    AdminActionResultDTO,
    LicenseDTO,
    LicenseListDTO,
)
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.events import LicenseDeviceReleased, LicenseEnabledChanged
from licenses.domain.license_key import mask_key
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)


class SetLicenseEnabledHandler:
    """Handler for SetLicenseEnabledCommand."""

    def __init__(
        self,
        store: LicenseStore,
        authorizer: AdminAuthorizer,
        event_bus: Optional[EventBus] = None,
        clock: Clock = utcnow,
    ):
        """Initialize handler with the store."""
        self.store = store
        self.authorizer = authorizer
        self.event_bus = event_bus
        self.clock = clock

    @requires_admin_secret
    async def handle(self, command: SetLicenseEnabledCommand) -> AdminActionResultDTO:
        """
        Handle set enabled command.

        Args:
            command: SetLicenseEnabledCommand

        Returns:
            AdminActionResultDTO with the updated record

        Raises:
            LicenseNotFoundError: If license not found
        """
        require_fields(key=command.key, enabled=command.enabled)
        enabled = bool(command.enabled)

        updated = await self.store.update(
            command.key.strip(), lambda license: license.with_enabled(enabled)
        )

        logger.info(
            "License enabled flag changed",
            extra={"license_key": mask_key(updated.key), "enabled": enabled},
        )

        if self.event_bus:
            await self.event_bus.publish(
                LicenseEnabledChanged(aggregate_id=updated.key, enabled=enabled)
            )

        return AdminActionResultDTO(
            key=updated.key,
            message="License enabled" if enabled else "License disabled",
            license=LicenseDTO.from_entity(updated, self.clock()),
        )


class ReleaseDeviceHandler:
    """Handler for ReleaseDeviceCommand."""

    def __init__(
        self,
        store: LicenseStore,
        authorizer: AdminAuthorizer,
        event_bus: Optional[EventBus] = None,
        clock: Clock = utcnow,
    ):
        """Initialize handler with the store."""
        self.store = store
        self.authorizer = authorizer
        self.event_bus = event_bus
        self.clock = clock

    @requires_admin_secret
    async def handle(self, command: ReleaseDeviceCommand) -> AdminActionResultDTO:
        """
        Handle release device command.

        Clears the bound device so the next activation may bind a new
        one. The activation state is kept as it is.

        Args:
            command: ReleaseDeviceCommand

        Returns:
            AdminActionResultDTO with the updated record

        Raises:
            LicenseNotFoundError: If license not found
        """
        require_fields(key=command.key)
        now = self.clock()
        previous = {}

        def release(license):
            previous["device_id"] = license.bound_device_id or ""
            return license.release_device(now)

        updated = await self.store.update(command.key.strip(), release)

        logger.info(
            "License device released",
            extra={
                "license_key": mask_key(updated.key),
                "had_device": bool(previous.get("device_id")),
            },
        )

        if self.event_bus:
            await self.event_bus.publish(
                LicenseDeviceReleased(
                    aggregate_id=updated.key,
                    previous_device_id=previous.get("device_id", ""),
                )
            )

        return AdminActionResultDTO(
            key=updated.key,
            message="Device released. The license can be activated on a new device.",
            license=LicenseDTO.from_entity(updated, now),
        )


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, store: LicenseStore, authorizer: AdminAuthorizer, clock: Clock = utcnow):
        self.store = store
        self.authorizer = authorizer
        self.clock = clock

    @requires_admin_secret
    async def handle(self, query: ListLicensesQuery) -> LicenseListDTO:
        email = (query.email or "").strip() or None
        licenses = await self.store.list(email)
        now = self.clock()
        return LicenseListDTO(
            licenses=[LicenseDTO.from_entity(license, now) for license in licenses],
            total=len(licenses),
        )
