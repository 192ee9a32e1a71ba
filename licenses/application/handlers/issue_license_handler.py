"""
IssueLicenseHandler.

Handles the issue license command.
"""
import logging
from typing import Optional

from core.application.authorization import AdminAuthorizer, requires_admin_secret
from core.application.validation import require_fields
from core.domain.clock import Clock, utcnow
from core.domain.events import EventBus
from core.domain.exceptions import (
    DuplicateKeyError,
    KeyGenerationError,
    ValidationException,
)
from core.domain.value_objects import LicenseType
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import IssuedLicenseDTO
from licenses.domain.events import LicenseIssued
from licenses.domain.license import License
from licenses.domain.license_key import mask_key
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)

MAX_INSERT_ATTEMPTS = 3


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        store: LicenseStore,
        authorizer: AdminAuthorizer,
        key_generator: Optional[LicenseKeyGenerator] = None,
        event_bus: Optional[EventBus] = None,
        clock: Clock = utcnow,
    ):
        """Initialize handler with the store and collaborators."""
        self.store = store
        self.authorizer = authorizer
        self.key_generator = key_generator or LicenseKeyGenerator(store)
        self.event_bus = event_bus
        self.clock = clock

    @requires_admin_secret
    async def handle(self, command: IssueLicenseCommand) -> IssuedLicenseDTO:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            IssuedLicenseDTO including the new key

        Raises:
            UnauthorizedError: If the admin secret does not match
            MissingFieldsError: If email or name is absent
            InvalidLicenseTypeError: If the license type is unknown
            KeyGenerationError: If no unused key could be stored
        """
        require_fields(email=command.email, name=command.name)
        license_type = LicenseType.parse(command.license_type)

        # put() can still lose a race against a concurrent issuer of the same key
        for attempt in range(1, MAX_INSERT_ATTEMPTS + 1):
            key = await self.key_generator.generate()
            try:
                license = License.create(
                    key=key,
                    owner_email=command.email,
                    owner_name=command.name,
                    license_type=license_type,
                    issued_at=self.clock(),
                )
            except ValueError as e:
                raise ValidationException(str(e), code="InvalidField")

            try:
                saved = await self.store.put(license)
                break
            except DuplicateKeyError:
                logger.warning(
                    "License key taken between check and insert",
                    extra={"attempt": attempt},
                )
        else:
            raise KeyGenerationError()

        logger.info(
            "License issued",
            extra={
                "license_key": mask_key(saved.key),
                "license_type": saved.license_type.value,
                "expires_at": saved.expires_at.isoformat(),
            },
        )

        if self.event_bus:
            await self.event_bus.publish(
                LicenseIssued(
                    aggregate_id=saved.key,
                    owner_email=str(saved.owner_email),
                    license_type=saved.license_type.value,
                    expires_at=saved.expires_at,
                )
            )

        return IssuedLicenseDTO(
            key=saved.key,
            email=str(saved.owner_email),
            name=saved.owner_name,
            license_type=saved.license_type.value,
            issued_at=saved.issued_at,
            expires_at=saved.expires_at,
        )
