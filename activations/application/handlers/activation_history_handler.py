"""
ActivationHistoryHandler.

Handler for reading the activation trail of a license.
"""
from activations.application.dto.activation_dto import (
    ActivationEventDTO,
    ActivationHistoryDTO,
)
from activations.application.queries.activation_history import ActivationHistoryQuery
from activations.ports.activation_event_repository import ActivationEventRepository
from core.application.authorization import AdminAuthorizer, requires_admin_secret
from core.application.validation import require_fields
from licenses.ports.license_store import LicenseStore


class ActivationHistoryHandler:
    """Handler for ActivationHistoryQuery."""

    def __init__(
        self,
        store: LicenseStore,
        activation_events: ActivationEventRepository,
        authorizer: AdminAuthorizer,
    ):
        self.store = store
        self.activation_events = activation_events
        self.authorizer = authorizer

    @requires_admin_secret
    async def handle(self, query: ActivationHistoryQuery) -> ActivationHistoryDTO:
        """
        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        require_fields(key=query.key)
        license = await self.store.get(query.key.strip())
        events = await self.activation_events.find_by_key(license.key)
        return ActivationHistoryDTO(
            key=license.key,
            activations=[ActivationEventDTO.from_entity(event) for event in events],
        )
