"""
Django implementation of ActivationEventRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List

from asgiref.sync import sync_to_async

from activations.domain.activation_event import ActivationEvent
from activations.infrastructure.models import ActivationEvent as ActivationEventModel
from activations.ports.activation_event_repository import ActivationEventRepository
from licenses.infrastructure.repositories.django_license_store import translate_db_errors


class DjangoActivationEventRepository(ActivationEventRepository):
    """Django ORM implementation of ActivationEventRepository."""

    def _to_domain(self, model: ActivationEventModel) -> ActivationEvent:
        return ActivationEvent(
            id=model.id,
            key=model.license_key,
            email=model.email,
            device_id=model.device_id,
            device_name=model.device_name,
            timestamp=model.timestamp,
        )

    @sync_to_async
    @translate_db_errors
    def append(self, event: ActivationEvent) -> ActivationEvent:
        # pylint: disable=no-member
        ActivationEventModel.objects.create(
            id=event.id,
            license_key=event.key,
            email=event.email,
            device_id=event.device_id,
            device_name=event.device_name,
            timestamp=event.timestamp,
        )
        return event

    @sync_to_async
    @translate_db_errors
    def find_by_key(self, key: str) -> List[ActivationEvent]:
        models = ActivationEventModel.objects.filter(license_key=key).order_by("-timestamp")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @translate_db_errors
    def prune_older_than(self, cutoff: datetime, dry_run: bool = False) -> int:
        queryset = ActivationEventModel.objects.filter(timestamp__lt=cutoff)
        if dry_run:
            return queryset.count()
        deleted, _ = queryset.delete()
        return deleted
