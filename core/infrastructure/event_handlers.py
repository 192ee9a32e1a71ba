"""
Event handlers for domain events.

These handlers process domain events for side effects such as audit
logging and metrics.
"""

import logging

from activations.domain.events import LicenseActivated
from core.domain.events import DomainEvent, EventBus, EventHandler
from core.metrics import admin_actions_total, licenses_issued_total
from licenses.domain.events import (
    LicenseDeviceReleased,
    LicenseEnabledChanged,
    LicenseIssued,
)
from licenses.domain.license_key import mask_key

logger = logging.getLogger("audit")

LICENSE_EVENTS = (
    LicenseIssued,
    LicenseActivated,
    LicenseEnabledChanged,
    LicenseDeviceReleased,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one structured record per event to the ``audit`` logger.
    License keys are masked.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        payload = event.to_dict()
        payload["aggregate_id"] = mask_key(event.aggregate_id)
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            payload["aggregate_id"],
            extra={"audit": payload},
        )


class MetricsEventHandler(EventHandler):
    """Event handler feeding Prometheus counters."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicenseIssued):
            licenses_issued_total.labels(license_type=event.license_type).inc()
        elif isinstance(event, LicenseEnabledChanged):
            action = "enable" if event.enabled else "disable"
            admin_actions_total.labels(action=action).inc()
        elif isinstance(event, LicenseDeviceReleased):
            admin_actions_total.labels(action="release_device").inc()


def register_event_handlers(event_bus: EventBus) -> None:
    """
    Register all event handlers with the event bus.

    Args:
        event_bus: Bus owned by the service container
    """
    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in LICENSE_EVENTS:
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logging.getLogger(__name__).info(
        "Event handlers registered", extra={"event_types": len(LICENSE_EVENTS)}
    )
