"""
In-memory event bus implementation.

Handlers run in the publishing request. A failing handler is logged and
never fails the operation that published the event.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Handlers for one event run concurrently; their exceptions are
    collected rather than propagated.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    async def publish(self, event: DomainEvent) -> int:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish

        Returns:
            Number of handlers that failed
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            logger.debug("No handlers registered for %s", event_type.__name__)
            return 0

        logger.debug("Publishing %s to %d handler(s)", event_type.__name__, len(handlers))

        results = await asyncio.gather(
            *(self._handle_event(handler, event) for handler in handlers),
            return_exceptions=True,
        )
        return sum(1 for result in results if isinstance(result, Exception))

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
            logger.debug("Handled %s with %s", event.event_type, handler.__class__.__name__)
        except Exception as e:
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )
            raise

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        """Handlers subscribed to an event type."""
        return list(self._handlers.get(event_type, []))
