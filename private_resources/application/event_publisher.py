"""
Event Publisher

Application service for publishing access events to registered handlers.
Lets the host application observe served resources and binding failures
without coupling the pipeline to a particular event bus.
"""

import logging
from threading import Lock
from typing import Callable, Dict, List, Type

from private_resources.domain.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventPublisher:
    """
    Synchronous dispatcher of access events.

    Handlers run in the publishing thread, those of the event's exact
    type first and then those subscribed to every event. Handler
    exceptions are caught and logged and never change the
    outcome of a request.
    """

    def __init__(self):
        """Initialize EventPublisher with empty handler registry."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}
        self._catch_all: List[EventHandler] = []
        self._lock = Lock()

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Register a handler for a specific event type.

        Args:
            event_type: Exact event class to receive
            handler: Callable taking the event

        Example:
            publisher = EventPublisher()
            publisher.subscribe(ResourceServedEvent, audit_download)
        """
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(
            f"Registered handler {_handler_name(handler)} for {event_type.__name__}"
        )

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler that receives every published event."""
        with self._lock:
            self._catch_all.append(handler)
        logger.debug(f"Registered catch-all handler {_handler_name(handler)}")

    def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> bool:
        """
        Remove a handler registered with subscribe().

        Returns:
            True if the handler was registered
        """
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                return True
        return False

    def publish(self, event: DomainEvent) -> None:
        """
        Publish an event to all registered handlers.

        Args:
            event: The domain event to publish
        """
        event_type = type(event)

        with self._lock:
            handlers = list(self._handlers.get(event_type, [])) + list(self._catch_all)

        if not handlers:
            logger.debug(f"No handlers registered for {event_type.__name__}")
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                # Observers must not break request handling
                logger.error(
                    f"Error in handler {_handler_name(handler)} for {event_type.__name__}: {e}",
                    exc_info=True,
                )


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
