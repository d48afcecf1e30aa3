"""
Access Log Handler

Writes served resources and context binding failures to a logger. The
access pipeline only publishes events and never logs them itself.
"""

import logging

from private_resources.domain.events import (
    DomainEvent,
    ResourceServedEvent,
    SecurityContextMismatchEvent,
)


class LoggingEventHandler:
    """Event handler that turns access events into log records."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """Log an event at a level matching its severity."""
        if isinstance(event, ResourceServedEvent):
            self._handle_resource_served(event)
        elif isinstance(event, SecurityContextMismatchEvent):
            self._handle_context_mismatch(event)
        else:
            self.logger.debug(
                f"Unhandled event: {event.__class__.__name__} "
                f"(aggregate_id={event.aggregate_id})"
            )

    def subscribe_to(self, publisher) -> None:
        """Register this handler for every event the pipeline publishes."""
        publisher.subscribe(ResourceServedEvent, self.handle)
        publisher.subscribe(SecurityContextMismatchEvent, self.handle)

    def _handle_resource_served(self, event: ResourceServedEvent) -> None:
        """Log a served resource."""
        self.logger.info(
            f"Resource served: resource={event.aggregate_id}, "
            f"filename={event.filename}, size={event.file_size} bytes, "
            f"path={event.request_path}, client={event.remote_addr}"
        )

    def _handle_context_mismatch(self, event: SecurityContextMismatchEvent) -> None:
        """Log a security context binding failure."""
        self.logger.warning(
            f"Security context mismatch: resource={event.aggregate_id}, "
            f"path={event.request_path}, client={event.remote_addr}"
        )
