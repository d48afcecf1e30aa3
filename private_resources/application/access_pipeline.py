"""
Access Pipeline

Orchestrates the verification and delivery of a protected resource:

    authenticate -> decode -> check expiration -> check context binding
    -> locate -> dispatch -> served

Each step either passes or raises a ProtectedResourceError. The first error
ends the request; no later step runs.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from private_resources.domain.access.guards import ContextBindingGuard, ExpirationGuard
from private_resources.domain.access.request import AccessRequest
from private_resources.domain.errors import ProtectedResourceError
from private_resources.domain.events import ResourceServedEvent
from private_resources.domain.resources.locator import ResourceLocator
from private_resources.domain.resources.value_objects import ResolvedResource
from private_resources.domain.tokens.authenticator import TokenAuthenticator
from private_resources.domain.tokens.codec import TokenCodec

from .delivery_dispatcher import DeliveryDispatcher
from .event_publisher import EventPublisher

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """States of a request passing through the pipeline, in order."""

    NOT_INVOLVED = "not_involved"
    AUTHENTICATING = "authenticating"
    DECODING = "decoding"
    CHECKING_EXPIRATION = "checking_expiration"
    CHECKING_CONTEXT_BINDING = "checking_context_binding"
    LOCATING = "locating"
    DISPATCHING = "dispatching"
    SERVED = "served"


@dataclass(frozen=True)
class AccessOutcome:
    """
    Result of AccessPipeline.handle().

    Attributes:
        state: SERVED, NOT_INVOLVED, or the state in which the request failed
        response: The served response (SERVED only)
        error: The terminal error (failures only)
        resource: The resolved resource, once located
    """
    state: PipelineState
    response: Any = None
    error: Optional[ProtectedResourceError] = None
    resource: Optional[ResolvedResource] = None

    @property
    def is_involved(self) -> bool:
        return self.state is not PipelineState.NOT_INVOLVED

    @property
    def is_served(self) -> bool:
        return self.state is PipelineState.SERVED

    @property
    def failed(self) -> bool:
        return self.error is not None


class AccessPipeline:
    """
    Verifies a protected resource token and serves the referenced file.

    Holds only read-only collaborators, so a single instance serves
    concurrent requests.
    """

    def __init__(
        self,
        authenticator: TokenAuthenticator,
        codec: TokenCodec,
        expiration_guard: ExpirationGuard,
        binding_guard: ContextBindingGuard,
        locator: ResourceLocator,
        dispatcher: DeliveryDispatcher,
        context_provider,
        event_publisher: EventPublisher,
        serve_strategy: Optional[str],
    ):
        """
        Initialize AccessPipeline with its collaborators.

        Args:
            authenticator: Verifies the token HMAC
            codec: Decodes the authenticated payload
            expiration_guard: Rejects expired tokens
            binding_guard: Rejects tokens bound to another security context
            locator: Resolves identifiers to files
            dispatcher: Sets headers and invokes the serve strategy
            context_provider: Object with `get_context_hash(http_request) -> str`
            event_publisher: Receives ResourceServedEvent
            serve_strategy: Configured strategy name
        """
        self.authenticator = authenticator
        self.codec = codec
        self.expiration_guard = expiration_guard
        self.binding_guard = binding_guard
        self.locator = locator
        self.dispatcher = dispatcher
        self.context_provider = context_provider
        self.event_publisher = event_publisher
        self.serve_strategy = serve_strategy

    def handle(self, access_request: AccessRequest, response: Any) -> AccessOutcome:
        """
        Run a request through the pipeline.

        Args:
            access_request: Token and request data
            response: Response to serve into; only modified once every check passed

        Returns:
            AccessOutcome describing where the request ended
        """
        if access_request.token is None:
            return AccessOutcome(state=PipelineState.NOT_INVOLVED)

        state = PipelineState.AUTHENTICATING
        resource = None
        try:
            encoded_payload = self.authenticator.verify(access_request.token)

            state = PipelineState.DECODING
            payload = self.codec.decode(encoded_payload)

            state = PipelineState.CHECKING_EXPIRATION
            self.expiration_guard.check(payload)

            state = PipelineState.CHECKING_CONTEXT_BINDING
            current_context_hash = None
            if payload.security_context_hash is not None:
                current_context_hash = self.context_provider.get_context_hash(
                    access_request.http_request
                )
            self.binding_guard.check(payload, current_context_hash, access_request)

            state = PipelineState.LOCATING
            resource = self.locator.resolve(payload.resource_identifier)

            state = PipelineState.DISPATCHING
            self.dispatcher.dispatch(self.serve_strategy, resource, response)
        except ProtectedResourceError as e:
            logger.warning(
                f"Protected resource request for {access_request.path} failed while "
                f"{state.value}: [{e.category.value}/{e.code}] {e.technical_message}"
            )
            return AccessOutcome(state=state, error=e, resource=resource)

        self._emit_resource_served(resource, access_request)
        return AccessOutcome(state=PipelineState.SERVED, response=response, resource=resource)

    def _emit_resource_served(
        self, resource: ResolvedResource, access_request: AccessRequest
    ) -> None:
        metadata = resource.metadata
        self.event_publisher.publish(
            ResourceServedEvent(
                aggregate_id=metadata.sha1,
                occurred_at=datetime.now(timezone.utc),
                filename=metadata.filename,
                media_type=metadata.media_type,
                file_size=metadata.file_size,
                request_path=access_request.path,
                remote_addr=access_request.remote_addr,
            )
        )
