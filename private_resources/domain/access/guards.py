"""
Access Guards

Checks applied to an authenticated token payload: expiration and binding to
the security context of the current request.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from private_resources.domain.errors import (
    ContextMismatchError,
    MalformedPayloadError,
    TokenExpiredError,
)
from private_resources.domain.events import SecurityContextMismatchEvent
from private_resources.domain.tokens.payload import TokenPayload

from .clock import Clock
from .request import AccessRequest

logger = logging.getLogger(__name__)

# ISO 8601 with a mandatory UTC offset, e.g. 2099-01-01T00:00:00Z or 2099-01-01T00:00:00+0000
EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_expiration(value: str) -> datetime:
    """
    Parse an expiration timestamp in EXPIRATION_FORMAT.

    Raises:
        MalformedPayloadError: If the value does not match the format
    """
    try:
        return datetime.strptime(value, EXPIRATION_FORMAT)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f'Invalid expiration date "{value}"', e) from e


class ExpirationGuard:
    """Rejects tokens whose expiration date lies in the past."""

    def __init__(self, clock: Clock):
        self.clock = clock

    def check(self, payload: TokenPayload) -> None:
        """
        Check the payload expiration against the clock.

        A token expiring exactly now is still valid.

        Raises:
            MalformedPayloadError: If the expiration date cannot be parsed
            TokenExpiredError: If the expiration date is before now
        """
        if payload.expiration_date_time is None:
            return

        expiration = parse_expiration(payload.expiration_date_time)
        if expiration < self.clock.now():
            raise TokenExpiredError(
                f'Token expired: this token expired at "{expiration.isoformat()}"',
                context={"expired_at": expiration.isoformat()},
            )


class ContextBindingGuard:
    """
    Rejects tokens bound to a security context other than the current one.

    The fingerprints are opaque strings computed elsewhere; this guard only
    compares them and reports mismatches to the event publisher.
    """

    def __init__(self, event_publisher):
        """
        Args:
            event_publisher: Object with a `publish(event)` method
        """
        self.event_publisher = event_publisher

    def check(
        self,
        payload: TokenPayload,
        current_context_hash: Optional[str],
        access_request: Optional[AccessRequest] = None,
    ) -> None:
        """
        Compare the payload fingerprint with the current one.

        Args:
            payload: Authenticated token payload
            current_context_hash: Fingerprint of the current request's security context
            access_request: Current request, for the mismatch event

        Raises:
            ContextMismatchError: If the token is bound and the fingerprints differ
        """
        if payload.security_context_hash is None:
            return

        if payload.security_context_hash == current_context_hash:
            return

        self._emit_mismatch(payload, current_context_hash, access_request)
        raise ContextMismatchError(
            "Invalid security hash: this request is signed for a different security context",
            context={"resource_identifier": payload.resource_identifier.value},
        )

    def _emit_mismatch(
        self,
        payload: TokenPayload,
        current_context_hash: Optional[str],
        access_request: Optional[AccessRequest],
    ) -> None:
        event = SecurityContextMismatchEvent(
            aggregate_id=payload.resource_identifier.value,
            occurred_at=datetime.now(timezone.utc),
            token_context_hash=payload.security_context_hash,
            current_context_hash=current_context_hash,
            request_path=access_request.path if access_request else "",
            remote_addr=access_request.remote_addr if access_request else None,
        )
        logger.debug(
            f"Security context mismatch for resource {payload.resource_identifier.value[:8]}"
        )
        self.event_publisher.publish(event)
