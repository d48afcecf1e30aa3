"""
Token Payload

Decoded content of a protected resource token.
"""

from dataclasses import dataclass
from typing import Optional

from private_resources.domain.resources.value_objects import ResourceIdentifier


@dataclass(frozen=True)
class TokenPayload:
    """
    Structured payload of an authenticated token.

    Attributes:
        resource_identifier: Content hash of the referenced resource
        expiration_date_time: Raw expiration timestamp, None if the token never expires
        security_context_hash: Fingerprint the token is bound to, None if unbound
    """
    resource_identifier: ResourceIdentifier
    expiration_date_time: Optional[str] = None
    security_context_hash: Optional[str] = None
