"""
Token Codec

Turns the authenticated, base64 encoded payload segment of a token into a
TokenPayload. Performs no I/O and places no trust in the input: it must
only ever be called with output of TokenAuthenticator.verify().
"""

import base64
import binascii
import json
from typing import Any, Dict, Optional

from private_resources.domain.errors import MalformedPayloadError
from private_resources.domain.resources.value_objects import (
    InvalidResourceIdentifierError,
    ResourceIdentifier,
)

from .payload import TokenPayload

RESOURCE_IDENTIFIER_FIELD = "resourceIdentifier"
EXPIRATION_FIELD = "expirationDateTime"
SECURITY_CONTEXT_HASH_FIELD = "securityContextHash"


class TokenCodec:
    """Decodes token payloads (`base64(JSON)`)."""

    def decode(self, encoded_payload: str) -> TokenPayload:
        """
        Decode an encoded payload segment.

        Both the URL-safe and the standard base64 alphabet are accepted,
        with or without padding.

        Args:
            encoded_payload: Payload segment returned by the authenticator

        Returns:
            TokenPayload

        Raises:
            MalformedPayloadError: If base64 or JSON decoding fails, the JSON is
                not an object, or a field has the wrong shape
        """
        data = self._load_json(self._b64decode(encoded_payload))

        raw_identifier = data.get(RESOURCE_IDENTIFIER_FIELD)
        if raw_identifier is None:
            raise MalformedPayloadError(f'Token payload is missing "{RESOURCE_IDENTIFIER_FIELD}"')
        try:
            identifier = ResourceIdentifier(raw_identifier)
        except InvalidResourceIdentifierError as e:
            raise MalformedPayloadError(
                f'Token payload has an invalid "{RESOURCE_IDENTIFIER_FIELD}": {e}', e
            ) from e

        return TokenPayload(
            resource_identifier=identifier,
            expiration_date_time=self._optional_string(data, EXPIRATION_FIELD),
            security_context_hash=self._optional_string(data, SECURITY_CONTEXT_HASH_FIELD),
        )

    @staticmethod
    def _b64decode(encoded_payload: str) -> bytes:
        try:
            normalized = encoded_payload.replace("-", "+").replace("_", "/")
            normalized += "=" * (-len(normalized) % 4)
            return base64.b64decode(normalized.encode("ascii"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedPayloadError("Token payload is not valid base64", e) from e

    @staticmethod
    def _load_json(raw: bytes) -> Dict[str, Any]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedPayloadError("Token payload is not valid JSON", e) from e

        if not isinstance(data, dict):
            raise MalformedPayloadError(
                f"Token payload must be a JSON object, got {type(data).__name__}"
            )
        return data

    @staticmethod
    def _optional_string(data: Dict[str, Any], field: str) -> Optional[str]:
        value = data.get(field)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedPayloadError(
                f'Token payload field "{field}" must be a string, got {type(value).__name__}'
            )
        return value
