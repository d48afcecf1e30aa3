"""
Security Context Providers

Compute the fingerprint of the security context of the current request. The
pipeline compares it byte for byte with the `securityContextHash` of a
token, so whoever issues tokens must compute it the same way.
"""

import hashlib
import json
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from flask import session


class SecurityContextProvider(ABC):
    """Abstract fingerprint provider bound to the current request."""

    @abstractmethod
    def get_context_hash(self, http_request: Any) -> str:
        """
        Return the fingerprint of the security context of `http_request`.

        Args:
            http_request: Framework request object (may be None)
        """
        pass  # pragma: no cover


class FlaskSessionContextProvider(SecurityContextProvider):
    """
    Fingerprint derived from selected keys of the Flask session.

    The fingerprint is the hex SHA-256 of the canonical JSON of
    `{key: session.get(key)}` for the configured keys. An anonymous session
    yields the hash of all-null values, which never matches a token issued
    for a logged in user.
    """

    DEFAULT_KEYS = ("user_id", "roles")

    def __init__(self, session_keys: Optional[Iterable[str]] = None):
        self.session_keys = tuple(session_keys or self.DEFAULT_KEYS)

    def get_context_hash(self, http_request: Any) -> str:
        context = {key: session.get(key) for key in self.session_keys}
        return self.hash_context(context)

    @staticmethod
    def hash_context(context: dict) -> str:
        """Fingerprint of a context mapping; also used by token issuers."""
        canonical = json.dumps(context, sort_keys=True, separators=(",", ":"), default=str)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class StaticContextProvider(SecurityContextProvider):
    """Provider returning a fixed fingerprint, for tests and single-tenant setups."""

    def __init__(self, context_hash: str):
        self.context_hash = context_hash

    def get_context_hash(self, http_request: Any) -> str:
        return self.context_hash
