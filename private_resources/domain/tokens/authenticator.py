"""
Token Authenticator

Verifies the HMAC appended to a protected resource token before anything in
the token is interpreted.
"""

import hashlib
import hmac

from private_resources.domain.errors import InvalidSignatureError

TOKEN_SEPARATOR = "."
DEFAULT_HMAC_ALGORITHM = "sha256"


class TokenAuthenticator:
    """
    Validates and strips the HMAC of a raw token.

    Token format: `<encoded payload><separator><hex HMAC of encoded payload>`.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_HMAC_ALGORITHM,
        separator: str = TOKEN_SEPARATOR,
    ):
        """
        Initialize TokenAuthenticator.

        Args:
            secret_key: Shared secret the tokens were signed with
            algorithm: hashlib digest name used for the HMAC
            separator: Character between payload and tag

        Raises:
            ValueError: If the secret is empty or the algorithm is unknown
        """
        if not secret_key:
            raise ValueError("secret_key cannot be empty")
        if algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported HMAC algorithm: {algorithm}")
        if not separator:
            raise ValueError("separator cannot be empty")

        self._secret = secret_key.encode("utf-8")
        self.algorithm = algorithm
        self.separator = separator

    def verify(self, raw_token: str) -> str:
        """
        Verify the token and return its encoded payload.

        Args:
            raw_token: Token as received in the request

        Returns:
            The encoded payload segment, safe to hand to the codec

        Raises:
            InvalidSignatureError: On a missing separator, an empty segment,
                non-ASCII input or a tag mismatch
        """
        if not isinstance(raw_token, str) or not raw_token.isascii():
            raise InvalidSignatureError("Invalid HMAC: token is not an ASCII string")

        encoded_payload, separator, tag = raw_token.rpartition(self.separator)
        if not separator or not encoded_payload or not tag:
            raise InvalidSignatureError("Invalid HMAC: token has no HMAC segment")

        expected_tag = self._generate_tag(encoded_payload)

        # Use constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(tag.encode("ascii"), expected_tag.encode("ascii")):
            raise InvalidSignatureError("Invalid HMAC: tag does not match payload")

        return encoded_payload

    def _generate_tag(self, encoded_payload: str) -> str:
        return hmac.new(
            self._secret, encoded_payload.encode("ascii"), self.algorithm
        ).hexdigest()
