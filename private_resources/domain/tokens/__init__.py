"""
Tokens Domain

Authentication and decoding of protected resource tokens.
"""

from .authenticator import DEFAULT_HMAC_ALGORITHM, TOKEN_SEPARATOR, TokenAuthenticator
from .codec import TokenCodec
from .payload import TokenPayload

__all__ = [
    "DEFAULT_HMAC_ALGORITHM",
    "TOKEN_SEPARATOR",
    "TokenAuthenticator",
    "TokenCodec",
    "TokenPayload",
]
