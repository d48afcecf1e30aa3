"""
Test fixtures package.

Provides token builders and storage helpers for testing.
"""

from .resource_fixtures import (
    OTHER_IDENTIFIER,
    SAMPLE_IDENTIFIER,
    create_metadata,
    sharded_path,
    store_file,
)
from .token_fixtures import (
    TEST_SECRET,
    create_payload,
    create_token,
    encode_payload,
    flip_character,
    sign,
)

__all__ = [
    "OTHER_IDENTIFIER",
    "SAMPLE_IDENTIFIER",
    "TEST_SECRET",
    "create_metadata",
    "create_payload",
    "create_token",
    "encode_payload",
    "flip_character",
    "sharded_path",
    "sign",
    "store_file",
]
