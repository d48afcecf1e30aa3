"""
Infrastructure Layer

Flask/Werkzeug serve strategies, security context providers and metadata stores.
"""

from .in_memory_metadata_repository import InMemoryResourceMetadataRepository
from .redis_metadata_repository import RedisResourceMetadataRepository
from .redis_store import RedisJsonStore
from .security_context import (
    FlaskSessionContextProvider,
    SecurityContextProvider,
    StaticContextProvider,
)
from .serve_strategies import (
    ReadfileStrategy,
    XAccelRedirectStrategy,
    XSendfileStrategy,
    register_default_strategies,
)

__all__ = [
    "FlaskSessionContextProvider",
    "InMemoryResourceMetadataRepository",
    "ReadfileStrategy",
    "RedisJsonStore",
    "RedisResourceMetadataRepository",
    "SecurityContextProvider",
    "StaticContextProvider",
    "XAccelRedirectStrategy",
    "XSendfileStrategy",
    "register_default_strategies",
]
