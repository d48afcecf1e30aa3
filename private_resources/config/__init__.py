"""
Configuration

Environment-based settings for the access pipeline and its Redis backend.
"""

from .redis_config import RedisConfig
from .settings import DEFAULT_TOKEN_ARGUMENT, ProtectedResourceConfig

__all__ = ["DEFAULT_TOKEN_ARGUMENT", "ProtectedResourceConfig", "RedisConfig"]
