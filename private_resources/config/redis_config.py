"""
Redis Configuration

Connection settings for the Redis metadata backend, read from REDIS_URL or
the individual REDIS_* variables.
"""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import redis

if TYPE_CHECKING:
    from private_resources.infrastructure.redis_store import RedisJsonStore


@dataclass
class RedisConfig:
    """Redis connection settings."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = field(default=None, repr=False)
    max_connections: int = 20
    namespace: str = "private_resources"

    @classmethod
    def from_env(cls) -> "RedisConfig":
        """
        Load settings from the environment.

        REDIS_URL (`redis://[:password@]host:port/db`) takes precedence over
        REDIS_HOST, REDIS_PORT, REDIS_DB and REDIS_PASSWORD.
        """
        config = cls(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", 6379)),
            db=int(os.getenv("REDIS_DB", 0)),
            password=os.getenv("REDIS_PASSWORD"),
            max_connections=int(os.getenv("REDIS_MAX_CONNECTIONS", 20)),
            namespace=os.getenv("REDIS_KEY_NAMESPACE", "private_resources"),
        )

        url = os.getenv("REDIS_URL")
        if url:
            params = redis.connection.parse_url(url)
            config.host = params.get("host", config.host)
            config.port = params.get("port", config.port)
            config.db = params.get("db", config.db)
            config.password = params.get("password", config.password)
        return config

    def create_client(self) -> redis.Redis:
        """Client backed by a connection pool sized by max_connections."""
        pool = redis.ConnectionPool(
            host=self.host,
            port=self.port,
            db=self.db,
            password=self.password,
            max_connections=self.max_connections,
            retry_on_timeout=True,
            socket_keepalive=True,
        )
        return redis.Redis(connection_pool=pool)

    def create_store(self) -> "RedisJsonStore":
        from private_resources.infrastructure.redis_store import RedisJsonStore

        return RedisJsonStore(self.create_client(), self.namespace)
