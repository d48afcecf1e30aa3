"""
Redis JSON Store

Reads and writes JSON documents under a key namespace. Redis errors are
logged and reported as a missing document or a failed write, so a Redis
outage degrades to "resource not found" instead of a server error.
"""

import json
import logging
from typing import Any, Dict, Optional

import redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisJsonStore:
    """JSON documents in Redis, one string value per key."""

    def __init__(self, client: redis.Redis, namespace: str = ""):
        self.client = client
        self.namespace = namespace

    def key_for(self, name: str) -> str:
        if not self.namespace:
            return name
        return f"{self.namespace}:{name}"

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Load a document.

        Returns:
            The decoded document, None if it is absent, unreadable or Redis failed
        """
        key = self.key_for(name)
        try:
            raw = self.client.get(key)
        except RedisError as e:
            logger.error(f"Redis read failed for {key}: {e}")
            return None

        if raw is None:
            return None
        try:
            document = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Stored document {key} is not valid JSON: {e}")
            return None
        return document if isinstance(document, dict) else None

    def store(self, name: str, document: Dict[str, Any]) -> bool:
        key = self.key_for(name)
        try:
            return bool(self.client.set(key, json.dumps(document, sort_keys=True)))
        except (RedisError, TypeError) as e:
            logger.error(f"Redis write failed for {key}: {e}")
            return False

    def discard(self, name: str) -> bool:
        key = self.key_for(name)
        try:
            return self.client.delete(key) > 0
        except RedisError as e:
            logger.error(f"Redis delete failed for {key}: {e}")
            return False

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except RedisError:
            return False
