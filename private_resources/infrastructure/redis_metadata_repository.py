"""
Redis Resource Metadata Repository

Concrete Redis-based implementation of ResourceMetadataRepository.
Each resource is a JSON document stored under `resource:<sha1>` in the
store's namespace.
"""

import logging
from typing import Optional

from private_resources.domain.resources.repositories import ResourceMetadataRepository
from private_resources.domain.resources.value_objects import ResourceMetadata

from .redis_store import RedisJsonStore

logger = logging.getLogger(__name__)

RESOURCE_KEY_PREFIX = "resource"


class RedisResourceMetadataRepository(ResourceMetadataRepository):
    """
    Redis-based implementation of ResourceMetadataRepository.

    Documents look like:
        {"sha1": "...", "media_type": "application/pdf",
         "filename": "report.pdf", "file_size": 1024}

    `sha1` may be omitted; the key already carries it.
    """

    def __init__(self, store: RedisJsonStore):
        self.store = store

    @staticmethod
    def _name(sha1: str) -> str:
        return f"{RESOURCE_KEY_PREFIX}:{sha1}"

    def save(self, metadata: ResourceMetadata) -> bool:
        """Store metadata without expiry."""
        return self.store.store(self._name(metadata.sha1), metadata.to_dict())

    def delete(self, sha1: str) -> bool:
        return self.store.discard(self._name(sha1))

    def get_by_sha1(self, sha1: str) -> Optional[ResourceMetadata]:
        document = self.store.load(self._name(sha1))
        if document is None:
            return None

        document.setdefault("sha1", sha1)
        try:
            return ResourceMetadata.from_dict(document)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Incomplete metadata for resource {sha1[:8]}: {e}")
            return None

    def is_available(self) -> bool:
        return self.store.ping()
