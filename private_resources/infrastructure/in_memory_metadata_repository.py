"""
In-Memory Resource Metadata Repository

Dictionary-backed ResourceMetadataRepository for development, tests and
applications that load their resource catalogue at startup.
"""

import threading
from typing import Dict, Iterable, Optional

from private_resources.domain.resources.repositories import ResourceMetadataRepository
from private_resources.domain.resources.value_objects import ResourceMetadata


class InMemoryResourceMetadataRepository(ResourceMetadataRepository):
    """Thread-safe in-memory metadata store keyed by SHA-1."""

    def __init__(self, resources: Optional[Iterable[ResourceMetadata]] = None):
        self._resources: Dict[str, ResourceMetadata] = {}
        self._lock = threading.Lock()
        for metadata in resources or []:
            self.add(metadata)

    def add(self, metadata: ResourceMetadata) -> None:
        with self._lock:
            self._resources[metadata.sha1] = metadata

    def remove(self, sha1: str) -> bool:
        with self._lock:
            return self._resources.pop(sha1, None) is not None

    def get_by_sha1(self, sha1: str) -> Optional[ResourceMetadata]:
        with self._lock:
            return self._resources.get(sha1)

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)
