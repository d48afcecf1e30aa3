"""
Resource Metadata Repository Interface

Abstract lookup of resource metadata by content hash. The store is owned by
the host application; the access pipeline only reads from it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .value_objects import ResourceMetadata


class ResourceMetadataRepository(ABC):
    """Abstract repository interface for resource metadata lookups."""

    @abstractmethod
    def get_by_sha1(self, sha1: str) -> Optional[ResourceMetadata]:
        """
        Retrieve resource metadata by content hash.

        Args:
            sha1: Lowercase SHA-1 hex digest of the resource content

        Returns:
            ResourceMetadata if found, None otherwise
        """
        pass  # pragma: no cover

    def is_available(self) -> bool:
        """
        Check if the backing store can be reached.

        Returns:
            True unless the implementation knows otherwise
        """
        return True
