"""
Resource Locator

Maps a resource identifier to a file below the configured storage root.
"""

import logging
from pathlib import Path
from typing import Union

from private_resources.domain.errors import NotFoundReason, ResourceNotFoundError

from .repositories import ResourceMetadataRepository
from .value_objects import ResolvedResource, ResourceIdentifier

logger = logging.getLogger(__name__)


class ResourceLocator:
    """
    Resolves resource identifiers to files in a sharded directory layout.

    A resource with identifier `abcd1234...` lives at
    `<root>/a/b/c/d/abcd1234...`. The identifier is validated before it is
    joined to the root, and the final path is checked to stay inside the
    root after symlinks are resolved.
    """

    def __init__(
        self,
        base_path: Union[str, Path],
        metadata_repository: ResourceMetadataRepository,
    ):
        """
        Initialize the locator.

        Args:
            base_path: Storage root of the protected resources
            metadata_repository: Lookup of resource metadata by SHA-1
        """
        self.base_path = Path(base_path)
        self.metadata_repository = metadata_repository

    def resolve(self, identifier: ResourceIdentifier) -> ResolvedResource:
        """
        Resolve an identifier to an existing file and its metadata.

        Args:
            identifier: Validated resource identifier

        Returns:
            ResolvedResource with absolute path and metadata

        Raises:
            ResourceNotFoundError: If metadata is unknown (reason METADATA), or if
                the file is missing, not a regular file or outside the root
                (reason FILE)
        """
        metadata = self.metadata_repository.get_by_sha1(identifier.value)
        if metadata is None:
            raise ResourceNotFoundError(
                f'Unknown resource: could not find resource with identifier "{identifier}"',
                NotFoundReason.METADATA,
            )

        root = self.base_path.resolve()
        path = identifier.shard_path(root)

        if not path.is_file():
            raise ResourceNotFoundError(
                f'File not found: the file "{path}" does not exist',
                NotFoundReason.FILE,
            )

        if not self._is_within_root(path, root):
            logger.warning(
                f"Resolved path for resource {identifier.value[:8]} escapes the storage root"
            )
            raise ResourceNotFoundError(
                f'File not found: the file "{path}" is outside of the storage root',
                NotFoundReason.FILE,
            )

        return ResolvedResource(path=path, metadata=metadata)

    @staticmethod
    def _is_within_root(path: Path, root: Path) -> bool:
        try:
            path.resolve().relative_to(root)
        except ValueError:
            return False
        return True
