"""
Resource Value Objects

Immutable value objects for resource identification and metadata.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple


SHA1_HEX_LENGTH = 40
SHARD_DEPTH = 4

_HEX_DIGEST_PATTERN = re.compile(r"^[0-9a-f]{%d}$" % SHA1_HEX_LENGTH)
_FORBIDDEN_PATH_CHARACTERS = ("/", "\\", "\x00", ":")


class InvalidResourceIdentifierError(ValueError):
    """Raised when a resource identifier is not a lowercase SHA-1 hex digest."""
    pass


def contains_path_traversal(value: str) -> bool:
    """
    Check whether a value could leave the directory it is joined to.

    Independent of the hex check in ResourceIdentifier: a value that passes
    here never contains a separator, a NUL byte, a drive marker or a dot
    segment.
    """
    if value in ("", ".", ".."):
        return True
    if any(char in value for char in _FORBIDDEN_PATH_CHARACTERS):
        return True
    return value.startswith("..")


@dataclass(frozen=True)
class ResourceIdentifier:
    """
    Value object representing the content hash of a stored resource.

    Requirements:
    - exactly 40 lowercase hexadecimal characters (SHA-1)
    - no path separators or dot segments, checked on its own
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidResourceIdentifierError(
                f"Invalid resource identifier: expected str, got {type(self.value).__name__}"
            )
        if contains_path_traversal(self.value):
            raise InvalidResourceIdentifierError(
                "Invalid resource identifier: contains path characters"
            )
        if not _HEX_DIGEST_PATTERN.match(self.value):
            raise InvalidResourceIdentifierError(
                f"Invalid resource identifier: must be {SHA1_HEX_LENGTH} lowercase hex characters"
            )

    def shard_parts(self) -> Tuple[str, ...]:
        """
        Path segments below the storage root.

        Returns:
            The first four characters as nested directories, then the full identifier
        """
        return tuple(self.value[:SHARD_DEPTH]) + (self.value,)

    def shard_path(self, root: Path) -> Path:
        """Join the sharded location of this resource to `root`."""
        return Path(root).joinpath(*self.shard_parts())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResourceMetadata:
    """
    Read-only metadata of a stored resource, owned by the metadata store.
    """
    sha1: str
    media_type: str
    filename: str
    file_size: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "sha1": self.sha1,
            "media_type": self.media_type,
            "filename": self.filename,
            "file_size": self.file_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResourceMetadata":
        """Create ResourceMetadata from dictionary."""
        return cls(
            sha1=data["sha1"],
            media_type=data.get("media_type") or "application/octet-stream",
            filename=data["filename"],
            file_size=int(data["file_size"]),
        )


@dataclass(frozen=True)
class ResolvedResource:
    """An existing regular file below the storage root together with its metadata."""
    path: Path
    metadata: ResourceMetadata
