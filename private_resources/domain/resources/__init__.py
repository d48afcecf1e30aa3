"""
Resources Domain

Resource identifiers, metadata and the sharded storage layout.
"""

from .locator import ResourceLocator
from .repositories import ResourceMetadataRepository
from .value_objects import (
    InvalidResourceIdentifierError,
    ResolvedResource,
    ResourceIdentifier,
    ResourceMetadata,
    contains_path_traversal,
)

__all__ = [
    "InvalidResourceIdentifierError",
    "ResolvedResource",
    "ResourceIdentifier",
    "ResourceLocator",
    "ResourceMetadata",
    "ResourceMetadataRepository",
    "contains_path_traversal",
]
