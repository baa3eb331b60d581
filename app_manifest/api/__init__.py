# app_manifest/api/__init__.py
"""API layer for app-manifest"""

from .exceptions import (
    ManifestToolError,
    RepositoryOpenError,
    ReferenceResolutionError,
    CommitLookupError,
    TreeRetrievalError,
    BlobRetrievalError,
    DescriptorParseError,
    DirectoryEntryLookupError,
    DiffComputationError,
    IdentifierDecodeError,
    ConfigError,
)
from .resolver import (
    ManifestResolver,
    manifest_by_branch,
    manifest_by_sha,
    manifest_by_pr,
    resolve_changes,
)

__all__ = [
    # Main classes
    "ManifestResolver",

    # Convenience functions
    "manifest_by_branch",
    "manifest_by_sha",
    "manifest_by_pr",
    "resolve_changes",

    # Exceptions
    "ManifestToolError",
    "RepositoryOpenError",
    "ReferenceResolutionError",
    "CommitLookupError",
    "TreeRetrievalError",
    "BlobRetrievalError",
    "DescriptorParseError",
    "DirectoryEntryLookupError",
    "DiffComputationError",
    "IdentifierDecodeError",
    "ConfigError",
]
