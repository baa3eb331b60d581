"""App Manifest - resolve deployable applications from a git repository.

Applications are directories carrying a descriptor file (``appspec.yaml``).
A manifest lists every application at a revision, versioned by the id of its
directory tree, and can be narrowed to the applications a branch changed.
"""

from .__version__ import __version__, __version_info__, __author__, __license__

# Exceptions
from .api.exceptions import (
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

# Core API
from .api.resolver import (
    ManifestResolver,
    manifest_by_branch,
    manifest_by_sha,
    manifest_by_pr,
    resolve_changes,
)

# Data models
from .models import Application, VersionedApplication, Manifest, ResolverConfig

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__license__",

    # Main classes
    "ManifestResolver",

    # Core API functions
    "manifest_by_branch",
    "manifest_by_sha",
    "manifest_by_pr",
    "resolve_changes",

    # Data models
    "Application",
    "VersionedApplication",
    "Manifest",
    "ResolverConfig",

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
