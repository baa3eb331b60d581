"""Exception definitions for app-manifest API"""

from ..constants import ErrorCode


class ManifestToolError(Exception):
    """Base exception for app-manifest"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class RepositoryOpenError(ManifestToolError):
    """Repository could not be opened"""

    def __init__(self, location: str, reason: str = None):
        message = f"Cannot open repository: {location}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.REPOSITORY_OPEN_FAILED)
        self.location = location


class ReferenceResolutionError(ManifestToolError):
    """Branch, tag or revision name could not be resolved to a commit"""

    def __init__(self, reference: str, reason: str = None):
        message = f"Cannot resolve reference: {reference}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.REFERENCE_RESOLUTION_FAILED)
        self.reference = reference


class CommitLookupError(ManifestToolError):
    """Commit object not found for an identifier"""

    def __init__(self, sha: str, reason: str = None):
        message = f"Commit not found: {sha}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.COMMIT_LOOKUP_FAILED)
        self.sha = sha


class TreeRetrievalError(ManifestToolError):
    """Tree of a commit could not be retrieved"""

    def __init__(self, sha: str, reason: str = None):
        message = f"Cannot retrieve tree of commit {sha}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.TREE_RETRIEVAL_FAILED)
        self.sha = sha


class BlobRetrievalError(ManifestToolError):
    """Blob contents could not be read"""

    def __init__(self, oid: str, reason: str = None):
        message = f"Cannot read blob {oid}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.BLOB_RETRIEVAL_FAILED)
        self.oid = oid


class DescriptorParseError(ManifestToolError):
    """Descriptor file content is malformed"""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Invalid descriptor for application '{path}': {reason}",
            ErrorCode.DESCRIPTOR_PARSE_FAILED
        )
        self.path = path
        self.reason = reason


class DirectoryEntryLookupError(ManifestToolError):
    """Application directory entry not found in tree"""

    def __init__(self, path: str, reason: str = None):
        message = f"Directory entry not found: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.DIRECTORY_ENTRY_LOOKUP_FAILED)
        self.path = path


class DiffComputationError(ManifestToolError):
    """Tree-to-tree diff failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DIFF_COMPUTATION_FAILED)


class IdentifierDecodeError(ManifestToolError):
    """Revision identifier is not a valid hex object id"""

    def __init__(self, identifier: str, reason: str):
        super().__init__(
            f"Invalid revision identifier '{identifier}': {reason}",
            ErrorCode.IDENTIFIER_DECODE_FAILED
        )
        self.identifier = identifier


class ConfigError(ManifestToolError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)
