"""Global constants for app-manifest"""

from enum import Enum

APP_NAME = "app-manifest"
LOG_FORMAT = "%(message)s"

# Descriptor files
DEFAULT_DESCRIPTOR_NAME = "appspec.yaml"
DESCRIPTOR_NAME_FIELD = "name"
DESCRIPTOR_DESCRIPTION_FIELD = "description"

# Project configuration
PROJECT_CONFIG_FILE = ".app-manifest.yaml"

# Git object identifiers (SHA-1)
GIT_OID_HEX_LENGTH = 40
PATH_SEPARATOR = "/"

DEFAULT_REVISION = "HEAD"
DEFAULT_LOG_LEVEL = "WARNING"


class BackendType(Enum):
    GIT = "git"


class TreeEntryType(Enum):
    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"  # submodule gitlink


class OutputFormat(Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


DEFAULT_BACKEND = BackendType.GIT.value


# Error codes
class ErrorCode:
    REPOSITORY_OPEN_FAILED = "AM001"
    REFERENCE_RESOLUTION_FAILED = "AM002"
    COMMIT_LOOKUP_FAILED = "AM003"
    TREE_RETRIEVAL_FAILED = "AM004"
    BLOB_RETRIEVAL_FAILED = "AM005"
    DESCRIPTOR_PARSE_FAILED = "AM006"
    DIRECTORY_ENTRY_LOOKUP_FAILED = "AM007"
    DIFF_COMPUTATION_FAILED = "AM008"
    IDENTIFIER_DECODE_FAILED = "AM009"
    CONFIG_FORMAT_ERROR = "AM010"


# Environment variables
ENV_CONFIG_PATH = "APP_MANIFEST_CONFIG"
ENV_DESCRIPTOR_NAME = "APP_MANIFEST_DESCRIPTOR"
ENV_BACKEND = "APP_MANIFEST_BACKEND"
ENV_LOG_LEVEL = "APP_MANIFEST_LOG_LEVEL"

# Display constants
EMOJI_ERROR = "✗"
