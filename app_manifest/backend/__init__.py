# app_manifest/backend/__init__.py
"""Repository backends for app-manifest"""

from .base import RepositoryBackend, TreeEntry, DiffDelta, decode_identifier
from .git import GitRepositoryBackend
from .factory import BackendFactory

__all__ = [
    'RepositoryBackend',
    'TreeEntry',
    'DiffDelta',
    'decode_identifier',
    'GitRepositoryBackend',
    'BackendFactory',
]
