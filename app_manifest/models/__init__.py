# app_manifest/models/__init__.py
"""Data models for app-manifest"""

from .application import Application, VersionedApplication
from .manifest import Manifest
from .config import ResolverConfig

__all__ = [
    # Application models
    "Application",
    "VersionedApplication",

    # Manifest models
    "Manifest",

    # Config models
    "ResolverConfig",
]
