# app_manifest/cli/commands/__init__.py
"""CLI commands"""

from . import manifest
from . import changes

__all__ = [
    "manifest",
    "changes",
]
