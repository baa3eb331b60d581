# app_manifest/services/__init__.py
"""Services for app-manifest"""

from .config_service import ConfigService

__all__ = [
    "ConfigService",
]
