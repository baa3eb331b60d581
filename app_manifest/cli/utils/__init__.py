"""CLI utility functions"""

from .output import (
    format_manifest,
    format_paths,
    format_error,
)

__all__ = [
    'format_manifest',
    'format_paths',
    'format_error',
]
