"""Core functionality for app-manifest"""

from .application_builder import build_application, parse_descriptor
from .descriptor_locator import LocatedDescriptor, locate_descriptors, discover_applications
from .manifest_engine import ManifestEngine, assemble_manifest
from .diff_reducer import reduce_to_diff, path_has_prefix, changed_paths

__all__ = [
    "build_application",
    "parse_descriptor",
    "LocatedDescriptor",
    "locate_descriptors",
    "discover_applications",
    "ManifestEngine",
    "assemble_manifest",
    "reduce_to_diff",
    "path_has_prefix",
    "changed_paths",
]
