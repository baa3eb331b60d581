"""Locate descriptor files in a repository tree"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List

from .application_builder import build_application
from ..api.exceptions import DirectoryEntryLookupError
from ..backend.base import RepositoryBackend
from ..constants import PATH_SEPARATOR
from ..models.application import Application, VersionedApplication

logger = logging.getLogger(__name__)

ApplicationBuilder = Callable[[str, bytes], Application]


@dataclass(frozen=True)
class LocatedDescriptor:
    """Descriptor file found in a tree"""
    path: str  # Normalized application directory path
    content: bytes
    oid: str  # Descriptor blob id


def normalize_path(path: str) -> str:
    """Strip trailing separators from a directory path"""
    return path.rstrip(PATH_SEPARATOR)


def locate_descriptors(
    repository: RepositoryBackend,
    tree: Any,
    descriptor_name: str
) -> Iterator[LocatedDescriptor]:
    """
    Yield every descriptor blob in a tree

    Args:
        repository: Open repository backend
        tree: Tree handle to walk
        descriptor_name: Descriptor file name

    Returns:
        Lazy iterator of located descriptors, in walk order

    Raises:
        BlobRetrievalError: If a descriptor blob cannot be read
    """
    for entry in repository.walk(tree):
        if entry.name != descriptor_name or not entry.is_blob:
            continue

        yield LocatedDescriptor(
            path=normalize_path(entry.root),
            content=repository.read_blob(entry.oid),
            oid=entry.oid
        )


def discover_applications(
    repository: RepositoryBackend,
    tree: Any,
    descriptor_name: str,
    builder: ApplicationBuilder = build_application
) -> List[VersionedApplication]:
    """
    Build a versioned application for every descriptor in a tree

    The version of an application is the id of its directory tree, so it
    changes whenever any file below the directory changes.

    Args:
        repository: Open repository backend
        tree: Tree handle to walk
        descriptor_name: Descriptor file name
        builder: Callable building an Application from (path, content)

    Returns:
        Versioned applications in walk order

    Raises:
        BlobRetrievalError: If a descriptor blob cannot be read
        DescriptorParseError: If a descriptor is malformed
        DirectoryEntryLookupError: If an application directory cannot be resolved
    """
    applications = []

    for descriptor in locate_descriptors(repository, tree, descriptor_name):
        application = builder(descriptor.path, descriptor.content)

        if not descriptor.path:
            # The tree root has no directory entry to version it by
            raise DirectoryEntryLookupError(descriptor.path, f"{descriptor_name} at repository root")

        dir_entry = repository.entry_by_path(tree, descriptor.path)
        if not dir_entry.is_tree:
            raise DirectoryEntryLookupError(descriptor.path, "not a directory")

        applications.append(VersionedApplication(
            application=application,
            version=dir_entry.oid
        ))
        logger.debug(f"Found application {application.name} at {descriptor.path} ({dir_entry.oid[:7]})")

    return applications
