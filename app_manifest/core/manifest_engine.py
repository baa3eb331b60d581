"""Manifest engine for assembling manifests from repository trees"""

import logging
from typing import Any, Iterable, Optional

from .application_builder import build_application
from .descriptor_locator import ApplicationBuilder, discover_applications
from ..backend.base import RepositoryBackend
from ..constants import DEFAULT_DESCRIPTOR_NAME
from ..models.application import VersionedApplication
from ..models.manifest import Manifest

logger = logging.getLogger(__name__)


def assemble_manifest(
    dir: str,
    revision_id: str,
    applications: Iterable[VersionedApplication]
) -> Manifest:
    """Wrap versioned applications with their repository location and revision"""
    return Manifest(dir=dir, sha=revision_id, applications=tuple(applications))


class ManifestEngine:
    """Engine for deriving manifests from commits of one repository"""

    def __init__(self,
                 repository: RepositoryBackend,
                 dir: str,
                 descriptor_name: str = DEFAULT_DESCRIPTOR_NAME,
                 builder: Optional[ApplicationBuilder] = None):
        """Initialize manifest engine

        Args:
            repository: Open repository backend
            dir: Repository location recorded in manifests
            descriptor_name: Descriptor file name
            builder: Application builder (defaults to the YAML builder)
        """
        self.repository = repository
        self.dir = dir
        self.descriptor_name = descriptor_name
        self.builder = builder or build_application

    def from_commit(self, commit: Any) -> Manifest:
        """Build the full manifest of a commit

        Args:
            commit: Commit handle from the repository backend

        Returns:
            Manifest of every application in the commit tree
        """
        sha = self.repository.commit_id(commit)
        tree = self.repository.commit_tree(commit)

        applications = discover_applications(
            self.repository,
            tree,
            self.descriptor_name,
            self.builder
        )

        manifest = assemble_manifest(self.dir, sha, applications)
        logger.info(f"Resolved {len(manifest)} application(s) at {sha[:7]}")
        return manifest

    def from_reference(self, name: str) -> Manifest:
        """Build the full manifest of a branch, tag or revision name"""
        return self.from_commit(self.repository.resolve_reference(name))

    def reference_tree(self, name: str) -> Any:
        """Get the tree of a branch, tag or revision name"""
        commit = self.repository.resolve_reference(name)
        return self.repository.commit_tree(commit)
