"""Resolver API for deriving application manifests from a repository"""

import logging
from typing import Any, Dict, List, Optional

from .exceptions import ConfigError
from ..backend import BackendFactory, RepositoryBackend
from ..core.diff_reducer import changed_paths, reduce_to_diff
from ..core.manifest_engine import ManifestEngine
from ..constants import DEFAULT_REVISION
from ..models.config import ResolverConfig
from ..models.manifest import Manifest

logger = logging.getLogger(__name__)


class ManifestResolver:
    """Resolve manifests at branches, commits and branch ranges

    Every call opens the repository, derives the manifest from scratch and
    releases the repository before returning, on success or failure.
    """

    def __init__(self, config: Optional[ResolverConfig] = None):
        """
        Initialize resolver

        Args:
            config: Resolver configuration (defaults apply when omitted)
        """
        self.config = config or ResolverConfig()

    def _backend(self, dir: str) -> RepositoryBackend:
        return BackendFactory.create(self.config.backend, dir)

    def _engine(self, repository: RepositoryBackend, dir: str) -> ManifestEngine:
        return ManifestEngine(repository, dir, self.config.descriptor_name)

    def manifest_by_branch(self, dir: str, branch: str) -> Manifest:
        """
        Resolve the manifest at a branch

        Args:
            dir: Repository location
            branch: Branch, tag or any name the backend can resolve

        Returns:
            Full manifest at the branch head
        """
        with self._backend(dir) as repository:
            return self._engine(repository, dir).from_reference(branch)

    def manifest_by_sha(self, dir: str, sha: str) -> Manifest:
        """
        Resolve the manifest at a commit id

        Args:
            dir: Repository location
            sha: Full hex commit id

        Returns:
            Full manifest at the commit

        Raises:
            IdentifierDecodeError: If sha is not a full-width hex id
        """
        backend = self._backend(dir)
        oid = backend.decode_identifier(sha)

        with backend as repository:
            commit = repository.lookup_commit(oid)
            return self._engine(repository, dir).from_commit(commit)

    def manifest_by_pr(self, dir: str, from_branch: str, to_branch: str) -> Manifest:
        """
        Resolve the applications changed on one branch relative to another

        Args:
            dir: Repository location
            from_branch: Branch carrying the changes (e.g. a feature branch)
            to_branch: Branch the changes are compared against (e.g. main)

        Returns:
            Manifest at from_branch narrowed to the applications whose
            directories contain files changed between to_branch and from_branch
        """
        with self._backend(dir) as repository:
            engine = self._engine(repository, dir)
            manifest = engine.from_reference(from_branch)

            from_tree = engine.reference_tree(from_branch)
            to_tree = engine.reference_tree(to_branch)

            # New side of the diff must be from_branch, the manifest being narrowed
            deltas = repository.diff_tree_to_tree(to_tree, from_tree)
            return reduce_to_diff(manifest, deltas)

    def resolve_changes(self, dir: str, revision: str = DEFAULT_REVISION) -> List[str]:
        """
        List files changed by a commit relative to its first parent

        Args:
            dir: Repository location
            revision: Commit to inspect (defaults to HEAD)

        Returns:
            Sorted changed file paths; every file for a root commit
        """
        with self._backend(dir) as repository:
            commit = repository.resolve_reference(revision)
            tree = repository.commit_tree(commit)
            parents = repository.commit_parents(commit)

            if not parents:
                paths = [entry.path for entry in repository.walk(tree) if entry.is_blob]
            else:
                parent_tree = repository.commit_tree(parents[0])
                paths = changed_paths(repository.diff_tree_to_tree(parent_tree, tree))

        return sorted(set(paths))


# Convenience functions
def _resolver(options: Dict[str, Any]) -> ManifestResolver:
    """Build a resolver from ResolverConfig keyword options"""
    try:
        config = ResolverConfig(**options)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    return ManifestResolver(config)


def manifest_by_branch(dir: str, branch: str, **options) -> Manifest:
    """
    Resolve the manifest at a branch (convenience function)

    Args:
        dir: Repository location
        branch: Branch name
        **options: ResolverConfig fields (descriptor_name, backend)
    """
    return _resolver(options).manifest_by_branch(dir, branch)


def manifest_by_sha(dir: str, sha: str, **options) -> Manifest:
    """Resolve the manifest at a commit id (convenience function)"""
    return _resolver(options).manifest_by_sha(dir, sha)


def manifest_by_pr(dir: str, from_branch: str, to_branch: str, **options) -> Manifest:
    """Resolve the applications changed between two branches (convenience function)"""
    return _resolver(options).manifest_by_pr(dir, from_branch, to_branch)


def resolve_changes(dir: str, revision: str = DEFAULT_REVISION, **options) -> List[str]:
    """List files changed by a commit (convenience function)"""
    return _resolver(options).resolve_changes(dir, revision)
