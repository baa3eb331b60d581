# app_manifest/backend/git.py
"""Git repository backend built on GitPython"""

import logging
from typing import Any, Dict, Iterator, List

from git import Repo
from git.exc import (
    BadName,
    BadObject,
    GitCommandError,
    InvalidGitRepositoryError,
    NoSuchPathError,
)
from git.objects import Commit, Object, Tree

from .base import DiffDelta, RepositoryBackend, TreeEntry
from ..api.exceptions import (
    BlobRetrievalError,
    CommitLookupError,
    DiffComputationError,
    DirectoryEntryLookupError,
    ReferenceResolutionError,
    RepositoryOpenError,
    TreeRetrievalError,
)
from ..constants import GIT_OID_HEX_LENGTH, TreeEntryType

logger = logging.getLogger(__name__)

# GitPython object type names
_ENTRY_TYPES = {
    "blob": TreeEntryType.BLOB,
    "tree": TreeEntryType.TREE,
    "submodule": TreeEntryType.COMMIT,
    "commit": TreeEntryType.COMMIT,
}

# Errors GitPython raises for missing or unreadable objects
_OBJECT_ERRORS = (BadName, BadObject, ValueError, GitCommandError)


class GitRepositoryBackend(RepositoryBackend):
    """Read-only access to a local git repository"""

    oid_hex_length = GIT_OID_HEX_LENGTH

    def __init__(self, location: str, config: Dict[str, Any] = None):
        super().__init__(location, config)
        self._repo = None

    @property
    def repo(self) -> Repo:
        """Get the underlying GitPython repository"""
        if self._repo is None:
            raise RuntimeError("Repository is not open")
        return self._repo

    def _do_open(self) -> None:
        try:
            self._repo = Repo(self.location)
        except NoSuchPathError as e:
            raise RepositoryOpenError(self.location, "no such path") from e
        except InvalidGitRepositoryError as e:
            raise RepositoryOpenError(self.location, "not a git repository") from e

        logger.debug(f"Opened git repository at {self.location}")

    def _do_close(self) -> None:
        self._repo.close()
        self._repo = None

    def resolve_reference(self, name: str) -> Commit:
        try:
            # rev_parse tries refs/, refs/tags/, refs/heads/ and refs/remotes/
            commit = self.repo.commit(name)
        except _OBJECT_ERRORS as e:
            raise ReferenceResolutionError(name, str(e)) from e

        logger.debug(f"Resolved {name} to {commit.hexsha}")
        return commit

    def lookup_commit(self, oid: bytes) -> Commit:
        sha = self.encode_identifier(oid)

        # GitPython hands back an unchecked commit for the null id
        if oid == Object.NULL_BIN_SHA:
            raise CommitLookupError(sha, "null object id")

        try:
            obj = Object.new_from_sha(self.repo, oid)
        except _OBJECT_ERRORS as e:
            raise CommitLookupError(sha, str(e)) from e

        if obj.type != "commit":
            raise CommitLookupError(sha, f"object is a {obj.type}")

        return obj

    def commit_id(self, commit: Commit) -> str:
        return commit.hexsha

    def commit_parents(self, commit: Commit) -> List[Commit]:
        try:
            return list(commit.parents)
        except _OBJECT_ERRORS as e:
            raise CommitLookupError(commit.hexsha, str(e)) from e

    def commit_tree(self, commit: Commit) -> Tree:
        try:
            return commit.tree
        except _OBJECT_ERRORS as e:
            raise TreeRetrievalError(commit.hexsha, str(e)) from e

    def walk(self, tree: Tree) -> Iterator[TreeEntry]:
        for item in tree.traverse():
            yield TreeEntry.from_path(
                item.path,
                _ENTRY_TYPES.get(item.type, TreeEntryType.BLOB),
                item.hexsha
            )

    def entry_by_path(self, tree: Tree, path: str) -> TreeEntry:
        if not path:
            raise DirectoryEntryLookupError(path, "empty path")

        try:
            item = tree.join(path)
        except KeyError as e:
            raise DirectoryEntryLookupError(path) from e

        return TreeEntry.from_path(
            path,
            _ENTRY_TYPES.get(item.type, TreeEntryType.BLOB),
            item.hexsha
        )

    def read_blob(self, oid: str) -> bytes:
        try:
            stream = self.repo.odb.stream(bytes.fromhex(oid))
            # Drain the stream before anything else talks to cat-file
            data = stream.read()
        except _OBJECT_ERRORS as e:
            raise BlobRetrievalError(oid, str(e)) from e

        object_type = stream.type
        if isinstance(object_type, bytes):
            object_type = object_type.decode()
        if object_type != "blob":
            raise BlobRetrievalError(oid, f"object is a {object_type}")

        return data

    def diff_tree_to_tree(self, old_tree: Tree, new_tree: Tree) -> List[DiffDelta]:
        try:
            # git diff-tree -r -M <old> <new>: a side is old, b side is new.
            # Renamed files keep both paths in the delta.
            diff_index = old_tree.diff(new_tree)
        except _OBJECT_ERRORS as e:
            raise DiffComputationError(
                f"Cannot diff tree {old_tree.hexsha} against {new_tree.hexsha}: {e}"
            ) from e

        deltas = [
            DiffDelta(
                old_path=diff.a_path,
                new_path=diff.b_path,
                status=diff.change_type or "M"
            )
            for diff in diff_index
        ]
        logger.debug(
            f"Diff {old_tree.hexsha[:7]}..{new_tree.hexsha[:7]}: {len(deltas)} changed file(s)"
        )
        return deltas
