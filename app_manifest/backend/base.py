# app_manifest/backend/base.py
"""Repository backend abstract base class"""

import posixpath
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..api.exceptions import IdentifierDecodeError
from ..constants import GIT_OID_HEX_LENGTH, PATH_SEPARATOR, TreeEntryType


@dataclass(frozen=True)
class TreeEntry:
    """Entry visited while walking a tree"""
    root: str  # Containing directory with trailing separator, "" at the top level
    name: str
    type: TreeEntryType
    oid: str  # Hex object id

    @property
    def path(self) -> str:
        """Full path of the entry"""
        return f"{self.root}{self.name}"

    @property
    def is_blob(self) -> bool:
        return self.type == TreeEntryType.BLOB

    @property
    def is_tree(self) -> bool:
        return self.type == TreeEntryType.TREE

    @classmethod
    def from_path(cls, path: str, type: TreeEntryType, oid: str) -> 'TreeEntry':
        """Create from a full entry path"""
        parent, name = posixpath.split(path)
        root = f"{parent}{PATH_SEPARATOR}" if parent else ""
        return cls(root=root, name=name, type=type, oid=oid)


@dataclass(frozen=True)
class DiffDelta:
    """One changed file between two trees"""
    old_path: Optional[str]
    new_path: Optional[str]
    status: str = "M"

    @property
    def path(self) -> str:
        """Path on the new side, falling back to the old side for deletions"""
        return self.new_path or self.old_path

    @property
    def paths(self) -> Tuple[str, ...]:
        """Distinct paths on both sides; a move touches its source and destination"""
        return tuple(dict.fromkeys(p for p in (self.old_path, self.new_path) if p))


class RepositoryBackend(ABC):
    """Abstract base class for repository access backends

    Commit and tree handles returned by a backend are opaque to callers and
    only ever passed back into the same backend instance.
    """

    # Width of an object id in hex digits
    oid_hex_length: int = GIT_OID_HEX_LENGTH

    def __init__(self, location: str, config: Dict[str, Any] = None):
        """
        Initialize repository backend

        Args:
            location: Repository location
            config: Backend-specific configuration
        """
        self.location = location
        self.config = config or {}
        self._opened = False

    def open(self) -> 'RepositoryBackend':
        """Open the repository"""
        if not self._opened:
            self._do_open()
            self._opened = True
        return self

    @abstractmethod
    def _do_open(self) -> None:
        """Actual open logic to be implemented by subclasses

        Raises:
            RepositoryOpenError: If the repository cannot be opened
        """
        pass

    @abstractmethod
    def resolve_reference(self, name: str) -> Any:
        """
        Resolve a branch, tag or revision name to a commit

        Args:
            name: Short name, fully qualified ref or object id

        Returns:
            Commit handle

        Raises:
            ReferenceResolutionError: If the name does not resolve to a commit
        """
        pass

    @abstractmethod
    def lookup_commit(self, oid: bytes) -> Any:
        """
        Look up a commit by its raw object id

        Args:
            oid: Raw object id

        Returns:
            Commit handle

        Raises:
            CommitLookupError: If no commit exists with this id
        """
        pass

    @abstractmethod
    def commit_id(self, commit: Any) -> str:
        """Get the full hex id of a commit"""
        pass

    @abstractmethod
    def commit_parents(self, commit: Any) -> List[Any]:
        """Get the parent commits of a commit"""
        pass

    @abstractmethod
    def commit_tree(self, commit: Any) -> Any:
        """
        Get the root tree of a commit

        Raises:
            TreeRetrievalError: If the tree cannot be read
        """
        pass

    @abstractmethod
    def walk(self, tree: Any) -> Iterator[TreeEntry]:
        """
        Walk every entry of a tree, at any depth

        Args:
            tree: Tree handle

        Returns:
            Lazy iterator of tree entries
        """
        pass

    @abstractmethod
    def entry_by_path(self, tree: Any, path: str) -> TreeEntry:
        """
        Get the entry at a path inside a tree

        Raises:
            DirectoryEntryLookupError: If no entry exists at the path
        """
        pass

    @abstractmethod
    def read_blob(self, oid: str) -> bytes:
        """
        Read blob contents

        Args:
            oid: Hex object id of the blob

        Raises:
            BlobRetrievalError: If the blob cannot be read
        """
        pass

    @abstractmethod
    def diff_tree_to_tree(self, old_tree: Any, new_tree: Any) -> List[DiffDelta]:
        """
        Compute the changed files between two trees

        Args:
            old_tree: Tree on the old side
            new_tree: Tree on the new side

        Returns:
            List of changed file deltas

        Raises:
            DiffComputationError: If the diff cannot be computed
        """
        pass

    def decode_identifier(self, identifier: str) -> bytes:
        """
        Decode a hex object id into its raw form

        Args:
            identifier: Hex object id

        Returns:
            Raw object id

        Raises:
            IdentifierDecodeError: If the id is not hex or has the wrong width
        """
        return decode_identifier(identifier, self.oid_hex_length)

    def encode_identifier(self, oid: bytes) -> str:
        """Encode a raw object id as hex"""
        return oid.hex()

    def close(self) -> None:
        """Release repository resources"""
        if self._opened:
            self._do_close()
            self._opened = False

    def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    def __enter__(self):
        """Context manager entry"""
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()


def decode_identifier(identifier: str, hex_length: int = GIT_OID_HEX_LENGTH) -> bytes:
    """Decode a fixed-width hex object id

    Raises:
        IdentifierDecodeError: If the id is not hex or has the wrong width
    """
    if not isinstance(identifier, str):
        raise IdentifierDecodeError(repr(identifier), "expected a string")

    if len(identifier) != hex_length:
        raise IdentifierDecodeError(
            identifier,
            f"expected {hex_length} hex digits, got {len(identifier)}"
        )

    # bytes.fromhex() tolerates whitespace, so check the digits first
    if any(c not in string.hexdigits for c in identifier):
        raise IdentifierDecodeError(identifier, "not a hexadecimal string")

    return bytes.fromhex(identifier)
