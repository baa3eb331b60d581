"""Shared fixtures: an in-memory repository backend and real git repositories."""

import hashlib
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from git import Repo

from app_manifest.api.exceptions import (
    BlobRetrievalError,
    CommitLookupError,
    DiffComputationError,
    DirectoryEntryLookupError,
    ReferenceResolutionError,
    RepositoryOpenError,
)
from app_manifest.backend import BackendFactory, DiffDelta, RepositoryBackend, TreeEntry
from app_manifest.constants import TreeEntryType

MEMORY_BACKEND = "memory"


def _sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


class MemoryTree:
    """Immutable nested tree built from a {path: content} mapping"""

    def __init__(self, children: Dict[str, object]):
        self.children = children
        parts = []
        for name in sorted(children):
            child = children[name]
            child_id = child.oid if isinstance(child, MemoryTree) else _sha1(child)
            parts.append(f"{name}:{child_id}")
        self.oid = _sha1("\n".join(parts).encode())

    @classmethod
    def from_files(cls, files: Dict[str, bytes]) -> 'MemoryTree':
        nested: Dict[str, object] = {}
        for path, content in files.items():
            node = nested
            *dirs, name = path.split("/")
            for d in dirs:
                node = node.setdefault(d, {})
            node[name] = content if isinstance(content, bytes) else content.encode()
        return cls._build(nested)

    @classmethod
    def _build(cls, nested: Dict[str, object]) -> 'MemoryTree':
        return cls({
            name: cls._build(child) if isinstance(child, dict) else child
            for name, child in nested.items()
        })


class MemoryCommit:
    def __init__(self, tree: MemoryTree, parents: List['MemoryCommit'], message: str):
        self.tree = tree
        self.parents = parents
        parent_ids = ",".join(p.sha for p in parents)
        self.sha = _sha1(f"{tree.oid}|{parent_ids}|{message}".encode())


class MemoryRepository:
    """Branches and commits held in memory"""

    def __init__(self):
        self.branches: Dict[str, MemoryCommit] = {}
        self.commits: Dict[str, MemoryCommit] = {}
        self.blobs: Dict[str, bytes] = {}
        self.broken_blobs = set()
        self.fail_diff = False
        self.open_count = 0
        self.close_count = 0

    def commit(self, branch: str, files: Dict[str, bytes], message: str = "commit",
               parent: Optional[str] = None) -> str:
        tree = MemoryTree.from_files(files)
        self._register_blobs(tree)
        base = self.branches.get(parent or branch)
        commit = MemoryCommit(tree, [base] if base else [], message)
        self.commits[commit.sha] = commit
        self.branches[branch] = commit
        return commit.sha

    def _register_blobs(self, tree: MemoryTree) -> None:
        for child in tree.children.values():
            if isinstance(child, MemoryTree):
                self._register_blobs(child)
            else:
                self.blobs[_sha1(child)] = child


# Location -> repository, looked up by MemoryRepositoryBackend
MEMORY_REPOSITORIES: Dict[str, MemoryRepository] = {}


class MemoryRepositoryBackend(RepositoryBackend):
    """Repository backend over MEMORY_REPOSITORIES"""

    def _do_open(self) -> None:
        if self.location not in MEMORY_REPOSITORIES:
            raise RepositoryOpenError(self.location, "unknown location")
        self.store = MEMORY_REPOSITORIES[self.location]
        self.store.open_count += 1

    def _do_close(self) -> None:
        self.store.close_count += 1

    def resolve_reference(self, name):
        if name in self.store.branches:
            return self.store.branches[name]
        if name in self.store.commits:
            return self.store.commits[name]
        raise ReferenceResolutionError(name, "no such ref")

    def lookup_commit(self, oid):
        sha = self.encode_identifier(oid)
        if sha not in self.store.commits:
            raise CommitLookupError(sha)
        return self.store.commits[sha]

    def commit_id(self, commit):
        return commit.sha

    def commit_parents(self, commit):
        return list(commit.parents)

    def commit_tree(self, commit):
        return commit.tree

    def walk(self, tree, root=""):
        # Pre-order, depth-first
        for name in sorted(tree.children):
            child = tree.children[name]
            if isinstance(child, MemoryTree):
                yield TreeEntry(root, name, TreeEntryType.TREE, child.oid)
                yield from self.walk(child, f"{root}{name}/")
            else:
                yield TreeEntry(root, name, TreeEntryType.BLOB, _sha1(child))

    def entry_by_path(self, tree, path):
        node = tree
        for part in path.split("/"):
            if not isinstance(node, MemoryTree) or part not in node.children:
                raise DirectoryEntryLookupError(path)
            node = node.children[part]
        if isinstance(node, MemoryTree):
            return TreeEntry.from_path(path, TreeEntryType.TREE, node.oid)
        return TreeEntry.from_path(path, TreeEntryType.BLOB, _sha1(node))

    def read_blob(self, oid):
        if oid in self.store.broken_blobs or oid not in self.store.blobs:
            raise BlobRetrievalError(oid, "unreadable")
        return self.store.blobs[oid]

    def diff_tree_to_tree(self, old_tree, new_tree):
        if self.store.fail_diff:
            raise DiffComputationError("diff failed")
        old = self._flatten(old_tree)
        new = self._flatten(new_tree)
        deltas = []
        for path in sorted(set(old) | set(new)):
            if path not in old:
                deltas.append(DiffDelta(None, path, "A"))
            elif path not in new:
                deltas.append(DiffDelta(path, path, "D"))
            elif old[path] != new[path]:
                deltas.append(DiffDelta(path, path, "M"))
        return deltas

    def _flatten(self, tree):
        return {e.path: e.oid for e in self.walk(tree) if e.is_blob}


@pytest.fixture
def memory_repo():
    """Register an empty in-memory repository at location 'mem://repo'"""
    BackendFactory.register_backend(MEMORY_BACKEND, MemoryRepositoryBackend)
    repository = MemoryRepository()
    MEMORY_REPOSITORIES["mem://repo"] = repository
    yield repository
    MEMORY_REPOSITORIES.clear()
    BackendFactory.unregister_backend(MEMORY_BACKEND)


@pytest.fixture
def memory_backend(memory_repo):
    """Open backend over the in-memory repository"""
    backend = MemoryRepositoryBackend("mem://repo").open()
    yield backend
    backend.close()


def descriptor(name: str, **fields) -> bytes:
    lines = [f"name: {name}"] + [f"{k}: {v}" for k, v in fields.items()]
    return ("\n".join(lines) + "\n").encode()


@pytest.fixture
def make_descriptor():
    """Build descriptor file content"""
    return descriptor


class GitRepoBuilder:
    """Build commits in a real git repository through GitPython"""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)
        with self.repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

    def write(self, rel_path: str, content) -> None:
        target = self.path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content)
        self.repo.index.add([rel_path])

    def remove(self, rel_path: str) -> None:
        self.repo.index.remove([rel_path], working_tree=True)

    def move(self, source: str, destination: str) -> None:
        self.repo.git.mv(source, destination)

    def commit(self, message: str = "commit") -> str:
        return self.repo.index.commit(message).hexsha

    def checkout(self, branch: str, create: bool = False) -> None:
        if create:
            self.repo.git.checkout("-B", branch)
        else:
            self.repo.git.checkout(branch)

    def tree_id(self, revision: str, path: str) -> str:
        return (self.repo.commit(revision).tree / path).hexsha


@pytest.fixture
def git_repo_builder(tmp_path):
    """Factory for empty real git repositories"""
    builders = []

    def make(name: str = "repo") -> GitRepoBuilder:
        builder = GitRepoBuilder(tmp_path / name)
        builders.append(builder)
        return builder

    yield make
    for builder in builders:
        builder.repo.close()


@pytest.fixture
def git_repo(tmp_path):
    """Real git repository with two applications committed on 'main'"""
    builder = GitRepoBuilder(tmp_path / "repo")
    builder.write("services/a/appspec.yaml", descriptor("a"))
    builder.write("services/a/main.go", "package main\n")
    builder.write("services/b/appspec.yaml", descriptor("b", description="Service B"))
    builder.write("README.md", "# services\n")
    builder.commit("Add services")
    builder.checkout("main", create=True)
    yield builder
    builder.repo.close()
