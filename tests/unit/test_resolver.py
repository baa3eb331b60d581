"""Tests for the revision resolvers over the in-memory backend."""

import pytest

from app_manifest import ManifestResolver, ResolverConfig, manifest_by_branch, resolve_changes
from app_manifest.api.exceptions import (
    CommitLookupError,
    ConfigError,
    DescriptorParseError,
    DiffComputationError,
    IdentifierDecodeError,
    ReferenceResolutionError,
    RepositoryOpenError,
)

LOCATION = "mem://repo"


@pytest.fixture
def resolver(memory_repo):
    return ManifestResolver(ResolverConfig(backend="memory"))


@pytest.fixture
def main_files(make_descriptor):
    return {
        "services/a/appspec.yaml": make_descriptor("a"),
        "services/a/main.go": b"package main\n",
        "services/b/appspec.yaml": make_descriptor("b"),
        "README.md": b"# repo\n",
    }


class TestManifestByBranch:
    def test_resolves_all_applications(self, resolver, memory_repo, main_files):
        sha = memory_repo.commit("main", main_files)

        manifest = resolver.manifest_by_branch(LOCATION, "main")

        assert manifest.dir == LOCATION
        assert manifest.sha == sha
        assert sorted(manifest.paths) == ["services/a", "services/b"]
        assert manifest.index_by_name()["a"].path == "services/a"

    def test_is_deterministic(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)

        first = resolver.manifest_by_branch(LOCATION, "main")
        second = resolver.manifest_by_branch(LOCATION, "main")

        assert first.sha == second.sha
        assert {a.path: a.version for a in first.applications} == \
            {a.path: a.version for a in second.applications}

    def test_unknown_branch(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)

        with pytest.raises(ReferenceResolutionError):
            resolver.manifest_by_branch(LOCATION, "missing")

    def test_unknown_repository(self, resolver):
        with pytest.raises(RepositoryOpenError):
            resolver.manifest_by_branch("mem://other", "main")

    def test_repository_released_on_failure(self, resolver, memory_repo, make_descriptor):
        memory_repo.commit("main", {"a/appspec.yaml": b"[broken"})

        with pytest.raises(DescriptorParseError):
            resolver.manifest_by_branch(LOCATION, "main")

        assert memory_repo.open_count == memory_repo.close_count == 1

    def test_repository_released_on_success(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)

        resolver.manifest_by_branch(LOCATION, "main")

        assert memory_repo.open_count == memory_repo.close_count == 1


class TestManifestBySha:
    def test_resolves_commit(self, resolver, memory_repo, main_files, make_descriptor):
        first = memory_repo.commit("main", main_files)
        main_files["services/c/appspec.yaml"] = make_descriptor("c")
        memory_repo.commit("main", main_files)

        manifest = resolver.manifest_by_sha(LOCATION, first)

        assert manifest.sha == first
        assert sorted(manifest.paths) == ["services/a", "services/b"]

    def test_invalid_hex_fails_before_opening(self, resolver, memory_repo):
        with pytest.raises(IdentifierDecodeError):
            resolver.manifest_by_sha(LOCATION, "not-a-sha")

        assert memory_repo.open_count == 0

    def test_unknown_commit(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)

        with pytest.raises(CommitLookupError):
            resolver.manifest_by_sha(LOCATION, "0" * 40)


class TestManifestByPr:
    def test_only_changed_applications(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)
        feature_files = dict(main_files)
        feature_files["services/a/handler.go"] = b"package main\n"
        feature_sha = memory_repo.commit("feature", feature_files, parent="main")

        manifest = resolver.manifest_by_pr(LOCATION, "feature", "main")

        assert manifest.sha == feature_sha
        assert manifest.paths == ["services/a"]

    def test_application_added_on_branch(self, resolver, memory_repo, main_files, make_descriptor):
        memory_repo.commit("main", main_files)
        feature_files = dict(main_files)
        feature_files["services/c/appspec.yaml"] = make_descriptor("c")
        memory_repo.commit("feature", feature_files, parent="main")

        manifest = resolver.manifest_by_pr(LOCATION, "feature", "main")

        assert manifest.paths == ["services/c"]

    def test_no_changes(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)
        memory_repo.commit("feature", main_files, message="empty", parent="main")

        manifest = resolver.manifest_by_pr(LOCATION, "feature", "main")

        assert manifest.applications == ()

    def test_manifest_is_subset_of_from_branch(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)
        feature_files = dict(main_files)
        feature_files["services/b/appspec.yaml"] = b"name: b\nreplicas: 2\n"
        feature_files["README.md"] = b"changed"
        memory_repo.commit("feature", feature_files, parent="main")

        full = resolver.manifest_by_branch(LOCATION, "feature")
        reduced = resolver.manifest_by_pr(LOCATION, "feature", "main")

        assert set(reduced.applications) <= set(full.applications)
        assert (reduced.dir, reduced.sha) == (full.dir, full.sha)
        assert reduced.paths == ["services/b"]

    def test_diff_failure_propagates(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)
        memory_repo.commit("feature", main_files, parent="main")
        memory_repo.fail_diff = True

        with pytest.raises(DiffComputationError):
            resolver.manifest_by_pr(LOCATION, "feature", "main")

        assert memory_repo.open_count == memory_repo.close_count

    def test_unknown_target_branch(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)

        with pytest.raises(ReferenceResolutionError):
            resolver.manifest_by_pr(LOCATION, "main", "missing")


class TestResolveChanges:
    def test_changes_against_first_parent(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)
        files = dict(main_files)
        files["services/a/main.go"] = b"changed"
        del files["README.md"]
        memory_repo.commit("main", files)

        assert resolver.resolve_changes(LOCATION, "main") == ["README.md", "services/a/main.go"]

    def test_root_commit_lists_all_files(self, resolver, memory_repo, main_files):
        memory_repo.commit("main", main_files)

        assert resolver.resolve_changes(LOCATION, "main") == sorted(main_files)


def test_unsupported_backend():
    resolver = ManifestResolver(ResolverConfig(backend="svn"))

    with pytest.raises(ConfigError):
        resolver.manifest_by_branch("/tmp/repo", "main")


def test_custom_descriptor_name(memory_repo, make_descriptor):
    memory_repo.commit("main", {
        "a/appspec.yaml": make_descriptor("a"),
        "b/deploy.yaml": make_descriptor("b"),
    })
    resolver = ManifestResolver(ResolverConfig(backend="memory", descriptor_name="deploy.yaml"))

    assert resolver.manifest_by_branch(LOCATION, "main").paths == ["b"]


def test_convenience_function_uses_options(memory_repo, make_descriptor):
    memory_repo.commit("main", {"a/appspec.yaml": make_descriptor("a")})

    assert manifest_by_branch(LOCATION, "main", backend="memory").paths == ["a"]


@pytest.mark.parametrize("options", [
    {"descriptor_name": "nested/appspec.yaml"},
    {"log_level": "loud"},
    {"backend": ""},
    {"unknown_option": True},
])
def test_convenience_function_rejects_bad_options(options):
    with pytest.raises(ConfigError, match="Invalid configuration"):
        resolve_changes("/tmp/repo", **options)
