"""Narrow manifests to the applications touched by a diff"""

import logging
from typing import Dict, Iterable, List, Union

from ..backend.base import DiffDelta
from ..constants import PATH_SEPARATOR
from ..models.application import VersionedApplication
from ..models.manifest import Manifest

logger = logging.getLogger(__name__)


def path_has_prefix(path: str, prefix: str) -> bool:
    """Check if a file path lies under a directory prefix

    Matching respects path segments: ``app1`` contains ``app1/x`` but not
    ``app10/x``. A prefix with a trailing separator is accepted as well.
    """
    prefix = prefix.rstrip(PATH_SEPARATOR)
    if not prefix:
        return True
    return path == prefix or path.startswith(prefix + PATH_SEPARATOR)


def changed_paths(deltas: Iterable[Union[DiffDelta, str]]) -> List[str]:
    """Get the file paths touched by diff deltas

    Both sides of a delta count, so a file moved between directories
    touches the directory it left as well as the one it entered.
    """
    paths = []
    for delta in deltas:
        if isinstance(delta, str):
            if delta:
                paths.append(delta)
        else:
            paths.extend(delta.paths)
    return paths


def reduce_to_diff(manifest: Manifest, deltas: Iterable[Union[DiffDelta, str]]) -> Manifest:
    """
    Keep only the applications whose directory contains a changed file

    Args:
        manifest: Full manifest
        deltas: Diff deltas or plain changed file paths

    Returns:
        Manifest with the same dir and sha, holding the matched applications
        in their original order
    """
    index = manifest.index_by_path()
    matched: Dict[str, VersionedApplication] = {}

    for path in changed_paths(deltas):
        for prefix, app in index.items():
            if prefix in matched:
                continue
            if path_has_prefix(path, prefix):
                matched[prefix] = app

    applications = tuple(
        app for prefix, app in index.items() if prefix in matched
    )

    logger.info(
        f"{len(applications)} of {len(index)} application(s) changed at {manifest.sha[:7]}"
    )
    return Manifest(dir=manifest.dir, sha=manifest.sha, applications=applications)
