# app_manifest/models/manifest.py
"""Manifest models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .application import VersionedApplication
from ..constants import PATH_SEPARATOR


@dataclass(frozen=True)
class Manifest:
    """Applications resolved at one revision of a repository"""

    dir: str  # Repository location
    sha: str  # Full hex id of the resolved commit
    applications: Tuple[VersionedApplication, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.applications, tuple):
            object.__setattr__(self, "applications", tuple(self.applications))

    def __len__(self) -> int:
        return len(self.applications)

    def index_by_name(self) -> Dict[str, VersionedApplication]:
        """Map application name to application, later entries win"""
        index = {}
        for app in self.applications:
            index[app.application.name] = app
        return index

    def index_by_path(self) -> Dict[str, VersionedApplication]:
        """Map ``path + "/"`` to application, for prefix matching of file paths"""
        index = {}
        for app in self.applications:
            index[f"{app.application.path}{PATH_SEPARATOR}"] = app
        return index

    @property
    def paths(self) -> List[str]:
        """Get application paths in manifest order"""
        return [app.path for app in self.applications]

    def find_application(self, name: str) -> Optional[VersionedApplication]:
        """Find application by name"""
        return self.index_by_name().get(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "dir": self.dir,
            "sha": self.sha,
            "applications": [a.to_dict() for a in self.applications]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Manifest':
        """Create from dictionary"""
        return cls(
            dir=data["dir"],
            sha=data["sha"],
            applications=tuple(
                VersionedApplication.from_dict(a) for a in data.get("applications", [])
            )
        )
