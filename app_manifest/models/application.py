"""Application data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Application:
    """A deployable application described by a descriptor file"""

    name: str
    path: str  # Directory path in the repository tree, no trailing separator
    description: Optional[str] = None
    spec: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "name": self.name,
            "path": self.path,
        }
        if self.description:
            data["description"] = self.description
        if self.spec:
            data["spec"] = self.spec
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Application':
        """Create from dictionary"""
        return cls(
            name=data["name"],
            path=data["path"],
            description=data.get("description"),
            spec=data.get("spec", {})
        )


@dataclass(frozen=True)
class VersionedApplication:
    """Application pinned to the tree id of its directory at one revision"""

    application: Application
    version: str  # Hex object id of the application directory tree

    @property
    def name(self) -> str:
        return self.application.name

    @property
    def path(self) -> str:
        return self.application.path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = self.application.to_dict()
        data["version"] = self.version
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VersionedApplication':
        """Create from dictionary"""
        return cls(
            application=Application.from_dict(data),
            version=data["version"]
        )
