"""Configuration data models"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from ..constants import (
    DEFAULT_BACKEND,
    DEFAULT_DESCRIPTOR_NAME,
    DEFAULT_LOG_LEVEL,
    PATH_SEPARATOR,
)


@dataclass
class ResolverConfig:
    """Settings for manifest resolution"""

    descriptor_name: str = DEFAULT_DESCRIPTOR_NAME
    backend: str = DEFAULT_BACKEND
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate configuration"""
        if not self.backend:
            raise ValueError("Backend name is required")

        if not self.descriptor_name or PATH_SEPARATOR in self.descriptor_name:
            raise ValueError(f"Descriptor name must be a plain file name: {self.descriptor_name!r}")

        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "descriptor_name": self.descriptor_name,
            "backend": self.backend,
            "log_level": self.log_level
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResolverConfig':
        """Create from dictionary"""
        return cls(
            descriptor_name=data.get("descriptor_name", DEFAULT_DESCRIPTOR_NAME),
            backend=data.get("backend", DEFAULT_BACKEND),
            log_level=data.get("log_level", DEFAULT_LOG_LEVEL)
        )
