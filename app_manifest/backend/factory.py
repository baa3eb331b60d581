"""Repository backend factory"""

from typing import Any, Dict, List, Type

from .base import RepositoryBackend
from .git import GitRepositoryBackend
from ..api.exceptions import ConfigError
from ..constants import BackendType


class BackendFactory:
    """Factory for creating repository backend instances"""

    # Registry of repository backends
    _backends: Dict[str, Type[RepositoryBackend]] = {
        BackendType.GIT.value: GitRepositoryBackend,
    }

    @classmethod
    def create(cls,
               backend_type: str,
               location: str,
               config: Dict[str, Any] = None) -> RepositoryBackend:
        """Create an unopened backend for a repository location

        Args:
            backend_type: Backend name
            location: Repository location
            config: Backend-specific configuration

        Returns:
            Repository backend instance

        Raises:
            ConfigError: If backend type is not supported
        """
        if backend_type not in cls._backends:
            raise ConfigError(
                f"Unsupported backend: {backend_type}. "
                f"Supported: {', '.join(cls.get_supported_types())}"
            )

        backend_class = cls._backends[backend_type]
        return backend_class(location, config)

    @classmethod
    def register_backend(cls, backend_type: str, backend_class: Type[RepositoryBackend]):
        """Register a new repository backend type

        Args:
            backend_type: Backend name
            backend_class: Backend class
        """
        cls._backends[backend_type] = backend_class

    @classmethod
    def unregister_backend(cls, backend_type: str) -> None:
        """Remove a registered backend type"""
        cls._backends.pop(backend_type, None)

    @classmethod
    def get_supported_types(cls) -> List[str]:
        """Get list of supported backend names"""
        return sorted(cls._backends.keys())

    @classmethod
    def is_supported(cls, backend_type: str) -> bool:
        """Check if a backend type is supported"""
        return backend_type in cls._backends
