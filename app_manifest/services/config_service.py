"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from ..api.exceptions import ConfigError
from ..models.config import ResolverConfig
from ..constants import (
    ENV_BACKEND,
    ENV_CONFIG_PATH,
    ENV_DESCRIPTOR_NAME,
    ENV_LOG_LEVEL,
    PROJECT_CONFIG_FILE,
)

logger = logging.getLogger(__name__)

# Environment variable -> config key
_ENV_OVERRIDES = {
    ENV_DESCRIPTOR_NAME: "descriptor_name",
    ENV_BACKEND: "backend",
    ENV_LOG_LEVEL: "log_level",
}


class ConfigService:
    """Service for loading resolver configuration

    Sources are applied in order, later ones winning: built-in defaults,
    the YAML config file, environment variables, explicit overrides.
    """

    def __init__(self,
                 config_path: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """Initialize config service

        Args:
            config_path: Config file path (defaults to $APP_MANIFEST_CONFIG
                or .app-manifest.yaml in the working directory)
            environ: Environment mapping (defaults to os.environ)
        """
        self.environ = os.environ if environ is None else environ

        if config_path is None:
            config_path = self.environ.get(ENV_CONFIG_PATH) or None

        # A named file must exist; the working directory default is optional
        self.required = config_path is not None
        if config_path is None:
            config_path = Path.cwd() / PROJECT_CONFIG_FILE
        self.config_path = Path(config_path)
        self._config: Optional[ResolverConfig] = None

    @property
    def config(self) -> ResolverConfig:
        """Get current configuration (lazy load)"""
        if self._config is None:
            self.load_config()
        return self._config

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> ResolverConfig:
        """Load configuration from all sources

        Args:
            overrides: Explicit values, e.g. from CLI options; empty values are ignored

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is malformed or a value is invalid
        """
        data = self._read_file()

        for env_name, key in _ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                data[key] = value

        if overrides:
            data.update({k: v for k, v in overrides.items() if v})

        try:
            self._config = ResolverConfig.from_dict(data)
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return self._config

    def _read_file(self) -> Dict[str, Any]:
        """Read the YAML config file, if present"""
        if not self.config_path.exists():
            if self.required:
                raise ConfigError(f"Configuration file not found: {self.config_path}")
            return {}

        with open(self.config_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {self.config_path} must contain a mapping")

        logger.debug(f"Loaded configuration from {self.config_path}")
        return data
