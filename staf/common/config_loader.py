"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment profiles and
environment variable override support.

Features:
    - Base YAML configuration (config/config.yaml)
    - Environment profile overlay (config/<env>.yaml, env defaults to "dev")
    - Environment variable override (API_BASE_URL overrides api.base_url)
    - Dot notation path access
    - Default value support with type conversion

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from ..errors import ConfigurationError


# Default configuration directory (repository root / config)
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"
DEFAULT_CONFIG_FILE = "config.yaml"

# Environment selection
ENV_VARIABLE = "STAF_ENV"
DEFAULT_ENV = "dev"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class ConfigLoader:
    """
    Configuration loader with YAML, environment profile and env var support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (API_BASE_URL)
        2. Environment profile YAML (config/dev.yaml)
        3. Base YAML configuration (config/config.yaml)
        4. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base_url", "http://localhost:8000")
        'https://api.example.com'  # From YAML or env var

        >>> config.environment
        'dev'

    Environment Variable Mapping:
        - api.base_url -> API_BASE_URL
        - tictactoe.bearer_token -> TICTACTOE_BEARER_TOKEN
        - logging.level -> LOGGING_LEVEL
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(
        cls,
        config_dir: Optional[Path] = None,
        env: Optional[str] = None,
    ) -> "ConfigLoader":
        """
        Singleton pattern - return existing instance if available.

        Configuration is loaded only once per process so every client and
        fixture sees the same values.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        env: Optional[str] = None,
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory holding config.yaml and <env>.yaml files.
                        Uses DEFAULT_CONFIG_DIR if not specified.
            env: Environment profile name. Falls back to STAF_ENV, then "dev".
        """
        if getattr(self, "_initialized", False):
            return

        self._config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._env = env or os.environ.get(ENV_VARIABLE) or DEFAULT_ENV
        self._load_config()
        self._initialized = True

    @property
    def environment(self) -> str:
        """Active environment profile name."""
        return self._env

    @property
    def config_dir(self) -> Path:
        """Directory the configuration was loaded from."""
        return self._config_dir

    def _load_config(self) -> None:
        """Load base configuration and merge the environment profile."""
        config = self._read_yaml(self._config_dir / DEFAULT_CONFIG_FILE)

        env_path = self._config_dir / f"{self._env}.yaml"
        if env_path.exists():
            config = deep_merge(config, self._read_yaml(env_path))
            logger.debug(f"Merged environment profile: {env_path}")
        else:
            logger.debug(f"No profile for environment '{self._env}' at {env_path}")

        self._config = config

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.warning(
                f"Configuration file not found: {path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file {path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping, "
                f"got {type(data).__name__}"
            )
        logger.debug(f"Loaded configuration from: {path}")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "api.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default

        Examples:
            >>> config.get("api.base_url")
            'https://api.example.com'

            >>> config.get("api.retry_count", 3)
            3
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "api", "tictactoe")

        Returns:
            Section dictionary or empty dict if not found
        """
        value = self._config.get(section, {})
        return dict(value) if isinstance(value, dict) else {}

    def reload(self) -> None:
        """
        Reload configuration from files.

        Useful when configuration files have been updated during runtime.
        """
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_dir} (env={self._env})")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "deep_merge",
    "DEFAULT_ENV",
    "ENV_VARIABLE",
]
