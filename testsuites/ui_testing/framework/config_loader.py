"""
================================================================================
Configuration Loader
================================================================================

Settings resolution from environment variables, a ``.env`` file and a JSON
configuration file.

Features:
    - Optional ``.env`` file (parsed without touching ``os.environ``)
    - Optional ``config.json`` with nested keys flattened to variable names
    - Environment variables always win over file-based values
    - Typed accessors (string, number, boolean)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import dotenv_values
from loguru import logger

from .settings import ConfigurationError, Settings


class ConfigLoader:
    """
    Configuration loader with ``.env``, JSON and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (TIMEOUT)
        2. ``.env`` file in the base directory
        3. ``config.json`` in the base directory
        4. Default values

    Usage:
        >>> loader = ConfigLoader()
        >>> settings = loader.load()
        >>> settings.timeout
        30000

        >>> loader.get_number("TIMEOUT", 10000)
        30000

    JSON Key Mapping:
        - {"timeout": 5000}             -> TIMEOUT
        - {"browser": {"type": "webkit"}} -> BROWSER_TYPE
        - {"base_url": "..."}           -> BASE_URL
    """

    ENV_FILE = ".env"
    CONFIG_FILE = "config.json"

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            base_dir: Directory holding ``.env`` and ``config.json``.
                      Defaults to the current working directory.
            environ: Environment mapping. Defaults to ``os.environ``.
        """
        self._base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self._environ = environ
        self._values: Dict[str, Any] = {}
        self._loaded = False

    @property
    def env_file(self) -> Path:
        return self._base_dir / self.ENV_FILE

    @property
    def config_file(self) -> Path:
        return self._base_dir / self.CONFIG_FILE

    def load(self) -> Settings:
        """
        Resolve all sources and build run settings.

        Returns:
            Immutable Settings instance

        Raises:
            ConfigurationError: If the JSON config is invalid or a value
                cannot be converted
        """
        self._values = self._collect()
        self._loaded = True
        return Settings.from_mapping(self._values)

    def reload(self) -> Settings:
        """Re-read all sources, e.g. after the files changed."""
        settings = self.load()
        logger.info(f"Configuration reloaded from: {self._base_dir}")
        return settings

    def _collect(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}

        if self.config_file.exists():
            values.update(_flatten(self.load_from_file(self.config_file)))
            logger.debug(f"Loaded configuration from: {self.config_file}")
        else:
            logger.debug(f"No config file at {self.config_file}, skipping")

        if self.env_file.exists():
            values.update(
                {k: v for k, v in dotenv_values(self.env_file).items() if v is not None}
            )
            logger.debug(f"Loaded environment file: {self.env_file}")

        environ = os.environ if self._environ is None else self._environ
        values.update(environ)
        return values

    # =========================================================================
    # Value Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a raw configuration value.

        Args:
            key: Variable name (``BASE_URL``) or dot path (``base.url``)
            default: Default value if key not found
        """
        if not self._loaded:
            self._values = self._collect()
            self._loaded = True

        value = self._values.get(key.upper().replace(".", "_"))
        # Empty strings count as unset
        if value is None or value == "":
            return default
        return value

    def get_string(self, key: str, default: str = "") -> str:
        return str(self.get(key, default))

    def get_number(self, key: str, default: int = 0) -> int:
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{key} must be an integer, got: {value!r}") from e

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).lower() == "true"

    @staticmethod
    def load_from_file(config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a JSON configuration file.

        Args:
            config_path: Path to the JSON file

        Returns:
            Parsed configuration object

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a
                JSON object
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to parse configuration file {path}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a JSON object, "
                f"got {type(data).__name__}"
            )
        return data


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested JSON keys into upper-case variable names."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name.upper()] = value
    return flat


def load_settings(base_dir: Optional[Union[str, Path]] = None) -> Settings:
    """Load run settings from the given directory and the process environment."""
    return ConfigLoader(base_dir=base_dir).load()


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "load_settings",
]
