"""
================================================================================
Run Settings
================================================================================

Immutable run configuration for the UI framework.

Settings are resolved once at startup (see ``config_loader``) and passed to
every consumer explicitly. Use ``dataclasses.replace`` to derive a variant.

Environment Variable Mapping:
    - TIMEOUT        -> timeout (ms, default 30000)
    - BASE_URL       -> base_url
    - HEADLESS       -> headless (only "false" disables it)
    - INCOGNITO      -> incognito (only "true" enables it)
    - ENABLE_LOGGING -> enable_logging (only "false" disables it)
    - ENVIRONMENT    -> environment
    - BROWSER_TYPE   -> browser_type
    - LOG_PATH       -> log_path

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from .types import BrowserType, ExecutionType, TestType


DEFAULT_TIMEOUT_MS = 30000

E = TypeVar("E", bound=Enum)


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


@dataclass(frozen=True)
class Settings:
    """
    Run settings for UI test execution.

    Attributes:
        timeout: Default timeout for page actions and navigation (ms)
        base_url: Base URL of the application under test
        test_type: UI, API or hybrid
        execution_type: Local, remote or cloud execution
        browser_type: Browser used for the run
        headless: Run browser without a visible window
        incognito: Launch browser in private mode
        log_path: Directory for per-run log files
        enable_logging: Master switch for console and file logging
        environment: Target environment name (dev, staging, prod)
        remote_url: Remote grid URL for cloud execution
        build_name: Build name for reporting
        application_name: Application under test
        custom_capabilities: Custom capabilities flag
    """

    timeout: int = DEFAULT_TIMEOUT_MS
    base_url: str = "http://localhost:3000"
    test_type: TestType = TestType.UI
    execution_type: ExecutionType = ExecutionType.LOCAL
    browser_type: BrowserType = BrowserType.CHROMIUM
    headless: bool = True
    incognito: bool = False
    log_path: str = "./logs"
    enable_logging: bool = True
    environment: str = "dev"
    remote_url: str = ""
    build_name: str = "Local Build"
    application_name: str = "AUT"
    custom_capabilities: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Settings":
        """
        Build settings from an environment-style mapping.

        Keys are variable names (``TIMEOUT``, ``HEADLESS`` ...). Missing keys
        fall back to the field defaults.

        Raises:
            ConfigurationError: If a value cannot be converted
        """
        defaults = cls()
        return cls(
            timeout=_as_int(values.get("TIMEOUT"), defaults.timeout, "TIMEOUT"),
            base_url=_as_str(values.get("BASE_URL"), defaults.base_url),
            test_type=_as_enum(TestType, values.get("TEST_TYPE"), defaults.test_type, "TEST_TYPE"),
            execution_type=_as_enum(
                ExecutionType,
                values.get("EXECUTION_TYPE"),
                defaults.execution_type,
                "EXECUTION_TYPE",
            ),
            browser_type=_as_enum(
                BrowserType,
                values.get("BROWSER_TYPE"),
                defaults.browser_type,
                "BROWSER_TYPE",
            ),
            headless=_flag_unless_false(values.get("HEADLESS")),
            incognito=_flag_if_true(values.get("INCOGNITO")),
            log_path=_as_str(values.get("LOG_PATH"), defaults.log_path),
            enable_logging=_flag_unless_false(values.get("ENABLE_LOGGING")),
            environment=_as_str(values.get("ENVIRONMENT"), defaults.environment),
            remote_url=_as_str(values.get("REMOTE_URL"), defaults.remote_url),
            build_name=_as_str(values.get("BUILD_NAME"), defaults.build_name),
            application_name=_as_str(values.get("APP_NAME"), defaults.application_name),
            custom_capabilities=_flag_if_true(values.get("CUSTOM_CAPABILITIES")),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from process environment variables only."""
        return cls.from_mapping(os.environ if environ is None else environ)

    def as_dict(self) -> Dict[str, Any]:
        """Return all settings as a plain dictionary (enum values unwrapped)."""
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(self).items()
        }


def _as_str(value: Any, default: str) -> str:
    # Empty strings count as unset
    if value is None or value == "":
        return default
    return str(value)


def _as_int(value: Any, default: int, name: str) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}")
    # JSON numbers arrive as floats; only whole values are accepted, as for strings
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigurationError(f"{name} must be an integer, got: {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}") from e


def _as_enum(enum_cls: Type[E], value: Any, default: E, name: str) -> E:
    if value is None or value == "":
        return default
    try:
        return enum_cls(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(
            f"Invalid {name}: {value!r}. Expected one of: {allowed}"
        ) from e


def _flag_unless_false(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value != "false"


def _flag_if_true(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value == "true"


__all__ = [
    "ConfigurationError",
    "DEFAULT_TIMEOUT_MS",
    "Settings",
]
