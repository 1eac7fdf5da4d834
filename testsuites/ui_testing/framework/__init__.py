"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation scaffolding.

Components:
    - settings / config_loader: run settings from env, .env and config.json
    - logger: loguru console + per-run file logging
    - browser_manager: keyed browser/context cache and teardown
    - session: per-test setup and teardown
    - driver_context: navigation and element interaction capability
    - page_base / base_step: page object and BDD step helpers

Author: Automation Team
License: MIT
================================================================================
"""

from .types import (
    BrowserType,
    ExecutionType,
    StepResult,
    StepType,
    TestSession,
    TestStatus,
    TestType,
)
from .settings import ConfigurationError, Settings
from .config_loader import ConfigLoader, load_settings
from .logger import get_log_file_path, init_logger
from .browser_manager import BrowserManager, UnsupportedBrowserError
from .driver_context import (
    ContextNotInitializedError,
    DriverContext,
    PageNotInitializedError,
)
from .session import close_session, driver_session, open_session
from .page_base import BasePage
from .base_step import BaseStep, StepAssertionError

__all__ = [
    "BrowserType",
    "ExecutionType",
    "StepResult",
    "StepType",
    "TestSession",
    "TestStatus",
    "TestType",
    "ConfigurationError",
    "Settings",
    "ConfigLoader",
    "load_settings",
    "get_log_file_path",
    "init_logger",
    "BrowserManager",
    "UnsupportedBrowserError",
    "ContextNotInitializedError",
    "DriverContext",
    "PageNotInitializedError",
    "close_session",
    "driver_session",
    "open_session",
    "BasePage",
    "BaseStep",
    "StepAssertionError",
]
