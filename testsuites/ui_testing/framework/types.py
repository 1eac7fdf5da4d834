"""
================================================================================
Framework Types
================================================================================

Enumerations and data holders shared across the UI framework.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playwright.async_api import BrowserContext, Page


class BrowserType(str, Enum):
    """Browser kinds known to the framework."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"
    MSEDGE = "msedge"


class ExecutionType(str, Enum):
    """Where the browser runs."""

    LOCAL = "local"
    REMOTE = "remote"
    CLOUD = "cloud"


class TestType(str, Enum):
    """Kind of test being executed."""

    __test__ = False

    UI = "ui"
    API = "api"
    HYBRID = "hybrid"


class StepType(str, Enum):
    """BDD step keywords."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"


class TestStatus(str, Enum):
    """Outcome of a step or test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class TestSession:
    """
    Per-test driver bundle.

    Holds the page and context created for one test together with the run
    settings the test was started with. Page and context stay ``None`` until
    the browser has been launched for the test.
    """

    __test__ = False

    browser_type: BrowserType
    test_name: str
    timeout: int
    headless: bool = True
    incognito: bool = False
    page: Optional[Page] = None
    context: Optional[BrowserContext] = None


@dataclass
class StepResult:
    """Execution record for a single BDD step."""

    step_name: str
    status: TestStatus
    duration: float
    error: Optional[str] = None
    screenshot: Optional[str] = None


__all__ = [
    "BrowserType",
    "ExecutionType",
    "TestType",
    "StepType",
    "TestStatus",
    "TestSession",
    "StepResult",
]
