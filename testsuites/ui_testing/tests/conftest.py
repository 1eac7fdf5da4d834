"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- One BrowserManager (browser/context cache) per run
- Per-test session: browser keyed by test name, fresh context and page
- A routed in-memory demo app, so no application server is needed
- Screenshot capture on failure

All async fixtures share the session event loop because Playwright objects
are bound to the loop that created them.

================================================================================
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Route

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.config_loader import load_settings
from testsuites.ui_testing.framework.driver_context import DriverContext
from testsuites.ui_testing.framework.logger import init_logger
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.session import driver_session
from testsuites.ui_testing.framework.settings import Settings
from testsuites.ui_testing.framework.types import TestSession
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.steps.login_steps import LoginSteps


VALID_USER = {"username": "testuser@example.com", "password": "password123"}

LOGIN_HTML = """<!doctype html>
<html>
<head><title>Login</title></head>
<body>
  <form id="login-form">
    <input name="username" />
    <input name="password" type="password" />
    <button type="submit">Log In</button>
  </form>
  <div class="error-message" style="display:none"></div>
  <script>
    document.getElementById("login-form").addEventListener("submit", function (e) {
      e.preventDefault();
      var user = this.username.value;
      var pass = this.password.value;
      var error = document.querySelector(".error-message");
      if (!user) {
        error.textContent = "Username is required";
        error.style.display = "block";
      } else if (user === "%(username)s" && pass === "%(password)s") {
        window.location.href = "/dashboard";
      } else {
        error.textContent = "Invalid credentials";
        error.style.display = "block";
      }
    });
  </script>
</body>
</html>
""" % VALID_USER

DASHBOARD_HTML = """<!doctype html>
<html>
<head><title>Dashboard</title></head>
<body><h1 data-testid="dashboard-title">Dashboard</h1></body>
</html>
"""


# ================================================================================
# Pytest Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase report on the item for failure capture in fixtures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# ================================================================================
# Run Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def settings(project_root: Path) -> Settings:
    """Run settings from env, .env and config.json at the repo root."""
    settings = load_settings(project_root)
    init_logger(settings)
    return settings


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(settings: Settings) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    Browsers stay cached for the whole run and are closed at the end.
    """
    async with BrowserManager(settings) as manager:
        yield manager


async def _serve_demo_app(route: Route) -> None:
    if route.request.url.rstrip("/").endswith("/dashboard"):
        await route.fulfill(status=200, content_type="text/html", body=DASHBOARD_HTML)
    else:
        await route.fulfill(status=200, content_type="text/html", body=LOGIN_HTML)


@pytest_asyncio.fixture(loop_scope="session")
async def ui_session(
    request: pytest.FixtureRequest,
    browser_manager: BrowserManager,
    settings: Settings,
) -> AsyncGenerator[TestSession, None]:
    """
    Function-scoped test session.

    Opens browser/context/page for the test, serves the demo app on the
    configured base URL and captures a screenshot if the test fails.
    """
    async with driver_session(browser_manager, settings, request.node.name) as session:
        await session.page.route(f"{settings.base_url.rstrip('/')}/**", _serve_demo_app)

        yield session

        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            try:
                page = BasePage(DriverContext(session), settings.base_url)
                await page.capture_failure(request.node.name)
            except Exception as e:
                logger.warning(f"Failed to capture screenshot on failure: {e}")


# ================================================================================
# Page Object / Step Fixtures
# ================================================================================

@pytest.fixture
def driver(ui_session: TestSession) -> DriverContext:
    return DriverContext(ui_session)


@pytest.fixture
def login_page(driver: DriverContext, settings: Settings) -> LoginPage:
    """Provides LoginPage instance."""
    return LoginPage(driver, settings.base_url)


@pytest.fixture
def login_steps(driver: DriverContext, settings: Settings) -> LoginSteps:
    """Provides LoginSteps instance for BDD-style tests."""
    return LoginSteps(driver, settings.base_url)


@pytest.fixture
def test_data():
    """
    Provides common test data for UI tests.
    """
    return {
        "valid_user": dict(VALID_USER),
        "invalid_user": {
            "username": "invalid@example.com",
            "password": "wrongpassword",
        },
    }
