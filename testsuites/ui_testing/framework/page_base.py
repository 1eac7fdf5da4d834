"""
================================================================================
Page Object Base
================================================================================

Page objects built on a DriverContext.

Provides:
    - Page URL handling relative to the configured base URL
    - Access to the shared DriverContext for element interaction
    - Screenshot and failure capture for Allure

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Page

from .driver_context import DriverContext


# Default output directory for screenshots
SCREENSHOT_DIR = Path("screenshots")


class BasePage:
    """
    Common behaviour for page objects.

    Page objects hold a DriverContext and call its interaction methods;
    they add selectors and page-specific flows on top.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"

            async def login(self, username: str, password: str):
                await self.driver.fill_text("#username", username)
                await self.driver.fill_text("#password", password)
                await self.driver.click("button[type='submit']")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        driver: DriverContext,
        base_url: str = "http://localhost:3000",
    ):
        """
        Initialize page object.

        Args:
            driver: Driver context of the current test
            base_url: Base URL for the application
        """
        self.driver = driver
        self.base_url = base_url.rstrip("/")

    @property
    def page(self) -> Page:
        return self.driver.page

    @property
    def url(self) -> str:
        """Absolute URL of this page."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    async def open(self) -> "BasePage":
        """Navigate to this page."""
        await self.driver.go_to_url(self.url)
        return self

    async def navigate_to(self, path: str) -> None:
        """
        Navigate to a path relative to the base URL.

        Absolute URLs are used unchanged.
        """
        if path.startswith(("http://", "https://")):
            full_url = path
        else:
            full_url = f"{self.base_url}/{path.lstrip('/')}"
        await self.driver.go_to_url(full_url)

    async def title(self) -> str:
        return await self.driver.page_title()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
        directory: Optional[Path] = None,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report
            directory: Output directory, defaults to SCREENSHOT_DIR

        Returns:
            Path to saved screenshot
        """
        directory = directory or SCREENSHOT_DIR
        directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = directory / f"{name}_{timestamp}.png"

        logger.info(f"Taking screenshot: {name}")
        png = await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Attach failure evidence to the Allure report.

        Saves:
            - Screenshot
            - Current URL
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )


__all__ = [
    "BasePage",
    "SCREENSHOT_DIR",
]
