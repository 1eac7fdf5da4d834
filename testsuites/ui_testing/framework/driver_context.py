"""
================================================================================
Driver Context
================================================================================

Shared interaction capability for page objects and step classes.

A DriverContext wraps the TestSession of one test and exposes navigation and
element interactions by selector. Page objects and step classes hold a
reference to it instead of inheriting interaction methods.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import allure
from loguru import logger
from playwright.async_api import BrowserContext, Locator, Page

from .types import BrowserType, TestSession


class PageNotInitializedError(RuntimeError):
    """Raised when the page is accessed before the browser was launched."""
    pass


class ContextNotInitializedError(RuntimeError):
    """Raised when the context is accessed before the browser was launched."""
    pass


class DriverContext:
    """
    Navigation and element interactions for one test session.

    Usage:
        driver = DriverContext(session)
        await driver.go_to_url("https://app.example.com/login")
        await driver.fill_text("input[name='username']", "demo_user")
        await driver.click("button[type='submit']")
    """

    def __init__(self, session: TestSession):
        self.session = session

    # =========================================================================
    # Session Access
    # =========================================================================

    @property
    def page(self) -> Page:
        """
        Current page.

        Raises:
            PageNotInitializedError: If no page was created for this test
        """
        if self.session.page is None:
            raise PageNotInitializedError(
                "Page is not initialized. Ensure browser is launched before accessing page."
            )
        return self.session.page

    @property
    def context(self) -> BrowserContext:
        """
        Current browser context.

        Raises:
            ContextNotInitializedError: If no context was created for this test
        """
        if self.session.context is None:
            raise ContextNotInitializedError(
                "Context is not initialized. Ensure browser is launched before accessing context."
            )
        return self.session.context

    @property
    def browser_type(self) -> BrowserType:
        return self.session.browser_type

    @property
    def test_name(self) -> str:
        return self.session.test_name

    @property
    def timeout(self) -> int:
        return self.session.timeout

    def set_page(self, page: Page) -> None:
        """Switch to another page (e.g. a popup)."""
        self.session.page = page

    def set_context(self, context: BrowserContext) -> None:
        self.session.context = context

    # =========================================================================
    # Navigation
    # =========================================================================

    async def go_to_url(self, url: str, wait_until: str = "networkidle") -> None:
        """
        Navigate to a URL and wait for the page to settle.

        Args:
            url: Absolute URL
            wait_until: 'load', 'domcontentloaded', 'networkidle' or 'commit'
        """
        with allure.step(f"Navigate to {url}"):
            try:
                logger.info(f"Navigating to URL: {url}")
                await self.page.goto(url, wait_until=wait_until)
                logger.info(f"Successfully navigated to: {url}")
            except Exception as e:
                logger.bind(data=e).error(f"Failed to navigate to URL: {url}")
                raise

    @property
    def current_url(self) -> str:
        return self.page.url

    async def page_title(self) -> str:
        return await self.page.title()

    async def refresh_page(self) -> None:
        logger.info("Refreshing page")
        await self.page.reload()

    async def go_back(self) -> None:
        logger.info("Going back in browser history")
        await self.page.go_back()

    async def go_forward(self) -> None:
        logger.info("Going forward in browser history")
        await self.page.go_forward()

    async def set_viewport_size(self, width: int, height: int) -> None:
        logger.info(f"Setting viewport size to {width}x{height}")
        await self.page.set_viewport_size({"width": width, "height": height})

    # =========================================================================
    # Element Interactions
    # =========================================================================

    def locator(self, selector: str) -> Locator:
        """Locator for a CSS/Playwright selector."""
        return self.page.locator(selector)

    async def locators(self, selector: str) -> List[Locator]:
        """One locator per element currently matching the selector."""
        locator = self.locator(selector)
        count = await locator.count()
        return [locator.nth(i) for i in range(count)]

    async def click(self, selector: str, **kwargs: Any) -> None:
        with allure.step(f"Click: {selector}"):
            logger.info(f"Clicking on element: {selector}")
            await self.locator(selector).click(**kwargs)

    async def double_click(self, selector: str) -> None:
        logger.info(f"Double clicking on element: {selector}")
        await self.locator(selector).dblclick()

    async def right_click(self, selector: str) -> None:
        logger.info(f"Right clicking on element: {selector}")
        await self.locator(selector).click(button="right")

    async def hover(self, selector: str) -> None:
        logger.info(f"Hovering over element: {selector}")
        await self.locator(selector).hover()

    async def fill_text(self, selector: str, text: str) -> None:
        """
        Fill an input element.

        Values typed into password fields are masked in the Allure step name.
        """
        shown = "*" * len(text) if "password" in selector.lower() else text
        with allure.step(f"Fill {selector}: {shown}"):
            logger.info(f"Filling text in element: {selector}")
            await self.locator(selector).fill(text)

    async def select_option(self, selector: str, value: str) -> None:
        logger.info(f"Selecting option: {value} from dropdown: {selector}")
        await self.locator(selector).select_option(value)

    async def get_text(self, selector: str) -> str:
        """Text content of the element, or an empty string."""
        return await self.locator(selector).text_content() or ""

    async def get_attribute(self, selector: str, name: str) -> Optional[str]:
        return await self.locator(selector).get_attribute(name)

    async def is_visible(self, selector: str) -> bool:
        return await self.locator(selector).is_visible()

    async def is_enabled(self, selector: str) -> bool:
        return await self.locator(selector).is_enabled()

    async def is_checked(self, selector: str) -> bool:
        return await self.locator(selector).is_checked()

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def wait_for_element(self, selector: str, timeout: Optional[int] = None) -> None:
        """Wait for element to become visible."""
        logger.info(f"Waiting for element: {selector}")
        await self.locator(selector).wait_for(state="visible", timeout=timeout)

    async def wait_for_element_hidden(self, selector: str, timeout: Optional[int] = None) -> None:
        logger.info(f"Waiting for element to be hidden: {selector}")
        await self.locator(selector).wait_for(state="hidden", timeout=timeout)

    async def wait(self, milliseconds: int) -> None:
        logger.debug(f"Waiting for {milliseconds}ms")
        await asyncio.sleep(milliseconds / 1000)

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript expression or function in the page."""
        return await self.page.evaluate(script, arg)


__all__ = [
    "DriverContext",
    "PageNotInitializedError",
    "ContextNotInitializedError",
]
