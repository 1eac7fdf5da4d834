"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - Browser reuse keyed by (browser kind, test name)
    - Context reuse keyed by (browser kind, test name)
    - Fresh page per test with run timeouts applied
    - Best-effort teardown that never fails a test

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .settings import Settings
from .types import BrowserType


CacheKey = Tuple[str, str]


class UnsupportedBrowserError(ValueError):
    """Raised when a browser kind cannot be launched by the manager."""
    pass


class BrowserManager:
    """
    Keyed cache of browser and context instances for UI testing.

    Browsers and contexts are looked up by ``(kind, test_name)``. A cached
    instance is returned as-is; otherwise a new one is created and stored.
    Pages are never cached.

    The context key ignores which browser instance is passed in: asking for a
    context with the same kind and test name returns the cached context even
    for a different browser object.

    No locking is done. Two concurrent requests for one key may both launch
    and only the last one is kept, so each test name should be driven by a
    single caller.

    Usage:
        async with BrowserManager(settings) as manager:
            browser = await manager.launch_browser("chromium", "test_login")
            context = await manager.create_context(browser, "test_login")
            page = await manager.create_page(context)
            await page.goto("https://example.com")
    """

    SUPPORTED_BROWSERS = (
        BrowserType.CHROMIUM,
        BrowserType.FIREFOX,
        BrowserType.WEBKIT,
    )

    CHROMIUM_ARGS: List[str] = [
        "--disable-blink-features=AutomationControlled",
        "--disable-dev-shm-usage",
        "--no-first-run",
        "--no-default-browser-check",
    ]

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
        "java_script_enabled": True,
        "bypass_csp": True,
    }

    def __init__(
        self,
        settings: Settings,
        playwright: Optional[Playwright] = None,
    ):
        """
        Initialize browser manager.

        Args:
            settings: Run settings (headless, incognito and timeout are used)
            playwright: Running Playwright driver. Started lazily on first
                launch when omitted.
        """
        self.settings = settings

        self._playwright: Optional[Playwright] = playwright
        self._owns_playwright = playwright is None
        self._browsers: Dict[CacheKey, Browser] = {}
        self._contexts: Dict[CacheKey, BrowserContext] = {}

    async def __aenter__(self) -> "BrowserManager":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close everything."""
        await self.stop()

    @property
    def browsers(self) -> Mapping[CacheKey, Browser]:
        """Read-only view of cached browsers."""
        return MappingProxyType(self._browsers)

    @property
    def contexts(self) -> Mapping[CacheKey, BrowserContext]:
        """Read-only view of cached contexts."""
        return MappingProxyType(self._contexts)

    # =========================================================================
    # Acquisition
    # =========================================================================

    async def launch_browser(
        self,
        browser_type: Union[BrowserType, str],
        test_name: str,
    ) -> Browser:
        """
        Return the browser for (browser_type, test_name), launching it if needed.

        Args:
            browser_type: 'chromium', 'firefox' or 'webkit'
            test_name: Logical test name used as part of the cache key

        Returns:
            Cached or newly launched Browser

        Raises:
            UnsupportedBrowserError: If the browser kind is not supported
        """
        kind = self._resolve_kind(browser_type)
        key = (kind.value, test_name)

        if key in self._browsers:
            logger.info(f"Reusing existing browser: {kind.value}")
            return self._browsers[key]

        logger.info(f"Launching browser: {kind.value}")

        launcher = getattr(await self._ensure_playwright(), kind.value)
        browser = await launcher.launch(**self.launch_options(kind))

        self._browsers[key] = browser
        logger.info(f"Browser launched successfully: {kind.value}")
        return browser

    async def create_context(
        self,
        browser: Browser,
        test_name: str,
        **options: Any,
    ) -> BrowserContext:
        """
        Return the context for (browser kind, test_name), creating it if needed.

        Args:
            browser: Browser to create the context in
            test_name: Logical test name used as part of the cache key
            **options: Extra context options for a newly created context

        Returns:
            Cached or new BrowserContext
        """
        key = (browser.browser_type.name, test_name)

        if key in self._contexts:
            logger.info(f"Reusing existing context for test: {test_name}")
            return self._contexts[key]

        logger.info(f"Creating browser context for test: {test_name}")

        context_options = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            **self.context_options(browser.browser_type.name),
            **options,
        }
        context = await browser.new_context(**context_options)

        self._contexts[key] = context
        logger.info(f"Browser context created successfully for test: {test_name}")
        return context

    async def create_page(self, context: BrowserContext) -> Page:
        """
        Create a new page in the context with run timeouts applied.

        Pages are never cached; every call returns a fresh page.
        """
        logger.info("Creating new page")
        page = await context.new_page()

        page.set_default_timeout(self.settings.timeout)
        page.set_default_navigation_timeout(self.settings.timeout)

        logger.info("Page created successfully")
        return page

    # =========================================================================
    # Teardown
    # =========================================================================

    async def close_page(self, page: Page) -> None:
        """Close a page. Errors are logged, never raised."""
        try:
            logger.info("Closing page")
            await page.close()
            logger.info("Page closed successfully")
        except Exception as e:
            logger.bind(data=e).error("Error closing page")

    async def close_context(self, context: BrowserContext) -> None:
        """Close a browser context. Errors are logged, never raised."""
        try:
            logger.info("Closing browser context")
            await context.close()
            logger.info("Browser context closed successfully")
        except Exception as e:
            logger.bind(data=e).error("Error closing browser context")

    async def close_browser(self, browser: Browser) -> None:
        """Close a browser. Errors are logged, never raised."""
        try:
            logger.info("Closing browser")
            await browser.close()
            logger.info("Browser closed successfully")
        except Exception as e:
            logger.bind(data=e).error("Error closing browser")

    def forget_context(self, context: BrowserContext) -> None:
        """Drop a context from the cache without closing it."""
        for key, cached in list(self._contexts.items()):
            if cached is context:
                del self._contexts[key]

    async def close_all(self) -> None:
        """
        Close every cached context, then every cached browser.

        Both caches end empty even if some closes failed.
        """
        logger.info("Closing all browsers")
        try:
            for context in list(self._contexts.values()):
                await self.close_context(context)
            for browser in list(self._browsers.values()):
                await self.close_browser(browser)
        finally:
            self._contexts.clear()
            self._browsers.clear()
        logger.info("All browsers closed successfully")

    async def stop(self) -> None:
        """Close all cached instances and stop Playwright if we started it."""
        await self.close_all()

        if self._playwright is not None and self._owns_playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.bind(data=e).error("Error stopping Playwright")
            self._playwright = None

    # =========================================================================
    # Options
    # =========================================================================

    def launch_options(self, browser_type: BrowserType) -> Dict[str, Any]:
        """Build launch options for a supported browser kind."""
        options: Dict[str, Any] = {"headless": self.settings.headless}

        if browser_type is BrowserType.CHROMIUM:
            args = ["--incognito"] if self.settings.incognito else []
            options["args"] = args + self.CHROMIUM_ARGS
        elif browser_type is BrowserType.FIREFOX:
            options["args"] = ["-private"] if self.settings.incognito else []

        return options

    def context_options(self, browser_name: str) -> Dict[str, Any]:
        """
        Per-kind context overrides merged over the defaults.

        Incognito is applied at launch, so no overrides are needed by default.
        Subclasses may return viewport, locale or permission settings here.
        """
        return {}

    def _resolve_kind(self, browser_type: Union[BrowserType, str]) -> BrowserType:
        try:
            kind = BrowserType(browser_type)
        except ValueError:
            raise UnsupportedBrowserError(
                f"Unsupported browser type: {browser_type}"
            ) from None
        if kind not in self.SUPPORTED_BROWSERS:
            raise UnsupportedBrowserError(f"Unsupported browser type: {kind.value}")
        return kind

    async def _ensure_playwright(self) -> Playwright:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
            self._owns_playwright = True
        return self._playwright


__all__ = [
    "BrowserManager",
    "CacheKey",
    "UnsupportedBrowserError",
]
