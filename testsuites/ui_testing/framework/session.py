"""
================================================================================
Test Session Lifecycle
================================================================================

Per-test setup and teardown on top of BrowserManager.

Setup launches (or reuses) the browser keyed by the test name, acquires the
context and opens a fresh page. Teardown closes the page and the context and
leaves the browser cached for the rest of the run.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from loguru import logger

from .browser_manager import BrowserManager
from .settings import Settings
from .types import TestSession


async def open_session(
    manager: BrowserManager,
    settings: Settings,
    test_name: str,
) -> TestSession:
    """
    Prepare browser, context and page for a test.

    Args:
        manager: Browser/context cache for the run
        settings: Run settings
        test_name: Test name used as cache key

    Returns:
        TestSession with page and context populated
    """
    logger.info(f"Starting test: {test_name}")

    browser = await manager.launch_browser(settings.browser_type, test_name)
    context = await manager.create_context(browser, test_name)
    page = await manager.create_page(context)

    return TestSession(
        browser_type=settings.browser_type,
        test_name=test_name,
        timeout=settings.timeout,
        headless=settings.headless,
        incognito=settings.incognito,
        page=page,
        context=context,
    )


async def close_session(manager: BrowserManager, session: TestSession) -> None:
    """Close the page and context of a test. Never raises."""
    logger.info(f"Ending test: {session.test_name}")

    if session.page is not None:
        await manager.close_page(session.page)
    if session.context is not None:
        await manager.close_context(session.context)
        manager.forget_context(session.context)


@asynccontextmanager
async def driver_session(
    manager: BrowserManager,
    settings: Settings,
    test_name: str,
) -> AsyncIterator[TestSession]:
    """
    Async context manager around open_session/close_session.

    Usage:
        async with driver_session(manager, settings, "test_login") as session:
            await session.page.goto(settings.base_url)
    """
    session = await open_session(manager, settings, test_name)
    try:
        yield session
    finally:
        await close_session(manager, session)


__all__ = [
    "open_session",
    "close_session",
    "driver_session",
]
