"""
Fakes for framework unit tests.

The fakes mimic the small slice of the Playwright async API the framework
touches, and record every launch/close in a shared event log so tests can
check ordering.
"""

from typing import Any, Dict, List, Optional

import pytest
from loguru import logger

from testsuites.ui_testing.framework.settings import Settings


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    def _record(self, action: str, **kwargs: Any) -> None:
        self.page.calls.append((action, self.selector, kwargs))

    async def click(self, **kwargs):
        self._record("click", **kwargs)

    async def dblclick(self):
        self._record("dblclick")

    async def hover(self):
        self._record("hover")

    async def fill(self, text):
        self._record("fill", text=text)

    async def select_option(self, value):
        self._record("select_option", value=value)

    async def text_content(self):
        return self.page.texts.get(self.selector)

    async def get_attribute(self, name):
        return self.page.attributes.get((self.selector, name))

    async def is_visible(self):
        return self.selector in self.page.visible

    async def is_enabled(self):
        return True

    async def is_checked(self):
        return False

    async def wait_for(self, state=None, timeout=None):
        self._record("wait_for", state=state, timeout=timeout)

    async def count(self):
        return self.page.counts.get(self.selector, 1)

    def nth(self, index):
        return FakeLocator(self.page, f"{self.selector} >> nth={index}")


class FakePage:
    def __init__(self, events: List[str], name: str):
        self.events = events
        self.name = name
        self.url = "about:blank"
        self.default_timeout: Optional[int] = None
        self.default_navigation_timeout: Optional[int] = None
        self.close_error: Optional[Exception] = None
        self.goto_error: Optional[Exception] = None
        self.closed = False
        self.calls: List[tuple] = []
        self.texts: Dict[str, Optional[str]] = {}
        self.attributes: Dict[tuple, str] = {}
        self.visible: set = set()
        self.counts: Dict[str, int] = {}

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.default_navigation_timeout = timeout

    def locator(self, selector):
        return FakeLocator(self, selector)

    async def goto(self, url, wait_until=None):
        self.calls.append(("goto", url, {"wait_until": wait_until}))
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url

    async def title(self):
        return "Fake Title"

    async def reload(self):
        self.calls.append(("reload", self.url, {}))

    async def go_back(self):
        self.calls.append(("go_back", self.url, {}))

    async def go_forward(self):
        self.calls.append(("go_forward", self.url, {}))

    async def set_viewport_size(self, size):
        self.calls.append(("set_viewport_size", self.url, size))

    async def evaluate(self, script, arg=None):
        return {"script": script, "arg": arg}

    async def screenshot(self, path=None, full_page=False):
        self.calls.append(("screenshot", path, {"full_page": full_page}))
        return b"\x89PNG"

    async def close(self):
        self.events.append(f"close page {self.name}")
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class FakeContext:
    def __init__(self, events: List[str], name: str, options: Dict[str, Any]):
        self.events = events
        self.name = name
        self.options = options
        self.pages: List[FakePage] = []
        self.close_error: Optional[Exception] = None
        self.closed = False

    async def new_page(self):
        page = FakePage(self.events, f"{self.name}/page{len(self.pages) + 1}")
        self.pages.append(page)
        return page

    async def close(self):
        self.events.append(f"close context {self.name}")
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class FakeBrowserType:
    def __init__(self, name: str):
        self.name = name


class FakeBrowser:
    def __init__(self, events: List[str], kind: str, number: int, options: Dict[str, Any]):
        self.events = events
        self.browser_type = FakeBrowserType(kind)
        self.name = f"{kind}#{number}"
        self.launch_options = options
        self.contexts: List[FakeContext] = []
        self.close_error: Optional[Exception] = None
        self.closed = False

    async def new_context(self, **options):
        context = FakeContext(self.events, f"{self.name}/ctx{len(self.contexts) + 1}", options)
        self.contexts.append(context)
        return context

    async def close(self):
        self.events.append(f"close browser {self.name}")
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class FakeLauncher:
    def __init__(self, events: List[str], name: str):
        self.events = events
        self.name = name
        self.launched: List[FakeBrowser] = []
        self.launch_error: Optional[Exception] = None

    async def launch(self, **options):
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self.events, self.name, len(self.launched) + 1, options)
        self.launched.append(browser)
        self.events.append(f"launch {browser.name}")
        return browser


class FakePlaywright:
    def __init__(self):
        self.events: List[str] = []
        self.chromium = FakeLauncher(self.events, "chromium")
        self.firefox = FakeLauncher(self.events, "firefox")
        self.webkit = FakeLauncher(self.events, "webkit")
        self.stopped = False

    async def stop(self):
        self.stopped = True


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def settings() -> Settings:
    return Settings(timeout=5000, headless=True, enable_logging=False)


@pytest.fixture
def make_page():
    """Factory for standalone fake pages."""
    def _make(name: str = "page") -> FakePage:
        return FakePage([], name)
    return _make


@pytest.fixture
def log_messages():
    """Capture loguru messages as 'LEVEL message' strings."""
    messages: List[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.rstrip("\n")),
        format="{level} {message}",
        level="DEBUG",
    )
    yield messages
    try:
        logger.remove(handler_id)
    except ValueError:
        pass
