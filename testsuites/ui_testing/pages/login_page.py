"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Example page object built on BasePage + DriverContext.

NOTE:
  Selectors are intentionally generic. Real projects should prefer stable
  `data-testid` attributes.

================================================================================
"""

from __future__ import annotations

import allure

from testsuites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_PATH = "/login"
    PAGE_TITLE = "Login"

    USERNAME_INPUT = "input[name='username']"
    PASSWORD_INPUT = "input[name='password']"
    LOGIN_BUTTON = "button[type='submit']"
    ERROR_MESSAGE = ".error-message"

    @allure.step("Open login page")
    async def open(self) -> "LoginPage":
        """Navigate to the login page and wait for the form."""
        await self.driver.go_to_url(self.url)
        await self.driver.wait_for_element(self.USERNAME_INPUT)
        return self

    async def enter_username(self, username: str) -> None:
        await self.driver.fill_text(self.USERNAME_INPUT, username)

    async def enter_password(self, password: str) -> None:
        await self.driver.fill_text(self.PASSWORD_INPUT, password)

    async def click_login_button(self) -> None:
        await self.driver.click(self.LOGIN_BUTTON)

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """Fill credentials and submit the form."""
        await self.enter_username(username)
        await self.enter_password(password)
        await self.click_login_button()

    async def get_error_message(self) -> str:
        return await self.driver.get_text(self.ERROR_MESSAGE)

    async def is_error_message_displayed(self) -> bool:
        return await self.driver.is_visible(self.ERROR_MESSAGE)


__all__ = ["LoginPage"]
