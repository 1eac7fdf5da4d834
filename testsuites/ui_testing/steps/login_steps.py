"""
================================================================================
Login Steps
================================================================================

Example BDD step definitions for the login flow.

================================================================================
"""

from __future__ import annotations

from testsuites.ui_testing.framework.base_step import BaseStep
from testsuites.ui_testing.framework.driver_context import DriverContext
from testsuites.ui_testing.framework.types import StepType
from testsuites.ui_testing.pages.login_page import LoginPage


class LoginSteps(BaseStep):
    """Given/When/Then steps for login scenarios."""

    def __init__(self, driver: DriverContext, base_url: str):
        super().__init__(driver)
        self.login_page = LoginPage(driver, base_url)

    async def given_user_navigates_to_login_page(self) -> None:
        await self.execute_step(
            "User navigates to login page",
            self.login_page.open,
            StepType.GIVEN,
        )

    async def when_user_enters_credentials(self, username: str, password: str) -> None:
        async def enter() -> None:
            await self.login_page.login(username, password)

        await self.execute_step(f"User enters credentials ({username})", enter, StepType.WHEN)

    async def then_user_should_see_error_message(self, expected_message: str) -> None:
        async def verify() -> None:
            displayed = await self.login_page.is_error_message_displayed()
            self.assert_true(displayed, "Error message should be displayed")

            actual = await self.login_page.get_error_message()
            self.assert_contains(actual, expected_message, "Error message should contain expected text")

        await self.execute_step(
            f"User should see error message: {expected_message}",
            verify,
            StepType.THEN,
        )

    async def then_user_should_be_logged_in(self) -> None:
        async def verify() -> None:
            self.assert_contains(
                self.login_page.current_url,
                "/dashboard",
                "User should be redirected to dashboard",
            )

        await self.execute_step("User should be logged in", verify, StepType.THEN)


__all__ = ["LoginSteps"]
