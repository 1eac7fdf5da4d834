"""
================================================================================
Base Step
================================================================================

Helpers for BDD-style step classes.

Step classes hold a DriverContext and the page objects they drive. Each
Given/When/Then method wraps its body in ``execute_step`` so that the step is
logged, shown as an Allure step and recorded as a StepResult.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Any, Awaitable, Callable, List, Optional

import allure
from loguru import logger

from .driver_context import DriverContext
from .types import StepResult, StepType, TestStatus


class StepAssertionError(AssertionError):
    """Raised when a step assertion fails."""
    pass


class BaseStep:
    """
    Base class for BDD step definitions.

    Usage:
        class LoginSteps(BaseStep):
            def __init__(self, driver, base_url):
                super().__init__(driver)
                self.login_page = LoginPage(driver, base_url)

            async def then_user_is_logged_in(self):
                async def verify():
                    self.assert_contains(self.login_page.current_url, "/dashboard",
                                         "User should be redirected to dashboard")
                await self.execute_step("User should be logged in", verify, StepType.THEN)
    """

    def __init__(self, driver: DriverContext):
        self.driver = driver
        self.results: List[StepResult] = []

    async def execute_step(
        self,
        step_name: str,
        action: Callable[[], Awaitable[Any]],
        step_type: Optional[StepType] = None,
    ) -> Any:
        """
        Run one step with logging and result recording.

        Args:
            step_name: Human-readable step description
            action: Zero-argument coroutine function performing the step
            step_type: Optional Given/When/Then keyword for the step title

        Returns:
            Whatever the action returned

        Raises:
            Any exception raised by the action, after it has been logged
        """
        title = f"{step_type.value} {step_name}" if step_type else step_name
        started = time.monotonic()

        with allure.step(title):
            try:
                logger.info(f"Executing step: {title}")
                outcome = await action()
            except Exception as e:
                self.results.append(
                    StepResult(
                        step_name=title,
                        status=TestStatus.FAILED,
                        duration=time.monotonic() - started,
                        error=str(e),
                    )
                )
                logger.bind(data=e).error(f"Step failed: {title}")
                raise

        self.results.append(
            StepResult(
                step_name=title,
                status=TestStatus.PASSED,
                duration=time.monotonic() - started,
            )
        )
        logger.info(f"Step passed: {title}")
        return outcome

    # =========================================================================
    # Assertions
    # =========================================================================

    def _fail(self, message: str) -> None:
        logger.error(f"Assertion failed: {message}")
        raise StepAssertionError(f"Assertion failed: {message}")

    def _pass(self, message: str) -> None:
        logger.info(f"Assertion passed: {message}")

    def assert_that(self, condition: bool, message: str) -> None:
        if not condition:
            self._fail(message)
        self._pass(message)

    def assert_equal(self, actual: Any, expected: Any, message: str) -> None:
        if actual != expected:
            self._fail(f"{message}. Expected: {expected}, Actual: {actual}")
        self._pass(message)

    def assert_not_equal(self, actual: Any, unexpected: Any, message: str) -> None:
        if actual == unexpected:
            self._fail(f"{message}. Value should not be: {unexpected}")
        self._pass(message)

    def assert_contains(self, text: str, substring: str, message: str) -> None:
        if substring not in text:
            self._fail(f'{message}. "{text}" does not contain "{substring}"')
        self._pass(message)

    def assert_true(self, value: Any, message: str) -> None:
        if not value:
            self._fail(f"{message}. Expected truthy value")
        self._pass(message)

    def assert_false(self, value: Any, message: str) -> None:
        if value:
            self._fail(f"{message}. Expected falsy value")
        self._pass(message)

    def assert_none(self, value: Any, message: str) -> None:
        if value is not None:
            self._fail(f"{message}. Expected None, got: {value}")
        self._pass(message)

    def assert_not_none(self, value: Any, message: str) -> None:
        if value is None:
            self._fail(f"{message}. Expected non-None value")
        self._pass(message)


__all__ = [
    "BaseStep",
    "StepAssertionError",
]
