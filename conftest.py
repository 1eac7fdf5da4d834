"""
Repository-level pytest configuration.

Registers the ``--run-ui`` switch. Browser-driven tests need installed
Playwright browsers (``playwright install``), so they only run when asked
for. Run settings are not touched here; they resolve from the environment,
``.env`` and ``config.json`` exactly as outside pytest.
"""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-ui",
        action="store_true",
        default=False,
        help="Run browser-driven UI tests (requires installed Playwright browsers)",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root; config.json and .env are looked up here."""
    return Path(__file__).parent
