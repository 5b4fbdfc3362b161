"""Pytest configuration and fixtures for FashionHub suite tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

FIXED_NOW = datetime(2026, 10, 19, 14, 3, 7, 123000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed UTC time used in artifact names."""
    return FIXED_NOW


@pytest.fixture
def sleeps() -> list[float]:
    """Recorded sleep calls; pass ``sleeps.append`` as a sleep function."""
    return []


@pytest.fixture
def videos_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "videos"
    directory.mkdir()
    return directory


@pytest.fixture
def screenshots_dir(tmp_path: Path) -> Path:
    return tmp_path / "screenshots"


@pytest.fixture
def browser_type(videos_dir: Path) -> Any:
    """Mock Playwright BrowserType whose page records to videos_dir.

    Returns
    -------
    Any
        MagicMock with ``launch`` returning a browser mock; the chain
        browser -> context -> page is reachable as attributes for assertions
    """
    page = MagicMock(name="page")
    page.video.path.return_value = str(videos_dir / "abc123.webm")

    context = MagicMock(name="context")
    context.new_page.return_value = page

    browser = MagicMock(name="browser")
    browser.new_context.return_value = context

    browser_type = MagicMock(name="chromium")
    browser_type.launch.return_value = browser
    browser_type.browser = browser
    browser_type.context = context
    browser_type.page = page
    return browser_type


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove variables that change suite behavior."""
    for name in (
        "CI",
        "ENV_VARS",
        "LOG_LEVEL",
        "LOGIN_USERNAME",
        "LOGIN_PASSWORD",
        "FASHIONHUB_CONFIG",
        "FASHIONHUB_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
