"""Tests for browser session management."""

import logging
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, call

import pytest

from fashionhub_e2e.constants import CI_BROWSER_ARGS, VIDEO_SIZE
from fashionhub_e2e.core.resources import ResourceRegistry
from fashionhub_e2e.core.session import SessionManager, is_ci_mode


class TestIsCiMode:
    def test_true_only_for_true(self) -> None:
        assert is_ci_mode({"CI": "true"}) is True
        assert is_ci_mode({"CI": "TRUE"}) is True
        assert is_ci_mode({"CI": "1"}) is False
        assert is_ci_mode({}) is False


class TestOpenSession:
    """Tests for opening a recording browser session."""

    def test_local_mode_is_headed_without_flags(self, browser_type: Any, videos_dir: Path) -> None:
        manager = SessionManager(browser_type, videos_dir)
        handle = manager.open_session(ci_mode=False)

        browser_type.launch.assert_called_once_with(headless=False, args=[])
        assert handle.page is browser_type.page
        assert handle.video_path == videos_dir / "abc123.webm"

    def test_ci_mode_is_headless_with_sandbox_flags(
        self, browser_type: Any, videos_dir: Path
    ) -> None:
        SessionManager(browser_type, videos_dir).open_session(ci_mode=True)

        browser_type.launch.assert_called_once_with(headless=True, args=list(CI_BROWSER_ARGS))

    def test_context_records_video(self, browser_type: Any, videos_dir: Path) -> None:
        """Test the context records 1280x720 video into the videos directory."""
        SessionManager(browser_type, videos_dir).open_session(ci_mode=False)

        kwargs = browser_type.browser.new_context.call_args.kwargs
        assert kwargs["record_video_dir"] == str(videos_dir)
        assert kwargs["record_video_size"] == VIDEO_SIZE

    def test_page_without_video(self, browser_type: Any, videos_dir: Path) -> None:
        browser_type.page.video = None
        handle = SessionManager(browser_type, videos_dir).open_session(ci_mode=False)
        assert handle.video_path is None

    def test_launch_failure_propagates(self, browser_type: Any, videos_dir: Path) -> None:
        """Test session-open failures are fatal to the scenario."""
        browser_type.launch.side_effect = RuntimeError("no browser")

        with pytest.raises(RuntimeError, match="no browser"):
            SessionManager(browser_type, videos_dir).open_session(ci_mode=False)

    def test_page_failure_closes_context_and_browser(
        self, browser_type: Any, videos_dir: Path
    ) -> None:
        """Test resources acquired before a failure are released."""
        browser_type.context.new_page.side_effect = RuntimeError("page crashed")

        with pytest.raises(RuntimeError):
            SessionManager(browser_type, videos_dir).open_session(ci_mode=False)

        browser_type.context.close.assert_called_once()
        browser_type.browser.close.assert_called_once()


class TestCloseSession:
    """Tests for closing sessions without raising."""

    def test_closes_page_context_browser_in_order(
        self, browser_type: Any, videos_dir: Path
    ) -> None:
        order = MagicMock()
        order.attach_mock(browser_type.page.close, "page")
        order.attach_mock(browser_type.context.close, "context")
        order.attach_mock(browser_type.browser.close, "browser")

        manager = SessionManager(browser_type, videos_dir)
        handle = manager.open_session(ci_mode=False)
        manager.close_session(handle)

        assert order.mock_calls == [call.page(), call.context(), call.browser()]
        assert handle.closed is True

    def test_close_failures_are_logged_not_raised(
        self, browser_type: Any, videos_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a failing page close still closes context and browser."""
        browser_type.page.close.side_effect = RuntimeError("Target closed")
        manager = SessionManager(browser_type, videos_dir)
        handle = manager.open_session(ci_mode=False)

        with caplog.at_level(logging.WARNING):
            manager.close_session(handle)

        browser_type.context.close.assert_called_once()
        browser_type.browser.close.assert_called_once()
        assert "Error closing page: Target closed" in caplog.text

    def test_close_is_idempotent(self, browser_type: Any, videos_dir: Path) -> None:
        manager = SessionManager(browser_type, videos_dir)
        handle = manager.open_session(ci_mode=False)

        manager.close_session(handle)
        manager.close_session(handle)
        manager.close_session(None)

        browser_type.browser.close.assert_called_once()


class TestResourceRegistry:
    """Tests for reverse-order resource release."""

    def test_release_reverse_order_and_continue_on_error(self) -> None:
        registry = ResourceRegistry()
        released = []

        def dispose(name: str) -> None:
            released.append(name)
            if name == "context":
                raise OSError("boom")

        for kind in ("browser", "context", "page"):
            registry.register(kind, kind, dispose)

        failed = registry.release_all()

        assert released == ["page", "context", "browser"]
        assert failed == ["context"]
        assert registry.resources == []

    def test_empty_release(self) -> None:
        assert ResourceRegistry().release_all() == []
