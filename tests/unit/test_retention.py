"""Tests for video retention and failure screenshots."""

import logging
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from fashionhub_e2e.core.outcome import Outcome
from fashionhub_e2e.core.retention import ArtifactRetentionPolicy


@pytest.fixture
def policy(screenshots_dir: Path, sleeps: list[float], fixed_now: datetime) -> ArtifactRetentionPolicy:
    return ArtifactRetentionPolicy(
        screenshots_dir=screenshots_dir,
        settle_delay=1.0,
        sleep=sleeps.append,
        clock=lambda: fixed_now,
        retries=3,
        retry_delay=0.5,
    )


@pytest.fixture
def video(videos_dir: Path) -> Path:
    path = videos_dir / "abc123.webm"
    path.write_bytes(b"video")
    return path


class TestOnScenarioEnd:
    """Tests for keeping or discarding videos by outcome."""

    def test_failed_video_is_renamed(
        self, policy: ArtifactRetentionPolicy, video: Path, videos_dir: Path
    ) -> None:
        """Test a failed scenario keeps its video under a descriptive name."""
        kept = policy.on_scenario_end(video, Outcome.FAILED, "Login with bad creds!! / test")

        assert kept == videos_dir / "Login_with_bad_creds_test-FAILED-14-03-07.webm"
        assert kept.read_bytes() == b"video"
        assert not video.exists()

    def test_passed_video_is_deleted(
        self, policy: ArtifactRetentionPolicy, video: Path, videos_dir: Path
    ) -> None:
        assert policy.on_scenario_end(video, Outcome.PASSED, "Login works") is None
        assert list(videos_dir.iterdir()) == []

    @pytest.mark.parametrize("outcome", [Outcome.SKIPPED, Outcome.UNKNOWN])
    def test_other_outcomes_leave_video_untouched(
        self, policy: ArtifactRetentionPolicy, video: Path, outcome: Outcome
    ) -> None:
        assert policy.on_scenario_end(video, outcome, "Maybe") is None
        assert video.read_bytes() == b"video"

    def test_waits_settle_delay_before_touching_video(
        self, policy: ArtifactRetentionPolicy, video: Path, sleeps: list[float]
    ) -> None:
        policy.on_scenario_end(video, Outcome.PASSED, "Login works")
        assert sleeps == [1.0]

    def test_missing_video_is_not_an_error(
        self,
        policy: ArtifactRetentionPolicy,
        videos_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a video not yet flushed to disk is skipped silently."""
        with caplog.at_level(logging.WARNING):
            result = policy.on_scenario_end(videos_dir / "gone.webm", Outcome.FAILED, "x")

        assert result is None
        assert caplog.records == []

    def test_no_video_path(self, policy: ArtifactRetentionPolicy, sleeps: list[float]) -> None:
        assert policy.on_scenario_end(None, Outcome.FAILED, "x") is None
        assert sleeps == []

    def test_locked_video_is_retried_then_left_in_place(
        self,
        policy: ArtifactRetentionPolicy,
        video: Path,
        sleeps: list[float],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a file locked on every attempt stays under its original name."""
        with patch.object(Path, "unlink", side_effect=PermissionError("locked")):
            with caplog.at_level(logging.WARNING):
                policy.on_scenario_end(video, Outcome.PASSED, "Login works")

        assert video.exists()
        assert sleeps == [1.0, 0.5, 0.5]
        assert "File operation failed after 3 attempts" in caplog.text


class TestCaptureFailureScreenshot:
    """Tests for failure screenshots and report attachments."""

    def test_writes_full_page_screenshot_and_attaches(
        self, policy: ArtifactRetentionPolicy, screenshots_dir: Path
    ) -> None:
        page = MagicMock()
        page.screenshot.return_value = b"png-bytes"
        reporter = MagicMock()

        path = policy.capture_failure_screenshot(page, "Login fails", reporter)

        assert path == screenshots_dir / "failure-login-fails-2026-10-19T14-03-07-123Z.png"
        page.screenshot.assert_called_once_with(path=str(path), full_page=True)
        reporter.attach.assert_called_once_with(b"png-bytes", "image/png")

    def test_without_reporter(self, policy: ArtifactRetentionPolicy) -> None:
        page = MagicMock()
        page.screenshot.return_value = b"png-bytes"
        assert policy.capture_failure_screenshot(page, "Login fails", None) is not None

    def test_attach_failure_is_logged_at_debug(
        self, policy: ArtifactRetentionPolicy, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test attachment errors never surface above debug level."""
        page = MagicMock()
        reporter = MagicMock()
        reporter.attach.side_effect = RuntimeError("report closed")

        with caplog.at_level(logging.DEBUG):
            path = policy.capture_failure_screenshot(page, "Login fails", reporter)

        assert path is not None
        record = next(r for r in caplog.records if "attach" in r.getMessage())
        assert record.levelno == logging.DEBUG

    def test_capture_failure_is_recovered(
        self, policy: ArtifactRetentionPolicy, caplog: pytest.LogCaptureFixture
    ) -> None:
        page = MagicMock()
        page.screenshot.side_effect = RuntimeError("Target closed")
        reporter = MagicMock()

        with caplog.at_level(logging.WARNING):
            assert policy.capture_failure_screenshot(page, "Login fails", reporter) is None

        reporter.attach.assert_not_called()
        assert "Could not capture screenshot" in caplog.text

    def test_no_page(self, policy: ArtifactRetentionPolicy) -> None:
        assert policy.capture_failure_screenshot(None, "Login fails", None) is None
