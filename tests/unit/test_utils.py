"""Tests for artifact naming and file operation helpers."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from fashionhub_e2e.utils import (
    failed_video_name,
    format_bytes,
    format_duration,
    iso_timestamp,
    mask_sensitive,
    sanitize_artifact_name,
    screenshot_name,
    with_retry,
)


class TestSanitizeArtifactName:
    """Tests for scenario name sanitizing."""

    def test_strips_illegal_characters_and_collapses_whitespace(self) -> None:
        """Test removal of punctuation and underscore joining."""
        assert sanitize_artifact_name("Login with bad creds!! / test") == "Login_with_bad_creds_test"

    def test_keeps_dots_and_dashes(self) -> None:
        assert sanitize_artifact_name("v1.2 - smoke") == "v1.2_-_smoke"

    def test_truncates_to_100_characters(self) -> None:
        """Test the length limit applies after sanitizing."""
        assert len(sanitize_artifact_name("a" * 150)) == 100

    def test_result_has_no_illegal_characters(self) -> None:
        result = sanitize_artifact_name('a<b>c:d"e/f\\g|h?i*j')
        assert not set('<>:"/\\|?*') & set(result)


class TestArtifactNames:
    """Tests for video and screenshot file names."""

    def test_iso_timestamp_has_millisecond_precision(self, fixed_now: datetime) -> None:
        assert iso_timestamp(fixed_now) == "2026-10-19T14:03:07.123Z"

    def test_iso_timestamp_converts_to_utc(self) -> None:
        """Test that aware local times are rendered in UTC."""
        local = datetime(2026, 10, 19, 16, 3, 7, tzinfo=timezone(timedelta(hours=2)))
        assert iso_timestamp(local) == "2026-10-19T14:03:07.000Z"

    def test_failed_video_name(self, fixed_now: datetime) -> None:
        """Test the kept video name format."""
        name = failed_video_name("Login with bad creds!! / test", fixed_now)
        assert name == "Login_with_bad_creds_test-FAILED-14-03-07.webm"

    def test_screenshot_name(self, fixed_now: datetime) -> None:
        """Test the screenshot name uses a slug and the full timestamp."""
        name = screenshot_name("Login fails", fixed_now)
        assert name == "failure-login-fails-2026-10-19T14-03-07-123Z.png"


class TestWithRetry:
    """Tests for bounded retry of file operations."""

    def test_success_on_first_attempt(self, sleeps: list[float]) -> None:
        calls = []
        assert with_retry(lambda: calls.append(1), sleep=sleeps.append) is True
        assert calls == [1]
        assert sleeps == []

    def test_retries_until_success(self, sleeps: list[float]) -> None:
        """Test a transient OSError is retried with the fixed delay."""
        attempts = []

        def flaky() -> None:
            attempts.append(1)
            if len(attempts) < 3:
                raise PermissionError("file locked")

        assert with_retry(flaky, retries=3, delay=0.5, sleep=sleeps.append) is True
        assert len(attempts) == 3
        assert sleeps == [0.5, 0.5]

    def test_gives_up_after_bound_with_one_warning(
        self, sleeps: list[float], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test exhaustion returns False and logs a single warning."""
        attempts = []

        def always_locked() -> None:
            attempts.append(1)
            raise PermissionError("file locked")

        with caplog.at_level(logging.WARNING):
            assert with_retry(always_locked, retries=3, sleep=sleeps.append) is False

        assert len(attempts) == 3
        assert len(sleeps) == 2
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "File operation failed after 3 attempts" in warnings[0].getMessage()

    def test_non_os_errors_are_retried(
        self, sleeps: list[float], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test any exception is retried and exhaustion still returns False."""
        attempts = []

        def recorder_busy() -> None:
            attempts.append(1)
            raise RuntimeError("recorder busy")

        with caplog.at_level(logging.WARNING):
            assert with_retry(recorder_busy, retries=3, sleep=sleeps.append) is False

        assert len(attempts) == 3
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "recorder busy" in warnings[0].getMessage()


class TestFormatting:
    """Tests for human-readable formatting helpers."""

    @pytest.mark.parametrize(
        ("seconds", "expected"), [(1.532, "1532ms"), (None, "Unknown"), (0, "Unknown")]
    )
    def test_format_duration(self, seconds: float | None, expected: str) -> None:
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0, "0 Bytes"), (512, "512 Bytes"), (1536, "1.5 KB"), (1024 * 1024, "1 MB")],
    )
    def test_format_bytes(self, size: int, expected: str) -> None:
        assert format_bytes(size) == expected

    def test_mask_sensitive(self) -> None:
        assert mask_sensitive("secret") == "se****"
        assert mask_sensitive(None) == "***"
