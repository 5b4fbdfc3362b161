"""Artifact retention for scenario videos and failure screenshots."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from fashionhub_e2e.constants import (
    FILE_OPERATION_RETRIES,
    FILE_OPERATION_RETRY_DELAY_SECONDS,
    PNG_MIME_TYPE,
    SCREENSHOTS_DIR,
    VIDEO_SETTLE_DELAY_SECONDS,
)
from fashionhub_e2e.core.outcome import Outcome
from fashionhub_e2e.utils import failed_video_name, screenshot_name, utc_now, with_retry

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Report collector able to embed binary attachments."""

    def attach(self, data: bytes, mime_type: str) -> None:
        """Attach data to the current scenario in the report."""
        ...


class ArtifactRetentionPolicy:
    """Decides which scenario artifacts are kept.

    Failed scenarios keep their video under a descriptive name and get a
    full-page screenshot. Passed scenarios lose their video. Skipped and
    unknown outcomes leave the video untouched.

    Parameters
    ----------
    screenshots_dir : Path
        Directory failure screenshots are written to
    settle_delay : float
        Seconds to wait before touching a video after its context closed
    sleep : Callable[[float], None]
        Sleep function, replaceable in tests
    clock : Callable[[], datetime]
        Source of the current time used in artifact names
    retries : int
        Attempts per rename or delete
    retry_delay : float
        Seconds between attempts
    """

    def __init__(
        self,
        screenshots_dir: Path = SCREENSHOTS_DIR,
        settle_delay: float = VIDEO_SETTLE_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = utc_now,
        retries: int = FILE_OPERATION_RETRIES,
        retry_delay: float = FILE_OPERATION_RETRY_DELAY_SECONDS,
    ) -> None:
        self.screenshots_dir = Path(screenshots_dir)
        self.settle_delay = settle_delay
        self.sleep = sleep
        self.clock = clock
        self.retries = retries
        self.retry_delay = retry_delay

    def _retry(self, operation: Callable[[], object]) -> bool:
        return with_retry(
            operation, retries=self.retries, delay=self.retry_delay, sleep=self.sleep
        )

    def on_scenario_end(
        self, video_path: Path | str | None, outcome: Outcome, scenario_name: str
    ) -> Path | None:
        """Keep or discard a scenario video according to its outcome.

        Parameters
        ----------
        video_path : Path | str | None
            Video recorded for the scenario
        outcome : Outcome
            Classified scenario outcome
        scenario_name : str
            Scenario name used for the kept video's file name

        Returns
        -------
        Path | None
            New path of a kept video, None otherwise

        Notes
        -----
        Must only be called after the browser session is closed. A video file
        that does not exist yet at rename time is skipped without error.
        """
        if not video_path:
            return None

        video = Path(video_path)
        self.sleep(self.settle_delay)

        if outcome is Outcome.FAILED:
            target = video.parent / failed_video_name(scenario_name, self.clock())
            renamed: list[Path] = []

            def rename() -> None:
                if not video.exists():
                    return
                video.rename(target)
                renamed.append(target)

            self._retry(rename)
            if renamed:
                logger.info("Video saved: %s", target.name)
                return target
            return None

        if outcome is Outcome.PASSED:

            def delete() -> None:
                if video.exists():
                    video.unlink()
                    logger.debug("Video deleted (test passed)")

            self._retry(delete)
            return None

        logger.debug("Video left untouched for %s outcome: %s", outcome.value, video.name)
        return None

    def capture_failure_screenshot(
        self, page: Any, scenario_name: str, reporter: Reporter | None = None
    ) -> Path | None:
        """Capture a full-page screenshot of a failed scenario.

        Parameters
        ----------
        page : Any
            Playwright Page still open at the failure point
        scenario_name : str
            Scenario name used in the screenshot file name
        reporter : Reporter | None
            Report collector to attach the image to, if any

        Returns
        -------
        Path | None
            Path of the written screenshot, or None if capture failed
        """
        if page is None:
            logger.warning("Could not capture screenshot: no page available")
            return None

        path = self.screenshots_dir / screenshot_name(scenario_name, self.clock())

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            image = page.screenshot(path=str(path), full_page=True)
        except Exception as e:
            logger.warning("Could not capture screenshot: %s", e)
            return None

        if reporter is not None:
            try:
                reporter.attach(image, PNG_MIME_TYPE)
            except Exception as e:
                logger.debug("Could not attach screenshot to report: %s", e)

        logger.info("Screenshot saved: %s", path)
        return path
