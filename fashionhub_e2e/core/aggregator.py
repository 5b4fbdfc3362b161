"""Run-level aggregation of scenario failures and artifact counts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from fashionhub_e2e.constants import (
    SCREENSHOT_EXTENSION,
    SCREENSHOTS_DIR,
    SEPARATOR_WIDTH,
    VIDEO_EXTENSION,
    VIDEOS_DIR,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutcomeRecord:
    """A failed scenario, recorded once and never modified."""

    name: str
    feature: str
    error: str | None
    timestamp: datetime
    duration: str


@dataclass(frozen=True)
class RunSummary:
    """Figures printed at the end of a run."""

    failed: int
    videos: int
    screenshots: int


def count_artifacts(directory: Path, extension: str) -> int:
    """Count files with an extension in a directory.

    Parameters
    ----------
    directory : Path
        Directory to scan (missing directories count as empty)
    extension : str
        Extension including the dot, e.g. ".webm"

    Returns
    -------
    int
        Number of matching files
    """
    directory = Path(directory)
    if not directory.is_dir():
        return 0
    return sum(1 for f in directory.iterdir() if f.is_file() and f.name.endswith(extension))


class RunContext:
    """State shared by all scenarios of one test run.

    Scenarios run sequentially, so the failure list has a single writer at a
    time and carries no lock.

    Parameters
    ----------
    environment : str
        Label printed in the artifacts summary ("CI" or "local")
    videos_dir : Path
        Directory holding kept videos
    screenshots_dir : Path
        Directory holding failure screenshots
    """

    def __init__(
        self,
        environment: str = "local",
        videos_dir: Path = VIDEOS_DIR,
        screenshots_dir: Path = SCREENSHOTS_DIR,
    ) -> None:
        self.environment = environment
        self.videos_dir = Path(videos_dir)
        self.screenshots_dir = Path(screenshots_dir)
        self._failures: list[OutcomeRecord] = []

    @property
    def failures(self) -> tuple[OutcomeRecord, ...]:
        """Failures recorded since the last summary."""
        return tuple(self._failures)

    def record_failure(self, record: OutcomeRecord) -> None:
        """Append a failed scenario to the run."""
        self._failures.append(record)
        logger.debug("Recorded failure %s (%s so far)", record.name, len(self._failures))

    def summarize(self, console: Console | None = None) -> RunSummary:
        """Print the failures and artifact counts, then clear the failures.

        Parameters
        ----------
        console : Console | None
            Console to print to, defaults to stdout

        Returns
        -------
        RunSummary
            Counts that were printed
        """
        if console is None:
            console = Console(highlight=False)

        rule = "=" * SEPARATOR_WIDTH
        console.print(f"\n{rule}")
        console.print("TEST EXECUTION SUMMARY")
        console.print(rule)

        failures = list(self._failures)

        if not failures:
            console.print("ALL TESTS PASSED! No failures detected.")
            console.print("No videos or screenshots saved (all tests passed)")
        else:
            console.print(f"FAILED TESTS: {len(failures)}")
            for index, record in enumerate(failures, start=1):
                console.print(f"\n{index}. {escape(record.name)}")
                console.print(f"   Feature: {escape(record.feature)}")
                console.print(f"   Duration: {record.duration}")
                console.print(f"   Time: {record.timestamp.astimezone().strftime('%H:%M:%S')}")

        videos = count_artifacts(self.videos_dir, VIDEO_EXTENSION)
        screenshots = count_artifacts(self.screenshots_dir, SCREENSHOT_EXTENSION)

        console.print(f"\nArtifacts Summary ({self.environment}):")
        console.print(f"Videos saved: {videos} (failures only)")
        console.print(f"Screenshots saved: {screenshots} (failures only)")

        if videos:
            console.print(f"Videos location: {self.videos_dir}/")
        if screenshots:
            console.print(f"Screenshots location: {self.screenshots_dir}/")

        console.print(f"{rule}\n")

        self._failures.clear()

        return RunSummary(failed=len(failures), videos=videos, screenshots=screenshots)
