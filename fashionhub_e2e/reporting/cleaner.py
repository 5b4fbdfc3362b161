"""Removal of videos, screenshots, reports and logs between runs."""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from fashionhub_e2e.constants import (
    HTML_REPORTS_DIR,
    JSON_REPORTS_DIR,
    SCREENSHOTS_DIR,
    TEST_RESULTS_DIR,
    VIDEOS_DIR,
)
from fashionhub_e2e.utils import format_bytes

logger = logging.getLogger(__name__)

VIDEO_PATTERN = re.compile(r"\.(webm|mp4)$")
SCREENSHOT_PATTERN = re.compile(r"\.(png|jpg|jpeg)$")
JSON_PATTERN = re.compile(r"\.json$")
LOG_PATTERN = re.compile(r"\.log$")

PROTECTED_FILES = {".gitkeep", ".gitignore", ".DS_Store"}

REPORT_KINDS = ("json", "html")


@dataclass
class CleanResult:
    count: int = 0
    size: int = 0

    def __add__(self, other: CleanResult) -> CleanResult:
        return CleanResult(self.count + other.count, self.size + other.size)


def is_protected(name: str) -> bool:
    """Hidden files and READMEs are never deleted."""
    return name in PROTECTED_FILES or name.startswith(".") or name.lower().startswith("readme")


class ArtifactCleaner:
    """Delete test artifacts while keeping the directory layout intact.

    Parameters
    ----------
    root : Path
        Project root, never cleaned itself
    console : Console | None
        Console receiving progress lines, defaults to stdout
    """

    def __init__(self, root: Path | None = None, console: Console | None = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()
        self.console = console or Console(highlight=False)

    def _path(self, relative: Path) -> Path:
        return self.root / relative

    def clean_directory(
        self,
        directory: Path,
        pattern: re.Pattern[str] | None = None,
        keep_last: int | None = None,
    ) -> CleanResult:
        """Delete the files of one directory.

        Sub-directories and protected files are left alone. A missing
        directory is created and counts as empty.

        Parameters
        ----------
        directory : Path
            Directory to clean
        pattern : re.Pattern[str] | None
            Only file names matching this pattern are deleted
        keep_last : int | None
            Keep the N most recently modified matching files

        Returns
        -------
        CleanResult
            Number of deleted files and bytes freed
        """
        directory = Path(directory)

        if directory.resolve() == self.root.resolve():
            self.console.print("  SAFETY: Refusing to clean root directory")
            logger.warning("Refusing to clean project root %s", directory)
            return CleanResult()

        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            self.console.print(f"  Directory created: {directory.name}")
            return CleanResult()

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            self.console.print(f"  Cannot read directory: {e}")
            return CleanResult()

        candidates = [
            entry
            for entry in entries
            if entry.is_file()
            and not is_protected(entry.name)
            and (pattern is None or pattern.search(entry.name))
        ]

        if keep_last is not None and len(candidates) > keep_last:
            candidates.sort(key=lambda entry: entry.stat().st_mtime, reverse=True)
            candidates = candidates[keep_last:]
        elif keep_last is not None:
            candidates = []

        if not candidates:
            self.console.print("  Directory is already empty")
            return CleanResult()

        result = CleanResult()
        for entry in candidates:
            try:
                size = entry.stat().st_size
                entry.unlink()
            except OSError as e:
                self.console.print(f"  Could not delete {entry.name}: {e}")
                continue
            result.count += 1
            result.size += size

        logger.debug("Deleted %s files from %s", result.count, directory)
        return result

    def clean(
        self,
        videos_only: bool = False,
        screenshots_only: bool = False,
        reports_only: bool = False,
        keep_last: int | None = None,
    ) -> CleanResult:
        """Clean artifacts and print a summary.

        Without flags everything is cleaned, including the ``.log`` files at
        the top of ``test-results``.

        Parameters
        ----------
        videos_only : bool
            Only delete recorded videos
        screenshots_only : bool
            Only delete screenshots
        reports_only : bool
            Only delete JSON and HTML reports
        keep_last : int | None
            Keep the N newest JSON reports

        Returns
        -------
        CleanResult
            Totals over every cleaned directory
        """
        self.console.print("Cleaning test artifacts...\n")
        total = CleanResult()

        if not screenshots_only and not reports_only:
            self.console.print("Cleaning videos...")
            result = self.clean_directory(self._path(VIDEOS_DIR), VIDEO_PATTERN)
            if result.count:
                self.console.print(f"  Deleted {result.count} video(s) ({format_bytes(result.size)})")
            total += result

        if not videos_only and not reports_only:
            self.console.print("Cleaning screenshots...")
            result = self.clean_directory(self._path(SCREENSHOTS_DIR), SCREENSHOT_PATTERN)
            if result.count:
                self.console.print(
                    f"  Deleted {result.count} screenshot(s) ({format_bytes(result.size)})"
                )
            total += result

        if not videos_only and not screenshots_only:
            self.console.print("Cleaning reports...")
            result = self.clean_directory(self._path(JSON_REPORTS_DIR), JSON_PATTERN, keep_last)
            if result.count and keep_last is not None:
                self.console.print(
                    f"  Deleted {result.count} JSON report(s) (kept last {keep_last})"
                )
            elif result.count:
                self.console.print(
                    f"  Deleted {result.count} JSON report(s) ({format_bytes(result.size)})"
                )
            total += result

            result = self.clean_directory(self._path(HTML_REPORTS_DIR))
            if result.count:
                self.console.print(
                    f"  Deleted {result.count} HTML report(s) ({format_bytes(result.size)})"
                )
            total += result

        if not videos_only and not screenshots_only and not reports_only:
            self.console.print("Cleaning logs...")
            result = self.clean_directory(self._path(TEST_RESULTS_DIR), LOG_PATTERN)
            if result.count:
                self.console.print(
                    f"  Deleted {result.count} log file(s) ({format_bytes(result.size)})"
                )
            total += result

        rule = "-" * 60
        self.console.print(rule)
        if total.count == 0:
            self.console.print("Nothing to clean - all directories are empty or don't exist")
        else:
            self.console.print("Cleanup complete!")
            self.console.print(f"   Total files deleted: {total.count}")
            self.console.print(f"   Total space freed: {format_bytes(total.size)}")
        self.console.print(rule)

        return total

    def clean_reports(self, kind: str | None = None) -> int:
        """Empty the report directories, keeping the directories themselves.

        Parameters
        ----------
        kind : str | None
            "json" or "html" to clean one directory, None for both

        Returns
        -------
        int
            Number of removed entries (files and report folders)

        Raises
        ------
        ValueError
            If ``kind`` is not "json", "html" or None
        """
        if kind is not None and kind not in REPORT_KINDS:
            raise ValueError(f"Unknown report kind: {kind}. Use one of: {', '.join(REPORT_KINDS)}")

        directories = {"json": JSON_REPORTS_DIR, "html": HTML_REPORTS_DIR}
        kinds = [kind] if kind else list(REPORT_KINDS)
        removed = 0

        for name in kinds:
            directory = self._path(directories[name])
            if not directory.exists():
                self.console.print(f"Directory {directory} doesn't exist, creating it...")
                directory.mkdir(parents=True, exist_ok=True)
                continue

            entries = list(directory.iterdir())
            for entry in entries:
                try:
                    if entry.is_dir():
                        shutil.rmtree(entry)
                    else:
                        entry.unlink()
                except OSError as e:
                    logger.error("Error cleaning %s: %s", entry, e)
                    continue
                removed += 1

            self.console.print(f"Cleaned {len(entries)} items from {directory}")

        self.console.print("Reports cleaned successfully!")
        return removed
