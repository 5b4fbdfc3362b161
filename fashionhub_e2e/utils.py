"""Utility functions for the FashionHub suite."""

import logging
import re
import time
from collections.abc import Callable
from datetime import datetime, timezone

from fashionhub_e2e.constants import (
    FILE_OPERATION_RETRIES,
    FILE_OPERATION_RETRY_DELAY_SECONDS,
    MAX_ARTIFACT_NAME_LENGTH,
    SCREENSHOT_EXTENSION,
    VIDEO_EXTENSION,
)

logger = logging.getLogger(__name__)

ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
PUNCTUATION = re.compile(r"[^\w\s.\-]")
WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_artifact_name(name: str) -> str:
    """Sanitize a scenario name for use as an artifact file name.

    Applies file name rules:
    - Remove characters illegal on common filesystems (< > : " / \\ | ? *)
    - Remove remaining punctuation other than dots and dashes
    - Collapse whitespace runs into a single underscore
    - Limit to 100 characters

    Parameters
    ----------
    name : str
        Scenario name to sanitize

    Returns
    -------
    str
        Sanitized name without extension or suffix
    """
    name = ILLEGAL_FILENAME_CHARS.sub("", name)
    name = PUNCTUATION.sub("", name)
    name = WHITESPACE_RUN.sub("_", name.strip())
    return name[:MAX_ARTIFACT_NAME_LENGTH]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def iso_timestamp(now: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision.

    Parameters
    ----------
    now : datetime
        Timestamp to format

    Returns
    -------
    str
        Timestamp such as ``2026-10-19T14:03:07.123Z``
    """
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def failed_video_name(scenario_name: str, now: datetime) -> str:
    """Build the file name a failed scenario's video is renamed to.

    Parameters
    ----------
    scenario_name : str
        Scenario name
    now : datetime
        Time of the rename

    Returns
    -------
    str
        Name like ``Login_fails-FAILED-14-03-07.webm``
    """
    time_of_day = now.astimezone(timezone.utc).strftime("%H-%M-%S")
    return f"{sanitize_artifact_name(scenario_name)}-FAILED-{time_of_day}{VIDEO_EXTENSION}"


def screenshot_name(scenario_name: str, now: datetime) -> str:
    """Build the file name of a failure screenshot.

    Parameters
    ----------
    scenario_name : str
        Scenario name
    now : datetime
        Capture time

    Returns
    -------
    str
        Name like ``failure-login-fails-2026-10-19T14-03-07-123Z.png``
    """
    slug = re.sub(r"[^a-z0-9]", "-", scenario_name.lower())
    stamp = re.sub(r"[:.]", "-", iso_timestamp(now))
    return f"failure-{slug}-{stamp}{SCREENSHOT_EXTENSION}"


def with_retry(
    operation: Callable[[], object],
    retries: int = FILE_OPERATION_RETRIES,
    delay: float = FILE_OPERATION_RETRY_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Run a filesystem operation, retrying any failure with a fixed delay.

    Parameters
    ----------
    operation : Callable[[], object]
        Operation to run (rename, delete)
    retries : int
        Total number of attempts
    delay : float
        Seconds to wait between attempts
    sleep : Callable[[float], None]
        Sleep function, replaceable in tests

    Returns
    -------
    bool
        True if an attempt succeeded, False once every attempt failed
    """
    for attempt in range(1, retries + 1):
        try:
            operation()
            return True
        except Exception as e:
            if attempt == retries:
                logger.warning("File operation failed after %s attempts: %s", retries, e)
                return False
            sleep(delay)

    return False


def format_duration(seconds: float | None) -> str:
    """Format a scenario duration in milliseconds.

    Parameters
    ----------
    seconds : float | None
        Duration reported by behave

    Returns
    -------
    str
        Duration such as ``1532ms``, or ``Unknown`` when not available
    """
    if not seconds:
        return "Unknown"
    return f"{seconds * 1000:.0f}ms"


def format_bytes(size: int) -> str:
    """Format a byte count for humans.

    Parameters
    ----------
    size : int
        Number of bytes

    Returns
    -------
    str
        Size such as ``0 Bytes``, ``512 Bytes`` or ``1.5 MB``
    """
    if size == 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1

    return f"{round(value, 2):g} {units[index]}"


def mask_sensitive(value: str | None) -> str:
    """Mask a credential for logging, keeping the first two characters."""
    if not value or len(value) < 3:
        return "***"
    return value[:2] + "*" * (len(value) - 2)
