"""Global constants for the FashionHub end-to-end suite.

Browser timeouts are expressed in milliseconds because Playwright takes
milliseconds everywhere. Delays slept by Python code are in seconds.
"""

from pathlib import Path

INSTANT_TIMEOUT_MS = 500
"""Pause between consecutive link checks in a status code sweep."""

SHORT_TIMEOUT_MS = 1000
"""Short wait after form submission and before touching a recorded video."""

MEDIUM_TIMEOUT_MS = 10000
"""Timeout for single-page navigations and selector waits."""

ACTION_TIMEOUT_MS = 30000
"""Timeout for slow third-party pages such as the GitHub pull request list."""

LONG_TIMEOUT_MS = 60000
"""Timeout for element visibility assertions and scenario cleanup."""

NAVIGATION_TIMEOUT_MS = ACTION_TIMEOUT_MS

VIDEO_SETTLE_DELAY_SECONDS = SHORT_TIMEOUT_MS / 1000
"""Delay before renaming or deleting a video.

Playwright keeps writing the video file for a moment after the context
closes.
"""

FILE_OPERATION_RETRIES = 3

FILE_OPERATION_RETRY_DELAY_SECONDS = 0.5

CLEANUP_TIMEOUT_SECONDS = LONG_TIMEOUT_MS / 1000
"""Budget for closing the session and handling artifacts after a scenario."""

MAX_ARTIFACT_NAME_LENGTH = 100

VIDEO_SIZE = {"width": 1280, "height": 720}

VIEWPORT = {"width": 1280, "height": 720}

CI_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
]
"""Chromium flags for headless runs inside containers and CI workers."""

TEST_RESULTS_DIR = Path("test-results")

VIDEOS_DIR = TEST_RESULTS_DIR / "videos"

SCREENSHOTS_DIR = TEST_RESULTS_DIR / "screenshots"

REPORTS_DIR = Path("reports")

JSON_REPORTS_DIR = REPORTS_DIR / "json"

HTML_REPORTS_DIR = REPORTS_DIR / "html"

VIDEO_EXTENSION = ".webm"

SCREENSHOT_EXTENSION = ".png"

PNG_MIME_TYPE = "image/png"

REPORT_INDEX_NAME = "Automation-report.html"

REPORT_INFO_NAME = "report-info.txt"

SEPARATOR_WIDTH = 80
