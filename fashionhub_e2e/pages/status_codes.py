"""Page object for checking HTTP status codes of links."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from playwright.sync_api import Error as PlaywrightError

from fashionhub_e2e.constants import INSTANT_TIMEOUT_MS, MEDIUM_TIMEOUT_MS, SEPARATOR_WIDTH
from fashionhub_e2e.pages.base import BasePage
from fashionhub_e2e.pages.selectors import IGNORED_LINK_PREFIXES

logger = logging.getLogger(__name__)

EXTRACT_LINKS_SCRIPT = "() => Array.from(document.querySelectorAll('a[href]')).map((a) => a.href)"


def is_valid_status_code(status_code: int) -> bool:
    """200 or any 3xx."""
    return status_code == 200 or 300 <= status_code < 400


def is_4xx_status_code(status_code: int) -> bool:
    return 400 <= status_code < 500


@dataclass(frozen=True)
class StatusResult:
    """Outcome of loading one URL.

    A navigation error is recorded with status code 0 and ``error`` set.
    """

    url: str
    status_code: int
    status_text: str
    is_valid: bool
    is_4xx: bool
    error: bool = False

    @classmethod
    def from_status(cls, url: str, status_code: int, status_text: str = "") -> StatusResult:
        return cls(
            url=url,
            status_code=status_code,
            status_text=status_text,
            is_valid=is_valid_status_code(status_code),
            is_4xx=is_4xx_status_code(status_code),
        )

    @classmethod
    def from_error(cls, url: str, message: str) -> StatusResult:
        return cls(
            url=url, status_code=0, status_text=message, is_valid=False, is_4xx=False, error=True
        )


def filter_links(hrefs: list[str | None]) -> list[str]:
    """Drop script, anchor, mail and phone links and duplicates, keeping order."""
    links: list[str] = []
    seen: set[str] = set()

    for href in hrefs:
        if not href or href.startswith(IGNORED_LINK_PREFIXES) or href in seen:
            continue
        seen.add(href)
        links.append(href)

    return links


class StatusCodePage(BasePage):
    """Collects links from a page and checks each one's status code."""

    def __init__(self, page: Any) -> None:
        super().__init__(page)
        self.links: list[str] = []
        self.status_results: list[StatusResult] = []

    def setup_status_code_tracking(self) -> None:
        self.status_results = []
        logger.info("Status code tracking configured")

    def check_status_code(self, url: str) -> StatusResult:
        """Load a URL and record its main document status.

        Parameters
        ----------
        url : str
            URL to load

        Returns
        -------
        StatusResult
            Status of the response; navigation failures give status 0
        """
        logger.info("Checking status code for: %s", url)

        try:
            response = self.page.goto(url, wait_until="domcontentloaded", timeout=MEDIUM_TIMEOUT_MS)
        except PlaywrightError as e:
            logger.error("Failed to check %s: %s", url, e)
            return StatusResult.from_error(url, str(e))

        if response is None:
            logger.error("Failed to check %s: no response received", url)
            return StatusResult.from_error(url, "No response received")

        return StatusResult.from_status(url, response.status, response.status_text)

    def extract_all_links(self) -> list[str]:
        logger.info("Extracting all links from page...")
        self.links = filter_links(self.page.evaluate(EXTRACT_LINKS_SCRIPT))

        if self.links:
            logger.info("Links found:")
            for index, link in enumerate(self.links, start=1):
                logger.info("   %s. %s", index, link)

        return self.links

    def check_all_links_status_codes(self) -> list[StatusResult]:
        if not self.links:
            logger.warning("No links to check")
            return []

        logger.info("Checking status codes for %s links...", len(self.links))
        self.status_results = []

        for index, link in enumerate(self.links, start=1):
            logger.info("[%s/%s] Checking: %s", index, len(self.links), link)
            self.status_results.append(self.check_status_code(link))
            self.wait(INSTANT_TIMEOUT_MS)

        return self.status_results

    def invalid_status_codes(self) -> list[StatusResult]:
        return [result for result in self.status_results if not result.is_valid]

    def status_codes_4xx(self) -> list[StatusResult]:
        return [result for result in self.status_results if result.is_4xx]

    def log_status_results(self) -> None:
        if not self.status_results:
            logger.info("No status results to display")
            return

        valid = [result for result in self.status_results if result.is_valid]
        invalid = self.invalid_status_codes()
        errors_4xx = self.status_codes_4xx()

        logger.info("STATUS CODE RESULTS:", extra={"marker": "result"})
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("Valid (200/30x): %s", len(valid))
        logger.info("Invalid: %s", len(invalid))
        logger.info("4xx Errors: %s", len(errors_4xx))
        logger.info("=" * SEPARATOR_WIDTH)

        if invalid:
            logger.error("INVALID STATUS CODES:")
            for index, result in enumerate(invalid, start=1):
                logger.error("   %s. [%s] %s", index, result.status_code, result.url)

        if errors_4xx:
            logger.error("4XX STATUS CODES:")
            for index, result in enumerate(errors_4xx, start=1):
                logger.error("   %s. [%s] %s", index, result.status_code, result.url)
