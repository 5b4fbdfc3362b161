"""Base page object shared by all pages."""

from __future__ import annotations

import logging
from typing import Any

from playwright.sync_api import expect

from fashionhub_e2e.constants import LONG_TIMEOUT_MS, NAVIGATION_TIMEOUT_MS

logger = logging.getLogger(__name__)


class BasePage:
    """Navigation and waiting helpers around a Playwright page.

    Parameters
    ----------
    page : Any
        Playwright Page owned by the current scenario
    """

    def __init__(self, page: Any) -> None:
        self.page = page

    def navigate(
        self,
        url: str,
        wait_until: str = "domcontentloaded",
        timeout: int = NAVIGATION_TIMEOUT_MS,
    ) -> Any:
        """Navigate to a URL and wait for the network to go idle.

        Parameters
        ----------
        url : str
            Absolute URL
        wait_until : str
            Playwright load state that ends the navigation
        timeout : int
            Navigation timeout in milliseconds

        Returns
        -------
        Any
            Playwright Response of the main document, or None
        """
        logger.info("Navigating to: %s", url)
        response = self.page.goto(url, wait_until=wait_until, timeout=timeout)
        self.page.wait_for_load_state("networkidle")
        logger.info("Successfully navigated to: %s", url, extra={"marker": "success"})
        return response

    def verify_element_visibility(
        self, should_be_visible: bool, locator: Any, timeout: int = LONG_TIMEOUT_MS
    ) -> None:
        if should_be_visible:
            expect(locator).to_be_visible(timeout=timeout)
            logger.debug("Element is visible: %s", locator)
        else:
            expect(locator).not_to_be_visible(timeout=timeout)
            logger.debug("Element is not visible: %s", locator)

    def wait(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)
        logger.debug("Waited %sms", ms)
