"""Page object for the FashionHub login form."""

from __future__ import annotations

import logging
from typing import Any

from playwright.sync_api import Error as PlaywrightError

from fashionhub_e2e.constants import MEDIUM_TIMEOUT_MS, SHORT_TIMEOUT_MS
from fashionhub_e2e.pages.base import BasePage
from fashionhub_e2e.pages.selectors import LOGIN_PAGE
from fashionhub_e2e.utils import mask_sensitive

logger = logging.getLogger(__name__)

LOGIN_PATH = "login.html"


class LoginPage(BasePage):
    """Fills and submits the login form and inspects the result."""

    def __init__(self, page: Any) -> None:
        super().__init__(page)
        self.selectors = LOGIN_PAGE

    def navigate_to_login(self, base_url: str) -> None:
        self.navigate(f"{base_url}{LOGIN_PATH}")
        self.verify_element_visibility(
            True, self.page.locator(self.selectors["username_input"]), MEDIUM_TIMEOUT_MS
        )
        logger.info("Login page loaded", extra={"marker": "success"})

    def fill_username(self, username: str) -> None:
        logger.info("Entering username: %s", mask_sensitive(username))
        self.page.fill(self.selectors["username_input"], username)

    def fill_password(self, password: str) -> None:
        logger.info("Entering password: %s", mask_sensitive(password))
        self.page.fill(self.selectors["password_input"], password)

    def click_login_button(self) -> None:
        logger.info("Clicking login button")
        self.page.click(self.selectors["submit_button"])
        self.wait(SHORT_TIMEOUT_MS)

    def login(self, username: str, password: str) -> None:
        self.fill_username(username)
        self.fill_password(password)
        self.click_login_button()

    def _is_visible_within(self, selector: str, timeout: int) -> bool:
        try:
            self.page.locator(selector).first.wait_for(state="visible", timeout=timeout)
        except PlaywrightError:
            return False
        return True

    def is_login_successful(self) -> bool:
        """Check whether the login went through.

        Returns
        -------
        bool
            True when the browser left the login page or a logged-in
            indicator became visible within the medium timeout
        """
        try:
            current_url = self.page.url
            logger.info("Current URL after login: %s", current_url)

            success = LOGIN_PATH not in current_url or self._is_visible_within(
                self.selectors["success_indicator"], MEDIUM_TIMEOUT_MS
            )
        except PlaywrightError as e:
            logger.error("Error checking login success: %s", e)
            return False

        if success:
            logger.info("Login successful", extra={"marker": "success"})
        else:
            logger.error("Login failed")

        return success

    def has_error_message(self) -> bool:
        visible = self._is_visible_within(self.selectors["error_message"], SHORT_TIMEOUT_MS)
        if visible:
            logger.warning("Error message is visible")
        return visible

    def get_error_message(self) -> str | None:
        try:
            text = self.page.locator(self.selectors["error_message"]).first.text_content()
        except PlaywrightError as e:
            logger.error("Could not get error message: %s", e)
            return None

        logger.info("Error message: %s", text)
        return text
