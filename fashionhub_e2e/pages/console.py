"""Page object capturing browser console output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fashionhub_e2e.config import EnvironmentConfig
from fashionhub_e2e.pages.base import BasePage
from fashionhub_e2e.utils import iso_timestamp, utc_now

logger = logging.getLogger(__name__)

PAGE_PATHS = {
    "home": "",
    "products": "products.html",
    "contact": "contact.html",
    "about": "about.html",
    "login": "login.html",
}


def page_url(config: EnvironmentConfig, page_name: str) -> str:
    """Resolve a named shop page to its URL; unknown names map to home."""
    return config.url_for(PAGE_PATHS.get(page_name.strip().lower(), ""))


@dataclass(frozen=True)
class ConsoleMessage:
    type: str
    text: str
    timestamp: str


class ConsolePage(BasePage):
    """Records console messages emitted while pages load."""

    def __init__(self, page: Any) -> None:
        super().__init__(page)
        self.console_errors: list[str] = []
        self.console_warnings: list[str] = []
        self.console_messages: list[ConsoleMessage] = []

    def setup_console_capture(self) -> None:
        """Reset captured messages and subscribe to console events."""
        self.console_errors = []
        self.console_warnings = []
        self.console_messages = []
        self.page.on("console", self._on_console)
        logger.info("Console message capture configured")

    def _on_console(self, message: Any) -> None:
        msg_type = message.type
        msg_text = message.text

        self.console_messages.append(
            ConsoleMessage(type=msg_type, text=msg_text, timestamp=iso_timestamp(utc_now()))
        )

        if msg_type == "error":
            self.console_errors.append(msg_text)
            logger.error("Console error detected: %s", msg_text)
        elif msg_type == "warning":
            self.console_warnings.append(msg_text)
            logger.warning("Console warning: %s", msg_text)

    def navigate_to_page(self, url: str, wait_ms: int = 1000) -> None:
        """Navigate and give late scripts time to log errors."""
        self.navigate(url)
        self.wait(wait_ms)

    @property
    def console_errors_count(self) -> int:
        return len(self.console_errors)

    def has_error_containing(self, keyword: str) -> bool:
        return any(keyword in error for error in self.console_errors)

    def log_console_errors(self) -> None:
        if not self.console_errors:
            logger.info("No console errors found", extra={"marker": "success"})
            return

        logger.error("Console errors detected (%s):", len(self.console_errors))
        for index, error in enumerate(self.console_errors, start=1):
            logger.error("  %s. %s", index, error)
