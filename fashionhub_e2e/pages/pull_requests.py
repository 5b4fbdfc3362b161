"""Page object for a GitHub pull request listing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from fashionhub_e2e.constants import ACTION_TIMEOUT_MS, MEDIUM_TIMEOUT_MS, SEPARATOR_WIDTH
from fashionhub_e2e.pages.base import BasePage
from fashionhub_e2e.pages.selectors import PULL_REQUEST_PAGE

logger = logging.getLogger(__name__)

EXTRACT_ROWS_SCRIPT = """
(selectors) => Array.from(document.querySelectorAll(selectors.row)).map((row) => {
  const title = row.querySelector(selectors.hover_card);
  const author = row.querySelector(selectors.author);
  const openedBy = row.querySelector(selectors.opened_by);
  return {
    title: title ? title.textContent.trim() : null,
    author: author ? author.textContent.trim() : null,
    opened_by: openedBy ? openedBy.textContent : null,
  };
})
"""

PR_NUMBER = re.compile(r"#(\d+)")


@dataclass(frozen=True)
class PullRequest:
    number: str
    title: str
    author: str


def parse_pull_requests(rows: list[dict[str, Any]]) -> list[PullRequest]:
    """Turn raw listing rows into pull requests.

    Parameters
    ----------
    rows : list[dict[str, Any]]
        Rows with ``title``, ``author`` and ``opened_by`` text, any of which
        may be None

    Returns
    -------
    list[PullRequest]
        Rows that have both a title and an author. The number is read from
        ``#<digits>`` in the "opened by" text, falling back to the 1-based
        row position.
    """
    pull_requests = []

    for index, row in enumerate(rows, start=1):
        title = (row.get("title") or "").strip()
        author = (row.get("author") or "").strip()
        if not title or not author:
            continue

        match = PR_NUMBER.search(row.get("opened_by") or "")
        number = match.group(1) if match else str(index)
        pull_requests.append(PullRequest(number=number, title=title, author=author))

    return pull_requests


class PullRequestPage(BasePage):
    """Counts and extracts open pull requests."""

    def __init__(self, page: Any) -> None:
        super().__init__(page)
        self.selectors = PULL_REQUEST_PAGE
        self.pull_requests: list[PullRequest] = []
        self.pr_count = 0

    def navigate_to_github_prs(self, repo_url: str) -> None:
        self.navigate(repo_url, wait_until="networkidle", timeout=ACTION_TIMEOUT_MS)
        logger.info("GitHub PR page loaded", extra={"marker": "success"})

    def _wait_for_rows(self) -> None:
        self.page.wait_for_selector(self.selectors["hover_card"], timeout=MEDIUM_TIMEOUT_MS)

    def count_open_pull_requests(self) -> int:
        """Count listing rows on the current page.

        Raises
        ------
        playwright.sync_api.Error
            If no pull request link appears within the medium timeout
        """
        try:
            self._wait_for_rows()
            self.pr_count = self.page.locator(self.selectors["row"]).count()
        except Exception as e:
            logger.error("Failed to count PRs: %s", e)
            raise

        logger.info("Found %s open pull requests", self.pr_count, extra={"marker": "success"})
        return self.pr_count

    def extract_pull_requests(self) -> list[PullRequest]:
        """Extract number, title and author of every listed pull request."""
        try:
            self._wait_for_rows()
            rows = self.page.evaluate(EXTRACT_ROWS_SCRIPT, self.selectors)
        except Exception as e:
            logger.error("Failed to extract PRs: %s", e)
            raise

        self.pull_requests = parse_pull_requests(rows)
        self.pr_count = len(self.pull_requests)
        logger.info("Extracted %s pull requests", self.pr_count, extra={"marker": "success"})
        return self.pull_requests

    def display_pull_requests(self) -> None:
        if not self.pull_requests:
            logger.warning("No pull requests to display")
            return

        rule = "=" * SEPARATOR_WIDTH
        print(f"\n{rule}")
        print(f"OPEN PULL REQUESTS (Total: {len(self.pull_requests)})")
        print(rule)
        for index, pr in enumerate(self.pull_requests, start=1):
            print(f"{index}. PR #{pr.number}: {pr.title}\n   Author: {pr.author}")
        print(f"{rule}\n")
