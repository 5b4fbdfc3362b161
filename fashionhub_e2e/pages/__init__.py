"""Page objects for the FashionHub shop and GitHub."""

from fashionhub_e2e.pages.base import BasePage
from fashionhub_e2e.pages.console import ConsolePage, page_url
from fashionhub_e2e.pages.login import LoginPage
from fashionhub_e2e.pages.pull_requests import PullRequest, PullRequestPage
from fashionhub_e2e.pages.status_codes import StatusCodePage, StatusResult

__all__ = [
    "BasePage",
    "ConsolePage",
    "LoginPage",
    "PullRequest",
    "PullRequestPage",
    "StatusCodePage",
    "StatusResult",
    "page_url",
]
