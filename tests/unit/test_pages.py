"""Tests for page objects with a mocked Playwright page."""

import logging
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from fashionhub_e2e.config import EnvironmentConfig
from fashionhub_e2e.pages import ConsolePage, LoginPage, PullRequestPage, StatusCodePage, page_url
from fashionhub_e2e.pages.pull_requests import parse_pull_requests
from fashionhub_e2e.pages.status_codes import (
    StatusResult,
    filter_links,
    is_4xx_status_code,
    is_valid_status_code,
)

CONFIG = EnvironmentConfig(
    environment="production",
    name="Production",
    base_url="https://pocketaces2.github.io/fashionhub/",
    github_pulls_url="https://github.com/appwrite/appwrite/pulls",
)


class TestConsolePage:
    """Tests for console message capture."""

    def test_page_url_mapping(self) -> None:
        assert page_url(CONFIG, "About") == CONFIG.base_url + "about.html"
        assert page_url(CONFIG, "home") == CONFIG.base_url
        assert page_url(CONFIG, "unknown") == CONFIG.base_url

    def test_captures_errors_and_warnings(self) -> None:
        page = MagicMock()
        console_page = ConsolePage(page)
        console_page.setup_console_capture()

        handler = page.on.call_args.args[1]
        handler(MagicMock(type="error", text="Uncaught ReferenceError: x"))
        handler(MagicMock(type="warning", text="deprecated"))
        handler(MagicMock(type="log", text="hello"))

        assert console_page.console_errors_count == 1
        assert console_page.console_warnings == ["deprecated"]
        assert len(console_page.console_messages) == 3
        assert console_page.has_error_containing("ReferenceError")
        assert not console_page.has_error_containing("TypeError")


class TestLoginPage:
    def test_navigate_waits_for_login_form(self) -> None:
        page = MagicMock()
        with patch("fashionhub_e2e.pages.base.expect") as mock_expect:
            LoginPage(page).navigate_to_login(CONFIG.base_url)

        page.goto.assert_called_once()
        assert page.goto.call_args.args[0] == CONFIG.base_url + "login.html"
        page.locator.assert_called_once_with('input[name="username"]')
        mock_expect.assert_called_once_with(page.locator.return_value)
        mock_expect.return_value.to_be_visible.assert_called_once_with(timeout=10000)

    def test_verify_element_hidden(self) -> None:
        locator = MagicMock()
        with patch("fashionhub_e2e.pages.base.expect") as mock_expect:
            LoginPage(MagicMock()).verify_element_visibility(False, locator, timeout=500)

        mock_expect.return_value.not_to_be_visible.assert_called_once_with(timeout=500)

    def test_login_fills_and_submits(self) -> None:
        page = MagicMock()
        LoginPage(page).login("demouser", "fashion123")

        page.fill.assert_any_call('input[name="username"]', "demouser")
        page.fill.assert_any_call('input[name="password"]', "fashion123")
        page.click.assert_called_once()

    def test_success_when_url_left_login_page(self) -> None:
        page = MagicMock()
        page.url = "https://pocketaces2.github.io/fashionhub/account.html"
        assert LoginPage(page).is_login_successful() is True

    def test_failure_when_still_on_login_without_indicator(self) -> None:
        page = MagicMock()
        page.url = "https://pocketaces2.github.io/fashionhub/login.html"
        page.locator.return_value.first.wait_for.side_effect = PlaywrightError("Timeout")
        assert LoginPage(page).is_login_successful() is False

    def test_error_message_visibility(self) -> None:
        page = MagicMock()
        page.locator.return_value.first.text_content.return_value = "Invalid credentials"
        login_page = LoginPage(page)

        assert login_page.has_error_message() is True
        assert login_page.get_error_message() == "Invalid credentials"


class TestParsePullRequests:
    """Tests for turning listing rows into pull requests."""

    def test_number_from_opened_by_text(self) -> None:
        rows = [{"title": " Fix login ", "author": "alice", "opened_by": "#10345 opened 2 days ago"}]
        prs = parse_pull_requests(rows)
        assert prs[0].number == "10345"
        assert prs[0].title == "Fix login"

    def test_number_falls_back_to_row_position(self) -> None:
        rows = [
            {"title": "A", "author": "a", "opened_by": None},
            {"title": "B", "author": "b", "opened_by": "opened yesterday"},
        ]
        assert [pr.number for pr in parse_pull_requests(rows)] == ["1", "2"]

    def test_rows_without_title_or_author_are_dropped(self) -> None:
        rows = [
            {"title": None, "author": "a", "opened_by": "#1"},
            {"title": "B", "author": "", "opened_by": "#2"},
            {"title": "C", "author": "c", "opened_by": "#3"},
        ]
        assert [pr.title for pr in parse_pull_requests(rows)] == ["C"]

    def test_extract_uses_page_rows(self) -> None:
        page = MagicMock()
        page.evaluate.return_value = [{"title": "A", "author": "a", "opened_by": "#7"}]
        pr_page = PullRequestPage(page)

        prs = pr_page.extract_pull_requests()

        assert pr_page.pr_count == 1
        assert prs[0].number == "7"

    def test_count_propagates_timeout(self) -> None:
        page = MagicMock()
        page.wait_for_selector.side_effect = PlaywrightError("Timeout 10000ms exceeded")

        with pytest.raises(PlaywrightError):
            PullRequestPage(page).count_open_pull_requests()


class TestStatusCodes:
    """Tests for link filtering and status code checks."""

    @pytest.mark.parametrize(
        ("code", "valid", "is_4xx"),
        [(200, True, False), (301, True, False), (204, False, False), (404, False, True), (500, False, False)],
    )
    def test_classification(self, code: int, valid: bool, is_4xx: bool) -> None:
        assert is_valid_status_code(code) is valid
        assert is_4xx_status_code(code) is is_4xx

    def test_filter_links(self) -> None:
        hrefs = [
            "https://a/x",
            "javascript:void(0)",
            "#top",
            "mailto:me@a",
            "tel:123",
            None,
            "https://a/x",
            "https://a/y",
        ]
        assert filter_links(hrefs) == ["https://a/x", "https://a/y"]

    def test_check_status_code_reads_response(self) -> None:
        page = MagicMock()
        page.goto.return_value = MagicMock(status=404, status_text="Not Found")

        result = StatusCodePage(page).check_status_code("https://a/missing")

        assert result == StatusResult.from_status("https://a/missing", 404, "Not Found")
        assert result.is_4xx

    def test_navigation_error_gives_status_zero(self, caplog: pytest.LogCaptureFixture) -> None:
        page = MagicMock()
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

        with caplog.at_level(logging.ERROR):
            result = StatusCodePage(page).check_status_code("https://nowhere/")

        assert result.status_code == 0
        assert result.error is True
        assert not result.is_valid

    def test_check_all_links(self) -> None:
        page = MagicMock()
        page.evaluate.return_value = ["https://a/ok", "https://a/missing"]
        page.goto.side_effect = [
            MagicMock(status=200, status_text="OK"),
            MagicMock(status=404, status_text="Not Found"),
        ]
        status_page = StatusCodePage(page)

        status_page.extract_all_links()
        status_page.check_all_links_status_codes()

        assert [r.url for r in status_page.invalid_status_codes()] == ["https://a/missing"]
        assert [r.status_code for r in status_page.status_codes_4xx()] == [404]
