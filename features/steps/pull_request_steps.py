import logging

from behave import given, then, when

from fashionhub_e2e.constants import SEPARATOR_WIDTH
from fashionhub_e2e.pages import PullRequestPage

logger = logging.getLogger(__name__)


@given("the user is on the GitHub repository pulls page")
def step_on_pulls_page(context) -> None:
    context.pull_request_page = PullRequestPage(context.page)
    context.pull_request_page.navigate_to_github_prs(context.env_config.github_pulls_url)


@when("the user counts the open pull requests")
def step_count_prs(context) -> None:
    context.pr_count = context.pull_request_page.count_open_pull_requests()


@when("the user extracts all open pull requests")
def step_extract_prs(context) -> None:
    context.pull_request_page.extract_pull_requests()


@then("the system should display the number of open PRs")
def step_display_pr_count(context) -> None:
    count = context.pull_request_page.pr_count
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("TOTAL OPEN PULL REQUESTS: %s", count)
    logger.info("=" * SEPARATOR_WIDTH)
    assert count >= 0, "PR count should be a number"


@then("the number of open PRs should be greater than {min_count:d}")
def step_pr_count_above(context, min_count: int) -> None:
    count = context.pull_request_page.pr_count
    assert count > min_count, f"Expected at least {min_count} open PR(s), but found {count}"


@then("the system should list all open PR titles")
def step_list_pr_titles(context) -> None:
    assert context.pull_request_page.pull_requests, "Should have at least one PR"
    context.pull_request_page.display_pull_requests()


@then("each PR should have a title and author")
def step_prs_have_title_and_author(context) -> None:
    prs = context.pull_request_page.pull_requests
    assert prs, "Should have PRs to validate"
    for index, pr in enumerate(prs, start=1):
        assert pr.title, f"PR {index} should have a title"
        assert pr.author, f"PR {index} should have an author"
