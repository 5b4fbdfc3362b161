import logging

from behave import given, then, when

from fashionhub_e2e.pages import StatusCodePage
from fashionhub_e2e.pages.status_codes import is_valid_status_code

logger = logging.getLogger(__name__)


@given("the browser is ready for status code checking")
def step_ready_for_status_codes(context) -> None:
    context.status_code_page = StatusCodePage(context.page)
    context.status_code_page.setup_status_code_tracking()


@when("the user navigates to the FashionHub home page")
def step_navigate_fashionhub_home(context) -> None:
    context.status_code_page.navigate(context.env_config.base_url)


@when("the user extracts all links from the page")
def step_extract_links(context) -> None:
    context.status_code_page.extract_all_links()


@when('the user checks the status code for "{url}"')
def step_check_status_code(context, url: str) -> None:
    result = context.status_code_page.check_status_code(url)
    context.status_code_page.status_results = [result]


@then("all links should return valid status codes")
def step_all_links_valid(context) -> None:
    page = context.status_code_page
    page.check_all_links_status_codes()
    page.log_status_results()
    invalid = page.invalid_status_codes()
    assert not invalid, (
        f"Expected all links to return 200 or 30x, but found {len(invalid)} invalid status codes"
    )


@then("no links should return 40x status codes")
def step_no_4xx(context) -> None:
    errors_4xx = context.status_code_page.status_codes_4xx()
    assert not errors_4xx, f"Expected no 40x status codes, but found {len(errors_4xx)}"


@then("the status code should be 200 or 30x")
def step_status_code_valid(context) -> None:
    results = context.status_code_page.status_results
    assert results, "No status code was checked"
    result = results[0]
    logger.info("Status code: %s - Valid: %s", result.status_code, is_valid_status_code(result.status_code))
    assert is_valid_status_code(result.status_code), (
        f"Expected status code 200 or 30x but got {result.status_code} for {result.url}"
    )


@then("the status code should be {expected:d}")
def step_status_code_equals(context, expected: int) -> None:
    results = context.status_code_page.status_results
    assert results, "No status code was checked"
    result = results[0]
    logger.info("Expected: %s, Got: %s", expected, result.status_code)
    assert result.status_code == expected, (
        f"Expected status code {expected} but got {result.status_code} for {result.url}"
    )
