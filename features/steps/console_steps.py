from behave import given, then, when

from fashionhub_e2e.pages import ConsolePage, page_url


@given("the browser captures console messages")
def step_capture_console(context) -> None:
    context.console_page = ConsolePage(context.page)
    context.console_page.setup_console_capture()


@when("the user navigates to the home page")
def step_navigate_home(context) -> None:
    context.console_page.navigate_to_page(page_url(context.env_config, "home"))


@when("the user navigates to the about page")
def step_navigate_about(context) -> None:
    context.console_page.navigate_to_page(page_url(context.env_config, "about"))


@when('the user navigates to the "{page_name}" page')
def step_navigate_named_page(context, page_name: str) -> None:
    context.console_page.navigate_to_page(page_url(context.env_config, page_name))


@then("the page should have no console errors")
def step_no_console_errors(context) -> None:
    count = context.console_page.console_errors_count
    if count:
        context.console_page.log_console_errors()
    assert count == 0, f"Expected no console errors but found {count}"


@then("the page should have console errors")
def step_has_console_errors(context) -> None:
    count = context.console_page.console_errors_count
    assert count > 0, "Expected console errors to be present"
    context.console_page.log_console_errors()


@then('the console errors should contain "{first}" or "{second}"')
def step_console_errors_contain(context, first: str, second: str) -> None:
    console_page = context.console_page
    found = console_page.has_error_containing(first) or console_page.has_error_containing(second)
    assert found, (
        f'Expected console errors to contain "{first}" or "{second}". '
        f"Found: {', '.join(console_page.console_errors)}"
    )
