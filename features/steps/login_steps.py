import logging

from behave import given, then, when

from fashionhub_e2e.config import get_credentials
from fashionhub_e2e.pages import LoginPage

logger = logging.getLogger(__name__)

INVALID_USERNAME = "invaliduser"
INVALID_PASSWORD = "wrongpassword"


@given("the user is on the login page")
def step_on_login_page(context) -> None:
    context.login_page = LoginPage(context.page)
    context.login_page.navigate_to_login(context.env_config.base_url)


@when("the user enters valid credentials")
def step_enter_valid_credentials(context) -> None:
    credentials = get_credentials()
    logger.info("Using valid credentials from environment")
    context.login_page.fill_username(credentials.username)
    context.login_page.fill_password(credentials.password)


@when("the user enters invalid credentials")
def step_enter_invalid_credentials(context) -> None:
    logger.info("Using invalid credentials")
    context.login_page.fill_username(INVALID_USERNAME)
    context.login_page.fill_password(INVALID_PASSWORD)


@when("the user clicks the login button")
def step_click_login(context) -> None:
    context.login_page.click_login_button()


@then("the user should be logged in successfully")
def step_logged_in(context) -> None:
    assert context.login_page.is_login_successful(), "Expected user to be logged in successfully"


@then("the user should see an error message")
def step_sees_error(context) -> None:
    assert context.login_page.has_error_message(), (
        "Expected to see an error message for invalid credentials"
    )
    logger.info("Error displayed: %s", context.login_page.get_error_message())
