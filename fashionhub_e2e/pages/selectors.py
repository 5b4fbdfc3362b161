"""CSS selectors for the pages under test."""

LOGIN_PAGE = {
    "username_input": 'input[name="username"]',
    "password_input": 'input[name="password"]',
    "submit_button": 'button[type="submit"], input[type="submit"]',
    "error_message": ".error-message, .alert-danger",
    "success_indicator": '.user-menu, .dashboard, [data-testid="user-profile"]',
}

PULL_REQUEST_PAGE = {
    "row": ".js-navigation-item",
    "hover_card": '[data-hovercard-type="pull_request"]',
    "opened_by": ".opened-by",
    "author": ".opened-by a",
}

IGNORED_LINK_PREFIXES = ("javascript:", "#", "mailto:", "tel:")
