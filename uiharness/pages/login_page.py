"""Login page object"""
import re
from typing import Dict, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from uiharness.pages.toolkit import InteractionToolkit

PAGE_URL = '/'
TODOS_URL = '/todos'

SELECTORS = {
    'username_input': '[data-testid="login-username"]',
    'password_input': '[data-testid="login-password"]',
    'login_button': '[data-testid="login-button"]',
    'error_message': '[data-testid="error-message"]',
    'register_tab': '[data-testid="tab-register"]',
    'login_tab': '[data-testid="tab-login"]',
    'page_title': 'h1',
    'loading_spinner': '[data-testid="loading-spinner"]',
    'todos_header': '[data-testid="todos-header"]',
}

# JS run in the page to switch off HTML5 validation on the login form
DISABLE_VALIDATION_SCRIPT = """() => {
    const form = document.querySelector('form');
    if (form) {
        form.setAttribute('novalidate', 'true');
    }
    document.querySelectorAll('form input[required]').forEach(input => input.removeAttribute('required'));
}"""


class LoginPage:
    """Semantic actions on the login screen"""

    selectors = SELECTORS

    def __init__(self, toolkit: InteractionToolkit):
        self.toolkit = toolkit
        self.logger = toolkit.logger

    def navigate(self) -> None:
        self.toolkit.navigate_to(PAGE_URL)
        self.toolkit.wait_for_page_load()

    def is_loaded(self) -> bool:
        """Login tab, both inputs and the button are visible within the timeout"""
        loaded = self.toolkit.wait_for_all_visible([
            (SELECTORS['login_tab'], 'Login Tab'),
            (SELECTORS['username_input'], 'Username Input'),
            (SELECTORS['password_input'], 'Password Input'),
            (SELECTORS['login_button'], 'Login Button'),
        ])
        if not loaded:
            self.logger.error('Login page is not loaded correctly')
        return loaded

    def enter_username(self, username: str) -> None:
        self.toolkit.fill(SELECTORS['username_input'], username, 'Username Input')

    def enter_password(self, password: str) -> None:
        self.toolkit.fill(SELECTORS['password_input'], password, 'Password Input', secret=True)

    def click_login_button(self) -> None:
        self.toolkit.click(SELECTORS['login_button'], 'Login Button')

    def click_register_tab(self) -> None:
        self.toolkit.click(SELECTORS['register_tab'], 'Register Tab')

    def click_login_tab(self) -> None:
        self.toolkit.click(SELECTORS['login_tab'], 'Login Tab')

    def login(self, username: str, password: str) -> None:
        self.logger.info(f"Attempting to login with username: {username}")
        self.enter_username(username)
        self.enter_password(password)
        self.click_login_button()

    def wait_for_login_to_complete(self) -> None:
        """Wait out the loading spinner; fast responses may never show it"""
        try:
            self.toolkit.wait_visible(SELECTORS['loading_spinner'], 'Loading Spinner', timeout=2000)
            self.toolkit.wait_hidden(SELECTORS['loading_spinner'], 'Loading Spinner', timeout=10000)
        except PlaywrightTimeoutError:
            self.logger.debug('Loading spinner not found or disappeared quickly')

    def login_and_wait(self, username: str, password: str) -> None:
        self.login(username, password)
        self.wait_for_login_to_complete()

    def get_error_message(self) -> Optional[str]:
        try:
            self.toolkit.wait_visible(SELECTORS['error_message'], 'Error Message', timeout=5000)
            return self.toolkit.text(SELECTORS['error_message'], 'Error Message')
        except PlaywrightTimeoutError:
            self.logger.debug('No error message found')
            return None

    def is_error_message_displayed(self) -> bool:
        return self.toolkit.is_visible(SELECTORS['error_message'], 'Error Message')

    def assert_error_message_displayed(self) -> None:
        self.toolkit.assert_visible(SELECTORS['error_message'], 'Error Message')

    def assert_error_message(self, expected: str) -> None:
        self.toolkit.assert_text(SELECTORS['error_message'], expected, 'Error Message')

    def clear_username(self) -> None:
        self.toolkit.clear_and_fill(SELECTORS['username_input'], '', 'Username Input')

    def clear_password(self) -> None:
        self.toolkit.clear_and_fill(SELECTORS['password_input'], '', 'Password Input')

    def clear_login_form(self) -> None:
        self.clear_username()
        self.clear_password()

    def get_title(self) -> Optional[str]:
        return self.toolkit.text(SELECTORS['page_title'], 'Page Title')

    def is_login_button_enabled(self) -> bool:
        return self.toolkit.is_enabled(SELECTORS['login_button'])

    def is_register_tab_visible(self) -> bool:
        return self.toolkit.is_visible(SELECTORS['register_tab'], 'Register Tab')

    def is_login_tab_visible(self) -> bool:
        return self.toolkit.is_visible(SELECTORS['login_tab'], 'Login Tab')

    def get_form_values(self) -> Dict[str, str]:
        return {
            'username': self.toolkit.input_value(SELECTORS['username_input']),
            'password': self.toolkit.input_value(SELECTORS['password_input']),
        }

    def disable_native_validation(self) -> None:
        """Let application-level validation messages show instead of the browser's"""
        self.logger.info('Disabling native HTML5 form validation.')
        self.toolkit.page.evaluate(DISABLE_VALIDATION_SCRIPT)

    def assert_redirect(self, expected_url: str, timeout: int = 10000) -> None:
        """Wait for a redirect whose URL contains expected_url"""
        self.logger.info(f"Asserting redirect to: {expected_url}")
        self.toolkit.wait_for_url(re.compile(re.escape(expected_url)), timeout=timeout)
        current_url = self.toolkit.current_url()
        if expected_url not in current_url:
            raise AssertionError(f'Expected URL to contain "{expected_url}", but got "{current_url}"')

    def assert_todos_header(self, expected_text: str = 'My Tasks') -> None:
        self.toolkit.assert_exact_text(SELECTORS['todos_header'], expected_text, 'Todos Header')
