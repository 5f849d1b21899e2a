"""
Interaction toolkit
Low-level DOM operations shared by every page object. Pages hold a toolkit
and delegate to it, so logging and timeout defaults stay in one place.
"""
import logging
import re
from typing import Optional, Pattern, Union

from playwright.sync_api import Locator, Page, TimeoutError as PlaywrightTimeoutError, expect

from uiharness.utils.logger import setup_logger

DEFAULT_TIMEOUT = 30000

Target = Union[str, Locator]


class InteractionToolkit:
    """Logged, timeout-bounded wrappers around a Playwright page"""

    def __init__(self, page: Page, base_url: str = '', timeout: int = DEFAULT_TIMEOUT,
                 logger: Optional[logging.Logger] = None):
        self.page = page
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.logger = logger or setup_logger(__name__)

    def locator(self, target: Target) -> Locator:
        return self.page.locator(target) if isinstance(target, str) else target

    @staticmethod
    def _name(target: Target, name: Optional[str]) -> str:
        if name:
            return name
        return target if isinstance(target, str) else 'Locator'

    # Navigation

    def resolve_url(self, url: str) -> str:
        if url.startswith('http://') or url.startswith('https://'):
            return url
        if not url.startswith('/'):
            url = f'/{url}'
        return f"{self.base_url}{url}"

    def navigate_to(self, url: str) -> None:
        full_url = self.resolve_url(url)
        self.logger.info(f"Navigating to: {full_url}")
        self.page.goto(full_url, wait_until='domcontentloaded')

    def wait_for_page_load(self) -> None:
        self.logger.debug('Waiting for page to load...')
        self.page.wait_for_load_state('domcontentloaded')
        self.page.wait_for_load_state('networkidle')

    def current_url(self) -> str:
        url = self.page.url
        self.logger.debug(f"Current URL: {url}")
        return url

    def title(self) -> str:
        title = self.page.title()
        self.logger.debug(f"Page title: {title}")
        return title

    def wait_for_url(self, pattern: Union[str, Pattern], timeout: Optional[int] = None) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(re.escape(pattern))
        self.logger.info(f"Waiting for URL matching: {pattern.pattern}")
        self.page.wait_for_url(pattern, timeout=timeout or self.timeout)

    def reload(self) -> None:
        self.logger.info('Reloading page...')
        self.page.reload(wait_until='domcontentloaded')

    def go_back(self) -> None:
        self.logger.info('Going back in browser history...')
        self.page.go_back(wait_until='domcontentloaded')

    def go_forward(self) -> None:
        self.logger.info('Going forward in browser history...')
        self.page.go_forward(wait_until='domcontentloaded')

    # Actions

    def click(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Clicking element: {self._name(target, name)}")
        self.locator(target).click(timeout=self.timeout)

    def double_click(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Double-clicking element: {self._name(target, name)}")
        self.locator(target).dblclick(timeout=self.timeout)

    def right_click(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Right-clicking element: {self._name(target, name)}")
        self.locator(target).click(button='right', timeout=self.timeout)

    def hover(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Hovering over element: {self._name(target, name)}")
        self.locator(target).hover(timeout=self.timeout)

    def fill(self, target: Target, text: str, name: Optional[str] = None, secret: bool = False) -> None:
        shown = '*' * len(text) if secret else text
        self.logger.info(f'Filling text "{shown}" into: {self._name(target, name)}')
        self.locator(target).fill(text, timeout=self.timeout)

    def clear_and_fill(self, target: Target, text: str, name: Optional[str] = None) -> None:
        self.logger.info(f'Clearing and filling text "{text}" into: {self._name(target, name)}')
        locator = self.locator(target)
        locator.clear(timeout=self.timeout)
        locator.fill(text, timeout=self.timeout)

    def select(self, target: Target, label: str, name: Optional[str] = None) -> None:
        self.logger.info(f'Selecting option "{label}" from dropdown: {self._name(target, name)}')
        self.locator(target).select_option(label=label, timeout=self.timeout)

    def press_key(self, key: str) -> None:
        self.logger.info(f"Pressing key: {key}")
        self.page.keyboard.press(key)

    def scroll_to(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Scrolling to element: {self._name(target, name)}")
        self.locator(target).scroll_into_view_if_needed(timeout=self.timeout)

    # Reads

    def text(self, target: Target, name: Optional[str] = None) -> Optional[str]:
        self.logger.debug(f"Getting text from element: {self._name(target, name)}")
        return self.locator(target).text_content(timeout=self.timeout)

    def input_value(self, target: Target) -> str:
        return self.locator(target).input_value(timeout=self.timeout)

    def attribute(self, target: Target, attribute: str) -> Optional[str]:
        return self.locator(target).get_attribute(attribute, timeout=self.timeout)

    def is_visible(self, target: Target, name: Optional[str] = None) -> bool:
        self.logger.debug(f"Checking if element is visible: {self._name(target, name)}")
        return self.locator(target).is_visible()

    def is_enabled(self, target: Target) -> bool:
        return self.locator(target).is_enabled(timeout=self.timeout)

    def is_checked(self, target: Target, name: Optional[str] = None) -> bool:
        self.logger.debug(f"Checking if element is checked: {self._name(target, name)}")
        return self.locator(target).is_checked(timeout=self.timeout)

    # Waits

    def wait_visible(self, target: Target, name: Optional[str] = None, timeout: Optional[int] = None) -> None:
        self.logger.info(f"Waiting for element to be visible: {self._name(target, name)}")
        self.locator(target).wait_for(state='visible', timeout=timeout or self.timeout)

    def wait_hidden(self, target: Target, name: Optional[str] = None, timeout: Optional[int] = None) -> None:
        self.logger.info(f"Waiting for element to be hidden: {self._name(target, name)}")
        self.locator(target).wait_for(state='hidden', timeout=timeout or self.timeout)

    def wait_for_all_visible(self, landmarks, timeout: Optional[int] = None) -> bool:
        """True when every (selector, name) landmark shows up in time, False otherwise"""
        try:
            for selector, name in landmarks:
                self.wait_visible(selector, name, timeout)
        except PlaywrightTimeoutError as e:
            self.logger.error(f"Landmark not visible in time: {e}")
            return False
        return True

    def wait_for_response(self, url_pattern: Union[str, Pattern], status: Optional[int] = None,
                          timeout: Optional[int] = None) -> None:
        self.logger.info(f"Waiting for response: {getattr(url_pattern, 'pattern', url_pattern)}"
                         f"{f' with status {status}' if status else ''}")

        def matches(response) -> bool:
            if isinstance(url_pattern, str):
                url_match = url_pattern in response.url
            else:
                url_match = bool(url_pattern.search(response.url))
            return url_match and (status is None or response.status == status)

        self.page.wait_for_event('response', predicate=matches, timeout=timeout or self.timeout)

    # Assertions

    def assert_visible(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Asserting element is visible: {self._name(target, name)}")
        expect(self.locator(target)).to_be_visible(timeout=self.timeout)

    def assert_hidden(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Asserting element is hidden: {self._name(target, name)}")
        expect(self.locator(target)).to_be_hidden(timeout=self.timeout)

    def assert_text(self, target: Target, expected: str, name: Optional[str] = None) -> None:
        self.logger.info(f'Asserting element {self._name(target, name)} contains text: "{expected}"')
        expect(self.locator(target)).to_contain_text(expected, timeout=self.timeout)

    def assert_exact_text(self, target: Target, expected: str, name: Optional[str] = None) -> None:
        self.logger.info(f'Asserting element {self._name(target, name)} has exact text: "{expected}"')
        expect(self.locator(target)).to_have_text(expected, timeout=self.timeout)

    def assert_absent(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Asserting element {self._name(target, name)} is NOT present")
        expect(self.locator(target)).not_to_be_attached(timeout=self.timeout)

    def assert_checked(self, target: Target, name: Optional[str] = None) -> None:
        self.logger.info(f"Asserting element is checked: {self._name(target, name)}")
        expect(self.locator(target)).to_be_checked(timeout=self.timeout)

    def assert_url(self, expected: str) -> None:
        self.logger.info(f"Asserting URL contains: {expected}")
        expect(self.page).to_have_url(re.compile(re.escape(expected)), timeout=self.timeout)

    def screenshot(self, name: Optional[str] = None) -> bytes:
        self.logger.info(f"Taking screenshot: {name or 'screenshot'}")
        return self.page.screenshot(full_page=True)
