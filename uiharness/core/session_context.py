"""Browser session lifecycle for a single scenario"""
import os
import time
from typing import Any, Dict, Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from uiharness.core.config_manager import BrowserFamily, Settings
from uiharness.data.data_store import DataStore
from uiharness.errors import SessionError
from uiharness.pages.login_page import LoginPage
from uiharness.pages.todo_page import TodoPage
from uiharness.pages.toolkit import InteractionToolkit
from uiharness.utils.helpers import sanitize_filename
from uiharness.utils.logger import setup_logger

logger = setup_logger(__name__)


class SessionContext:
    """Per-scenario state: the Playwright session plus ad-hoc test data.

    One instance is built for every scenario and discarded afterwards.
    Use it as a context manager (or through the ``world`` fixture) so the
    browser is closed on every exit path.
    """

    def __init__(self, settings: Settings, data_store: Optional[DataStore] = None):
        self.settings = settings
        self.data_store = data_store
        self.logger = logger
        self.test_data: Dict[str, Any] = {}
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self._toolkit: Optional[InteractionToolkit] = None

    def __enter__(self) -> 'SessionContext':
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self.page is not None

    def open(self) -> Page:
        """Launch the configured browser and return a fresh page"""
        if self.page is not None:
            return self.page

        family = BrowserFamily.parse(self.settings.browser)
        logger.info(f"Initializing {family.value} browser...")

        try:
            self.playwright = sync_playwright().start()
            browser_type = {
                BrowserFamily.CHROMIUM: self.playwright.chromium,
                BrowserFamily.FIREFOX: self.playwright.firefox,
                BrowserFamily.WEBKIT: self.playwright.webkit,
            }[family]

            self.browser = browser_type.launch(
                headless=self.settings.headless,
                slow_mo=self.settings.slow_mo,
            )
            self.context = self.browser.new_context(
                viewport=self.settings.viewport,
                base_url=self.settings.base_url or None,
                ignore_https_errors=True,
            )
            self.context.set_default_timeout(self.settings.timeout)
            self.page = self.context.new_page()
        except Exception as e:
            logger.error(f"Browser launch failed: {e}")
            self.close()
            raise SessionError(f"Could not start {family.value} browser: {e}") from e

        self.page.on("console", lambda msg: logger.debug(f"Browser console: {msg.text}"))
        logger.info('Browser and Page initialized successfully.')
        return self.page

    def close(self) -> None:
        """Tear the session down; a no-op when nothing is open"""
        if self.playwright is None and self.browser is None:
            return

        logger.info('Closing browser...')
        try:
            for resource in (self.page, self.context, self.browser):
                if resource is None:
                    continue
                try:
                    resource.close()
                except Exception as e:
                    logger.warning(f"Error while closing {type(resource).__name__}: {e}")
            if self.playwright is not None:
                self.playwright.stop()
        finally:
            self.page = None
            self.context = None
            self.browser = None
            self.playwright = None
            self._toolkit = None

    def capture_artifact(self, label: str) -> Optional[bytes]:
        """Full page screenshot bytes, also saved under the Allure results dir"""
        if self.page is None:
            return None

        os.makedirs(self.settings.allure_results_dir, exist_ok=True)
        path = os.path.join(
            self.settings.allure_results_dir,
            f"screenshot-{sanitize_filename(label)}-{int(time.time() * 1000)}.png",
        )
        logger.debug(f"Taking screenshot: {path}")
        return self.page.screenshot(path=path, full_page=True)

    @property
    def toolkit(self) -> InteractionToolkit:
        if self.page is None:
            raise SessionError('No browser session is open')
        if self._toolkit is None:
            self._toolkit = InteractionToolkit(
                self.page,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                logger=self.logger,
            )
        return self._toolkit

    @property
    def login_page(self) -> LoginPage:
        return LoginPage(self.toolkit)

    @property
    def todo_page(self) -> TodoPage:
        return TodoPage(self.toolkit)
