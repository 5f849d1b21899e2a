"""Unit tests for the per-scenario browser session"""
from unittest.mock import MagicMock, patch

import pytest

from uiharness.core.session_context import SessionContext
from uiharness.errors import SessionError
from uiharness.pages.login_page import LoginPage
from uiharness.pages.todo_page import TodoPage


@pytest.fixture
def playwright_mock():
    with patch('uiharness.core.session_context.sync_playwright') as sync_playwright:
        playwright = MagicMock()
        sync_playwright.return_value.start.return_value = playwright
        yield playwright


def browser_parts(playwright, family='chromium'):
    browser_type = getattr(playwright, family)
    browser = browser_type.launch.return_value
    context = browser.new_context.return_value
    page = context.new_page.return_value
    return browser_type, browser, context, page


def test_open_launches_configured_browser(playwright_mock, make_settings):
    settings = make_settings(browser='firefox', headless=True, slow_mo=10, timeout=1234,
                             base_url='http://app.test')
    browser_type, browser, context, page = browser_parts(playwright_mock, 'firefox')

    world = SessionContext(settings)
    assert world.open() is page

    browser_type.launch.assert_called_once_with(headless=True, slow_mo=10)
    browser.new_context.assert_called_once_with(
        viewport={'width': 1920, 'height': 1080},
        base_url='http://app.test',
        ignore_https_errors=True,
    )
    context.set_default_timeout.assert_called_once_with(1234)
    page.on.assert_called_once()
    assert page.on.call_args[0][0] == 'console'
    assert world.is_open


def test_open_twice_reuses_session(playwright_mock, make_settings):
    world = SessionContext(make_settings())
    first = world.open()

    assert world.open() is first
    playwright_mock.chromium.launch.assert_called_once()


def test_context_manager_closes_when_body_raises(playwright_mock, make_settings):
    _, browser, context, page = browser_parts(playwright_mock)

    with pytest.raises(RuntimeError):
        with SessionContext(make_settings()) as world:
            raise RuntimeError('step exploded')

    page.close.assert_called_once()
    context.close.assert_called_once()
    browser.close.assert_called_once()
    playwright_mock.stop.assert_called_once()
    assert world.page is None
    assert world.browser is None
    assert world.playwright is None


def test_close_twice_is_noop(playwright_mock, make_settings):
    _, browser, _, _ = browser_parts(playwright_mock)
    world = SessionContext(make_settings())
    world.open()

    world.close()
    world.close()

    browser.close.assert_called_once()
    playwright_mock.stop.assert_called_once()


def test_close_without_open_is_noop(playwright_mock, make_settings):
    SessionContext(make_settings()).close()

    playwright_mock.stop.assert_not_called()


def test_close_continues_after_resource_error(playwright_mock, make_settings):
    _, browser, context, page = browser_parts(playwright_mock)
    page.close.side_effect = Exception('page already gone')
    world = SessionContext(make_settings())
    world.open()

    world.close()

    context.close.assert_called_once()
    browser.close.assert_called_once()
    playwright_mock.stop.assert_called_once()
    assert world.page is None


def test_unsupported_browser_raises_before_launch(playwright_mock, make_settings):
    world = SessionContext(make_settings(browser='netscape'))

    with pytest.raises(SessionError, match='netscape'):
        world.open()

    playwright_mock.chromium.launch.assert_not_called()
    assert world.playwright is None


def test_launch_failure_releases_resources(playwright_mock, make_settings):
    playwright_mock.chromium.launch.side_effect = Exception('executable not found')
    world = SessionContext(make_settings())

    with pytest.raises(SessionError) as exc_info:
        world.open()

    assert 'executable not found' in str(exc_info.value.__cause__)
    playwright_mock.stop.assert_called_once()
    assert world.playwright is None
    assert world.page is None


def test_capture_artifact_without_page_returns_none(make_settings):
    assert SessionContext(make_settings()).capture_artifact('anything') is None


def test_capture_artifact_writes_under_allure_dir(playwright_mock, make_settings, tmp_path):
    _, _, _, page = browser_parts(playwright_mock)
    page.screenshot.return_value = b'png-bytes'
    world = SessionContext(make_settings())
    world.open()

    assert world.capture_artifact('login page') == b'png-bytes'

    kwargs = page.screenshot.call_args.kwargs
    assert kwargs['full_page'] is True
    assert kwargs['path'].startswith(str(tmp_path / 'allure-results' / 'screenshot-login_page-'))
    assert kwargs['path'].endswith('.png')


def test_test_data_is_per_session(make_settings):
    first = SessionContext(make_settings())
    second = SessionContext(make_settings())
    first.test_data['login_url'] = 'http://localhost:5173/'

    assert second.test_data == {}


def test_page_accessors_share_toolkit(playwright_mock, make_settings):
    world = SessionContext(make_settings(base_url='http://app.test', timeout=999))
    world.open()

    login_page = world.login_page
    todo_page = world.todo_page

    assert isinstance(login_page, LoginPage)
    assert isinstance(todo_page, TodoPage)
    assert login_page.toolkit is todo_page.toolkit
    assert login_page.toolkit.base_url == 'http://app.test'
    assert login_page.toolkit.timeout == 999


def test_toolkit_requires_open_session(make_settings):
    with pytest.raises(SessionError):
        SessionContext(make_settings()).toolkit
