"""Unit tests for failure screenshots"""
import os
from unittest.mock import Mock, patch

from uiharness.core.screenshots import capture_failure


@patch('uiharness.core.screenshots.allure')
def test_capture_failure_saves_and_attaches(allure, make_settings, tmp_path):
    world = Mock()
    world.settings = make_settings()
    world.page.screenshot.return_value = b'png-bytes'

    path = capture_failure(world, 'Login with wrong password')

    assert os.path.dirname(path) == str(tmp_path / 'screenshots')
    assert os.path.basename(path).startswith('FAILED-Login_with_wrong_password-')
    assert path.endswith('.png')
    world.page.screenshot.assert_called_once_with(path=path, full_page=True)
    allure.attach.assert_called_once_with(
        b'png-bytes',
        name='FAILED-Login_with_wrong_password',
        attachment_type=allure.attachment_type.PNG,
    )


@patch('uiharness.core.screenshots.allure')
def test_capture_failure_without_page(allure, make_settings):
    world = Mock()
    world.settings = make_settings()
    world.page = None

    assert capture_failure(world, 'Anything') is None
    allure.attach.assert_not_called()
