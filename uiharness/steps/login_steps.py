"""Login step definitions"""
from pytest_bdd import given, parsers, then, when

from uiharness.pages.login_page import SELECTORS, TODOS_URL
from uiharness.steps import open_page
from uiharness.utils.helpers import mask

TAB_SELECTORS = {
    'Register': SELECTORS['register_tab'],
    'Login': SELECTORS['login_tab'],
}


@given('I am on the login page')
def on_login_page(world):
    page = world.login_page
    open_page(page, 'Login page')
    world.test_data['login_url'] = page.toolkit.current_url()
    world.logger.info('User is on the login page')


@when(parsers.parse('I enter username "{username}" and password "{password}"'))
def enter_credentials(world, username, password):
    page = world.login_page
    page.enter_username(username)
    page.enter_password(password)
    world.logger.info(f'Entered credentials: username="{username}", password="{mask(password)}"')


@when('I click the login button')
def click_login(world):
    page = world.login_page
    page.click_login_button()
    page.wait_for_login_to_complete()
    world.logger.info('Clicked login button and waited for completion')


@then('I should see the todos page header')
def see_todos_header(world):
    world.login_page.assert_todos_header('My Tasks')
    world.logger.info('Verified todos page header: My Tasks')


@then(parsers.parse('I should see the page title "{expected_title}"'))
def see_page_title(world, expected_title):
    title = world.login_page.toolkit.title()
    assert expected_title in title, f'Expected page title to contain "{expected_title}", got "{title}"'
    world.logger.info(f"Verified page title contains: {expected_title}")


@then(parsers.parse('I should see an error message "{expected_message}"'))
def see_error_message(world, expected_message):
    page = world.login_page
    page.assert_error_message_displayed()
    actual = page.get_error_message() or ''
    assert expected_message in actual, f'Expected error "{expected_message}", got "{actual}"'
    world.logger.info(f"Verified error message: {expected_message}")


@then('I should remain on the login page')
def remain_on_login_page(world):
    page = world.login_page
    origin = world.test_data.get('login_url')
    current = page.toolkit.current_url()
    if origin is not None:
        assert current == origin, f'Expected to stay on "{origin}", but got "{current}"'
    assert TODOS_URL not in current, f'Unexpected redirect to "{current}"'
    assert page.is_loaded(), 'Login form is no longer displayed'
    world.logger.info('Verified user remains on login page')


@then('I should see the username input field')
def see_username_input(world):
    world.login_page.toolkit.assert_visible(SELECTORS['username_input'], 'Login Username')


@then('I should see the password input field')
def see_password_input(world):
    world.login_page.toolkit.assert_visible(SELECTORS['password_input'], 'Login Password')


@then('I should see the login button')
def see_login_button(world):
    world.login_page.toolkit.assert_visible(SELECTORS['login_button'], 'Login Button')


@then(parsers.parse('I should see the "{tab_name}" tab'))
def see_tab(world, tab_name):
    selector = TAB_SELECTORS.get(tab_name)
    assert selector is not None, f'Unknown tab "{tab_name}"'
    world.login_page.toolkit.assert_visible(selector, f"{tab_name} Tab")
    world.logger.info(f"Verified {tab_name} tab is visible")


@when(parsers.parse('I click the "{tab_name}" tab'))
def click_tab(world, tab_name):
    page = world.login_page
    if tab_name == 'Register':
        page.click_register_tab()
    else:
        page.click_login_tab()
    world.logger.info(f"Clicked {tab_name} tab")


@then('I should see the registration tab')
def see_registration_tab(world):
    assert world.login_page.is_register_tab_visible(), 'Registration tab is not visible'


@when(parsers.parse('I enter password "{password}"'))
def enter_password(world, password):
    world.login_page.enter_password(password)
    world.logger.info(f"Entered password: {mask(password)}")


@then('the password field should mask the input')
def password_is_masked(world):
    input_type = world.login_page.toolkit.attribute(SELECTORS['password_input'], 'type')
    assert input_type == 'password', f'Expected password input type, got "{input_type}"'


@then('the password should not be visible in plain text')
def password_not_plain_text(world):
    toolkit = world.login_page.toolkit
    value = toolkit.input_value(SELECTORS['password_input'])
    displayed = toolkit.text(SELECTORS['password_input']) or ''
    assert value, 'Password field is empty'
    assert value not in displayed, 'Password is rendered as plain text'


@given(parsers.parse('I am logged in as "{username}" with password "{password}"'))
def logged_in_as(world, username, password):
    page = world.login_page
    page.navigate()
    page.is_loaded()
    page.login_and_wait(username, password)
    page.assert_redirect(TODOS_URL)
    world.test_data['current_user'] = {'username': username, 'password': password}
    world.logger.info(f"Successfully logged in as: {username}")
