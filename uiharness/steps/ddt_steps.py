"""
Data-driven login steps
Used by the generated feature file and by scenarios that look cases up by id
"""
import pytest
from pytest_bdd import given, parsers, then, when

from uiharness.data.outcomes import ExpectedOutcome, parse_expected_result
from uiharness.pages.login_page import TODOS_URL

TODOS_HEADER = 'My Tasks'


def verify_login_outcome(world, outcome: ExpectedOutcome) -> None:
    """Success: redirect to the todo list with its header. Error: message shown, still on the login screen."""
    page = world.login_page

    if outcome.is_success:
        page.assert_redirect(TODOS_URL)
        page.assert_todos_header(TODOS_HEADER)
        world.logger.info('Verified successful login redirect')
        return

    page.assert_error_message_displayed()
    actual = page.get_error_message() or ''
    assert outcome.message in actual, f'Expected error containing "{outcome.message}", got "{actual}"'

    origin = world.test_data.get('login_url')
    current = page.toolkit.current_url()
    if origin is not None:
        assert current == origin, f'Expected to stay on "{origin}", but got "{current}"'
    assert TODOS_URL not in current, f'Unexpected redirect to "{current}"'
    world.logger.info(f"Verified login error: {outcome.message}")


def lookup_login_case(world, case_id: str):
    """Row for case_id from the login sheet; a missing case fails the scenario"""
    settings = world.settings
    row = world.data_store.get_row(settings.login_sheet, settings.key_column, case_id)
    if row is None:
        pytest.fail(
            f"Test case '{case_id}' not found in column '{settings.key_column}' "
            f"of sheet '{settings.login_sheet}'"
        )
    return row


@when(parsers.re(r'I login with username "(?P<username>[^"]*)" and password "(?P<password>[^"]*)"'))
def login_with_credentials(world, username, password):
    world.login_page.login_and_wait(username, password)


@then(parsers.re(r'the login outcome should be "(?P<expected_result>[^"]*)"'))
def login_outcome_should_be(world, expected_result):
    verify_login_outcome(world, parse_expected_result(expected_result))


@given(parsers.parse('I have the login data case "{case_id}"'))
def have_login_case(world, case_id):
    row = lookup_login_case(world, case_id)
    world.test_data['login_case'] = dict(row)
    world.logger.info(f"Loaded data case {case_id}")


@when('I log in with the data case credentials')
def login_with_case(world):
    case = world.test_data['login_case']
    world.login_page.login_and_wait(str(case.get('username', '')), str(case.get('password', '')))


@then('I should see the expected login result for the data case')
def expected_result_for_case(world):
    case = world.test_data['login_case']
    verify_login_outcome(world, parse_expected_result(case.get('expected_result')))
