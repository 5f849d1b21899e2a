"""Unit tests for the scenario generator"""
import pytest

from tests.conftest import LOGIN_HEADER, LOGIN_ROWS
from uiharness.data.data_store import DataStore
from uiharness.data.scenario_generator import ScenarioGenerator, has_scenarios
from uiharness.errors import GenerationError


def loaded_store(path):
    store = DataStore(path)
    store.load()
    return store


def test_one_scenario_per_row(login_workbook, tmp_path):
    output = tmp_path / 'generated' / 'login_ddt.feature'
    ScenarioGenerator(loaded_store(login_workbook), output).generate()

    text = output.read_text(encoding='utf-8')
    assert text.count('Scenario:') == 2
    assert '@generated @ddt' in text
    assert 'Feature: Login DDT Tests' in text
    assert 'Scenario: Login test #1 - TC-LOGIN-001 (admin)' in text
    assert 'When I login with username "admin" and password "password"' in text
    assert 'Then the login outcome should be "Success"' in text
    assert 'When I login with username "admin" and password "wrongpassword"' in text
    assert 'Then the login outcome should be "Error: Invalid credentials"' in text


def test_steps_follow_row_order(login_workbook, tmp_path):
    text = ScenarioGenerator(loaded_store(login_workbook), tmp_path / 'out.feature').render()

    assert text.index('TC-LOGIN-001') < text.index('TC-LOGIN-002')
    assert text.count('Given I am on the login page') == 2


def test_regeneration_is_byte_identical(login_workbook, tmp_path):
    output = tmp_path / 'login_ddt.feature'
    generator = ScenarioGenerator(loaded_store(login_workbook), output)

    generator.generate()
    first = output.read_bytes()
    generator.generate()

    assert output.read_bytes() == first
    assert b'\r\n' not in first


def test_generate_overwrites_previous_content(login_workbook, tmp_path):
    output = tmp_path / 'login_ddt.feature'
    output.write_text('Feature: stale\n  Scenario: left over\n')

    ScenarioGenerator(loaded_store(login_workbook), output).generate()

    text = output.read_text()
    assert 'stale' not in text
    assert 'left over' not in text


def test_empty_sheet_generates_feature_without_scenarios(workbook_factory, tmp_path):
    path = workbook_factory({'Login': [LOGIN_HEADER]})
    output = tmp_path / 'login_ddt.feature'

    ScenarioGenerator(loaded_store(path), output).generate()

    text = output.read_text()
    assert 'Feature: Login DDT Tests' in text
    assert 'Scenario:' not in text


def test_numeric_password_rendered_as_text(workbook_factory, tmp_path):
    path = workbook_factory({'Login': [LOGIN_HEADER, ['TC-9', 'Numeric', 'user1', 123456, 'Error: Invalid']]})

    text = ScenarioGenerator(loaded_store(path), tmp_path / 'out.feature').render()

    assert 'password "123456"' in text


def test_missing_cells_render_as_empty_arguments(workbook_factory, tmp_path):
    path = workbook_factory({'Login': [LOGIN_HEADER, ['TC-8', 'Blank username', None, 'pw', 'Error: Required']]})

    text = ScenarioGenerator(loaded_store(path), tmp_path / 'out.feature').render()

    assert 'When I login with username "" and password "pw"' in text


def test_custom_sheet_name(workbook_factory, tmp_path):
    path = workbook_factory({'Smoke': [LOGIN_HEADER] + LOGIN_ROWS[:1]})

    text = ScenarioGenerator(loaded_store(path), tmp_path / 'out.feature', sheet_name='Smoke').render()

    assert 'Feature: Smoke DDT Tests' in text
    assert 'Scenario: Smoke test #1 - TC-LOGIN-001 (admin)' in text


def test_missing_sheet_raises(login_workbook, tmp_path):
    generator = ScenarioGenerator(loaded_store(login_workbook), tmp_path / 'out.feature', sheet_name='Absent')

    with pytest.raises(GenerationError, match="Sheet 'Absent'"):
        generator.generate()

    assert not (tmp_path / 'out.feature').exists()


def test_unloaded_store_raises(tmp_path):
    generator = ScenarioGenerator(DataStore(tmp_path / 'never.xlsx'), tmp_path / 'out.feature')

    with pytest.raises(GenerationError):
        generator.generate()


def test_lazy_load_failure_is_chained(tmp_path):
    generator = ScenarioGenerator(DataStore(tmp_path / 'missing.xlsx', lazy_load=True), tmp_path / 'out.feature')

    with pytest.raises(GenerationError) as exc_info:
        generator.generate()

    assert 'missing.xlsx' in str(exc_info.value.__cause__)


def test_double_quote_in_value_is_rejected(workbook_factory, tmp_path):
    path = workbook_factory({'Login': [LOGIN_HEADER, ['TC-7', 'Quote', 'ad"min', 'pw', 'Success']]})

    with pytest.raises(GenerationError, match='TC-7'):
        ScenarioGenerator(loaded_store(path), tmp_path / 'out.feature').generate()


def test_line_break_in_value_is_rejected(workbook_factory, tmp_path):
    path = workbook_factory({'Login': [LOGIN_HEADER, ['TC-6', 'Newline', 'admin', 'pass\nword', 'Success']]})

    with pytest.raises(GenerationError, match="'password'"):
        ScenarioGenerator(loaded_store(path), tmp_path / 'out.feature').generate()


def test_unwritable_output_raises(login_workbook, tmp_path):
    # a directory cannot be opened for writing
    target = tmp_path / 'taken'
    target.mkdir()

    with pytest.raises(GenerationError) as exc_info:
        ScenarioGenerator(loaded_store(login_workbook), target).generate()

    assert isinstance(exc_info.value.__cause__, OSError)


def test_has_scenarios(workbook_factory, login_workbook, tmp_path):
    populated = tmp_path / 'populated.feature'
    ScenarioGenerator(loaded_store(login_workbook), populated).generate()
    empty = tmp_path / 'empty.feature'
    ScenarioGenerator(loaded_store(workbook_factory({'Login': [LOGIN_HEADER]}, name='empty.xlsx')), empty).generate()

    assert has_scenarios(populated)
    assert not has_scenarios(empty)
    assert not has_scenarios(tmp_path / 'never-written.feature')
