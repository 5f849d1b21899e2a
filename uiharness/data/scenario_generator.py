"""
Scenario generator
Writes one Gherkin scenario per data row so pytest-bdd picks the cases up as ordinary scenarios
"""
from pathlib import Path
from typing import Any, Dict, List, Union

from jinja2 import Environment, StrictUndefined

from uiharness.data.data_store import DataStore, Row
from uiharness.errors import DataStoreError, GenerationError
from uiharness.utils.logger import setup_logger

logger = setup_logger(__name__)

FEATURE_TEMPLATE = '''\
# Generated from the "{{ sheet }}" sheet of {{ source }}. Do not edit by hand;
# the file is rewritten at the start of every run.
@generated @ddt
Feature: {{ sheet }} DDT Tests
  Data-driven {{ sheet | lower }} cases, one scenario per row.
{% for case in cases %}

  Scenario: {{ sheet }} test #{{ case.index }} - {{ case.case_id }} ({{ case.username }})
    Given I am on the login page
    When I login with username "{{ case.username }}" and password "{{ case.password }}"
    Then the login outcome should be "{{ case.expected_result }}"
{% endfor %}
'''

REQUIRED_COLUMNS = ('username', 'password', 'expected_result')
SCENARIO_MARKER = '\n  Scenario:'

_environment = Environment(
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
    autoescape=False,
)


def _literal(value: Any, column: str, case_id: str) -> str:
    """Render a cell for use inside a quoted step argument"""
    text = '' if value is None else str(value)
    if '"' in text or '\n' in text or '\r' in text:
        raise GenerationError(
            f"Case {case_id}: column '{column}' contains a double quote or line break "
            f"and cannot be written as a step argument"
        )
    return text


class ScenarioGenerator:
    """Renders a sheet of login cases into a feature file"""

    def __init__(self, data_store: DataStore, output_path: Union[str, Path],
                 sheet_name: str = 'Login', key_column: str = 'test_case_id'):
        self.data_store = data_store
        self.output_path = Path(output_path)
        self.sheet_name = sheet_name
        self.key_column = key_column
        self.template = _environment.from_string(FEATURE_TEMPLATE)

    def build_cases(self, rows) -> List[Dict[str, Any]]:
        cases = []
        for index, row in enumerate(rows, 1):
            case_id = str(row.get(self.key_column, f'row-{index}')).strip()
            case = {'index': index, 'case_id': _literal(case_id, self.key_column, case_id)}
            for column in REQUIRED_COLUMNS:
                case[column] = _literal(row.get(column), column, case_id)
            cases.append(case)
        return cases

    def render(self) -> str:
        """Feature file text for the current sheet contents"""
        rows = self._rows()
        source = self.data_store.source.name if self.data_store.source else 'test data'
        return self.template.render(sheet=self.sheet_name, source=source, cases=self.build_cases(rows))

    def _rows(self) -> List[Row]:
        try:
            if not self.data_store.has_sheet(self.sheet_name):
                raise GenerationError(
                    f"Sheet '{self.sheet_name}' is not present in {self.data_store.source}; "
                    f"available sheets: {self.data_store.sheet_names}"
                )
            return list(self.data_store.get_sheet(self.sheet_name))
        except DataStoreError as e:
            raise GenerationError(f"Cannot read sheet '{self.sheet_name}': {e}") from e

    def generate(self) -> None:
        """Rewrite the output file with one scenario per row of the sheet"""
        content = self.render()

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.output_path, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
        except OSError as e:
            raise GenerationError(f"Cannot write generated feature file {self.output_path}: {e}") from e

        count = content.count(SCENARIO_MARKER)
        logger.info(f"Generated {count} scenarios from sheet '{self.sheet_name}' into {self.output_path}")


def has_scenarios(path: Union[str, Path]) -> bool:
    """True when a generated feature file exists and holds at least one scenario"""
    path = Path(path)
    if not path.is_file():
        return False
    return SCENARIO_MARKER in path.read_text(encoding='utf-8')
