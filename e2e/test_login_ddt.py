"""Login scenarios generated from the Login sheet at the start of the run"""
from pathlib import Path

import pytest
from pytest_bdd import scenarios

from uiharness.data.scenario_generator import has_scenarios

GENERATED_FEATURE = Path(__file__).resolve().parents[1] / 'features' / 'generated' / 'login_ddt.feature'

# an empty Login sheet is valid data; it must not stop the authored suites from collecting
if not has_scenarios(GENERATED_FEATURE):
    pytest.skip(f"No data-driven login cases in {GENERATED_FEATURE.name}", allow_module_level=True)

scenarios('generated/login_ddt.feature')
