"""Browser suite wiring: lifecycle hooks, fixtures and step definitions"""
from uiharness.plugin import (  # noqa: F401
    data_store,
    pytest_bdd_after_scenario,
    pytest_bdd_before_scenario,
    pytest_bdd_step_error,
    pytest_configure,
    pytest_unconfigure,
    settings,
    world,
)
from uiharness.steps.ddt_steps import *  # noqa: F401, F403
from uiharness.steps.login_steps import *  # noqa: F401, F403
from uiharness.steps.todo_steps import *  # noqa: F401, F403
