"""
pytest lifecycle hooks for the browser suites

Global setup loads the test data and writes the generated feature file
before pytest-bdd collects any scenario. Every scenario gets its own
SessionContext through the ``world`` fixture, closed on every exit path.
"""
from pathlib import Path

import pytest
from dotenv import load_dotenv

from uiharness.core.config_manager import Settings, resolve
from uiharness.core.screenshots import capture_failure
from uiharness.core.session_context import SessionContext
from uiharness.data.data_store import DataStore
from uiharness.data.scenario_generator import ScenarioGenerator
from uiharness.errors import DataLoadError, GenerationError
from uiharness.utils.logger import log_settings, set_level, setup_logger

logger = setup_logger(__name__)

SETTINGS_KEY = pytest.StashKey[Settings]()
DATA_STORE_KEY = pytest.StashKey[DataStore]()
FAILED_KEY = pytest.StashKey[bool]()


def is_xdist_worker(config) -> bool:
    return hasattr(config, 'workerinput')


def tag_expression(tags: str) -> str:
    """Turn a Gherkin tag expression like '@smoke and not @skip' into a pytest -m expression"""
    return tags.replace('@', '').strip()


def _rooted(config, path: str) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else Path(config.rootpath) / candidate


def pytest_configure(config):
    load_dotenv()
    settings = resolve()
    set_level(settings.log_level)
    log_settings(settings, logger)

    if settings.tags and not config.option.markexpr:
        config.option.markexpr = tag_expression(settings.tags)
        logger.info(f"Filtering scenarios by tags: {config.option.markexpr}")

    store = DataStore(_rooted(config, settings.data_file))
    try:
        store.load()
    except DataLoadError as e:
        logger.critical(f"FATAL: test data could not be loaded, aborting run: {e}")
        raise

    if not is_xdist_worker(config):
        generator = ScenarioGenerator(
            store,
            _rooted(config, settings.generated_feature),
            sheet_name=settings.login_sheet,
            key_column=settings.key_column,
        )
        try:
            generator.generate()
        except GenerationError as e:
            logger.critical(f"FATAL: generated scenarios could not be written, aborting run: {e}")
            raise

    config.stash[SETTINGS_KEY] = settings
    config.stash[DATA_STORE_KEY] = store
    logger.info('Starting test execution...')


def pytest_unconfigure(config):
    if SETTINGS_KEY in config.stash:
        logger.info('Test execution completed')


@pytest.fixture(scope='session')
def settings(request) -> Settings:
    return request.config.stash[SETTINGS_KEY]


@pytest.fixture(scope='session')
def data_store(request) -> DataStore:
    return request.config.stash[DATA_STORE_KEY]


@pytest.fixture
def world(settings, data_store):
    """Open a browser session for one scenario and always close it afterwards"""
    with SessionContext(settings, data_store) as context:
        logger.info(f"Browser initialized: {settings.browser}")
        yield context
    logger.info('Browser closed')


def pytest_bdd_before_scenario(request, feature, scenario):
    request.node.stash[FAILED_KEY] = False
    logger.info(f"Starting scenario: {scenario.name}")


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    request.node.stash[FAILED_KEY] = True
    logger.error(f"Step failed: {step.keyword} {step.name} ({type(exception).__name__}: {exception})")

    settings = request.config.stash[SETTINGS_KEY]
    world = step_func_args.get('world')
    if not settings.screenshot_on_fail or world is None:
        return
    try:
        capture_failure(world, scenario.name)
    except Exception as e:
        logger.warning(f"Could not capture failure screenshot: {e}")


def pytest_bdd_after_scenario(request, feature, scenario):
    status = 'failed' if request.node.stash.get(FAILED_KEY, False) else 'passed'
    logger.info(f"Scenario completed: {scenario.name} - Status: {status}")
