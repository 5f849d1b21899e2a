#!/usr/bin/env python3
"""
uiharness - data-driven UI test harness
Launches the pytest-bdd browser suites with environment-scoped settings
"""

import os
import sys
from pathlib import Path

import click
import pytest
from dotenv import load_dotenv

from uiharness.core.config_manager import BrowserFamily, resolve
from uiharness.data.data_store import DataStore
from uiharness.data.scenario_generator import ScenarioGenerator
from uiharness.errors import HarnessError
from uiharness.utils.logger import log_settings, setup_logger

logger = setup_logger(__name__)

ROOT = Path(__file__).resolve().parent
SUITE_DIR = ROOT / 'e2e'


def export_options(env, tags, browser, headless, slow_mo, screenshot, data_file):
    """Publish CLI choices as the environment variables the harness reads"""
    values = {
        'TEST_ENV': env,
        'TEST_TAGS': ' or '.join(f'({t})' for t in tags) if tags else None,
        'BROWSER': browser,
        'HEADLESS': None if headless is None else str(headless).lower(),
        'SLOW_MO': None if slow_mo is None else str(slow_mo),
        'SCREENSHOT_ON_FAIL': 'true' if screenshot else None,
        'TEST_DATA_FILE': data_file,
    }
    for name, value in values.items():
        if value:
            os.environ[name] = value


def write_generated_feature() -> int:
    settings = resolve()
    store = DataStore(ROOT / settings.data_file)
    store.load()
    ScenarioGenerator(store, ROOT / settings.generated_feature,
                      sheet_name=settings.login_sheet, key_column=settings.key_column).generate()
    return 0


@click.command(context_settings={'ignore_unknown_options': True})
@click.option('--env', '-e', default=None, help='Environment profile (local/development/staging/production)')
@click.option('--tags', '-t', multiple=True, help='Tag expression to filter scenarios, e.g. "@smoke and not @wip"')
@click.option('--browser', '-b', type=click.Choice([f.value for f in BrowserFamily]), default=None,
              help='Browser to use')
@click.option('--headless/--headed', default=None, help='Run with or without a visible browser window')
@click.option('--slow-mo', default=None, type=int, help='Slow down execution by milliseconds')
@click.option('--screenshot', is_flag=True, help='Take screenshots on failure')
@click.option('--data-file', '-d', default=None, help='Path to the test data workbook')
@click.option('--alluredir', default=None, help='Allure results directory')
@click.option('--generate-only', is_flag=True, help='Load test data and write the generated feature file, then exit')
@click.argument('pytest_args', nargs=-1, type=click.UNPROCESSED)
def main(env, tags, browser, headless, slow_mo, screenshot, data_file, alluredir, generate_only, pytest_args):
    """
    Run the browser scenarios through pytest-bdd

    Examples:
        # Run everything against the local profile
        python run.py

        # Smoke scenarios on staging in Firefox
        python run.py --env staging --tags "@smoke" --browser firefox

        # Extra arguments go straight to pytest
        python run.py --env development -- -x -k login
    """
    load_dotenv()
    export_options(env, tags, browser, headless, slow_mo, screenshot, data_file)

    settings = resolve()
    log_settings(settings, logger)

    if generate_only:
        try:
            sys.exit(write_generated_feature())
        except HarnessError as e:
            logger.critical(f"FATAL: {e}")
            sys.exit(1)

    args = [str(SUITE_DIR), f"--alluredir={alluredir or settings.allure_results_dir}"]
    args.extend(pytest_args)
    logger.info(f"Running: pytest {' '.join(args)}")
    sys.exit(pytest.main(args))


if __name__ == '__main__':
    main()
