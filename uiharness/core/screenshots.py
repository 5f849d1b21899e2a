"""Failure screenshots attached to the Allure report"""
import os
from typing import Optional

import allure

from uiharness.utils.helpers import sanitize_filename, timestamp_slug
from uiharness.utils.logger import setup_logger

logger = setup_logger(__name__)


def capture_failure(world, scenario_name: str) -> Optional[str]:
    """Save a full page screenshot for a failed scenario and attach it to the report"""
    if world.page is None:
        logger.warning(f"No page open, skipping failure screenshot for: {scenario_name}")
        return None

    name = f"FAILED-{sanitize_filename(scenario_name)}"
    directory = world.settings.screenshots_dir
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f"{name}-{timestamp_slug()}.png")

    image = world.page.screenshot(path=path, full_page=True)
    allure.attach(image, name=name, attachment_type=allure.attachment_type.PNG)

    logger.info(f"Failure screenshot saved: {path}")
    return path
