"""Logging setup shared by every harness module"""
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from colorama import Fore, Style, init as colorama_init

colorama_init()

SILENT = logging.CRITICAL + 10

LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'SILENT': SILENT,
}

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.MAGENTA,
}

LEVEL_NAMES = {
    logging.WARNING: 'WARN',
}


class ColoredFormatter(logging.Formatter):
    """[timestamp] [LEVEL] name: message, with the level colored"""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec='milliseconds')
        level = LEVEL_NAMES.get(record.levelno, record.levelname)
        if self.use_color:
            level = f"{LEVEL_COLORS.get(record.levelno, '')}{level}{Style.RESET_ALL}"
        message = f"[{timestamp}] [{level}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def resolve_level(value: Optional[str] = None) -> int:
    """Map a LOG_LEVEL string to a logging level, INFO when unknown"""
    if value is None:
        value = os.environ.get('LOG_LEVEL', 'INFO')
    return LEVELS.get(value.strip().upper(), logging.INFO)


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a logger writing colored lines to stderr at the LOG_LEVEL threshold"""
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    if not any(getattr(h, '_uiharness', False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(use_color=sys.stderr.isatty()))
        handler._uiharness = True
        logger.addHandler(handler)

    return logger


def set_level(level: str) -> None:
    """Re-apply a level to every logger created through setup_logger"""
    resolved = resolve_level(level)
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and any(getattr(h, '_uiharness', False) for h in logger.handlers):
            logger.setLevel(resolved)


def log_settings(settings, logger: logging.Logger) -> None:
    """Print the resolved configuration block"""
    logger.info('--- Framework Configuration ---')
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Base URL: {settings.base_url}")
    logger.info(f"Browser: {settings.browser}")
    logger.info(f"Headless: {settings.headless}")
    logger.info(f"Slow Mo: {settings.slow_mo}ms")
    logger.info(f"Timeout: {settings.timeout}ms")
    logger.info(f"Viewport: {settings.viewport_width}x{settings.viewport_height}")
    logger.info(f"Allure Dir: {settings.allure_results_dir}")
    logger.info(f"Screenshot on Fail: {settings.screenshot_on_fail}")
    logger.info(f"Test Data: {settings.data_file}")
    logger.info('-------------------------------')
