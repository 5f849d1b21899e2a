"""Unit tests for logging setup"""
import logging

import pytest

from uiharness.utils.logger import SILENT, ColoredFormatter, resolve_level, set_level, setup_logger


@pytest.mark.parametrize('value, level', [
    ('DEBUG', logging.DEBUG),
    ('info', logging.INFO),
    ('WARN', logging.WARNING),
    ('warning', logging.WARNING),
    ('ERROR', logging.ERROR),
    ('SILENT', SILENT),
    ('chatty', logging.INFO),
])
def test_resolve_level(value, level):
    assert resolve_level(value) == level


def test_resolve_level_reads_environment(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'error')
    assert resolve_level() == logging.ERROR

    monkeypatch.delenv('LOG_LEVEL')
    assert resolve_level() == logging.INFO


def test_setup_logger_attaches_one_handler():
    first = setup_logger('tests.logger.once')
    second = setup_logger('tests.logger.once')

    assert first is second
    assert len([h for h in first.handlers if getattr(h, '_uiharness', False)]) == 1


def test_set_level_updates_harness_loggers():
    logger = setup_logger('tests.logger.levels', level='INFO')

    set_level('ERROR')
    try:
        assert logger.level == logging.ERROR
    finally:
        set_level('INFO')


def test_formatter_layout():
    record = logging.LogRecord('uiharness.demo', logging.WARNING, __file__, 1, 'disk almost full', None, None)

    line = ColoredFormatter(use_color=False).format(record)

    assert line.startswith('[')
    assert '] [WARN] uiharness.demo: disk almost full' in line
