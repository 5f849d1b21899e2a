"""Shared fixtures for harness unit and integration tests"""
from dataclasses import replace
from pathlib import Path

import pytest
from openpyxl import Workbook

from uiharness.core.config_manager import resolve

LOGIN_HEADER = ['test_case_id', 'description', 'username', 'password', 'expected_result']

LOGIN_ROWS = [
    ['TC-LOGIN-001', 'Valid administrator credentials', 'admin', 'password', 'Success'],
    ['TC-LOGIN-002', 'Wrong password', 'admin', 'wrongpassword', 'Error: Invalid credentials'],
]


def write_workbook(path: Path, sheets) -> Path:
    """Write {sheet name: [rows]} to an xlsx file; None cells stay empty"""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        sheet = workbook.create_sheet(title=name)
        for row_index, row in enumerate(rows, 1):
            for column_index, value in enumerate(row, 1):
                if value is not None:
                    sheet.cell(row=row_index, column=column_index, value=value)
    workbook.save(path)
    return path


@pytest.fixture
def workbook_factory(tmp_path):
    def build(sheets, name='test_data.xlsx'):
        return write_workbook(tmp_path / name, sheets)
    return build


@pytest.fixture
def login_workbook(workbook_factory):
    return workbook_factory({'Login': [LOGIN_HEADER] + LOGIN_ROWS})


@pytest.fixture
def make_settings(tmp_path):
    base = resolve('local', environ={})

    def build(**changes):
        defaults = {
            'allure_results_dir': str(tmp_path / 'allure-results'),
            'screenshots_dir': str(tmp_path / 'screenshots'),
        }
        defaults.update(changes)
        return replace(base, **defaults)
    return build
