"""pytest-bdd step definitions; every step receives the scenario's SessionContext as ``world``"""
from typing import Dict, List

from uiharness.pages import PageObject


def table_hashes(datatable: List[List[str]]) -> List[Dict[str, str]]:
    """Rows of a Gherkin data table as dicts keyed by the header row"""
    if not datatable:
        return []
    header = [cell.strip() for cell in datatable[0]]
    return [dict(zip(header, (cell.strip() for cell in row))) for row in datatable[1:]]


def open_page(page: PageObject, name: str) -> None:
    """Navigate to a page and fail the step unless it finishes loading"""
    page.navigate()
    assert page.is_loaded(), f'{name} did not finish loading'
