from __future__ import annotations

import pytest

from sheets_emulator.services.sheets_mock import SheetsMock
from sheets_emulator.services.spreadsheet_registry import SpreadsheetRegistry
from sheets_emulator.utils.logging import clear_context

SPREADSHEET_ID = "test-spreadsheet-id"


@pytest.fixture(autouse=True)
def reset_log_context() -> None:
    """Keep request ids and extra context from leaking between tests."""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def registry() -> SpreadsheetRegistry:
    """Registry with a single default-sized sheet named Sheet1."""
    reg = SpreadsheetRegistry(spreadsheet_id=SPREADSHEET_ID)
    reg.add_sheet("Sheet1")
    return reg


@pytest.fixture
def empty_mock() -> SheetsMock:
    """Spreadsheet without any sheets."""
    return SheetsMock(spreadsheet_id=SPREADSHEET_ID)


@pytest.fixture
def mock() -> SheetsMock:
    """Spreadsheet with one default-sized sheet named Sheet1."""
    sheets = SheetsMock(spreadsheet_id=SPREADSHEET_ID)
    sheets.add_sheet("Sheet1")
    return sheets


@pytest.fixture
def data_mock() -> SheetsMock:
    """Spreadsheet with a Data sheet holding a header row and two records."""
    sheets = SheetsMock(spreadsheet_id=SPREADSHEET_ID)
    sheets.add_sheet("Data")
    sheets.update_values(
        "Data!A1:C3",
        [
            ["name", "qty", "active"],
            ["apple", 3, True],
            ["pear", 1.5, False],
        ],
    )
    return sheets
