"""Services for the sheets emulator."""

from sheets_emulator.services.range_engine import RangeEngine
from sheets_emulator.services.sheets_mock import NOT_PRESENT, SheetsMock
from sheets_emulator.services.spreadsheet_registry import SpreadsheetRegistry

__all__ = ["NOT_PRESENT", "RangeEngine", "SheetsMock", "SpreadsheetRegistry"]
