"""In-memory stand-in for one spreadsheet of the remote spreadsheet service.

Each SheetsMock owns exactly one spreadsheet. Create one per test (or per
application instance) and discard it afterwards; there is no shared state
between instances.

Key features:
- Thread-safe: every public call holds a per-spreadsheet re-entrant lock,
  so row splices never interleave when requests arrive concurrently
- Snapshots returned by get_spreadsheet are deep copies
- Errors are raised for the whole call; nothing is partially applied
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from enum import Enum
from typing import Any

from sheets_emulator.config import Settings
from sheets_emulator.models import (
    AddSheetResponse,
    AppendValuesResponse,
    BatchGetValuesResponse,
    BatchUpdateSpreadsheetRequest,
    BatchUpdateSpreadsheetResponse,
    Dimension,
    InsertDataOption,
    Response,
    SheetProperties,
    Spreadsheet,
    UpdateValuesResponse,
    ValueInputOption,
    ValueRange,
)
from sheets_emulator.services.cell_codec import CellValue, decode_value
from sheets_emulator.services.range_engine import RangeEngine
from sheets_emulator.services.spreadsheet_registry import SpreadsheetRegistry
from sheets_emulator.utils.logging import get_logger

logger = get_logger(__name__)


class Absent(Enum):
    """Marker for a cell address with no backing cell."""

    NOT_PRESENT = "NOT_PRESENT"


NOT_PRESENT = Absent.NOT_PRESENT


class SheetsMock:
    """Thread-safe in-memory spreadsheet with the service's operation surface."""

    def __init__(
        self,
        spreadsheet_id: str = "test-spreadsheet-id",
        title: str = "Test Spreadsheet",
        default_row_count: int = 100,
        default_column_count: int = 26,
        default_pixel_size: int = 100,
    ) -> None:
        """Initialize an empty spreadsheet.

        Args:
            spreadsheet_id: Identifier of the emulated spreadsheet.
            title: Display title of the spreadsheet.
            default_row_count: Rows in every added sheet.
            default_column_count: Columns in every added sheet.
            default_pixel_size: Pixel size of row/column metadata.
        """
        self.registry = SpreadsheetRegistry(
            spreadsheet_id=spreadsheet_id,
            title=title,
            default_row_count=default_row_count,
            default_column_count=default_column_count,
            default_pixel_size=default_pixel_size,
        )
        self.engine = RangeEngine(self.registry)
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Settings) -> SheetsMock:
        """Build a mock from configuration, creating the initial sheets."""
        mock = cls(
            spreadsheet_id=settings.spreadsheet_id,
            title=settings.spreadsheet_title,
            default_row_count=settings.default_row_count,
            default_column_count=settings.default_column_count,
            default_pixel_size=settings.default_pixel_size,
        )
        for title in settings.initial_sheets_list:
            mock.add_sheet(title)
        return mock

    @property
    def spreadsheet_id(self) -> str:
        return self.registry.spreadsheet_id

    # ------------------------------------------------------------------ #
    # Spreadsheet
    # ------------------------------------------------------------------ #

    def get_spreadsheet(self, include_grid_data: bool = True) -> Spreadsheet:
        """Return a snapshot of the spreadsheet.

        Args:
            include_grid_data: Whether sheets carry their cell data.

        Returns:
            A deep copy; mutating it does not affect the emulator.
        """
        with self._lock:
            snapshot = self.registry.spreadsheet.model_copy(deep=True)
        if not include_grid_data:
            for sheet in snapshot.sheets:
                sheet.data = []
        return snapshot

    def add_sheet(self, title: str | None = None) -> SheetProperties:
        """Add a sheet with the default geometry.

        Raises:
            DuplicateSheetTitleError: If a sheet with this title exists.
        """
        with self._lock:
            return self.registry.add_sheet(title)

    def batch_update(
        self, request: BatchUpdateSpreadsheetRequest | dict[str, Any]
    ) -> BatchUpdateSpreadsheetResponse:
        """Apply structural requests in order.

        Only add-sheet requests are supported. Other request kinds produce no
        reply and are skipped. Every title is checked before the first sheet
        is added, so a duplicate anywhere in the batch adds nothing.

        Raises:
            DuplicateSheetTitleError: If a title is already in use or repeated
                within the batch.
        """
        if isinstance(request, dict):
            request = BatchUpdateSpreadsheetRequest.model_validate(request)

        with self._lock:
            for item in request.requests:
                if item.add_sheet is None and item.model_extra:
                    logger.warning(
                        "Skipping unsupported batchUpdate request",
                        kinds=",".join(sorted(item.model_extra)),
                    )

            titles = self.registry.resolve_titles(
                [
                    item.add_sheet.properties.title
                    for item in request.requests
                    if item.add_sheet is not None
                ]
            )
            replies = [
                Response(
                    add_sheet=AddSheetResponse(
                        properties=self.registry.add_sheet(title)
                    )
                )
                for title in titles
            ]

            return BatchUpdateSpreadsheetResponse(
                spreadsheet_id=self.spreadsheet_id,
                replies=replies,
                updated_spreadsheet=self.registry.spreadsheet.model_copy(deep=True),
            )

    # ------------------------------------------------------------------ #
    # Values
    # ------------------------------------------------------------------ #

    def get_value_range(self, range_expr: str) -> ValueRange:
        with self._lock:
            return self.engine.get_value_range(range_expr)

    def batch_get(
        self,
        range_exprs: Sequence[str],
        major_dimension: Dimension | str = Dimension.ROWS,
    ) -> BatchGetValuesResponse:
        with self._lock:
            return self.engine.batch_get(range_exprs, major_dimension)

    def update_values(
        self,
        range_expr: str,
        values: Sequence[Sequence[Any]],
        major_dimension: Dimension | str = Dimension.ROWS,
        value_input_option: ValueInputOption = ValueInputOption.RAW,
    ) -> UpdateValuesResponse:
        with self._lock:
            return self.engine.update_values(
                range_expr, values, major_dimension, value_input_option
            )

    def append_values(
        self,
        range_expr: str,
        values: Sequence[Sequence[Any]],
        insert_data_option: InsertDataOption = InsertDataOption.OVERWRITE,
        value_input_option: ValueInputOption = ValueInputOption.RAW,
        major_dimension: Dimension | str = Dimension.ROWS,
    ) -> AppendValuesResponse:
        with self._lock:
            return self.engine.append_values(
                range_expr,
                values,
                insert_data_option,
                value_input_option,
                major_dimension,
            )

    # ------------------------------------------------------------------ #
    # Test accessors
    # ------------------------------------------------------------------ #

    def cell(self, address: str) -> CellValue | Absent:
        """Return the value of a single cell, e.g. ``mock.cell("Data!A1")``.

        Returns None for an empty cell and NOT_PRESENT for an address outside
        the grid.
        """
        with self._lock:
            cell = self.engine.cell_data(address)
            if cell is None:
                return NOT_PRESENT
            return decode_value(cell.user_entered_value)

    def has_cell(self, address: str) -> bool:
        """Whether the address's top-left corner has a backing cell."""
        with self._lock:
            return self.engine.cell_data(address) is not None
