"""Ownership of the sheets of one spreadsheet.

Sheets are only ever added. A sheet's id is its 0-based creation index, so
ids are never reused.
"""

from __future__ import annotations

from collections.abc import Sequence

from sheets_emulator.models import (
    GridProperties,
    Sheet,
    SheetProperties,
    Spreadsheet,
    SpreadsheetProperties,
)
from sheets_emulator.services.grid_store import GridStore, create_empty_grid
from sheets_emulator.utils.exceptions import DuplicateSheetTitleError
from sheets_emulator.utils.logging import get_logger

logger = get_logger(__name__)


class SpreadsheetRegistry:
    """Holds one Spreadsheet and creates and looks up its sheets."""

    def __init__(
        self,
        spreadsheet_id: str,
        title: str = "Test Spreadsheet",
        default_row_count: int = 100,
        default_column_count: int = 26,
        default_pixel_size: int = 100,
    ) -> None:
        """Initialize an empty spreadsheet.

        Args:
            spreadsheet_id: Immutable identifier of the spreadsheet.
            title: Display title.
            default_row_count: Rows in every newly added sheet.
            default_column_count: Columns in every newly added sheet.
            default_pixel_size: Pixel size of new row/column metadata.
        """
        self.spreadsheet = Spreadsheet(
            spreadsheet_id=spreadsheet_id,
            properties=SpreadsheetProperties(title=title),
            sheets=[],
        )
        self.default_row_count = default_row_count
        self.default_column_count = default_column_count
        self.default_pixel_size = default_pixel_size

    @property
    def spreadsheet_id(self) -> str:
        return self.spreadsheet.spreadsheet_id

    @property
    def sheets(self) -> list[Sheet]:
        return self.spreadsheet.sheets

    def first_sheet(self) -> Sheet | None:
        """Return the sheet addressed by unqualified ranges, if any."""
        return self.spreadsheet.sheets[0] if self.spreadsheet.sheets else None

    def get_sheet_by_name(self, title: str) -> Sheet | None:
        """Find a sheet by exact title."""
        for sheet in self.spreadsheet.sheets:
            if sheet.properties.title == title:
                return sheet
        return None

    def resolve_titles(self, titles: Sequence[str | None]) -> list[str]:
        """Resolve the titles of sheets about to be added, in order.

        Missing titles default to ``Sheet<n>`` where n is the 1-based position
        the sheet would get. Nothing is added.

        Raises:
            DuplicateSheetTitleError: If a title clashes with an existing
                sheet or with an earlier entry of titles.
        """
        taken = {sheet.properties.title for sheet in self.spreadsheet.sheets}
        resolved: list[str] = []
        for offset, title in enumerate(titles):
            if title is None:
                title = f"Sheet{len(self.spreadsheet.sheets) + offset + 1}"
            if title in taken:
                raise DuplicateSheetTitleError(title)
            taken.add(title)
            resolved.append(title)
        return resolved

    def add_sheet(self, title: str | None = None) -> SheetProperties:
        """Append a new, fully populated sheet with the default geometry.

        Args:
            title: Sheet title. Defaults to ``Sheet<n>`` where n is the new
                sheet's 1-based position.

        Returns:
            Properties of the new sheet.

        Raises:
            DuplicateSheetTitleError: If a sheet with this title exists.
        """
        sheet_id = len(self.spreadsheet.sheets)
        title = self.resolve_titles([title])[0]

        properties = SheetProperties(
            sheet_id=sheet_id,
            title=title,
            index=sheet_id,
            grid_properties=GridProperties(
                row_count=self.default_row_count,
                column_count=self.default_column_count,
            ),
        )
        grid = create_empty_grid(
            self.default_row_count,
            self.default_column_count,
            self.default_pixel_size,
        )
        self.spreadsheet.sheets.append(Sheet(properties=properties, data=[grid]))

        logger.info(
            "Sheet added",
            sheet_id=sheet_id,
            title=title,
            rows=self.default_row_count,
            columns=self.default_column_count,
        )
        return properties.model_copy(deep=True)

    def grid_store(self, sheet: Sheet) -> GridStore:
        """Return a store over the sheet's first (and only) grid block."""
        return GridStore(sheet.data[0], pixel_size=self.default_pixel_size)

    def sync_grid_properties(self, sheet: Sheet) -> None:
        """Copy the grid's actual size into the sheet's grid properties."""
        store = self.grid_store(sheet)
        sheet.properties.grid_properties.row_count = store.row_count
        sheet.properties.grid_properties.column_count = store.column_count
