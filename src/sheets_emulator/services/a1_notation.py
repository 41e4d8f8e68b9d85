"""Parsing and formatting of A1 range expressions.

Supported forms, for a sheet with the default 100x26 grid:

    "Sheet1!A1"      -> rows [0, 0],  columns [0, 0]
    "Sheet1!A1:C1"   -> rows [0, 0],  columns [0, 2]
    "A1"             -> first sheet, rows [0, 0], columns [0, 0]
    "'My Sheet'!A1"  -> quoted title, required when the title has a space
    "Sheet1"         -> the whole sheet, rows [0, 99], columns [0, 25]
    "Sheet1!A:A"     -> rows [0, 99], column [0, 0]
    "Sheet1!A:B"     -> rows [0, 99], columns [0, 1]
    "Sheet1!1:1"     -> row [0, 0],   columns [0, 25]
    "Sheet1!1:2"     -> rows [0, 1],  columns [0, 25]
    "Sheet1!C3:A1"   -> rows [0, 2],  columns [0, 2], corners in either order

Columns are a single letter A-Z. Multi-letter columns (AA, AB, ...) are
rejected instead of being read as base-26.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sheets_emulator.config import MAX_ADDRESSABLE_COLUMNS
from sheets_emulator.models import Sheet
from sheets_emulator.services.spreadsheet_registry import SpreadsheetRegistry
from sheets_emulator.utils.exceptions import InvalidRangeError, SheetNotFoundError

_CELL_REF = re.compile(r"^(?P<letters>[A-Za-z]+)?(?P<digits>[0-9]+)?$")
_SINGLE_LETTER_CELLS = re.compile(r"^[A-Za-z]?[0-9]*(:[A-Za-z]?[0-9]*)?$")


@dataclass(frozen=True)
class CellPosition:
    """A 0-based, fully resolved cell coordinate."""

    row: int
    column: int


@dataclass
class RangeAddress:
    """A range expression resolved against a sheet; both corners inclusive."""

    sheet: Sheet
    top_left: CellPosition
    bottom_right: CellPosition

    @property
    def row_count(self) -> int:
        return self.bottom_right.row - self.top_left.row + 1

    @property
    def column_count(self) -> int:
        return self.bottom_right.column - self.top_left.column + 1


@dataclass
class _PartialRef:
    row: int | None = None
    column: int | None = None


def letter_to_column(letter: str) -> int:
    """Map a column letter to its 0-based index ('A' -> 0, 'Z' -> 25)."""
    if len(letter) != 1 or not letter.isascii() or not letter.isalpha():
        raise InvalidRangeError(
            f"Only single-letter columns are supported, got {letter!r}"
        )
    return ord(letter.upper()) - ord("A")


def column_to_letter(column: int) -> str:
    """Map a 0-based column index to its letter (0 -> 'A', 25 -> 'Z')."""
    if not 0 <= column < MAX_ADDRESSABLE_COLUMNS:
        raise InvalidRangeError(
            f"Column index {column} cannot be written as a single letter"
        )
    return chr(ord("A") + column)


def format_cell(position: CellPosition) -> str:
    """Render a position as a cell reference such as ``B3``."""
    return f"{column_to_letter(position.column)}{position.row + 1}"


def quote_sheet_name(title: str) -> str:
    """Quote a sheet title for use in a range expression if it has a space."""
    if " " in title:
        escaped = title.replace("'", "''")
        return f"'{escaped}'"
    return title


def unquote_sheet_name(name: str) -> str:
    """Strip surrounding single quotes and unescape doubled inner quotes."""
    if len(name) >= 2 and name.startswith("'") and name.endswith("'"):
        return name[1:-1].replace("''", "'")
    return name


def parse_cell(ref: str, range_expr: str | None = None) -> _PartialRef:
    """Parse one side of a range into a possibly partial reference.

    Digits alone give a whole-row reference, a letter alone gives a
    whole-column reference.
    """
    match = _CELL_REF.match(ref)
    if match is None or (match["letters"] is None and match["digits"] is None):
        raise InvalidRangeError(f"Invalid cell reference: {ref!r}", range_expr)

    parsed = _PartialRef()
    if match["letters"] is not None:
        try:
            parsed.column = letter_to_column(match["letters"])
        except InvalidRangeError as e:
            raise InvalidRangeError(e.message, range_expr) from e
    if match["digits"] is not None:
        row_number = int(match["digits"])
        if row_number < 1:
            raise InvalidRangeError(
                f"Row numbers start at 1, got {row_number}", range_expr
            )
        parsed.row = row_number - 1
    return parsed


def parse_a1_notation(range_expr: str, registry: SpreadsheetRegistry) -> RangeAddress:
    """Resolve a range expression against the registry's sheets.

    Raises:
        InvalidRangeError: If the expression is empty or malformed.
        SheetNotFoundError: If the named sheet does not exist, or the
            expression is unqualified and there are no sheets.
    """
    if not range_expr:
        raise InvalidRangeError("No range provided", range_expr)

    sheet: Sheet | None
    if "!" in range_expr:
        quoted_name, _, rest = range_expr.rpartition("!")
        sheet_name = unquote_sheet_name(quoted_name)
        sheet = registry.get_sheet_by_name(sheet_name)
        if sheet is None:
            raise SheetNotFoundError(sheet_name)
    else:
        rest = range_expr
        if rest and not _SINGLE_LETTER_CELLS.match(rest):
            whole_sheet = registry.get_sheet_by_name(unquote_sheet_name(rest))
            if whole_sheet is not None:
                return _whole_sheet(whole_sheet)
        sheet = registry.first_sheet()
        if sheet is None:
            raise SheetNotFoundError()

    if not rest:
        raise InvalidRangeError("No range provided", range_expr)

    parts = rest.split(":")
    if len(parts) > 2:
        raise InvalidRangeError("A range has at most two corners", range_expr)

    top_left = parse_cell(parts[0], range_expr) if parts[0] else None
    bottom_right = (
        parse_cell(parts[1], range_expr) if len(parts) == 2 and parts[1] else None
    )

    if top_left is None and bottom_right is None:
        raise InvalidRangeError("No range provided", range_expr)
    if top_left is None:
        raise InvalidRangeError("No top left cell provided", range_expr)
    if bottom_right is None:
        bottom_right = _PartialRef(row=top_left.row, column=top_left.column)

    grid = sheet.properties.grid_properties
    first_row = top_left.row if top_left.row is not None else 0
    first_column = top_left.column if top_left.column is not None else 0
    last_row = (
        bottom_right.row if bottom_right.row is not None else grid.row_count - 1
    )
    last_column = (
        bottom_right.column
        if bottom_right.column is not None
        else grid.column_count - 1
    )

    # Corners given in reverse order ("B2:A1") address the same rectangle.
    return RangeAddress(
        sheet=sheet,
        top_left=CellPosition(
            min(first_row, last_row), min(first_column, last_column)
        ),
        bottom_right=CellPosition(
            max(first_row, last_row), max(first_column, last_column)
        ),
    )


def _whole_sheet(sheet: Sheet) -> RangeAddress:
    grid = sheet.properties.grid_properties
    return RangeAddress(
        sheet=sheet,
        top_left=CellPosition(0, 0),
        bottom_right=CellPosition(grid.row_count - 1, grid.column_count - 1),
    )


def create_a1_from_ranges(
    sheet: Sheet,
    top_left: CellPosition,
    bottom_right: CellPosition,
) -> str:
    """Build a qualified range expression such as ``Sheet1!A2:A4``."""
    title = quote_sheet_name(sheet.properties.title)
    return f"{title}!{format_cell(top_left)}:{format_cell(bottom_right)}"
