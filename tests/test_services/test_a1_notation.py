"""Tests for A1 range parsing and formatting."""

import pytest

from sheets_emulator.services.a1_notation import (
    CellPosition,
    RangeAddress,
    column_to_letter,
    create_a1_from_ranges,
    letter_to_column,
    parse_a1_notation,
    parse_cell,
    quote_sheet_name,
    unquote_sheet_name,
)
from sheets_emulator.services.spreadsheet_registry import SpreadsheetRegistry
from sheets_emulator.utils.exceptions import InvalidRangeError, SheetNotFoundError


def _corners(address: RangeAddress) -> tuple[tuple[int, int], tuple[int, int]]:
    return (
        (address.top_left.row, address.top_left.column),
        (address.bottom_right.row, address.bottom_right.column),
    )


class TestColumnLetters:
    """Tests for column letter conversion."""

    def test_letter_to_column(self) -> None:
        assert letter_to_column("A") == 0
        assert letter_to_column("z") == 25

    def test_column_to_letter(self) -> None:
        assert column_to_letter(0) == "A"
        assert column_to_letter(25) == "Z"

    @pytest.mark.parametrize("letter", ["AA", "", "1", "É"])
    def test_invalid_letters(self, letter: str) -> None:
        with pytest.raises(InvalidRangeError):
            letter_to_column(letter)

    @pytest.mark.parametrize("column", [-1, 26])
    def test_unrepresentable_columns(self, column: int) -> None:
        with pytest.raises(InvalidRangeError):
            column_to_letter(column)


class TestParseCell:
    """Tests for single corner parsing."""

    def test_full_reference(self) -> None:
        ref = parse_cell("C5")
        assert (ref.row, ref.column) == (4, 2)

    def test_row_only(self) -> None:
        ref = parse_cell("7")
        assert (ref.row, ref.column) == (6, None)

    def test_column_only(self) -> None:
        ref = parse_cell("b")
        assert (ref.row, ref.column) == (None, 1)

    @pytest.mark.parametrize("ref", ["", "A0", "1A", "A-1", "A1B"])
    def test_invalid(self, ref: str) -> None:
        with pytest.raises(InvalidRangeError):
            parse_cell(ref)


class TestSheetNames:
    """Tests for quoting sheet titles."""

    def test_quote_only_when_spaced(self) -> None:
        assert quote_sheet_name("Data") == "Data"
        assert quote_sheet_name("My Sheet") == "'My Sheet'"

    def test_quote_escapes_inner_quotes(self) -> None:
        assert quote_sheet_name("Bob's Sheet") == "'Bob''s Sheet'"
        assert unquote_sheet_name("'Bob''s Sheet'") == "Bob's Sheet"

    def test_unquote_leaves_bare_names(self) -> None:
        assert unquote_sheet_name("Data") == "Data"
        assert unquote_sheet_name("'") == "'"


class TestParseA1Notation:
    """Tests for resolving range expressions against sheets."""

    @pytest.mark.parametrize(
        ("expr", "expected"),
        [
            ("Sheet1!A1", ((0, 0), (0, 0))),
            ("Sheet1!A1:C1", ((0, 0), (0, 2))),
            ("Sheet1!B2:D10", ((1, 1), (9, 3))),
            ("A1", ((0, 0), (0, 0))),
            ("a1:b2", ((0, 0), (1, 1))),
            ("Sheet1!A:A", ((0, 0), (99, 0))),
            ("Sheet1!A:B", ((0, 0), (99, 1))),
            ("Sheet1!1:1", ((0, 0), (0, 25))),
            ("Sheet1!1:2", ((0, 0), (1, 25))),
            ("Sheet1!B2:B", ((1, 1), (99, 1))),
            ("Sheet1!B3:5", ((2, 1), (4, 25))),
            ("Sheet1!A", ((0, 0), (99, 0))),
            ("Sheet1!3", ((2, 0), (2, 25))),
            ("Sheet1", ((0, 0), (99, 25))),
        ],
    )
    def test_resolves_corners(
        self,
        registry: SpreadsheetRegistry,
        expr: str,
        expected: tuple[tuple[int, int], tuple[int, int]],
    ) -> None:
        address = parse_a1_notation(expr, registry)
        assert address.sheet.properties.title == "Sheet1"
        assert _corners(address) == expected

    def test_single_cell_fills_bottom_right(
        self, registry: SpreadsheetRegistry
    ) -> None:
        address = parse_a1_notation("Sheet1!C4", registry)
        assert address.top_left == address.bottom_right == CellPosition(3, 2)

    def test_reversed_corners_are_normalised(
        self, registry: SpreadsheetRegistry
    ) -> None:
        address = parse_a1_notation("Sheet1!C3:A1", registry)
        assert _corners(address) == ((0, 0), (2, 2))
        assert address.row_count == 3
        assert address.column_count == 3

    def test_mixed_corners_are_normalised(
        self, registry: SpreadsheetRegistry
    ) -> None:
        address = parse_a1_notation("Sheet1!C1:A3", registry)
        assert _corners(address) == ((0, 0), (2, 2))

    def test_quoted_sheet_name(self, registry: SpreadsheetRegistry) -> None:
        registry.add_sheet("My Sheet")
        address = parse_a1_notation("'My Sheet'!B2", registry)
        assert address.sheet.properties.title == "My Sheet"
        assert _corners(address) == ((1, 1), (1, 1))

    def test_unqualified_uses_first_sheet(self, registry: SpreadsheetRegistry) -> None:
        registry.add_sheet("Other")
        address = parse_a1_notation("B2", registry)
        assert address.sheet.properties.title == "Sheet1"

    def test_bare_sheet_title_addresses_whole_sheet(
        self, registry: SpreadsheetRegistry
    ) -> None:
        registry.add_sheet("Data")
        address = parse_a1_notation("Data", registry)
        assert address.sheet.properties.title == "Data"
        assert _corners(address) == ((0, 0), (99, 25))

    def test_cell_like_title_is_read_as_cell(
        self, registry: SpreadsheetRegistry
    ) -> None:
        registry.add_sheet("B2")
        address = parse_a1_notation("B2", registry)
        assert address.sheet.properties.title == "Sheet1"
        assert _corners(address) == ((1, 1), (1, 1))

    def test_default_fill_uses_current_grid_size(
        self, registry: SpreadsheetRegistry
    ) -> None:
        registry.sheets[0].properties.grid_properties.row_count = 150
        address = parse_a1_notation("Sheet1!A:A", registry)
        assert address.bottom_right.row == 149

    def test_unknown_sheet(self, registry: SpreadsheetRegistry) -> None:
        with pytest.raises(SheetNotFoundError) as exc_info:
            parse_a1_notation("Missing!A1", registry)
        assert exc_info.value.title == "Missing"

    def test_unqualified_without_sheets(self) -> None:
        registry = SpreadsheetRegistry(spreadsheet_id="x")
        with pytest.raises(SheetNotFoundError):
            parse_a1_notation("A1", registry)

    @pytest.mark.parametrize(
        "expr",
        ["", "Sheet1!", ":", "Sheet1!:B2", "A1:B2:C3", "Sheet1!AA1", "Sheet1!A0"],
    )
    def test_invalid_expressions(
        self, registry: SpreadsheetRegistry, expr: str
    ) -> None:
        with pytest.raises(InvalidRangeError):
            parse_a1_notation(expr, registry)

    def test_empty_expression_checked_before_sheets(self) -> None:
        registry = SpreadsheetRegistry(spreadsheet_id="x")
        with pytest.raises(InvalidRangeError):
            parse_a1_notation("", registry)


class TestCreateA1FromRanges:
    """Tests for formatting resolved ranges."""

    def test_formats_qualified_range(self, registry: SpreadsheetRegistry) -> None:
        sheet = registry.sheets[0]
        expr = create_a1_from_ranges(sheet, CellPosition(1, 0), CellPosition(3, 0))
        assert expr == "Sheet1!A2:A4"

    def test_quotes_spaced_titles(self, registry: SpreadsheetRegistry) -> None:
        registry.add_sheet("My Sheet")
        sheet = registry.sheets[1]
        expr = create_a1_from_ranges(sheet, CellPosition(0, 0), CellPosition(0, 25))
        assert expr == "'My Sheet'!A1:Z1"

    def test_output_parses_back(self, registry: SpreadsheetRegistry) -> None:
        sheet = registry.sheets[0]
        expr = create_a1_from_ranges(sheet, CellPosition(4, 2), CellPosition(9, 5))
        assert _corners(parse_a1_notation(expr, registry)) == ((4, 2), (9, 5))
