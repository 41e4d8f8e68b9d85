"""Read, overwrite and append operations over resolved ranges.

Every operation resolves its range expression with the A1 parser, walks the
resulting address over the sheet's grid store and converts cell values with
the codec. Validation (cell existence, value types, ordering) happens before
any cell is touched, so a failing call leaves the grid unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sheets_emulator.models import (
    AppendValuesResponse,
    BatchGetValuesResponse,
    CellData,
    Dimension,
    InsertDataOption,
    UpdateValuesResponse,
    ValueInputOption,
    ValueRange,
)
from sheets_emulator.services.a1_notation import (
    CellPosition,
    RangeAddress,
    create_a1_from_ranges,
    parse_a1_notation,
)
from sheets_emulator.services.cell_codec import (
    CellValue,
    decode_value,
    encode_matrix,
    values_to_row,
)
from sheets_emulator.services.spreadsheet_registry import SpreadsheetRegistry
from sheets_emulator.utils.exceptions import (
    CellNotFoundError,
    UnsupportedOrderingError,
)
from sheets_emulator.utils.logging import get_logger, timed_operation

logger = get_logger(__name__)


def _require_rows(major_dimension: Dimension | str) -> None:
    if major_dimension != Dimension.ROWS:
        requested = (
            major_dimension.value
            if isinstance(major_dimension, Dimension)
            else str(major_dimension)
        )
        raise UnsupportedOrderingError(requested)


class RangeEngine:
    """Range operations against the sheets of one registry."""

    def __init__(self, registry: SpreadsheetRegistry) -> None:
        self.registry = registry

    @property
    def spreadsheet_id(self) -> str:
        return self.registry.spreadsheet_id

    def resolve(self, range_expr: str) -> RangeAddress:
        address = parse_a1_notation(range_expr, self.registry)
        logger.debug(
            "Resolved range",
            range=range_expr,
            sheet=address.sheet.properties.title,
            top_left=(address.top_left.row, address.top_left.column),
            bottom_right=(address.bottom_right.row, address.bottom_right.column),
        )
        return address

    def _cells(
        self, address: RangeAddress, range_expr: str
    ) -> list[list[CellData]]:
        """Collect the cells under an address in row-major order.

        Raises:
            CellNotFoundError: If any coordinate has no backing cell.
        """
        store = self.registry.grid_store(address.sheet)
        rows: list[list[CellData]] = []
        for row in range(address.top_left.row, address.bottom_right.row + 1):
            cells: list[CellData] = []
            for column in range(
                address.top_left.column, address.bottom_right.column + 1
            ):
                cell = store.cell_at(row, column)
                if cell is None:
                    raise CellNotFoundError(row, column, range_expr)
                cells.append(cell)
            rows.append(cells)
        return rows

    def get_value_range(self, range_expr: str) -> ValueRange:
        """Read the values under a range, row-major."""
        address = self.resolve(range_expr)
        values: list[list[CellValue]] = [
            [decode_value(cell.user_entered_value) for cell in row]
            for row in self._cells(address, range_expr)
        ]
        return ValueRange(
            range=range_expr, major_dimension=Dimension.ROWS, values=values
        )

    def batch_get(
        self,
        range_exprs: Sequence[str],
        major_dimension: Dimension | str = Dimension.ROWS,
    ) -> BatchGetValuesResponse:
        """Read several ranges; a single bad range fails the whole batch.

        Raises:
            UnsupportedOrderingError: If major_dimension is not ROWS.
        """
        _require_rows(major_dimension)

        with timed_operation(logger, "batch_get") as metrics:
            value_ranges = [self.get_value_range(expr) for expr in range_exprs]
            metrics.rows = sum(len(vr.values) for vr in value_ranges)
            metrics.cells = sum(len(row) for vr in value_ranges for row in vr.values)
            metrics.custom_metrics["ranges"] = len(value_ranges)

        return BatchGetValuesResponse(
            spreadsheet_id=self.spreadsheet_id, value_ranges=value_ranges
        )

    def update_values(
        self,
        range_expr: str,
        values: Sequence[Sequence[Any]],
        major_dimension: Dimension | str = Dimension.ROWS,
        value_input_option: ValueInputOption = ValueInputOption.RAW,
    ) -> UpdateValuesResponse:
        """Overwrite the cells under a range with a row-major value matrix.

        Cell (r, c) of the range receives ``values[r - top][c - left]``. Cells
        with no corresponding value keep their content; values falling
        outside the range are ignored.

        Raises:
            UnsupportedOrderingError: If the matrix is not row-major.
            UnsupportedValueTypeError: If a value cannot be encoded.
            CellNotFoundError: If the range exceeds the grid.
        """
        _require_rows(major_dimension)

        address = self.resolve(range_expr)
        encoded = encode_matrix(values, value_input_option)
        target = self._cells(address, range_expr)

        written = 0
        for row_offset, cells in enumerate(target):
            if row_offset >= len(encoded):
                break
            incoming = encoded[row_offset]
            for column_offset, cell in enumerate(cells):
                if column_offset >= len(incoming):
                    break
                cell.user_entered_value = incoming[column_offset]
                written += 1

        updated_rows = len(values)
        updated_columns = len(values[0]) if values else 0
        logger.debug(
            "Values updated",
            range=range_expr,
            rows=updated_rows,
            columns=updated_columns,
            cells_written=written,
        )
        return UpdateValuesResponse(
            spreadsheet_id=self.spreadsheet_id,
            updated_range=range_expr,
            updated_rows=updated_rows,
            updated_columns=updated_columns,
            updated_cells=updated_rows * updated_columns,
            updated_data=ValueRange(
                range=range_expr,
                major_dimension=Dimension.ROWS,
                values=[list(row) for row in values],
            ),
        )

    def append_values(
        self,
        range_expr: str,
        values: Sequence[Sequence[Any]],
        insert_data_option: InsertDataOption = InsertDataOption.OVERWRITE,
        value_input_option: ValueInputOption = ValueInputOption.RAW,
        major_dimension: Dimension | str = Dimension.ROWS,
    ) -> AppendValuesResponse:
        """Write rows immediately below the range's last row.

        With INSERT_ROWS the rows below the insertion point are pushed down
        and the grid grows by one row per appended row. With OVERWRITE the
        rows at the insertion point are replaced; the grid only grows when
        the appended rows run past its end.

        The reported updated range spans column A of the written rows only,
        and is omitted when no rows were written.

        Raises:
            UnsupportedOrderingError: If the matrix is not row-major.
            UnsupportedValueTypeError: If a value cannot be encoded.
        """
        _require_rows(major_dimension)

        address = self.resolve(range_expr)
        sheet = address.sheet
        store = self.registry.grid_store(sheet)
        # Ranges below the grid append at its end.
        insert_at = min(address.bottom_right.row + 1, store.row_count)

        width = max((len(row) for row in values), default=0)
        new_rows = [
            values_to_row(row, max(store.column_count, width), value_input_option)
            for row in values
        ]
        remove_count = (
            len(new_rows) if insert_data_option == InsertDataOption.OVERWRITE else 0
        )

        with timed_operation(logger, "append") as metrics:
            store.ensure_columns(width)
            store.splice_rows(
                insert_at,
                new_rows,
                [store.new_metadata() for _ in new_rows],
                remove_count,
            )
            self.registry.sync_grid_properties(sheet)
            metrics.rows = len(new_rows)
            metrics.cells = sum(len(row) for row in values)

        logger.info(
            "Rows appended",
            sheet=sheet.properties.title,
            insert_at=insert_at,
            rows=len(new_rows),
            mode=InsertDataOption(insert_data_option).value,
            row_count=store.row_count,
        )

        updated_range = None
        if new_rows:
            updated_range = create_a1_from_ranges(
                sheet,
                CellPosition(row=insert_at, column=0),
                CellPosition(row=insert_at + len(new_rows) - 1, column=0),
            )
        updated_rows = len(values)
        updated_columns = len(values[0]) if values else 0
        return AppendValuesResponse(
            spreadsheet_id=self.spreadsheet_id,
            table_range=range_expr,
            updates=UpdateValuesResponse(
                spreadsheet_id=self.spreadsheet_id,
                updated_range=updated_range,
                updated_rows=updated_rows,
                updated_columns=updated_columns,
                updated_cells=updated_rows * updated_columns,
                updated_data=ValueRange(
                    range=range_expr,
                    major_dimension=Dimension.ROWS,
                    values=[list(row) for row in values],
                ),
            ),
        )

    def cell_data(self, address_expr: str) -> CellData | None:
        """Return the cell at the top-left corner of an address, if present."""
        address = self.resolve(address_expr)
        store = self.registry.grid_store(address.sheet)
        return store.cell_at(address.top_left.row, address.top_left.column)
