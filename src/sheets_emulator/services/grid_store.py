"""Bounded access and structural row edits on a sheet's grid data block.

A grid is always fully populated: every row holds one cell per column
metadata entry, and there is one row metadata entry per row.
"""

from __future__ import annotations

from collections.abc import Sequence

from sheets_emulator.models import CellData, DimensionProperties, GridData, RowData


def create_empty_grid(
    row_count: int,
    column_count: int,
    pixel_size: int = 100,
) -> GridData:
    """Create a grid of empty cells with default row and column metadata."""
    return GridData(
        start_row=0,
        start_column=0,
        row_data=[
            RowData(values=[CellData() for _ in range(column_count)])
            for _ in range(row_count)
        ],
        row_metadata=[
            DimensionProperties(pixel_size=pixel_size) for _ in range(row_count)
        ],
        column_metadata=[
            DimensionProperties(pixel_size=pixel_size) for _ in range(column_count)
        ],
    )


class GridStore:
    """Mutating view over a GridData block.

    The store edits the block in place; there is no copy-on-write.
    """

    def __init__(self, grid: GridData, pixel_size: int = 100) -> None:
        self.grid = grid
        self.pixel_size = pixel_size

    @property
    def row_count(self) -> int:
        return len(self.grid.row_data)

    @property
    def column_count(self) -> int:
        return len(self.grid.column_metadata)

    def cell_at(self, row: int, column: int) -> CellData | None:
        """Return the cell at 0-based coordinates, or None if there is none.

        Negative indices are treated as absent rather than counting from the
        end of the grid.
        """
        if row < 0 or column < 0 or row >= len(self.grid.row_data):
            return None
        cells = self.grid.row_data[row].values
        if column >= len(cells):
            return None
        return cells[column]

    def new_metadata(self) -> DimensionProperties:
        return DimensionProperties(pixel_size=self.pixel_size)

    def splice_rows(
        self,
        at_index: int,
        new_rows: Sequence[RowData],
        metadata: Sequence[DimensionProperties],
        remove_count: int = 0,
    ) -> list[RowData]:
        """Replace remove_count rows at at_index with new_rows.

        Rows after the splice shift down (or up) accordingly. Row metadata is
        spliced in parallel so that both sequences keep the same length.

        Args:
            at_index: 0-based row where the splice starts. Values past the end
                append to the grid.
            new_rows: Rows to insert.
            metadata: One metadata entry per new row.
            remove_count: Number of existing rows to remove first.

        Returns:
            The rows that were removed.

        Raises:
            ValueError: If metadata does not match new_rows one-to-one, or the
                index or count is negative.
        """
        if len(metadata) != len(new_rows):
            raise ValueError(
                f"Expected {len(new_rows)} metadata entries, got {len(metadata)}"
            )
        if at_index < 0 or remove_count < 0:
            raise ValueError("Row splice index and remove count must be >= 0")

        end = at_index + remove_count
        removed = self.grid.row_data[at_index:end]
        self.grid.row_data[at_index:end] = list(new_rows)
        self.grid.row_metadata[at_index:end] = list(metadata)
        return removed

    def ensure_columns(self, column_count: int) -> None:
        """Widen the grid to at least column_count columns and pad every row."""
        missing = column_count - len(self.grid.column_metadata)
        if missing > 0:
            self.grid.column_metadata.extend(
                self.new_metadata() for _ in range(missing)
            )
        width = len(self.grid.column_metadata)
        for row in self.grid.row_data:
            if len(row.values) < width:
                row.values.extend(CellData() for _ in range(width - len(row.values)))
