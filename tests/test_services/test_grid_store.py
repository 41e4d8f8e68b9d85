"""Tests for the grid store."""

import pytest

from sheets_emulator.models import CellData, DimensionProperties, ExtendedValue, RowData
from sheets_emulator.services.grid_store import GridStore, create_empty_grid


def _row(label: str, width: int = 3) -> RowData:
    cells = [CellData(user_entered_value=ExtendedValue(string_value=label))]
    cells.extend(CellData() for _ in range(width - 1))
    return RowData(values=cells)


def _labels(store: GridStore) -> list[str | None]:
    return [row.values[0].user_entered_value.string_value for row in store.grid.row_data]


@pytest.fixture
def store() -> GridStore:
    """A 4x3 grid whose rows are labelled r0..r3 in column A."""
    grid = create_empty_grid(4, 3, pixel_size=20)
    for index in range(4):
        grid.row_data[index] = _row(f"r{index}")
    return GridStore(grid, pixel_size=20)


class TestCreateEmptyGrid:
    """Tests for grid construction."""

    def test_default_geometry(self) -> None:
        grid = create_empty_grid(100, 26)
        assert grid.start_row == 0
        assert grid.start_column == 0
        assert len(grid.row_data) == 100
        assert all(len(row.values) == 26 for row in grid.row_data)
        assert len(grid.row_metadata) == 100
        assert len(grid.column_metadata) == 26
        assert all(m.pixel_size == 100 for m in grid.row_metadata)
        assert all(
            m.hidden_by_filter is False and m.hidden_by_user is False
            for m in grid.column_metadata
        )

    def test_cells_are_independent(self) -> None:
        grid = create_empty_grid(2, 2)
        grid.row_data[0].values[0].user_entered_value.string_value = "x"
        assert grid.row_data[1].values[0].user_entered_value.string_value is None
        assert grid.row_data[0].values[1].user_entered_value.string_value is None


class TestCellAt:
    """Tests for bounded cell access."""

    def test_inside_grid(self, store: GridStore) -> None:
        cell = store.cell_at(2, 0)
        assert cell is not None
        assert cell.user_entered_value.string_value == "r2"

    @pytest.mark.parametrize(
        ("row", "column"), [(4, 0), (0, 3), (-1, 0), (0, -1), (99, 99)]
    )
    def test_outside_grid(self, store: GridStore, row: int, column: int) -> None:
        assert store.cell_at(row, column) is None


class TestSpliceRows:
    """Tests for structural row edits."""

    def test_insert_shifts_rows_down(self, store: GridStore) -> None:
        removed = store.splice_rows(1, [_row("new")], [store.new_metadata()])
        assert removed == []
        assert _labels(store) == ["r0", "new", "r1", "r2", "r3"]
        assert len(store.grid.row_metadata) == store.row_count == 5

    def test_replace_keeps_row_count(self, store: GridStore) -> None:
        new_rows = [_row("a"), _row("b")]
        removed = store.splice_rows(
            1, new_rows, [store.new_metadata() for _ in new_rows], remove_count=2
        )
        assert [r.values[0].user_entered_value.string_value for r in removed] == [
            "r1",
            "r2",
        ]
        assert _labels(store) == ["r0", "a", "b", "r3"]
        assert len(store.grid.row_metadata) == 4

    def test_replace_past_end_grows(self, store: GridStore) -> None:
        new_rows = [_row("a"), _row("b")]
        store.splice_rows(3, new_rows, [store.new_metadata() for _ in new_rows], 2)
        assert _labels(store) == ["r0", "r1", "r2", "a", "b"]
        assert len(store.grid.row_metadata) == 5

    def test_splice_at_end_appends(self, store: GridStore) -> None:
        store.splice_rows(4, [_row("tail")], [store.new_metadata()])
        assert _labels(store)[-1] == "tail"

    def test_new_metadata_uses_pixel_size(self, store: GridStore) -> None:
        assert store.new_metadata() == DimensionProperties(pixel_size=20)

    def test_metadata_mismatch_rejected(self, store: GridStore) -> None:
        with pytest.raises(ValueError):
            store.splice_rows(0, [_row("a"), _row("b")], [store.new_metadata()])
        assert store.row_count == 4

    def test_negative_index_rejected(self, store: GridStore) -> None:
        with pytest.raises(ValueError):
            store.splice_rows(-1, [], [])


class TestEnsureColumns:
    """Tests for widening the grid."""

    def test_widens_metadata_and_rows(self, store: GridStore) -> None:
        store.ensure_columns(5)
        assert store.column_count == 5
        assert all(len(row.values) == 5 for row in store.grid.row_data)
        assert store.grid.column_metadata[4].pixel_size == 20

    def test_never_narrows(self, store: GridStore) -> None:
        store.ensure_columns(1)
        assert store.column_count == 3
        assert all(len(row.values) == 3 for row in store.grid.row_data)
