"""Conversion between tagged cell values and plain scalars."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sheets_emulator.models import CellData, ExtendedValue, RowData, ValueInputOption
from sheets_emulator.utils.exceptions import UnsupportedValueTypeError

CellValue = str | int | float | bool | None
"""A plain cell scalar as it appears in a value matrix."""


def encode_value(
    value: Any,
    value_input_option: ValueInputOption = ValueInputOption.RAW,
) -> ExtendedValue:
    """Wrap a plain scalar into an ExtendedValue.

    With USER_ENTERED input, strings starting with ``=`` are stored as
    formula text. Formulas are never evaluated.

    Raises:
        UnsupportedValueTypeError: If the value is not a string, number,
            boolean or None.
    """
    if value is None:
        return ExtendedValue()
    # bool is a subclass of int and must be checked first.
    if isinstance(value, bool):
        return ExtendedValue(bool_value=value)
    if isinstance(value, int | float):
        return ExtendedValue(number_value=value)
    if isinstance(value, str):
        if value_input_option == ValueInputOption.USER_ENTERED and value.startswith(
            "="
        ):
            return ExtendedValue(formula_value=value)
        return ExtendedValue(string_value=value)
    raise UnsupportedValueTypeError(value)


def decode_value(value: ExtendedValue) -> CellValue:
    """Unwrap an ExtendedValue into a plain scalar; empty cells give None."""
    if value.string_value is not None:
        return value.string_value
    if value.number_value is not None:
        return value.number_value
    if value.bool_value is not None:
        return value.bool_value
    if value.formula_value is not None:
        return value.formula_value
    return None


def encode_matrix(
    values: Sequence[Sequence[Any]],
    value_input_option: ValueInputOption = ValueInputOption.RAW,
) -> list[list[ExtendedValue]]:
    """Encode a whole value matrix, failing before anything is written."""
    return [[encode_value(v, value_input_option) for v in row] for row in values]


def values_to_row(
    values: Sequence[Any],
    column_count: int = 0,
    value_input_option: ValueInputOption = ValueInputOption.RAW,
) -> RowData:
    """Build a full row from scalars, padded with empty cells to column_count."""
    cells = [
        CellData(user_entered_value=encode_value(v, value_input_option))
        for v in values
    ]
    cells.extend(CellData() for _ in range(column_count - len(cells)))
    return RowData(values=cells)
