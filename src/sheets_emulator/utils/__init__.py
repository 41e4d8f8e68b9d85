"""Utilities package for the sheets emulator.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
"""

from sheets_emulator.utils.exceptions import (
    AuthenticationError,
    CellNotFoundError,
    DuplicateSheetTitleError,
    ErrorCode,
    HTTPStatusMixin,
    InvalidRangeError,
    RangeError,
    SheetError,
    SheetNotFoundError,
    SheetsEmulatorError,
    SpreadsheetNotFoundError,
    UnsupportedOrderingError,
    UnsupportedValueTypeError,
    ValueEncodingError,
)
from sheets_emulator.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Exceptions
    "AuthenticationError",
    "CellNotFoundError",
    "DuplicateSheetTitleError",
    "ErrorCode",
    "HTTPStatusMixin",
    "InvalidRangeError",
    "RangeError",
    "SheetError",
    "SheetNotFoundError",
    "SheetsEmulatorError",
    "SpreadsheetNotFoundError",
    "UnsupportedOrderingError",
    "UnsupportedValueTypeError",
    "ValueEncodingError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
