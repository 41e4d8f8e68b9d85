"""Centralized exception classes for the sheets emulator.

This module provides a hierarchy of custom exceptions with error codes,
HTTP status code mapping, and structured error details. Every failure is
raised for the whole call that triggered it; nothing is partially applied.

Exception Hierarchy:
    SheetsEmulatorError (base)
    ├── RangeError
    │   ├── InvalidRangeError
    │   └── CellNotFoundError
    ├── SheetError
    │   ├── SheetNotFoundError
    │   ├── DuplicateSheetTitleError
    │   └── SpreadsheetNotFoundError
    ├── ValueEncodingError
    │   ├── UnsupportedOrderingError
    │   └── UnsupportedValueTypeError
    └── AuthenticationError

Error Codes:
    All errors have a unique error code (e.g., "E1001") that is echoed in the
    error envelope returned by the HTTP transport.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used by the emulator.

    Error codes are grouped by category:
    - E1xxx: Range addressing errors
    - E2xxx: Sheet and spreadsheet lookup errors
    - E3xxx: Value and ordering errors
    - E4xxx: Transport/authentication errors
    - E9xxx: Internal/unexpected errors
    """

    # Range errors (E1xxx)
    INVALID_RANGE = "E1001"
    CELL_NOT_FOUND = "E1002"

    # Sheet errors (E2xxx)
    SHEET_NOT_FOUND = "E2001"
    DUPLICATE_SHEET_TITLE = "E2002"
    SPREADSHEET_NOT_FOUND = "E2003"

    # Value errors (E3xxx)
    UNSUPPORTED_ORDERING = "E3001"
    UNSUPPORTED_VALUE_TYPE = "E3002"

    # Transport errors (E4xxx)
    AUTHENTICATION_FAILED = "E4001"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"


class HTTPStatusMixin:
    """Mixin that provides HTTP status code for exceptions.

    Subclasses set the `http_status` class attribute; the transport layer
    uses it when rendering the error envelope.
    """

    http_status: int = 500

    def get_http_status(self) -> int:
        """Get the HTTP status code for this exception.

        Returns:
            HTTP status code appropriate for this error.
        """
        return self.http_status


class SheetsEmulatorError(Exception, HTTPStatusMixin):
    """Base exception for all sheets emulator errors.

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
        http_status: HTTP status code for API responses (default 500).
    """

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for API responses.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# Range Errors (E1xxx)
# =============================================================================


class RangeError(SheetsEmulatorError):
    """Base class for range addressing errors."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_RANGE,
        range_expr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending range expression.

        Args:
            message: Error message.
            error_code: Error code.
            range_expr: The range expression being resolved.
            details: Additional details.
        """
        details = details or {}
        if range_expr is not None:
            details["range"] = range_expr
        super().__init__(message, error_code, details)
        self.range_expr = range_expr


class InvalidRangeError(RangeError):
    """Raised when a range expression is empty or malformed."""

    def __init__(
        self,
        message: str,
        range_expr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the malformed expression.

        Args:
            message: Error message.
            range_expr: The malformed range expression.
            details: Additional details.
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_RANGE,
            range_expr=range_expr,
            details=details,
        )


class CellNotFoundError(RangeError):
    """Raised when a resolved coordinate has no backing cell."""

    def __init__(
        self,
        row: int,
        column: int,
        range_expr: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the missing coordinate.

        Args:
            row: 0-based row index.
            column: 0-based column index.
            range_expr: The range expression being walked.
            details: Additional details.
        """
        details = details or {}
        details["row"] = row
        details["column"] = column
        super().__init__(
            message=f"Cell not found at row {row}, column {column}",
            error_code=ErrorCode.CELL_NOT_FOUND,
            range_expr=range_expr,
            details=details,
        )
        self.row = row
        self.column = column


# =============================================================================
# Sheet Errors (E2xxx)
# =============================================================================


class SheetError(SheetsEmulatorError):
    """Base class for sheet and spreadsheet lookup errors."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.SHEET_NOT_FOUND,
        title: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the sheet title.

        Args:
            message: Error message.
            error_code: Error code.
            title: Title of the affected sheet.
            details: Additional details.
        """
        details = details or {}
        if title is not None:
            details["title"] = title
        super().__init__(message, error_code, details)
        self.title = title


class SheetNotFoundError(SheetError):
    """Raised when a sheet qualifier does not match any existing sheet."""

    def __init__(
        self,
        title: str | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the unknown title.

        Args:
            title: The sheet title that was not found, or None when the
                spreadsheet has no sheets at all.
            message: Optional custom message.
            details: Additional details.
        """
        if message is None:
            message = (
                f"Sheet {title} not found"
                if title is not None
                else "Spreadsheet has no sheets"
            )
        super().__init__(
            message=message,
            error_code=ErrorCode.SHEET_NOT_FOUND,
            title=title,
            details=details,
        )


class DuplicateSheetTitleError(SheetError):
    """Raised when adding a sheet whose title already exists."""

    def __init__(
        self,
        title: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the duplicated title.

        Args:
            title: The title that is already in use.
            details: Additional details.
        """
        super().__init__(
            message=(
                f'A sheet with the name "{title}" already exists. '
                "Please enter another name."
            ),
            error_code=ErrorCode.DUPLICATE_SHEET_TITLE,
            title=title,
            details=details,
        )


class SpreadsheetNotFoundError(SheetError):
    """Raised when a request targets a spreadsheet id this emulator does not own."""

    http_status: int = 404

    def __init__(
        self,
        spreadsheet_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the unknown spreadsheet id.

        Args:
            spreadsheet_id: The requested spreadsheet id.
            details: Additional details.
        """
        details = details or {}
        details["spreadsheet_id"] = spreadsheet_id
        super().__init__(
            message=f"Requested entity was not found: {spreadsheet_id}",
            error_code=ErrorCode.SPREADSHEET_NOT_FOUND,
            details=details,
        )
        self.spreadsheet_id = spreadsheet_id


# =============================================================================
# Value Errors (E3xxx)
# =============================================================================


class ValueEncodingError(SheetsEmulatorError):
    """Base class for errors about the shape or type of cell values."""

    http_status: int = 400


class UnsupportedOrderingError(ValueEncodingError):
    """Raised when a non-row-major major dimension is requested."""

    def __init__(
        self,
        major_dimension: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the requested dimension.

        Args:
            major_dimension: The dimension that was requested.
            details: Additional details.
        """
        details = details or {}
        details["major_dimension"] = major_dimension
        super().__init__(
            message="Only row-major updates are supported",
            error_code=ErrorCode.UNSUPPORTED_ORDERING,
            details=details,
        )
        self.major_dimension = major_dimension


class UnsupportedValueTypeError(ValueEncodingError):
    """Raised when a value is not a string, number, boolean or empty."""

    def __init__(
        self,
        value: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the rejected value.

        Args:
            value: The value the codec could not encode.
            details: Additional details.
        """
        value_type = type(value).__name__
        details = details or {}
        details["value_type"] = value_type
        super().__init__(
            message=f"Unsupported value type: {value_type}",
            error_code=ErrorCode.UNSUPPORTED_VALUE_TYPE,
            details=details,
        )
        self.value_type = value_type


# =============================================================================
# Transport Errors (E4xxx)
# =============================================================================


class AuthenticationError(SheetsEmulatorError):
    """Raised when a request carries no valid bearer token."""

    http_status: int = 401

    def __init__(
        self,
        message: str = "Request is missing a valid bearer token",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional details.
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTHENTICATION_FAILED,
            details=details,
        )
