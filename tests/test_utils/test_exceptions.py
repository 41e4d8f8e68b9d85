"""Tests for the centralized exception classes."""

from sheets_emulator.utils.exceptions import (
    AuthenticationError,
    CellNotFoundError,
    DuplicateSheetTitleError,
    ErrorCode,
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


class TestErrorCode:
    """Tests for ErrorCode enumeration."""

    def test_error_codes_are_unique(self) -> None:
        """All error codes should have unique values."""
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))

    def test_error_code_format(self) -> None:
        """Error codes should follow Exxxx format."""
        for code in ErrorCode:
            assert code.value.startswith("E")
            assert len(code.value) == 5
            assert code.value[1:].isdigit()

    def test_range_errors_start_with_e1(self) -> None:
        """Range error codes should start with E1."""
        for code in [ErrorCode.INVALID_RANGE, ErrorCode.CELL_NOT_FOUND]:
            assert code.value.startswith("E1")

    def test_sheet_errors_start_with_e2(self) -> None:
        """Sheet error codes should start with E2."""
        sheet_codes = [
            ErrorCode.SHEET_NOT_FOUND,
            ErrorCode.DUPLICATE_SHEET_TITLE,
            ErrorCode.SPREADSHEET_NOT_FOUND,
        ]
        for code in sheet_codes:
            assert code.value.startswith("E2")

    def test_value_errors_start_with_e3(self) -> None:
        """Value error codes should start with E3."""
        for code in [ErrorCode.UNSUPPORTED_ORDERING, ErrorCode.UNSUPPORTED_VALUE_TYPE]:
            assert code.value.startswith("E3")


class TestSheetsEmulatorError:
    """Tests for the base error class."""

    def test_basic_initialization(self) -> None:
        error = SheetsEmulatorError("Test error message")
        assert str(error) == "[E9001] Test error message"
        assert error.message == "Test error message"
        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.details == {}
        assert error.http_status == 500

    def test_with_custom_error_code(self) -> None:
        error = SheetsEmulatorError("Custom", error_code=ErrorCode.INVALID_RANGE)
        assert str(error) == "[E1001] Custom"

    def test_to_dict_without_details(self) -> None:
        error = SheetsEmulatorError("Plain")
        assert error.to_dict() == {"error_code": "E9001", "message": "Plain"}

    def test_to_dict_with_details(self) -> None:
        error = SheetsEmulatorError("Detailed", details={"key": "value"})
        assert error.to_dict()["details"] == {"key": "value"}

    def test_get_http_status(self) -> None:
        assert SheetsEmulatorError("x").get_http_status() == 500


class TestRangeErrors:
    """Tests for range addressing errors."""

    def test_invalid_range_error(self) -> None:
        error = InvalidRangeError("No range provided", range_expr="")
        assert isinstance(error, RangeError)
        assert error.error_code == ErrorCode.INVALID_RANGE
        assert error.http_status == 400
        assert error.details["range"] == ""
        assert error.range_expr == ""

    def test_invalid_range_error_without_expression(self) -> None:
        error = InvalidRangeError("Bad")
        assert "range" not in error.details

    def test_cell_not_found_error(self) -> None:
        error = CellNotFoundError(100, 0, range_expr="Sheet1!A101")
        assert error.row == 100
        assert error.column == 0
        assert error.message == "Cell not found at row 100, column 0"
        assert error.details == {"row": 100, "column": 0, "range": "Sheet1!A101"}
        assert error.error_code == ErrorCode.CELL_NOT_FOUND
        assert error.http_status == 400


class TestSheetErrors:
    """Tests for sheet and spreadsheet lookup errors."""

    def test_sheet_not_found_error(self) -> None:
        error = SheetNotFoundError("Missing")
        assert isinstance(error, SheetError)
        assert error.message == "Sheet Missing not found"
        assert error.title == "Missing"
        assert error.details["title"] == "Missing"
        assert error.http_status == 400

    def test_sheet_not_found_without_title(self) -> None:
        error = SheetNotFoundError()
        assert error.message == "Spreadsheet has no sheets"
        assert "title" not in error.details

    def test_sheet_not_found_custom_message(self) -> None:
        error = SheetNotFoundError("X", message="Custom")
        assert error.message == "Custom"

    def test_duplicate_sheet_title_error(self) -> None:
        error = DuplicateSheetTitleError("Sheet1")
        assert error.error_code == ErrorCode.DUPLICATE_SHEET_TITLE
        assert "Sheet1" in error.message
        assert error.http_status == 400

    def test_spreadsheet_not_found_error(self) -> None:
        error = SpreadsheetNotFoundError("other-id")
        assert error.http_status == 404
        assert error.spreadsheet_id == "other-id"
        assert error.details["spreadsheet_id"] == "other-id"
        assert error.error_code == ErrorCode.SPREADSHEET_NOT_FOUND


class TestValueErrors:
    """Tests for value and ordering errors."""

    def test_unsupported_ordering_error(self) -> None:
        error = UnsupportedOrderingError("COLUMNS")
        assert isinstance(error, ValueEncodingError)
        assert error.major_dimension == "COLUMNS"
        assert error.message == "Only row-major updates are supported"
        assert error.http_status == 400

    def test_unsupported_value_type_error(self) -> None:
        error = UnsupportedValueTypeError({"a": 1})
        assert error.value_type == "dict"
        assert error.message == "Unsupported value type: dict"
        assert error.details["value_type"] == "dict"
        assert error.error_code == ErrorCode.UNSUPPORTED_VALUE_TYPE


class TestAuthenticationError:
    """Tests for transport errors."""

    def test_defaults(self) -> None:
        error = AuthenticationError()
        assert error.http_status == 401
        assert error.error_code == ErrorCode.AUTHENTICATION_FAILED
        assert "bearer token" in error.message


class TestExceptionHierarchy:
    """All errors should be catchable through the base class."""

    def test_all_inherit_from_base(self) -> None:
        errors = [
            InvalidRangeError("x"),
            CellNotFoundError(0, 0),
            SheetNotFoundError("x"),
            DuplicateSheetTitleError("x"),
            SpreadsheetNotFoundError("x"),
            UnsupportedOrderingError("COLUMNS"),
            UnsupportedValueTypeError(object()),
            AuthenticationError(),
        ]
        for error in errors:
            assert isinstance(error, SheetsEmulatorError)
            assert isinstance(error, Exception)
