"""Pydantic models mirroring the spreadsheet service's wire shapes.

Field names are snake_case in Python and camelCase on the wire; models accept
either form on input and serialize by alias.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SheetsModel(BaseModel):
    """Base model with camelCase wire aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Enumerations
# =============================================================================


class Dimension(str, Enum):
    """Ordering of a value matrix."""

    ROWS = "ROWS"
    COLUMNS = "COLUMNS"


class ValueInputOption(str, Enum):
    """How incoming values are interpreted."""

    USER_ENTERED = "USER_ENTERED"
    RAW = "RAW"
    INPUT_VALUE_OPTION_UNSPECIFIED = "INPUT_VALUE_OPTION_UNSPECIFIED"


class InsertDataOption(str, Enum):
    """Whether an append shifts existing rows down or overwrites them."""

    OVERWRITE = "OVERWRITE"
    INSERT_ROWS = "INSERT_ROWS"


# =============================================================================
# Grid data
# =============================================================================


class DimensionProperties(SheetsModel):
    """Metadata for a single row or column."""

    hidden_by_filter: bool = False
    hidden_by_user: bool = False
    pixel_size: int = 100


class ErrorValue(SheetsModel):
    """An error held by a cell."""

    type: str
    message: str


class ExtendedValue(SheetsModel):
    """Tagged cell value; at most one field is set, none means empty."""

    string_value: str | None = None
    number_value: int | float | None = None
    bool_value: bool | None = None
    formula_value: str | None = None
    error_value: ErrorValue | None = None


class CellData(SheetsModel):
    """A single cell."""

    user_entered_value: ExtendedValue = Field(default_factory=ExtendedValue)


class RowData(SheetsModel):
    """An ordered row of cells."""

    values: list[CellData] = Field(default_factory=list)


class GridData(SheetsModel):
    """The cell block backing a sheet, with parallel row/column metadata."""

    start_row: int = 0
    start_column: int = 0
    row_data: list[RowData] = Field(default_factory=list)
    row_metadata: list[DimensionProperties] = Field(default_factory=list)
    column_metadata: list[DimensionProperties] = Field(default_factory=list)


# =============================================================================
# Spreadsheet structure
# =============================================================================


class GridProperties(SheetsModel):
    """Geometry of a grid sheet."""

    row_count: int
    column_count: int
    frozen_row_count: int = 0
    frozen_column_count: int = 0
    hide_gridlines: bool = False
    row_group_control_after: bool = False
    column_group_control_after: bool = False


class SheetProperties(SheetsModel):
    """Properties of a sheet."""

    sheet_id: int = Field(..., description="0-based creation index of the sheet")
    title: str = Field(..., description="Sheet title, unique in the spreadsheet")
    index: int = Field(..., description="Position of the sheet in the spreadsheet")
    grid_properties: GridProperties


class Sheet(SheetsModel):
    """A sheet and its single grid data block."""

    properties: SheetProperties
    data: list[GridData] = Field(default_factory=list)


class SpreadsheetProperties(SheetsModel):
    """Properties of a spreadsheet."""

    title: str


class Spreadsheet(SheetsModel):
    """A spreadsheet and its sheets, in creation order."""

    spreadsheet_id: str
    properties: SpreadsheetProperties
    sheets: list[Sheet] = Field(default_factory=list)


# =============================================================================
# Values API
# =============================================================================


class ValueRange(SheetsModel):
    """A rectangular block of plain values addressed by a range expression."""

    range: str | None = Field(default=None, description="A1 range expression")
    major_dimension: Dimension = Field(
        default=Dimension.ROWS, description="Ordering of the values matrix"
    )
    values: list[list[Any]] = Field(
        default_factory=list, description="Value matrix in major_dimension order"
    )


class UpdateValuesResponse(SheetsModel):
    """Summary of a values update."""

    spreadsheet_id: str
    updated_range: str | None = None
    updated_rows: int
    updated_columns: int
    updated_cells: int
    updated_data: ValueRange | None = None


class AppendValuesResponse(SheetsModel):
    """Summary of a values append."""

    spreadsheet_id: str
    table_range: str
    updates: UpdateValuesResponse


class BatchGetValuesResponse(SheetsModel):
    """Values for several ranges, in request order."""

    spreadsheet_id: str
    value_ranges: list[ValueRange] = Field(default_factory=list)


# =============================================================================
# batchUpdate API
# =============================================================================


class AddSheetProperties(SheetsModel):
    """Requested properties of a new sheet.

    Only ``title`` is honoured; geometry always comes from configuration.
    """

    sheet_id: int | None = None
    title: str | None = None
    index: int | None = None
    grid_properties: dict[str, Any] | None = None


class AddSheetRequest(SheetsModel):
    """Request to add a sheet."""

    properties: AddSheetProperties = Field(default_factory=AddSheetProperties)


class Request(SheetsModel):
    """A single batchUpdate request; unknown kinds are kept as extras."""

    model_config = ConfigDict(extra="allow")

    add_sheet: AddSheetRequest | None = None


class BatchUpdateSpreadsheetRequest(SheetsModel):
    """Body of a spreadsheet batchUpdate call."""

    requests: list[Request] = Field(default_factory=list)
    include_spreadsheet_in_response: bool = False
    response_ranges: list[str] = Field(default_factory=list)
    response_include_grid_data: bool = False


class AddSheetResponse(SheetsModel):
    """Reply to an add-sheet request."""

    properties: SheetProperties


class Response(SheetsModel):
    """A single batchUpdate reply."""

    add_sheet: AddSheetResponse | None = None


class BatchUpdateSpreadsheetResponse(SheetsModel):
    """Result of a spreadsheet batchUpdate call."""

    spreadsheet_id: str
    replies: list[Response] = Field(default_factory=list)
    updated_spreadsheet: Spreadsheet


# =============================================================================
# Transport
# =============================================================================


class TokenResponse(BaseModel):
    """Response of the simulated OAuth token exchange."""

    access_token: str
    expires_in: int = 3600
    token_type: str = "Bearer"
    scope: str = "https://www.googleapis.com/auth/spreadsheets"


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: str
    version: str


_STATUS_NAMES = {
    400: "INVALID_ARGUMENT",
    401: "UNAUTHENTICATED",
    404: "NOT_FOUND",
    500: "INTERNAL",
}


class ErrorBody(BaseModel):
    """Inner body of the service's error envelope."""

    code: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable error message")
    status: str = Field(..., description="Canonical status name")
    details: dict[str, Any] | None = Field(
        default=None, description="Error code, request id and debugging details"
    )


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    error: ErrorBody

    @classmethod
    def build(
        cls,
        code: int,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> "ErrorResponse":
        """Create an error envelope.

        Args:
            code: HTTP status code.
            message: Human-readable error message.
            error_code: Optional machine-readable error code (e.g. "E1001").
            details: Optional additional details.
            request_id: Optional request ID for correlation.

        Returns:
            ErrorResponse instance.
        """
        merged: dict[str, Any] = dict(details or {})
        if error_code:
            merged["errorCode"] = error_code
        if request_id:
            merged["requestId"] = request_id
        return cls(
            error=ErrorBody(
                code=code,
                message=message,
                status=_STATUS_NAMES.get(code, "UNKNOWN"),
                details=merged or None,
            )
        )
