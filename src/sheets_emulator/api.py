"""FastAPI transport exposing a SheetsMock over the service's REST paths.

The application decodes requests into engine calls and serializes results
back into the service's wire shapes. It holds no range logic of its own.
Each call to create_app builds an application around its own SheetsMock.
"""

import uuid
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Body, Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sheets_emulator.config import Settings, settings, validate_settings_on_startup
from sheets_emulator.models import (
    AppendValuesResponse,
    BatchGetValuesResponse,
    BatchUpdateSpreadsheetRequest,
    BatchUpdateSpreadsheetResponse,
    Dimension,
    ErrorResponse,
    HealthResponse,
    InsertDataOption,
    Spreadsheet,
    TokenResponse,
    UpdateValuesResponse,
    ValueInputOption,
    ValueRange,
)
from sheets_emulator.services.sheets_mock import SheetsMock
from sheets_emulator.utils.exceptions import (
    AuthenticationError,
    ErrorCode,
    SheetsEmulatorError,
    SpreadsheetNotFoundError,
)
from sheets_emulator.utils.logging import (
    LogContext,
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

configure_logging(
    level=settings.log_level_int,
    use_structured_formatter=True,
)
logger = get_logger(__name__)

API_VERSION = "0.1.0"
SPREADSHEET_PATH = "/v4/spreadsheets/{spreadsheet_id}"


def _config(request: Request) -> Settings:
    config: Settings = request.app.state.settings
    return config


def require_token(request: Request) -> None:
    """Reject the request unless it carries the configured bearer token."""
    config = _config(request)
    if not config.require_auth:
        return
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token or token != config.get_access_token():
        raise AuthenticationError()


def get_sheets(request: Request, spreadsheet_id: str) -> SheetsMock:
    """Return the app's SheetsMock if it owns the requested spreadsheet."""
    sheets: SheetsMock = request.app.state.sheets
    if spreadsheet_id != sheets.spreadsheet_id:
        raise SpreadsheetNotFoundError(spreadsheet_id)
    return sheets


SheetsDep = Annotated[SheetsMock, Depends(get_sheets)]


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", get_request_id())
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.build(
            code=status_code,
            message=message,
            error_code=error_code,
            details=details,
            request_id=request_id,
        ).model_dump(exclude_none=True),
    )


def create_app(
    sheets: SheetsMock | None = None,
    config: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        sheets: Spreadsheet to serve. Built from configuration if omitted.
        config: Settings to use. Defaults to the module-level settings.

    Returns:
        The configured application.
    """
    config = config or settings
    validate_settings_on_startup(config)

    app = FastAPI(
        title="Sheets Emulator",
        description=(
            "In-memory emulation of a spreadsheet service's values and "
            "batchUpdate endpoints for exercising API clients in tests."
        ),
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = config
    app.state.sheets = sheets or SheetsMock.from_settings(config)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Any) -> Any:
        """Assign a request ID, expose it in logs and echo it in headers."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()

    @app.exception_handler(SheetsEmulatorError)
    async def emulator_exception_handler(
        request: Request, exc: SheetsEmulatorError
    ) -> JSONResponse:
        """Render emulator errors in the service's error envelope."""
        http_status = exc.get_http_status()
        error = exc.to_dict()
        logger.warning(
            f"Request failed: {error['message']}",
            error_code=error["error_code"],
            http_status=http_status,
            path=request.url.path,
        )
        return _error_response(request, http_status, **error)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed bodies and query parameters as invalid arguments."""
        errors = [
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        ]
        logger.warning("Invalid request", path=request.url.path, errors=errors)
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid request: " + "; ".join(errors),
            details={"validationErrors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render routing errors (404, 405) in the service's error envelope."""
        logger.warning(f"HTTP Error: {exc.detail}", status_code=exc.status_code)
        return _error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all handler that hides internals unless debug is enabled."""
        logger.exception(
            f"Unexpected error: {type(exc).__name__}",
            error_type=type(exc).__name__,
        )
        if config.debug:
            message = f"Internal server error: {type(exc).__name__}: {exc}"
        else:
            message = "Internal error encountered."
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            message,
            error_code=ErrorCode.INTERNAL_ERROR.value,
        )

    # ------------------------------------------------------------------ #
    # Service endpoints
    # ------------------------------------------------------------------ #

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check() -> dict[str, Any]:
        """Check the health status of the emulator."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": API_VERSION,
        }

    @app.post("/token", response_model=TokenResponse, tags=["Auth"])
    @app.post("/oauth2/v4/token", response_model=TokenResponse, tags=["Auth"])
    def issue_token(request: Request) -> TokenResponse:
        """Simulated OAuth token exchange; any grant receives the test token."""
        return TokenResponse(access_token=_config(request).get_access_token())

    # ------------------------------------------------------------------ #
    # Spreadsheet endpoints
    # ------------------------------------------------------------------ #

    spreadsheet_routes: dict[str, Any] = {
        "dependencies": [Depends(require_token)],
        "response_model_exclude_none": True,
        "tags": ["Spreadsheets"],
    }

    @app.get(SPREADSHEET_PATH, response_model=Spreadsheet, **spreadsheet_routes)
    @app.get(SPREADSHEET_PATH + "/", response_model=Spreadsheet, **spreadsheet_routes)
    def get_spreadsheet(
        sheets: SheetsDep,
        include_grid_data: Annotated[bool, Query(alias="includeGridData")] = True,
    ) -> Spreadsheet:
        """Return the spreadsheet, its sheets and (by default) their cells."""
        return sheets.get_spreadsheet(include_grid_data=include_grid_data)

    @app.post(
        SPREADSHEET_PATH + ":batchUpdate",
        response_model=BatchUpdateSpreadsheetResponse,
        **spreadsheet_routes,
    )
    @app.post(
        SPREADSHEET_PATH + "/:batchUpdate",
        response_model=BatchUpdateSpreadsheetResponse,
        **spreadsheet_routes,
    )
    def batch_update(
        sheets: SheetsDep,
        body: Annotated[BatchUpdateSpreadsheetRequest, Body()],
    ) -> BatchUpdateSpreadsheetResponse:
        """Apply structural requests; only addSheet is supported."""
        with LogContext(operation="batchUpdate"):
            return sheets.batch_update(body)

    @app.get(
        SPREADSHEET_PATH + "/values:batchGet",
        response_model=BatchGetValuesResponse,
        **spreadsheet_routes,
    )
    def batch_get(
        sheets: SheetsDep,
        ranges: Annotated[list[str] | None, Query()] = None,
        major_dimension: Annotated[
            Dimension, Query(alias="majorDimension")
        ] = Dimension.ROWS,
    ) -> BatchGetValuesResponse:
        """Read several ranges at once."""
        with LogContext(operation="batchGet"):
            return sheets.batch_get(ranges or [], major_dimension)

    @app.get(
        SPREADSHEET_PATH + "/values/{range_expr}",
        response_model=ValueRange,
        **spreadsheet_routes,
    )
    def get_values(sheets: SheetsDep, range_expr: str) -> ValueRange:
        """Read one range."""
        with LogContext(operation="get", range=range_expr):
            return sheets.get_value_range(range_expr)

    @app.put(
        SPREADSHEET_PATH + "/values/{range_expr}",
        response_model=UpdateValuesResponse,
        **spreadsheet_routes,
    )
    def update_values(
        sheets: SheetsDep,
        range_expr: str,
        body: Annotated[ValueRange, Body()],
        value_input_option: Annotated[
            ValueInputOption, Query(alias="valueInputOption")
        ] = ValueInputOption.RAW,
    ) -> UpdateValuesResponse:
        """Overwrite the cells of one range."""
        with LogContext(operation="update", range=range_expr):
            return sheets.update_values(
                range_expr,
                body.values,
                major_dimension=body.major_dimension,
                value_input_option=value_input_option,
            )

    @app.post(
        SPREADSHEET_PATH + "/values/{range_expr}:append",
        response_model=AppendValuesResponse,
        **spreadsheet_routes,
    )
    def append_values(
        sheets: SheetsDep,
        range_expr: str,
        body: Annotated[ValueRange, Body()],
        value_input_option: Annotated[
            ValueInputOption, Query(alias="valueInputOption")
        ] = ValueInputOption.RAW,
        insert_data_option: Annotated[
            InsertDataOption, Query(alias="insertDataOption")
        ] = InsertDataOption.OVERWRITE,
        include_values_in_response: Annotated[
            bool, Query(alias="includeValuesInResponse")
        ] = True,
    ) -> AppendValuesResponse:
        """Write rows below a range."""
        with LogContext(operation="append", range=range_expr):
            response = sheets.append_values(
                range_expr,
                body.values,
                insert_data_option=insert_data_option,
                value_input_option=value_input_option,
                major_dimension=body.major_dimension,
            )
        if not include_values_in_response:
            response.updates.updated_data = None
        return response

    return app
