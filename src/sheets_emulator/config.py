"""Configuration management for the sheets emulator.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
SHEETS_EMULATOR_ prefix, or via a .env file in the project root.

Environment Variables:
    SHEETS_EMULATOR_SPREADSHEET_ID: Id of the emulated spreadsheet
    SHEETS_EMULATOR_SPREADSHEET_TITLE: Display title (default: Test Spreadsheet)
    SHEETS_EMULATOR_DEFAULT_ROW_COUNT: Rows in a new sheet (default: 100)
    SHEETS_EMULATOR_DEFAULT_COLUMN_COUNT: Columns in a new sheet (default: 26)
    SHEETS_EMULATOR_DEFAULT_PIXEL_SIZE: Row/column pixel size (default: 100)
    SHEETS_EMULATOR_INITIAL_SHEETS: Comma-separated sheet titles created at start
    SHEETS_EMULATOR_REQUIRE_AUTH: Require a bearer token (default: true)
    SHEETS_EMULATOR_ACCESS_TOKEN: Bearer token handed out and accepted (default: test)
    SHEETS_EMULATOR_LOG_LEVEL: Logging level (default: INFO)
    SHEETS_EMULATOR_DEBUG: Include internal details in 500 responses (default: false)
    SHEETS_EMULATOR_SERVER_HOST: Server bind host (default: 127.0.0.1)
    SHEETS_EMULATOR_SERVER_PORT: Server bind port (default: 8080)
"""

import logging
from typing import Any

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Column letters are single characters, so a sheet cannot be wider than A..Z.
MAX_ADDRESSABLE_COLUMNS = 26


class Settings(BaseSettings):
    """Emulator settings loaded from environment variables.

    Example .env file:
        SHEETS_EMULATOR_SPREADSHEET_ID=my-spreadsheet
        SHEETS_EMULATOR_INITIAL_SHEETS=Sheet1,Data
        SHEETS_EMULATOR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETS_EMULATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Spreadsheet Settings
    # =========================================================================

    spreadsheet_id: str = "test-spreadsheet-id"
    """Identifier of the single spreadsheet the emulator owns."""

    spreadsheet_title: str = "Test Spreadsheet"
    """Display title reported in spreadsheet properties."""

    default_row_count: int = 100
    """Number of rows a newly added sheet is populated with."""

    default_column_count: int = 26
    """Number of columns a newly added sheet is populated with."""

    default_pixel_size: int = 100
    """Pixel size recorded in every row and column metadata entry."""

    initial_sheets: str = ""
    """Comma-separated titles of sheets created when the emulator starts."""

    # =========================================================================
    # Auth Settings
    # =========================================================================

    require_auth: bool = True
    """Reject spreadsheet requests without the configured bearer token."""

    access_token: SecretStr = SecretStr("test")
    """Bearer token returned by the token endpoint and expected on requests."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional error details."""

    # =========================================================================
    # Server Settings
    # =========================================================================

    server_host: str = "127.0.0.1"
    """Host address for the server to bind to."""

    server_port: int = 8080
    """Port for the server to listen on."""

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return upper_v

    @field_validator("default_row_count")
    @classmethod
    def validate_row_count(cls, v: int) -> int:
        """Validate the default row count is positive."""
        if v < 1:
            raise ValueError(f"default_row_count must be at least 1, got {v}")
        return v

    @field_validator("default_column_count")
    @classmethod
    def validate_column_count(cls, v: int) -> int:
        """Validate the default column count fits single-letter addressing."""
        if not 1 <= v <= MAX_ADDRESSABLE_COLUMNS:
            raise ValueError(
                "default_column_count must be between 1 and "
                f"{MAX_ADDRESSABLE_COLUMNS}, got {v}"
            )
        return v

    @field_validator("default_pixel_size")
    @classmethod
    def validate_pixel_size(cls, v: int) -> int:
        """Validate the pixel size is positive."""
        if v < 1:
            raise ValueError(f"default_pixel_size must be at least 1, got {v}")
        return v

    @field_validator("spreadsheet_id")
    @classmethod
    def validate_spreadsheet_id(cls, v: str) -> str:
        """Validate the spreadsheet id is non-empty and path-safe."""
        v = v.strip()
        if not v or "/" in v:
            raise ValueError("spreadsheet_id must be a non-empty string without '/'")
        return v

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"server_port must be between 1 and 65535, got {v}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def initial_sheets_list(self) -> list[str]:
        """Get the initial sheet titles as a list."""
        titles = [title.strip() for title in self.initial_sheets.split(",")]
        return [title for title in titles if title]

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def get_access_token(self) -> str:
        """Get the bearer token value.

        Returns:
            The token string.

        Note:
            Direct access to access_token returns a SecretStr which prevents
            accidental logging.
        """
        return self.access_token.get_secret_value()

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary with the access token masked.

        Returns:
            Dictionary representation safe for logging.
        """
        return {
            "spreadsheet_id": self.spreadsheet_id,
            "spreadsheet_title": self.spreadsheet_title,
            "default_row_count": self.default_row_count,
            "default_column_count": self.default_column_count,
            "default_pixel_size": self.default_pixel_size,
            "initial_sheets": self.initial_sheets_list,
            "require_auth": self.require_auth,
            "access_token": "***" if self.get_access_token() else "(not set)",
            "log_level": self.log_level,
            "debug": self.debug,
            "server_host": self.server_host,
            "server_port": self.server_port,
        }


def validate_settings_on_startup(s: Settings) -> None:
    """Validate settings on application startup.

    Emits warnings for configurations that are valid but unusual for a
    test double.

    Args:
        s: Settings instance to validate.
    """
    logger = logging.getLogger(__name__)

    if not s.require_auth:
        logger.warning(
            "Bearer token checks are disabled. Clients will not exercise "
            "their authorization path. Set SHEETS_EMULATOR_REQUIRE_AUTH=true."
        )
    elif not s.get_access_token():
        logger.warning(
            "SHEETS_EMULATOR_ACCESS_TOKEN is empty; every authorized request "
            "will be rejected."
        )

    safe = ", ".join(f"{key}={value}" for key, value in s.to_safe_dict().items())
    logger.info(f"Configuration loaded: {safe}")


# Create the global settings instance
settings = Settings()
