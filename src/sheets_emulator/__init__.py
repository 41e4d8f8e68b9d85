"""Sheets Emulator - in-memory stand-in for a spreadsheet web service."""

from sheets_emulator.api import create_app
from sheets_emulator.services.sheets_mock import NOT_PRESENT, SheetsMock

__all__ = ["NOT_PRESENT", "SheetsMock", "create_app"]
__version__ = "0.1.0"


def main() -> None:
    """Run the emulator using uvicorn."""
    import uvicorn

    from sheets_emulator.config import settings

    uvicorn.run(
        "sheets_emulator.api:create_app",
        factory=True,
        host=settings.server_host,
        port=settings.server_port,
    )
