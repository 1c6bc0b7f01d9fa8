"""Utility modules for SongPicker.

Available utility modules (re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at SongPickerError;
  each error class declares the HTTP status the API layer maps it to.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    BusyError,
    ConfigurationError,
    ConflictError,
    EmptyCatalogError,
    NoSongsForArtistError,
    NotFoundError,
    SongPickerError,
    StorageUnavailableError,
    ValidationError,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "BusyError",
    "ConfigurationError",
    "ConflictError",
    "EmptyCatalogError",
    "NoSongsForArtistError",
    "NotFoundError",
    "SongPickerError",
    "StorageUnavailableError",
    "ValidationError",
    "configure_logging",
    "get_logger",
]
