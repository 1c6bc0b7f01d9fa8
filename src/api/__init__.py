"""SongPicker API layer — routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    AddSongRequest,
    DeleteSongResponse,
    ErrorResponse,
    HealthResponse,
    PickSongRequest,
    PickSongResponse,
    SearchResponse,
    SuggestResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "AddSongRequest",
    "DeleteSongResponse",
    "ErrorResponse",
    "HealthResponse",
    "PickSongRequest",
    "PickSongResponse",
    "SearchResponse",
    "SuggestResponse",
]
