"""Pydantic request/response schemas for the SongPicker API.

Defines the public contract for all REST endpoints — listing, song
creation and deletion, picking, search, suggestions, and health.

# ─── HOW SCHEMAS WORK ─────────────────────────────────────────────────
#
# FastAPI uses these models for request validation (invalid bodies get a
# 422 with details), response serialization (response_model=...), and the
# generated OpenAPI docs at /docs.
#
# Convention: Request schemas end with "Request", response schemas end
# with "Response".  Song, Artist, and SongWithArtist from src.models are
# returned directly where no wrapping is needed.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.models.catalog import Song, SongWithArtist
from src.models.selection import SelectionAlgorithm


class AddSongRequest(BaseModel):
    """Song registration body.

    Fields are optional here so that missing values reach the catalog
    store and fail with its ValidationError (400) rather than a schema 422.
    ``artistName`` is accepted as the wire name.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    artist_name: str | None = Field(default=None, alias="artistName")


class DeleteSongResponse(BaseModel):
    """Confirmation returned after a song is deleted."""

    message: str
    song: Song


class PickSongRequest(BaseModel):
    """Which selection algorithm to pick a song with.

    Omit ``algorithm`` to use the server default (``DEFAULT_ALGORITHM``).
    """

    algorithm: SelectionAlgorithm | None = None


class PickSongResponse(BaseModel):
    algorithm: SelectionAlgorithm
    song: SongWithArtist


class SearchResponse(BaseModel):
    """Filtered and ordered songs for the song table."""

    query: str
    sort: str
    order: str | None = None
    total: int
    songs: list[SongWithArtist] = Field(default_factory=list)


class SuggestResponse(BaseModel):
    """Autocomplete suggestions for the song entry form."""

    field: str
    prefix: str
    suggestions: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    store: str
    songs: int
    artists: int


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
