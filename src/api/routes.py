"""FastAPI API routes for SongPicker.

Provides REST endpoints for listing the catalog, registering and deleting
songs, picking a song, searching/sorting the song table, form
autocomplete, and health checks.  Service dependencies are resolved from
``app.state`` via FastAPI's ``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                  Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/songs             GET     List all songs
# /api/v1/songs             POST    Register a song (creates the artist)
# /api/v1/songs/{id}        DELETE  Delete a song by id
# /api/v1/songs/search      GET     Filter + date sort / shuffle
# /api/v1/artists           GET     List all artists
# /api/v1/pick              POST    Pick a song with a selection algorithm
# /api/v1/suggestions       GET     Title / artist autocomplete
# /api/v1/health            GET     Health check + catalog size
#
# Application errors raised here (ValidationError, ConflictError, ...) are
# turned into status codes by ErrorHandlingMiddleware.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request

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
from src.models.catalog import Artist, Song
from src.models.selection import SelectionAlgorithm, SortMode, SortOrder
from src.services.catalog_query import (
    DEFAULT_SUGGESTION_LIMIT,
    CatalogView,
    suggest_artists,
    suggest_titles,
)
from src.services.catalog_store import CatalogStore
from src.services.selection_engine import SelectionEngine
from src.utils.errors import ValidationError

router = APIRouter(prefix="/api/v1")

_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Dependency injection helpers — resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_catalog_store(request: Request) -> CatalogStore:
    """Return the catalog store from application state."""
    return request.app.state.catalog_store


def _get_selection_engine(request: Request) -> SelectionEngine:
    """Return the selection engine from application state."""
    return request.app.state.selection_engine


def _get_suggestion_limit(request: Request) -> int:
    return getattr(request.app.state, "suggestion_limit", DEFAULT_SUGGESTION_LIMIT)


def _get_default_algorithm(request: Request) -> SelectionAlgorithm:
    return getattr(request.app.state, "default_algorithm", SelectionAlgorithm.RANDOM)


CatalogStoreDep = Annotated[CatalogStore, Depends(_get_catalog_store)]
SelectionEngineDep = Annotated[SelectionEngine, Depends(_get_selection_engine)]
SuggestionLimitDep = Annotated[int, Depends(_get_suggestion_limit)]
DefaultAlgorithmDep = Annotated[SelectionAlgorithm, Depends(_get_default_algorithm)]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/songs", response_model=list[Song], summary="List all songs")
async def list_songs(store: CatalogStoreDep) -> list[Song]:
    return await store.list_songs()


@router.get("/artists", response_model=list[Artist], summary="List all artists")
async def list_artists(store: CatalogStoreDep) -> list[Artist]:
    return await store.list_artists()


@router.post(
    "/songs",
    response_model=Song,
    status_code=201,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
    summary="Register a song",
)
async def add_song(body: AddSongRequest, store: CatalogStoreDep) -> Song:
    """Register a song; the artist is created on first reference."""
    return await store.add_song(body.title, body.artist_name)


@router.delete(
    "/songs/{song_id}",
    response_model=DeleteSongResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
    summary="Delete a song by id",
)
async def delete_song(song_id: str, store: CatalogStoreDep) -> DeleteSongResponse:
    """Delete a song by id; a non-numeric id raises ValidationError (400)."""
    if not (song_id.isascii() and song_id.isdigit()):
        raise ValidationError("Invalid song ID")
    removed = await store.delete_song(int(song_id))
    return DeleteSongResponse(message="Song deleted successfully", song=removed)


@router.get("/songs/search", response_model=SearchResponse, summary="Search and order songs")
async def search_songs(
    store: CatalogStoreDep,
    q: str = "",
    sort: SortMode = SortMode.DATE,
    order: SortOrder = SortOrder.DESC,
) -> SearchResponse:
    """Filter songs by title/artist substring, then sort by date or shuffle.

    ``sort=random`` draws a fresh permutation on every request; there is no
    per-client view state on the server.
    """
    snapshot = await store.snapshot()
    view = CatalogView()
    if sort is SortMode.RANDOM:
        view.shuffle(snapshot)
    else:
        view.order = order
    songs = view.render(snapshot, q)
    return SearchResponse(
        query=q,
        sort=sort.value,
        order=order.value if sort is SortMode.DATE else None,
        total=len(songs),
        songs=songs,
    )


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


@router.post(
    "/pick",
    response_model=PickSongResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Pick a song with a selection algorithm",
)
async def pick_song(
    body: PickSongRequest,
    store: CatalogStoreDep,
    engine: SelectionEngineDep,
    default_algorithm: DefaultAlgorithmDep,
) -> PickSongResponse:
    algorithm = body.algorithm or default_algorithm
    snapshot = await store.snapshot()
    song = engine.pick(snapshot, algorithm)
    return PickSongResponse(algorithm=algorithm, song=song)


# ---------------------------------------------------------------------------
# Autocomplete
# ---------------------------------------------------------------------------


@router.get("/suggestions", response_model=SuggestResponse, summary="Autocomplete titles or artists")
async def suggest(
    store: CatalogStoreDep,
    limit: SuggestionLimitDep,
    field: Annotated[Literal["title", "artist"], Query()] = "title",
    prefix: str = "",
) -> SuggestResponse:
    snapshot = await store.snapshot()
    if field == "title":
        suggestions = suggest_titles(snapshot, prefix, limit)
    else:
        suggestions = suggest_artists(snapshot, prefix, limit)
    return SuggestResponse(field=field, prefix=prefix, suggestions=suggestions)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(store: CatalogStoreDep) -> HealthResponse:
    """Report whether the catalog can be read, plus its size.

    An unreadable catalog propagates as StorageUnavailableError (500).
    """
    snapshot = await store.snapshot()
    return HealthResponse(
        status="healthy",
        version=_VERSION,
        store=store.provider_name,
        songs=len(snapshot.songs),
        artists=len(snapshot.artists),
    )
