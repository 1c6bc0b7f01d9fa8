"""Catalog store — the single owner of the Songs and Artists collections.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services (business logic).
# Depends on: IDocumentStore.
#
# CatalogStore enforces every consistency rule of the catalog:
#
#   1. ID ASSIGNMENT — ids are max(existing) + 1, or 1 for an empty
#      collection.  Deleted ids leave gaps and are not handed out again
#      while a higher id exists.
#   2. ARTIST DE-DUPLICATION — artists are resolved by exact,
#      case-sensitive name; a new Artist is only created for an unseen name.
#   3. UNIQUENESS — no two songs share (title, artist_id).
#   4. SINGLE WRITER — one add/delete in flight per store.  A second
#      mutating call is rejected with BusyError instead of queueing.
#
# Reads never take the write lock.  Torn reads are prevented by the
# document store's atomic save, not by locking.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import datetime
from typing import Any, Callable

import structlog

from src.interfaces.document_store import IDocumentStore
from src.models.catalog import Artist, CatalogSnapshot, Song
from src.utils.errors import (
    BusyError,
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

logger = structlog.get_logger(logger_name=__name__)

SONGS_COLLECTION = "songs"
ARTISTS_COLLECTION = "artists"


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def next_id(records: list[Song] | list[Artist]) -> int:
    """Return ``max(existing ids) + 1``, or ``1`` for an empty collection."""
    return max((r.id for r in records), default=0) + 1


class CatalogStore:
    """Reads and mutates the catalog through an injected document store.

    Parameters
    ----------
    document_store:
        Backend holding the ``songs`` and ``artists`` collections.
    clock:
        Zero-argument callable returning the aware datetime used for
        ``created_at``.  Defaults to the current UTC time.
    """

    def __init__(
        self,
        document_store: IDocumentStore,
        clock: Callable[[], datetime.datetime] | None = None,
    ) -> None:
        self._documents = document_store
        self._clock = clock or _utc_now
        self._write_lock = asyncio.Lock()

    @property
    def provider_name(self) -> str:
        return self._documents.get_provider_name()

    @property
    def is_writing(self) -> bool:
        return self._write_lock.locked()

    # ── Reads ──────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create both collections if they do not exist yet."""
        await self._documents.ensure_initialized(SONGS_COLLECTION)
        await self._documents.ensure_initialized(ARTISTS_COLLECTION)
        logger.info("catalog_initialized", store=self.provider_name)

    async def list_songs(self) -> list[Song]:
        await self._documents.ensure_initialized(SONGS_COLLECTION)
        records = await self._documents.load(SONGS_COLLECTION)
        return [self._parse(Song, r, SONGS_COLLECTION) for r in records]

    async def list_artists(self) -> list[Artist]:
        await self._documents.ensure_initialized(ARTISTS_COLLECTION)
        records = await self._documents.load(ARTISTS_COLLECTION)
        return [self._parse(Artist, r, ARTISTS_COLLECTION) for r in records]

    async def snapshot(self) -> CatalogSnapshot:
        """Return both collections as an immutable snapshot."""
        songs, artists = await asyncio.gather(self.list_songs(), self.list_artists())
        return CatalogSnapshot(songs=tuple(songs), artists=tuple(artists))

    # ── Writes ─────────────────────────────────────────────────────────

    async def add_song(self, title: str | None, artist_name: str | None) -> Song:
        """Register a song, creating its artist on first reference.

        Raises
        ------
        ValidationError
            If title or artist name is missing or blank.
        ConflictError
            If the same title is already registered for that artist.
        BusyError
            If another write is in progress.
        """
        title = (title or "").strip()
        artist_name = (artist_name or "").strip()
        if not title or not artist_name:
            raise ValidationError("Title and artist name are required")

        async with self._exclusive_write("add_song"):
            songs = await self.list_songs()
            artists = await self.list_artists()

            artist = next((a for a in artists if a.name == artist_name), None)
            new_artist: Artist | None = None
            if artist is None:
                new_artist = Artist(id=next_id(artists), name=artist_name)
                artist = new_artist

            if any(s.title == title and s.artist_id == artist.id for s in songs):
                raise ConflictError(f"'{title}' by {artist_name} is already registered")

            song = Song(
                id=next_id(songs),
                title=title,
                artist_id=artist.id,
                created_at=self._clock(),
            )

            # Artists are written first so a persisted song always resolves.
            if new_artist is not None:
                await self._documents.save(
                    ARTISTS_COLLECTION,
                    self._dump([*artists, new_artist]),
                )
                logger.info("artist_created", artist_id=new_artist.id, name=new_artist.name)
            await self._documents.save(SONGS_COLLECTION, self._dump([*songs, song]))

        logger.info("song_added", song_id=song.id, title=song.title, artist_id=song.artist_id)
        return song

    async def delete_song(self, song_id: int) -> Song:
        """Remove the song with *song_id* and return it.  Artists are kept.

        Raises
        ------
        NotFoundError
            If no song has that id.
        BusyError
            If another write is in progress.
        """
        async with self._exclusive_write("delete_song"):
            songs = await self.list_songs()
            removed = next((s for s in songs if s.id == song_id), None)
            if removed is None:
                raise NotFoundError(f"Song {song_id} not found")

            remaining = [s for s in songs if s.id != song_id]
            await self._documents.save(SONGS_COLLECTION, self._dump(remaining))

        logger.info("song_deleted", song_id=song_id)
        return removed

    # ── Private helpers ────────────────────────────────────────────────

    def _exclusive_write(self, operation: str) -> asyncio.Lock:
        # No await between the check and the acquire, so on a single event
        # loop nothing can slip in between them.
        if self._write_lock.locked():
            logger.warning("write_rejected_busy", operation=operation)
            raise BusyError()
        return self._write_lock

    def _parse(
        self, model: type[Song] | type[Artist], record: dict[str, Any], collection: str
    ) -> Song | Artist:
        try:
            return model.model_validate(record)
        except ValueError as exc:
            raise StorageUnavailableError(
                f"Malformed record in '{collection}': {record!r}",
                provider_name=self.provider_name,
            ) from exc

    @staticmethod
    def _dump(records: list[Song] | list[Artist]) -> list[dict[str, Any]]:
        return [r.model_dump(mode="json") for r in records]
