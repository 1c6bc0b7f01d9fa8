"""Unit tests for CatalogStore.

Covers id assignment, artist de-duplication, duplicate rejection,
deletion, conditional artist persistence, and the single-writer lock.
Backed by in-memory document stores; no files are touched.
"""

from __future__ import annotations

import asyncio
import datetime
from typing import Any

import pytest

from src.models.catalog import Artist, Song
from src.providers.document_store.memory_store import MemoryDocumentStore
from src.services.catalog_store import (
    ARTISTS_COLLECTION,
    SONGS_COLLECTION,
    CatalogStore,
    next_id,
)
from src.utils.errors import (
    BusyError,
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)


class RecordingDocumentStore(MemoryDocumentStore):
    """Memory store that remembers which collections were saved, in order."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        super().__init__(initial)
        self.saved: list[str] = []

    async def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        self.saved.append(collection)
        await super().save(collection, records)


# ======================================================================
# Id assignment
# ======================================================================


class TestNextId:
    def test_empty_collection_starts_at_one(self) -> None:
        assert next_id([]) == 1

    def test_max_plus_one_with_gaps(self) -> None:
        artists = [Artist(id=1, name="A"), Artist(id=7, name="B"), Artist(id=3, name="C")]
        assert next_id(artists) == 8


# ======================================================================
# Reads
# ======================================================================


class TestReads:
    @pytest.mark.asyncio
    async def test_missing_collections_read_as_empty(self, catalog_store: CatalogStore) -> None:
        assert await catalog_store.list_songs() == []
        assert await catalog_store.list_artists() == []

    @pytest.mark.asyncio
    async def test_snapshot_contains_both_collections(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("Idol", "YOASOBI")
        snapshot = await catalog_store.snapshot()
        assert [s.title for s in snapshot.songs] == ["Idol"]
        assert [a.name for a in snapshot.artists] == ["YOASOBI"]

    @pytest.mark.asyncio
    async def test_malformed_record_is_storage_error(self, clock) -> None:
        documents = MemoryDocumentStore({SONGS_COLLECTION: [{"id": "x"}], ARTISTS_COLLECTION: []})
        store = CatalogStore(documents, clock=clock)
        with pytest.raises(StorageUnavailableError):
            await store.list_songs()


# ======================================================================
# add_song
# ======================================================================


class TestAddSong:
    @pytest.mark.asyncio
    async def test_registration_scenario(self, catalog_store: CatalogStore) -> None:
        """Lilac, duplicate Lilac, StaRt by the same artist, then delete Lilac."""
        lilac = await catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        assert (lilac.id, lilac.title, lilac.artist_id) == (1, "Lilac", 1)
        assert await catalog_store.list_artists() == [Artist(id=1, name="Mrs. GREEN APPLE")]

        with pytest.raises(ConflictError):
            await catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")

        start = await catalog_store.add_song("StaRt", "Mrs. GREEN APPLE")
        assert (start.id, start.artist_id) == (2, 1)
        assert len(await catalog_store.list_artists()) == 1

        await catalog_store.delete_song(1)
        assert [s.id for s in await catalog_store.list_songs()] == [2]

    @pytest.mark.asyncio
    async def test_created_at_comes_from_clock(self, memory_store: MemoryDocumentStore) -> None:
        stamp = datetime.datetime(2024, 3, 1, 9, 30, tzinfo=datetime.timezone.utc)
        store = CatalogStore(memory_store, clock=lambda: stamp)
        song = await store.add_song("Idol", "YOASOBI")
        assert song.created_at == stamp
        assert (await store.list_songs())[0].created_at == stamp

    @pytest.mark.asyncio
    async def test_new_id_exceeds_all_existing(self, catalog_store: CatalogStore) -> None:
        for title in ("A", "B", "C"):
            await catalog_store.add_song(title, "Artist")
        await catalog_store.delete_song(2)
        song = await catalog_store.add_song("D", "Artist")
        assert song.id == 4
        assert [s.id for s in await catalog_store.list_songs()] == [1, 3, 4]

    @pytest.mark.asyncio
    async def test_same_artist_is_deduplicated(self, catalog_store: CatalogStore) -> None:
        first = await catalog_store.add_song("Odoriko", "Vaundy")
        second = await catalog_store.add_song("Kaiju no Hanauta", "Vaundy")
        assert first.artist_id == second.artist_id
        assert len(await catalog_store.list_artists()) == 1
        assert len(await catalog_store.list_songs()) == 2

    @pytest.mark.asyncio
    async def test_artist_names_are_case_sensitive(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("Idol", "YOASOBI")
        song = await catalog_store.add_song("Idol", "Yoasobi")
        assert song.artist_id == 2
        assert [a.name for a in await catalog_store.list_artists()] == ["YOASOBI", "Yoasobi"]

    @pytest.mark.asyncio
    async def test_same_title_different_artist_is_allowed(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("Intro", "Artist A")
        await catalog_store.add_song("Intro", "Artist B")
        assert len(await catalog_store.list_songs()) == 2

    @pytest.mark.asyncio
    async def test_conflict_leaves_catalog_unchanged(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        with pytest.raises(ConflictError):
            await catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        assert len(await catalog_store.list_songs()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("title", "artist"),
        [("", "YOASOBI"), ("Idol", ""), (None, "YOASOBI"), ("Idol", None), ("   ", "YOASOBI")],
    )
    async def test_missing_fields_rejected(self, catalog_store: CatalogStore, title, artist) -> None:
        with pytest.raises(ValidationError):
            await catalog_store.add_song(title, artist)
        assert await catalog_store.list_songs() == []

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_is_stripped(self, catalog_store: CatalogStore) -> None:
        song = await catalog_store.add_song("  Idol ", " YOASOBI  ")
        assert song.title == "Idol"
        assert (await catalog_store.list_artists())[0].name == "YOASOBI"

    @pytest.mark.asyncio
    async def test_artists_saved_only_for_new_artist(self, clock) -> None:
        documents = RecordingDocumentStore()
        store = CatalogStore(documents, clock=clock)
        await store.initialize()
        documents.saved.clear()

        await store.add_song("Lilac", "Mrs. GREEN APPLE")
        assert documents.saved == [ARTISTS_COLLECTION, SONGS_COLLECTION]

        documents.saved.clear()
        await store.add_song("StaRt", "Mrs. GREEN APPLE")
        assert documents.saved == [SONGS_COLLECTION]


# ======================================================================
# delete_song
# ======================================================================


class TestDeleteSong:
    @pytest.mark.asyncio
    async def test_removes_only_that_song(self, catalog_store: CatalogStore) -> None:
        for title in ("A", "B", "C"):
            await catalog_store.add_song(title, "Artist")
        removed = await catalog_store.delete_song(2)
        assert isinstance(removed, Song)
        assert removed.title == "B"
        assert [s.title for s in await catalog_store.list_songs()] == ["A", "C"]

    @pytest.mark.asyncio
    async def test_second_delete_is_not_found(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("A", "Artist")
        await catalog_store.delete_song(1)
        with pytest.raises(NotFoundError):
            await catalog_store.delete_song(1)

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, catalog_store: CatalogStore) -> None:
        with pytest.raises(NotFoundError):
            await catalog_store.delete_song(99)

    @pytest.mark.asyncio
    async def test_artist_is_kept_after_last_song_deleted(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("Idol", "YOASOBI")
        await catalog_store.delete_song(1)
        assert await catalog_store.list_artists() == [Artist(id=1, name="YOASOBI")]


# ======================================================================
# Single-writer lock
# ======================================================================


class TestWriteSerialization:
    @pytest.mark.asyncio
    async def test_concurrent_adds_one_rejected_busy(self, slow_catalog_store: CatalogStore) -> None:
        results = await asyncio.gather(
            slow_catalog_store.add_song("Lilac", "Mrs. GREEN APPLE"),
            slow_catalog_store.add_song("Idol", "YOASOBI"),
            return_exceptions=True,
        )
        assert isinstance(results[0], Song)
        assert isinstance(results[1], BusyError)

        songs = await slow_catalog_store.list_songs()
        assert [s.title for s in songs] == ["Lilac"]
        assert [a.name for a in await slow_catalog_store.list_artists()] == ["Mrs. GREEN APPLE"]

    @pytest.mark.asyncio
    async def test_delete_during_add_is_busy(self, slow_catalog_store: CatalogStore) -> None:
        await slow_catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        results = await asyncio.gather(
            slow_catalog_store.add_song("StaRt", "Mrs. GREEN APPLE"),
            slow_catalog_store.delete_song(1),
            return_exceptions=True,
        )
        assert isinstance(results[0], Song)
        assert isinstance(results[1], BusyError)
        assert len(await slow_catalog_store.list_songs()) == 2

    @pytest.mark.asyncio
    async def test_reads_not_blocked_by_write(self, slow_catalog_store: CatalogStore) -> None:
        await slow_catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        task = asyncio.create_task(slow_catalog_store.add_song("StaRt", "Mrs. GREEN APPLE"))
        await asyncio.sleep(0)

        assert slow_catalog_store.is_writing
        songs = await slow_catalog_store.list_songs()
        assert songs[0].title == "Lilac"

        await task
        assert not slow_catalog_store.is_writing

    @pytest.mark.asyncio
    async def test_lock_released_after_failure(self, catalog_store: CatalogStore) -> None:
        await catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        with pytest.raises(ConflictError):
            await catalog_store.add_song("Lilac", "Mrs. GREEN APPLE")
        assert not catalog_store.is_writing
        song = await catalog_store.add_song("StaRt", "Mrs. GREEN APPLE")
        assert song.id == 2

    @pytest.mark.asyncio
    async def test_validation_does_not_take_lock(self, slow_catalog_store: CatalogStore) -> None:
        results = await asyncio.gather(
            slow_catalog_store.add_song("", ""),
            slow_catalog_store.add_song("Idol", "YOASOBI"),
            return_exceptions=True,
        )
        assert isinstance(results[0], ValidationError)
        assert isinstance(results[1], Song)
