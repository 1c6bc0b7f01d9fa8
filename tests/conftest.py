"""Shared pytest fixtures for the SongPicker test suite."""

from __future__ import annotations

import asyncio
import datetime
import itertools
import random
from pathlib import Path
from typing import Any, Callable

import pytest

from src.models.catalog import Artist, CatalogSnapshot, Song
from src.providers.document_store.json_file_store import JSONFileDocumentStore
from src.providers.document_store.memory_store import MemoryDocumentStore
from src.services.catalog_store import CatalogStore

_BASE_TIME = datetime.datetime(2025, 6, 15, 12, 0, tzinfo=datetime.timezone.utc)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_snapshot(catalog: dict[str, list[str]], empty_artists: list[str] | None = None) -> CatalogSnapshot:
    """Build a snapshot from ``{artist name: [titles]}``.

    Artists get ids in dict order; songs get ids and one-minute-apart
    ``created_at`` stamps in the same order.  *empty_artists* are appended
    without songs (orphans).
    """
    artists: list[Artist] = []
    songs: list[Song] = []
    song_id = itertools.count(1)
    for artist_id, (name, titles) in enumerate(catalog.items(), start=1):
        artists.append(Artist(id=artist_id, name=name))
        for title in titles:
            sid = next(song_id)
            songs.append(
                Song(
                    id=sid,
                    title=title,
                    artist_id=artist_id,
                    created_at=_BASE_TIME + datetime.timedelta(minutes=sid),
                )
            )
    for name in empty_artists or []:
        artists.append(Artist(id=len(artists) + 1, name=name))
    return CatalogSnapshot(songs=tuple(songs), artists=tuple(artists))


class SlowDocumentStore(MemoryDocumentStore):
    """Memory store that yields to the event loop on every call.

    Lets tests interleave two coroutines the way file I/O would.
    """

    async def load(self, collection: str) -> list[dict[str, Any]]:
        await asyncio.sleep(0)
        return await super().load(collection)

    async def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        await asyncio.sleep(0)
        await super().save(collection, records)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def clock() -> Callable[[], datetime.datetime]:
    """A clock that advances one second per call, starting at a fixed instant."""
    ticks = itertools.count()
    return lambda: _BASE_TIME + datetime.timedelta(seconds=next(ticks))


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def catalog_store(memory_store: MemoryDocumentStore, clock) -> CatalogStore:
    return CatalogStore(memory_store, clock=clock)


@pytest.fixture
def json_store(tmp_path: Path) -> JSONFileDocumentStore:
    return JSONFileDocumentStore(tmp_path / "db")


@pytest.fixture
def slow_catalog_store(clock) -> CatalogStore:
    return CatalogStore(SlowDocumentStore(), clock=clock)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(20250615)


@pytest.fixture
def sample_snapshot() -> CatalogSnapshot:
    return make_snapshot(
        {
            "Mrs. GREEN APPLE": ["Lilac", "StaRt", "Ao to Natsu"],
            "YOASOBI": ["Idol"],
            "Vaundy": ["Odoriko", "Kaiju no Hanauta"],
        }
    )
