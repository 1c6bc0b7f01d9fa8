"""Unit tests for the catalog models and the CatalogSnapshot helpers."""

from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.models.catalog import (
    UNKNOWN_ARTIST_NAME,
    Artist,
    CatalogSnapshot,
    Song,
    SongWithArtist,
)
from src.models.selection import SelectionAlgorithm, SortOrder
from tests.conftest import make_snapshot

_NOW = datetime.datetime(2025, 6, 15, 12, 0, tzinfo=datetime.timezone.utc)


class TestEntities:
    def test_song_is_frozen(self) -> None:
        song = Song(id=1, title="Lilac", artist_id=1, created_at=_NOW)
        with pytest.raises(PydanticValidationError):
            song.title = "changed"

    def test_ids_start_at_one(self) -> None:
        with pytest.raises(PydanticValidationError):
            Artist(id=0, name="YOASOBI")

    def test_empty_artist_name_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            Artist(id=1, name="")

    def test_song_round_trips_through_json_mode(self) -> None:
        song = Song(id=3, title="Idol", artist_id=2, created_at=_NOW)
        dumped = song.model_dump(mode="json")
        assert dumped["created_at"].startswith("2025-06-15T12:00:00")
        assert Song.model_validate(dumped) == song

    def test_enum_values(self) -> None:
        assert SelectionAlgorithm("artist-weighted") is SelectionAlgorithm.ARTIST_WEIGHTED
        assert SortOrder.DESC == "desc"


class TestCatalogSnapshot:
    def test_empty_snapshot(self) -> None:
        assert CatalogSnapshot().is_empty
        assert CatalogSnapshot().joined() == []

    def test_song_counts_include_orphans(self) -> None:
        snapshot = make_snapshot({"A": ["a1", "a2"], "B": ["b1"]}, empty_artists=["C"])
        assert snapshot.song_counts() == {1: 2, 2: 1, 3: 0}

    def test_songs_by_artist(self, sample_snapshot: CatalogSnapshot) -> None:
        assert [s.title for s in sample_snapshot.songs_by_artist(3)] == ["Odoriko", "Kaiju no Hanauta"]
        assert sample_snapshot.songs_by_artist(99) == []

    def test_joined_keeps_stored_order(self, sample_snapshot: CatalogSnapshot) -> None:
        joined = sample_snapshot.joined()
        assert all(isinstance(s, SongWithArtist) for s in joined)
        assert [s.id for s in joined] == [1, 2, 3, 4, 5, 6]
        assert joined[3].artist_name == "YOASOBI"

    def test_unresolved_artist_gets_placeholder(self) -> None:
        song = Song(id=1, title="Lost", artist_id=42, created_at=_NOW)
        snapshot = CatalogSnapshot(songs=(song,), artists=())
        assert snapshot.with_artist(song).artist_name == UNKNOWN_ARTIST_NAME
