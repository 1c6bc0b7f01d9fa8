"""Core catalog entities for SongPicker.

Defines frozen Pydantic v2 models for artists and songs, the joined
``SongWithArtist`` view used for display and selection results, and the
immutable ``CatalogSnapshot`` handed to read-only consumers.

Key relationships:
    - Song.artist_id references Artist.id
    - CatalogSnapshot bundles both collections at one point in time; the
      selection engine and the query layer never see anything else
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_ARTIST_NAME = "Unknown artist"


class Artist(BaseModel):
    """A performing artist.  Created on first reference, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    name: str = Field(min_length=1)  # unique, case-sensitive


class Song(BaseModel):
    """A registered song.  Created by add-song, deleted by id, never updated."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    title: str = Field(min_length=1)
    artist_id: int = Field(ge=1)
    created_at: datetime.datetime


class SongWithArtist(Song):
    """A song joined with the name of its artist."""

    artist_name: str


class CatalogSnapshot(BaseModel):
    """Immutable point-in-time copy of both catalog collections.

    Songs and artists keep their stored order; algorithms that walk
    artists (cumulative weighting) depend on it.
    """

    model_config = ConfigDict(frozen=True)

    songs: tuple[Song, ...] = ()
    artists: tuple[Artist, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.songs

    def artist_names(self) -> dict[int, str]:
        """Return a mapping of artist id to artist name."""
        return {artist.id: artist.name for artist in self.artists}

    def artist_name(self, artist_id: int) -> str:
        """Return the artist's name, or a placeholder when it does not resolve."""
        return self.artist_names().get(artist_id, UNKNOWN_ARTIST_NAME)

    def songs_by_artist(self, artist_id: int) -> list[Song]:
        return [song for song in self.songs if song.artist_id == artist_id]

    def song_counts(self) -> dict[int, int]:
        """Return the number of songs per artist id (artists without songs map to 0)."""
        counts = {artist.id: 0 for artist in self.artists}
        for song in self.songs:
            if song.artist_id in counts:
                counts[song.artist_id] += 1
        return counts

    def with_artist(self, song: Song) -> SongWithArtist:
        return SongWithArtist(**song.model_dump(), artist_name=self.artist_name(song.artist_id))

    def joined(self) -> list[SongWithArtist]:
        """Return every song joined with its artist name, in stored order."""
        names = self.artist_names()
        return [
            SongWithArtist(
                **song.model_dump(),
                artist_name=names.get(song.artist_id, UNKNOWN_ARTIST_NAME),
            )
            for song in self.songs
        ]
