"""Catalog query layer — filter, date sort, shuffle, and autocomplete.

Read-only helpers over a ``CatalogSnapshot`` for display surfaces (the
search endpoint, the CLI listing).  Nothing here mutates the catalog;
deletes go through ``CatalogStore``.

``CatalogView`` keeps the small amount of state a song table needs
between renders: the current sort mode, the date-sort direction, and the
most recent shuffle permutation.
"""

from __future__ import annotations

import random
from typing import Iterable, MutableSequence, TypeVar

from src.models.catalog import CatalogSnapshot, SongWithArtist
from src.models.selection import SortMode, SortOrder

_T = TypeVar("_T")

DEFAULT_SUGGESTION_LIMIT = 5


def filter_songs(songs: Iterable[SongWithArtist], query: str) -> list[SongWithArtist]:
    """Keep songs whose title or artist name contains *query*, ignoring case.

    An empty query matches everything.
    """
    needle = query.lower()
    return [
        song
        for song in songs
        if needle in song.title.lower() or needle in song.artist_name.lower()
    ]


def sort_by_date(songs: Iterable[SongWithArtist], order: SortOrder = SortOrder.DESC) -> list[SongWithArtist]:
    return sorted(songs, key=lambda s: s.created_at, reverse=order is SortOrder.DESC)


def fisher_yates_shuffle(items: MutableSequence[_T], rng: random.Random) -> MutableSequence[_T]:
    """Shuffle *items* in place with a uniform Fisher–Yates permutation and return it."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def _suggest(values: Iterable[str], prefix: str, limit: int) -> list[str]:
    if not prefix:
        return []
    lowered = prefix.lower()
    seen: dict[str, None] = {}
    for value in values:
        if value.lower().startswith(lowered) and value not in seen:
            seen[value] = None
            if len(seen) >= limit:
                break
    return list(seen)


def suggest_titles(snapshot: CatalogSnapshot, prefix: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[str]:
    """Distinct song titles starting with *prefix* (case-insensitive), in catalog order."""
    return _suggest((song.title for song in snapshot.songs), prefix, limit)


def suggest_artists(snapshot: CatalogSnapshot, prefix: str, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[str]:
    """Distinct artist names starting with *prefix* (case-insensitive), in catalog order."""
    return _suggest((artist.name for artist in snapshot.artists), prefix, limit)


class CatalogView:
    """Sort/shuffle state for a song table.

    Starts sorted by date, newest first.  ``toggle_date_sort`` flips the
    direction while the view stays in date mode; coming back from random
    mode always restarts at newest first.  ``shuffle`` draws a fresh
    permutation on every call, and ``render`` reuses it until the next
    explicit shuffle.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self.mode = SortMode.DATE
        self.order = SortOrder.DESC
        self._shuffled_ids: dict[int, int] = {}

    def toggle_date_sort(self) -> SortOrder:
        if self.mode is SortMode.DATE and self.order is SortOrder.DESC:
            self.order = SortOrder.ASC
        else:
            self.order = SortOrder.DESC
        self.mode = SortMode.DATE
        return self.order

    def shuffle(self, snapshot: CatalogSnapshot) -> list[int]:
        """Switch to random mode and draw a new permutation of the current songs."""
        ids = fisher_yates_shuffle([song.id for song in snapshot.songs], self._rng)
        self._shuffled_ids = {song_id: rank for rank, song_id in enumerate(ids)}
        self.mode = SortMode.RANDOM
        return list(ids)

    def render(self, snapshot: CatalogSnapshot, query: str = "") -> list[SongWithArtist]:
        """Return the filtered songs in the view's current order."""
        songs = filter_songs(snapshot.joined(), query)
        if self.mode is SortMode.DATE:
            return sort_by_date(songs, self.order)
        # Songs added after the last shuffle go to the end, in stored order.
        unranked = len(self._shuffled_ids)
        return sorted(songs, key=lambda s: self._shuffled_ids.get(s.id, unranked))
