"""Song selection engine — picks one song from a catalog snapshot.

# ─── ALGORITHMS ──────────────────────────────────────────────────────
#
#   random           uniform over all songs
#   artist-equal     uniform over artists, then uniform over the drawn
#                    artist's songs; an artist with no songs is reported
#                    (NoSongsForArtistError), never silently redrawn
#   artist-weighted  artists weighted by sqrt(song count), then uniform
#                    over the drawn artist's songs
#
# The square root dampens large catalogs: an artist with 4 songs is twice
# as likely as an artist with 1 song, not four times.
#
# Every pick is a pure function of the snapshot and the injected random
# source.  Seed a ``random.Random`` to make draws reproducible in tests.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import math
import random
from typing import Sequence, TypeVar

import structlog

from src.models.catalog import Artist, CatalogSnapshot, Song, SongWithArtist
from src.models.selection import SelectionAlgorithm
from src.utils.errors import EmptyCatalogError, NoSongsForArtistError, ValidationError

logger = structlog.get_logger(logger_name=__name__)

_T = TypeVar("_T")


class SelectionEngine:
    """Stateless song picker over immutable snapshots.

    Parameters
    ----------
    rng:
        Random source exposing ``random()`` and ``randrange()``.  Defaults
        to a fresh ``random.Random``.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def pick(
        self,
        snapshot: CatalogSnapshot,
        algorithm: SelectionAlgorithm | str = SelectionAlgorithm.RANDOM,
    ) -> SongWithArtist:
        """Pick one song from *snapshot* with *algorithm*.

        Raises
        ------
        ValidationError
            If *algorithm* is not a known identifier.
        EmptyCatalogError
            If there is nothing to pick from.
        NoSongsForArtistError
            If ``artist-equal`` draws an artist without songs.
        """
        try:
            algorithm = SelectionAlgorithm(algorithm)
        except ValueError as exc:
            allowed = ", ".join(a.value for a in SelectionAlgorithm)
            raise ValidationError(f"Unknown algorithm '{algorithm}'. Allowed: {allowed}") from exc

        if snapshot.is_empty:
            raise EmptyCatalogError("There are no songs to pick from")

        if algorithm is SelectionAlgorithm.RANDOM:
            song = self._pick_random(snapshot)
        elif algorithm is SelectionAlgorithm.ARTIST_EQUAL:
            song = self._pick_artist_equal(snapshot)
        else:
            song = self._pick_artist_weighted(snapshot)

        picked = snapshot.with_artist(song)
        logger.info(
            "song_picked",
            algorithm=algorithm.value,
            song_id=picked.id,
            artist_id=picked.artist_id,
        )
        return picked

    @staticmethod
    def weights(snapshot: CatalogSnapshot) -> list[tuple[Artist, float]]:
        """Return ``(artist, sqrt(song count))`` for every artist with songs, in artist order."""
        counts = snapshot.song_counts()
        weighted = [(artist, math.sqrt(counts[artist.id])) for artist in snapshot.artists]
        return [(artist, weight) for artist, weight in weighted if weight > 0]

    # ── Algorithms ─────────────────────────────────────────────────────

    def _pick_random(self, snapshot: CatalogSnapshot) -> Song:
        return self._choice(snapshot.songs)

    def _pick_artist_equal(self, snapshot: CatalogSnapshot) -> Song:
        if not snapshot.artists:
            raise EmptyCatalogError("There are no artists to pick from")

        artist = self._choice(snapshot.artists)
        songs = snapshot.songs_by_artist(artist.id)
        if not songs:
            raise NoSongsForArtistError(artist.name)
        return self._choice(songs)

    def _pick_artist_weighted(self, snapshot: CatalogSnapshot) -> Song:
        weighted = self.weights(snapshot)
        if not weighted:
            raise EmptyCatalogError("There are no songs to pick from")

        artist = self._cumulative_draw(weighted)
        return self._choice(snapshot.songs_by_artist(artist.id))

    # ── Sampling primitives ────────────────────────────────────────────

    def _choice(self, items: Sequence[_T]) -> _T:
        return items[self._rng.randrange(len(items))]

    def _cumulative_draw(self, weighted: list[tuple[Artist, float]]) -> Artist:
        """Walk the weights subtracting from r in [0, total) until r <= 0."""
        total = sum(weight for _, weight in weighted)
        remainder = self._rng.random() * total
        for artist, weight in weighted:
            remainder -= weight
            if remainder <= 0:
                return artist
        # Rounding drift can leave a positive remainder after the walk.
        logger.debug("weighted_draw_fallback", remainder=remainder)
        return weighted[-1][0]
