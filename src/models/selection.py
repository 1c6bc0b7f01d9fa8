"""Selection and display enums shared by the services, API, and CLI."""

from __future__ import annotations

from enum import Enum


class SelectionAlgorithm(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Algorithms the selection engine can pick a song with.

    RANDOM:          uniform over all songs
    ARTIST_EQUAL:    uniform over artists, then uniform over that artist's songs
    ARTIST_WEIGHTED: artists weighted by sqrt(song count), then uniform over songs
    """

    RANDOM = "random"
    ARTIST_EQUAL = "artist-equal"
    ARTIST_WEIGHTED = "artist-weighted"


class SortMode(str, Enum):  # noqa: UP042
    """How the catalog view orders songs."""

    DATE = "date"
    RANDOM = "random"


class SortOrder(str, Enum):  # noqa: UP042
    ASC = "asc"
    DESC = "desc"
