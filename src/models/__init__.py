"""SongPicker domain models — re-exports all public model classes.

Other parts of the codebase import from ``src.models`` rather than the
individual submodules:
    - catalog.py    — Artist, Song, the joined SongWithArtist view, snapshots
    - selection.py  — algorithm and sort enums
"""

from __future__ import annotations

from src.models.catalog import (
    UNKNOWN_ARTIST_NAME,
    Artist,
    CatalogSnapshot,
    Song,
    SongWithArtist,
)
from src.models.selection import SelectionAlgorithm, SortMode, SortOrder

__all__ = [
    # catalog
    "UNKNOWN_ARTIST_NAME",
    "Artist",
    "CatalogSnapshot",
    "Song",
    "SongWithArtist",
    # selection
    "SelectionAlgorithm",
    "SortMode",
    "SortOrder",
]
