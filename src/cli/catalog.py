"""Standalone CLI for managing and picking from the song catalog.

Usage::

    python -m src.cli list
    python -m src.cli add "Lilac" "Mrs. GREEN APPLE"
    python -m src.cli delete 1
    python -m src.cli pick --algorithm artist-weighted
    python -m src.cli search apple --order asc
    python -m src.cli search --shuffle --json

Reads and writes the same ``songs.json`` / ``artists.json`` documents as
the API server (``CATALOG_DIR``, overridable with ``--data-dir``).  Logs go
to stderr so stdout only carries command output.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys
from typing import Any, Sequence

from src.config.settings import Settings
from src.models.catalog import SongWithArtist
from src.models.selection import SelectionAlgorithm, SortOrder
from src.providers.document_store.json_file_store import JSONFileDocumentStore
from src.services.catalog_query import CatalogView
from src.services.catalog_store import CatalogStore
from src.services.selection_engine import SelectionEngine
from src.utils.errors import SongPickerError
from src.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _emit(args: argparse.Namespace, payload: Any, text: str) -> None:
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(text)


def _format_song(song: SongWithArtist) -> str:
    return f"{song.id:>4}  {song.title} / {song.artist_name}  ({song.created_at:%Y-%m-%d})"


def _format_table(songs: Sequence[SongWithArtist]) -> str:
    if not songs:
        return "No songs registered."
    return "\n".join(_format_song(s) for s in songs)


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_list(args: argparse.Namespace, store: CatalogStore) -> int:
    snapshot = await store.snapshot()
    songs = snapshot.joined()
    _emit(args, [s.model_dump(mode="json") for s in songs], _format_table(songs))
    return 0


async def _handle_artists(args: argparse.Namespace, store: CatalogStore) -> int:
    artists = await store.list_artists()
    text = "\n".join(f"{a.id:>4}  {a.name}" for a in artists) or "No artists registered."
    _emit(args, [a.model_dump(mode="json") for a in artists], text)
    return 0


async def _handle_add(args: argparse.Namespace, store: CatalogStore) -> int:
    song = await store.add_song(args.title, args.artist)
    _emit(args, song.model_dump(mode="json"), f"Added song {song.id}: {song.title}")
    return 0


async def _handle_delete(args: argparse.Namespace, store: CatalogStore) -> int:
    song = await store.delete_song(args.song_id)
    _emit(args, song.model_dump(mode="json"), f"Deleted song {song.id}: {song.title}")
    return 0


async def _handle_pick(args: argparse.Namespace, store: CatalogStore) -> int:
    engine = SelectionEngine(random.Random(args.seed))
    picked = engine.pick(await store.snapshot(), args.algorithm)
    _emit(args, picked.model_dump(mode="json"), f"{picked.title} / {picked.artist_name}")
    return 0


async def _handle_search(args: argparse.Namespace, store: CatalogStore) -> int:
    snapshot = await store.snapshot()
    view = CatalogView(random.Random(args.seed))
    if args.shuffle:
        view.shuffle(snapshot)
    else:
        view.order = SortOrder(args.order)
    songs = view.render(snapshot, args.query)
    if not songs and args.query:
        text = "No songs match your search."
    else:
        text = _format_table(songs)
    _emit(args, [s.model_dump(mode="json") for s in songs], text)
    return 0


_HANDLERS = {
    "list": _handle_list,
    "artists": _handle_artists,
    "add": _handle_add,
    "delete": _handle_delete,
    "pick": _handle_pick,
    "search": _handle_search,
}


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the catalog CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli",
        description="Manage the SongPicker catalog and pick songs.",
    )
    parser.add_argument("--data-dir", default=None, help="Catalog directory (default: CATALOG_DIR)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    subparsers = parser.add_subparsers(dest="command", help="Catalog commands")

    subparsers.add_parser("list", help="List all songs")
    subparsers.add_parser("artists", help="List all artists")

    add_parser = subparsers.add_parser("add", help="Register a song")
    add_parser.add_argument("title", help="Song title")
    add_parser.add_argument("artist", help="Artist name")

    delete_parser = subparsers.add_parser("delete", help="Delete a song by id")
    delete_parser.add_argument("song_id", type=int, help="Song id")

    pick_parser = subparsers.add_parser("pick", help="Pick a song")
    pick_parser.add_argument(
        "--algorithm",
        "-a",
        choices=[a.value for a in SelectionAlgorithm],
        default=None,
        help="Selection algorithm (default: DEFAULT_ALGORITHM)",
    )
    pick_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible pick")

    search_parser = subparsers.add_parser("search", help="Search, sort, or shuffle songs")
    search_parser.add_argument("query", nargs="?", default="", help="Title or artist substring")
    search_parser.add_argument(
        "--order",
        choices=[o.value for o in SortOrder],
        default=SortOrder.DESC.value,
        help="Registration date order (default: desc)",
    )
    search_parser.add_argument("--shuffle", action="store_true", help="Random order instead of date")
    search_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible shuffle")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run(argv: Sequence[str] | None = None, app_settings: Settings | None = None) -> int:
    """Parse *argv*, run the command, and return the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    app_settings = app_settings or Settings()
    configure_logging(log_level="WARNING", stream=sys.stderr)

    if args.command == "pick" and args.algorithm is None:
        args.algorithm = app_settings.default_algorithm

    store = CatalogStore(JSONFileDocumentStore(args.data_dir or app_settings.catalog_dir))
    try:
        return asyncio.run(_HANDLERS[args.command](args, store))
    except SongPickerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def main() -> None:
    """CLI entry point for the catalog tool."""
    sys.exit(run())


if __name__ == "__main__":
    main()
