"""JSON-file document store.

Persists each collection as a pretty-printed JSON array at
``<directory>/<collection>.json`` (``db/songs.json``, ``db/artists.json``
by default).  Blocking file I/O runs in a worker thread via
``asyncio.to_thread`` so the event loop stays responsive.

Saves are atomic: the new document is written to a temporary file in the
same directory, flushed to disk, and moved over the target with
``os.replace``.  A concurrent reader therefore sees either the old or the
new file, never a torn one.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog

from src.interfaces.document_store import IDocumentStore
from src.utils.errors import StorageUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DIRECTORY = Path("db")


class JSONFileDocumentStore(IDocumentStore):
    """One JSON file per collection under *directory*."""

    def __init__(self, directory: str | Path = _DEFAULT_DIRECTORY) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, collection: str) -> Path:
        return self._directory / f"{collection}.json"

    # ------------------------------------------------------------------
    # IDocumentStore implementation
    # ------------------------------------------------------------------

    async def load(self, collection: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._load_sync, collection)

    async def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        await asyncio.to_thread(self._save_sync, collection, records)
        logger.debug("collection_saved", collection=collection, records=len(records))

    async def ensure_initialized(self, collection: str) -> None:
        created = await asyncio.to_thread(self._ensure_sync, collection)
        if created:
            logger.info("collection_created", path=str(self.path_for(collection)))

    def get_provider_name(self) -> str:
        return "json_file"

    # -- Sync helpers (executed via asyncio.to_thread) -------------------------

    def _load_sync(self, collection: str) -> list[dict[str, Any]]:
        path = self.path_for(collection)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise StorageUnavailableError(
                f"{path.name} does not exist",
                provider_name=self.get_provider_name(),
            ) from exc
        except json.JSONDecodeError as exc:
            raise StorageUnavailableError(
                f"{path.name} is not valid JSON: {exc.msg} (line {exc.lineno})",
                provider_name=self.get_provider_name(),
            ) from exc
        except UnicodeDecodeError as exc:
            raise StorageUnavailableError(
                f"{path.name} is not valid UTF-8 (byte {exc.start})",
                provider_name=self.get_provider_name(),
            ) from exc
        except OSError as exc:
            raise StorageUnavailableError(
                f"Could not read {path.name}: {exc.strerror}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise StorageUnavailableError(
                f"{path.name} must contain a JSON array of objects",
                provider_name=self.get_provider_name(),
            )
        return data

    def _save_sync(self, collection: str, records: list[dict[str, Any]]) -> None:
        path = self.path_for(collection)
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            # The temp file must live in the same directory for os.replace
            # to be an atomic rename on the same filesystem.
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._directory,
                prefix=f".{collection}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise StorageUnavailableError(
                f"Could not write {path.name}: {exc.strerror}",
                provider_name=self.get_provider_name(),
            ) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

    def _ensure_sync(self, collection: str) -> bool:
        path = self.path_for(collection)
        if path.exists():
            return False
        self._save_sync(collection, [])
        return True
