"""In-memory document store.

Simple, fast store suitable for tests and single-process scripting.  Can be
swapped for the JSON file store via the IDocumentStore interface.
"""

from __future__ import annotations

import copy
from typing import Any

import structlog

from src.interfaces.document_store import IDocumentStore
from src.utils.errors import StorageUnavailableError

logger = structlog.get_logger(logger_name=__name__)


class MemoryDocumentStore(IDocumentStore):
    """Collections held in a plain dict.

    Records are deep-copied on the way in and out so callers never share
    mutable state with the store.

    Parameters
    ----------
    initial:
        Optional seed data, keyed by collection name.
    """

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})

    # ------------------------------------------------------------------
    # IDocumentStore implementation
    # ------------------------------------------------------------------

    async def load(self, collection: str) -> list[dict[str, Any]]:
        if collection not in self._collections:
            raise StorageUnavailableError(
                f"Collection '{collection}' does not exist",
                provider_name=self.get_provider_name(),
            )
        return copy.deepcopy(self._collections[collection])

    async def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        self._collections[collection] = copy.deepcopy(records)
        logger.debug("collection_saved", collection=collection, records=len(records))

    async def ensure_initialized(self, collection: str) -> None:
        if collection not in self._collections:
            self._collections[collection] = []
            logger.debug("collection_created", collection=collection)

    def get_provider_name(self) -> str:
        return "memory"
