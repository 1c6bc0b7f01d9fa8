"""Abstract base class for catalog document stores.

Defines the contract for the flat key-value document store the catalog is
persisted in: each named collection (``"songs"``, ``"artists"``) is a list
of plain dict records.  Implementations may use JSON files, memory, or any
other backend.  The adapter pattern allows the backend to be swapped
without touching the catalog rules in ``src/services/catalog_store.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IDocumentStore(ABC):
    """Contract for collection-per-document persistence.

    All operations are async so file- or network-backed stores never block
    the event loop.
    """

    @abstractmethod
    async def load(self, collection: str) -> list[dict[str, Any]]:
        """Read every record of *collection*.

        Parameters
        ----------
        collection:
            Collection name, e.g. ``"songs"``.

        Returns
        -------
        list[dict]
            The stored records, in stored order.

        Raises
        ------
        StorageUnavailableError
            If the collection cannot be read or is not a list of records.
        """

    @abstractmethod
    async def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        """Replace *collection* with *records*.

        Must be atomic: a concurrent ``load`` sees either the previous or
        the new document, never a partially written one.
        """

    @abstractmethod
    async def ensure_initialized(self, collection: str) -> None:
        """Create *collection* as an empty list if it does not exist yet."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
