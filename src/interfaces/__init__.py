"""Public interface definitions for external collaborators.

The catalog is persisted exclusively through the abstract base classes
defined in this package.  Concrete adapters live in ``src/providers/`` and
are injected at startup in ``src/main.py``, so unit tests can pass an
in-memory store instead of touching the filesystem.

CONCRETE PROVIDER MAP:
    Interface        →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IDocumentStore   →  JSONFileDocumentStore, MemoryDocumentStore
"""

from src.interfaces.document_store import IDocumentStore

__all__ = [
    "IDocumentStore",
]
