"""Catalog document stores.

JSONFileDocumentStore keeps one pretty-printed JSON array per collection
(``songs.json``, ``artists.json``) under a directory and replaces files
atomically on save.

MemoryDocumentStore is dict-based — fast but not shared across processes
and lost on restart.  Used by the test-suite and the ``memory`` backend.
"""

from src.providers.document_store.json_file_store import JSONFileDocumentStore
from src.providers.document_store.memory_store import MemoryDocumentStore

__all__ = ["JSONFileDocumentStore", "MemoryDocumentStore"]
