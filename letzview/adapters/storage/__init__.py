"""
Backends de catalogue et magasins de documents.

Trois formes de stockage implémentent ICatalogBackend :
- EmbeddedCatalogBackend : un document par série (forme par défaut)
- SubDocumentCatalogBackend : documents série / saison / épisode, cascade explicite
- KVCatalogBackend : blob unique derrière le proxy KV

InMemoryDocumentStore implémente IDocumentStore sans persistance.
"""

from letzview.adapters.storage.embedded import EmbeddedCatalogBackend
from letzview.adapters.storage.kv import KVCatalogBackend
from letzview.adapters.storage.memory_store import InMemoryDocumentStore
from letzview.adapters.storage.subdocuments import SubDocumentCatalogBackend

__all__ = [
    "EmbeddedCatalogBackend",
    "KVCatalogBackend",
    "InMemoryDocumentStore",
    "SubDocumentCatalogBackend",
]
