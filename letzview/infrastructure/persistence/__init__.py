"""
Persistance de LetzView.

- database : engine SQLModel et sessions
- models : table `documents`
- document_store : magasin de documents SQLite (IDocumentStore)
- kv_store : blob catalogue sur disque (diskcache) servi par le proxy KV
"""

from letzview.infrastructure.persistence.database import create_db_engine, init_db
from letzview.infrastructure.persistence.document_store import SQLModelDocumentStore
from letzview.infrastructure.persistence.kv_store import KVBlobStore

__all__ = [
    "create_db_engine",
    "init_db",
    "SQLModelDocumentStore",
    "KVBlobStore",
]
