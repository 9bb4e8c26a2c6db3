"""
Magasin de documents en mémoire.

Implémentation de IDocumentStore sans persistance, pour les tests et le
développement local. Mêmes sémantiques que le magasin SQLite : tri par id,
fusion de premier niveau, suppression sans cascade.
"""

import copy
from typing import Any, Optional

from letzview.core.ports.document_store import (
    DocumentSnapshot,
    IDocumentStore,
    numeric_sort_key,
    split_path,
)


class InMemoryDocumentStore(IDocumentStore):
    """Magasin de documents dans un dictionnaire chemin -> contenu."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    @property
    def paths(self) -> list[str]:
        """Chemins de tous les documents stockés (triés)."""
        return sorted(self._documents)

    def _snapshot(self, path: str) -> DocumentSnapshot:
        _, doc_id = split_path(path)
        return DocumentSnapshot(
            id=doc_id, path=path, data=copy.deepcopy(self._documents[path])
        )

    async def get(self, collection_path: str) -> list[DocumentSnapshot]:
        collection_path = collection_path.strip("/")
        matching = [
            path for path in self._documents if split_path(path)[0] == collection_path
        ]
        return [self._snapshot(path) for path in sorted(matching, key=lambda p: split_path(p)[1])]

    async def get_one(self, doc_path: str) -> Optional[DocumentSnapshot]:
        split_path(doc_path)
        path = doc_path.strip("/")
        return self._snapshot(path) if path in self._documents else None

    async def set(self, doc_path: str, data: dict[str, Any], merge: bool = False) -> None:
        split_path(doc_path)
        path = doc_path.strip("/")
        content = copy.deepcopy(data)
        if merge and path in self._documents:
            content = {**self._documents[path], **content}
        self._documents[path] = content

    async def delete(self, doc_path: str) -> None:
        split_path(doc_path)
        self._documents.pop(doc_path.strip("/"), None)

    async def query(
        self,
        collection_path: str,
        order_by: str,
        equals: Optional[tuple[str, Any]] = None,
    ) -> list[DocumentSnapshot]:
        snapshots = await self.get(collection_path)
        if equals is not None:
            field_name, value = equals
            snapshots = [s for s in snapshots if s.data.get(field_name) == value]
        return sorted(snapshots, key=numeric_sort_key(order_by))
