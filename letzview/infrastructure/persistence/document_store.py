"""
Implementation SQLModel du magasin de documents.

Implemente l'interface IDocumentStore au-dessus de la table `documents`.
Les operations SQLite sont synchrones : elles sont executees dans le pool
de threads de la boucle asyncio pour ne pas bloquer l'appelant.
"""

import asyncio
import json
from datetime import datetime
from functools import partial
from typing import Any, Callable, Optional, TypeVar

from loguru import logger
from sqlalchemy import Engine
from sqlmodel import Session, select

from letzview.core.ports.document_store import (
    DocumentSnapshot,
    IDocumentStore,
    numeric_sort_key,
    split_path,
)
from letzview.infrastructure.persistence.database import session_scope
from letzview.infrastructure.persistence.models import DocumentModel

T = TypeVar("T")


class SQLModelDocumentStore(IDocumentStore):
    """
    Magasin de documents persistant dans SQLite.

    Implemente IDocumentStore avec conversion entre DocumentModel
    (persistance) et DocumentSnapshot (port).
    """

    def __init__(self, engine: Engine) -> None:
        """
        Initialise le magasin avec un engine deja initialise (tables creees).

        Args :
            engine : Engine SQLAlchemy vers la base
        """
        self._engine = engine

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    @staticmethod
    def _to_snapshot(model: DocumentModel) -> DocumentSnapshot:
        return DocumentSnapshot(id=model.doc_id, path=model.path, data=model.data)

    def _get_sync(self, collection_path: str) -> list[DocumentSnapshot]:
        with Session(self._engine) as session:
            statement = (
                select(DocumentModel)
                .where(DocumentModel.collection == collection_path.strip("/"))
                .order_by(DocumentModel.doc_id)
            )
            return [self._to_snapshot(model) for model in session.exec(statement).all()]

    def _get_one_sync(self, doc_path: str) -> Optional[DocumentSnapshot]:
        split_path(doc_path)
        with Session(self._engine) as session:
            model = session.get(DocumentModel, doc_path.strip("/"))
            return self._to_snapshot(model) if model else None

    def _set_sync(self, doc_path: str, data: dict[str, Any], merge: bool) -> None:
        collection, doc_id = split_path(doc_path)
        path = doc_path.strip("/")
        with session_scope(self._engine) as session:
            existing = session.get(DocumentModel, path)
            if existing:
                content = {**existing.data, **data} if merge else dict(data)
                existing.data_json = json.dumps(content, ensure_ascii=False)
                existing.updated_at = datetime.utcnow()
                session.add(existing)
            else:
                session.add(
                    DocumentModel(
                        path=path,
                        collection=collection,
                        doc_id=doc_id,
                        data_json=json.dumps(data, ensure_ascii=False),
                    )
                )

    def _delete_sync(self, doc_path: str) -> None:
        split_path(doc_path)
        with session_scope(self._engine) as session:
            model = session.get(DocumentModel, doc_path.strip("/"))
            if model:
                session.delete(model)

    async def get(self, collection_path: str) -> list[DocumentSnapshot]:
        """Liste les documents d'une collection, tries par id."""
        return await self._run(self._get_sync, collection_path)

    async def get_one(self, doc_path: str) -> Optional[DocumentSnapshot]:
        """Recupere un document par chemin."""
        return await self._run(self._get_one_sync, doc_path)

    async def set(self, doc_path: str, data: dict[str, Any], merge: bool = False) -> None:
        """Ecrit (ou fusionne) un document."""
        await self._run(self._set_sync, doc_path, data, merge)
        logger.debug("Document ecrit", path=doc_path, merge=merge)

    async def delete(self, doc_path: str) -> None:
        """Supprime un document ; ses sous-collections restent en place."""
        await self._run(self._delete_sync, doc_path)
        logger.debug("Document supprime", path=doc_path)

    async def query(
        self,
        collection_path: str,
        order_by: str,
        equals: Optional[tuple[str, Any]] = None,
    ) -> list[DocumentSnapshot]:
        """Filtre par egalite puis trie par champ numerique croissant."""
        snapshots = await self.get(collection_path)
        if equals is not None:
            field, value = equals
            snapshots = [s for s in snapshots if s.data.get(field) == value]
        return sorted(snapshots, key=numeric_sort_key(order_by))
