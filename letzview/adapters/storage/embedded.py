"""
Backend catalogue "un document par série".

Chaque série est un document `series/{id}` qui embarque ses saisons et ses
épisodes. Supprimer le document supprime donc tout son contenu.
"""

from loguru import logger

from letzview.adapters.storage.documents import series_from_document, series_to_document
from letzview.core.entities.catalog import Series
from letzview.core.ports.catalog import ICatalogBackend
from letzview.core.ports.document_store import IDocumentStore
from letzview.utils.constants import SERIES_COLLECTION


class EmbeddedCatalogBackend(ICatalogBackend):
    """
    Catalogue stocké à raison d'un document par série.

    Les séries sont retournées dans l'ordre du magasin.
    """

    def __init__(self, store: IDocumentStore, collection: str = SERIES_COLLECTION) -> None:
        self._store = store
        self._collection = collection

    def _path(self, series_id: str) -> str:
        return f"{self._collection}/{series_id}"

    async def load_catalog(self) -> list[Series]:
        snapshots = await self._store.get(self._collection)
        return [series_from_document(snap.data, doc_id=snap.id) for snap in snapshots]

    async def save_series(self, series: Series) -> None:
        await self._store.set(self._path(series.id), series_to_document(series))
        logger.debug("Série enregistrée", series_id=series.id, seasons=len(series.seasons))

    async def delete_series(self, series_id: str) -> None:
        await self._store.delete(self._path(series_id))
        logger.debug("Série supprimée", series_id=series_id)
