"""
Backend catalogue "blob clé-valeur".

Tout le catalogue est un seul blob `{series: [...]}` derrière le proxy KV.
Chaque écriture relit le blob, remplace l'entrée de la série, puis renvoie
le blob complet : le dernier écrivain l'emporte.
"""

from typing import Any

from loguru import logger

from letzview.adapters.api.kv_client import KVProxyClient
from letzview.adapters.storage.documents import series_from_document, series_to_document
from letzview.core.entities.catalog import Series
from letzview.core.ports.catalog import ICatalogBackend


def _series_entries(blob: dict[str, Any]) -> list[dict[str, Any]]:
    entries = blob.get("series")
    if not isinstance(entries, list):
        return []
    return [entry for entry in entries if isinstance(entry, dict)]


class KVCatalogBackend(ICatalogBackend):
    """Catalogue stocké dans le blob du proxy KV (ordre du blob conservé)."""

    def __init__(self, client: KVProxyClient) -> None:
        self._client = client

    async def load_catalog(self) -> list[Series]:
        blob = await self._client.read_blob()
        return [series_from_document(entry) for entry in _series_entries(blob)]

    async def save_series(self, series: Series) -> None:
        blob = await self._client.read_blob()
        entries = _series_entries(blob)
        document = series_to_document(series)

        for index, entry in enumerate(entries):
            if entry.get("id") == series.id:
                entries[index] = document
                break
        else:
            entries.append(document)

        await self._client.write_blob({**blob, "series": entries})
        logger.debug("Série enregistrée (blob KV)", series_id=series.id, total=len(entries))

    async def delete_series(self, series_id: str) -> None:
        blob = await self._client.read_blob()
        entries = [entry for entry in _series_entries(blob) if entry.get("id") != series_id]
        await self._client.write_blob({**blob, "series": entries})
        logger.debug("Série supprimée (blob KV)", series_id=series_id)
