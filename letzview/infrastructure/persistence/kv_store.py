"""
Magasin cle-valeur du blob catalogue.

Le proxy KV (/api/db) stocke tout le catalogue sous une seule cle. Le blob
est conserve sur disque avec diskcache, ce qui permet de le garder entre les
redemarrages du serveur.
"""

import asyncio
import copy
from functools import partial
from pathlib import Path
from typing import Any

from diskcache import Cache
from loguru import logger

from letzview.utils.constants import EMPTY_CATALOG_BLOB, KV_CATALOG_KEY


class KVBlobStore:
    """
    Stockage asynchrone du blob `{series: [...]}`.

    Utilise diskcache pour la persistance et run_in_executor pour
    les operations non-bloquantes.

    Example:
        store = KVBlobStore(directory=".cache/kv")
        await store.write({"series": []})
        data = await store.read()
    """

    def __init__(self, directory: str | Path = ".cache/kv", key: str = KV_CATALOG_KEY) -> None:
        """
        Initialise le magasin.

        Args:
            directory: Repertoire diskcache (cree si inexistant)
            key: Cle sous laquelle le blob est range
        """
        self._cache = Cache(str(directory))
        self._key = key

    async def read(self) -> dict[str, Any]:
        """
        Lit le blob.

        Returns:
            Le blob stocke, ou `{series: []}` si absent
        """
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._cache.get, self._key)
        if data is None:
            return copy.deepcopy(EMPTY_CATALOG_BLOB)
        return data

    async def write(self, data: dict[str, Any]) -> None:
        """
        Remplace le blob (pas de fusion).

        Args:
            data: Nouveau contenu complet
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, partial(self._cache.set, self._key, data))
        logger.debug("Blob catalogue ecrit", key=self._key, keys=sorted(data))

    def close(self) -> None:
        """Ferme le cache."""
        self._cache.close()
