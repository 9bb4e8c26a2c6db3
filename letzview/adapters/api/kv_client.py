"""
Client du proxy clé-valeur (/api/db).

Le proxy expose le catalogue complet sous forme d'un blob JSON :
GET le lit, POST {password, data} le remplace. Aucune relance automatique :
un échec remonte à l'appelant.

Usage:
    client = KVProxyClient(base_url="http://localhost:8000", password="secret")
    blob = await client.read_blob()
    await client.write_blob({"series": [...]})
"""

from typing import Any, Optional

import httpx
from loguru import logger


class KVProxyClient:
    """
    Client HTTP du proxy KV.

    Attributes:
        DB_ENDPOINT: Chemin de l'endpoint du proxy
    """

    DB_ENDPOINT = "/api/db"

    def __init__(self, base_url: str, password: str, timeout: float = 15.0) -> None:
        """
        Initialise le client.

        Args:
            base_url: URL de base du serveur LetzView
            password: Secret admin envoyé avec chaque écriture
            timeout: Timeout HTTP en secondes
        """
        self._base_url = base_url.rstrip("/")
        self._password = password
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le crée si nécessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        return self._client

    async def read_blob(self) -> dict[str, Any]:
        """
        Lit le blob catalogue.

        Returns:
            Le blob, `{series: []}` si le proxy renvoie autre chose qu'un objet

        Raises:
            httpx.HTTPStatusError: Réponse d'erreur du proxy
        """
        response = await self._get_client().get(self.DB_ENDPOINT)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            return {"series": []}
        data.setdefault("series", [])
        return data

    async def write_blob(self, data: dict[str, Any]) -> None:
        """
        Remplace le blob catalogue.

        Raises:
            httpx.HTTPStatusError: 401 si le mot de passe est refusé, 400 si
                le blob est invalide
        """
        response = await self._get_client().post(
            self.DB_ENDPOINT, json={"password": self._password, "data": data}
        )
        response.raise_for_status()
        logger.debug("Blob catalogue envoyé", keys=sorted(data))

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
