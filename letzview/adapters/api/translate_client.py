"""
Client du proxy de traduction (/api/translate).

Utilisé par l'administration pour pré-remplir les langues alternatives ;
les appelants traitent ses échecs comme non bloquants.
"""

from typing import Optional

import httpx

from letzview.core.exceptions import TranslationError
from letzview.core.ports.translator import ITranslator


class TranslateProxyClient(ITranslator):
    """
    Client HTTP du proxy de traduction LetzView.

    Example:
        client = TranslateProxyClient(base_url="http://localhost:8000")
        fr = await client.translate("Hello", target="fr")
    """

    def __init__(self, base_url: str, timeout: float = 15.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self._client

    async def translate(self, text: str, target: str, source: str = "en") -> str:
        """
        Traduit via le proxy.

        Raises:
            TranslationError: Réponse d'erreur du proxy (message du champ `error`)
        """
        response = await self._get_client().post(
            "/api/translate", json={"text": text, "target": target, "source": source}
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            raise TranslationError(
                payload.get("error") or "Translate failed", status_code=response.status_code
            )
        return payload.get("text") or ""

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
