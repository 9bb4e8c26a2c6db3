"""
Client Google Translate (API v2) utilisé par le proxy de traduction.

Usage:
    client = GoogleTranslateClient(api_key="your_key")
    text = await client.translate("Hello", target="fr")
    await client.close()
"""

from typing import Optional

import httpx
from loguru import logger

from letzview.adapters.api.retry import RateLimitError, send_with_retry
from letzview.core.exceptions import TranslationError
from letzview.core.ports.translator import ITranslator


class GoogleTranslateClient(ITranslator):
    """
    Client de l'API Google Cloud Translation v2.

    Implemente ITranslator avec:
    - Requete POST JSON (q, source, target, format=text)
    - Retry automatique sur rate limiting (429)
    - Message d'erreur amont propagé dans TranslationError

    Attributes:
        TRANSLATE_URL: Point d'entrée de l'API v2
    """

    TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"

    def __init__(self, api_key: Optional[str]) -> None:
        """
        Initialise le client.

        Args:
            api_key: Clé API Google (None = non configurée)
        """
        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le crée si nécessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=15.0,
            )
        return self._client

    async def translate(self, text: str, target: str, source: str = "en") -> str:
        """
        Traduit un texte.

        Raises:
            TranslationError: Clé absente (500), débit limité (429),
                erreur amont (code amont)
        """
        if not self._api_key:
            raise TranslationError(
                "Missing translate API key (LETZVIEW_GOOGLE_TRANSLATE_API_KEY).",
                status_code=500,
            )

        try:
            response = await send_with_retry(
                self._get_client(),
                "POST",
                self.TRANSLATE_URL,
                params={"key": self._api_key},
                json={"q": text, "source": source, "target": target, "format": "text"},
            )
        except RateLimitError as exc:
            logger.warning("Service de traduction saturé", target=target, retry_after=exc.retry_after)
            raise TranslationError("Rate limited", status_code=429) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            error = payload.get("error")
            message = (error.get("message") if isinstance(error, dict) else None) or "Translate failed"
            logger.warning(
                "Traduction refusée par le service amont",
                status=response.status_code,
                target=target,
            )
            raise TranslationError(message, status_code=response.status_code)

        translations = (payload.get("data") or {}).get("translations") or [{}]
        return translations[0].get("translatedText") or ""

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
