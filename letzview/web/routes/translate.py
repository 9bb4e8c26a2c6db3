"""
Proxy de traduction : POST /api/translate.

Relaie `{text, target, source}` vers le service de traduction amont et
renvoie `{text}`. La clé API ne quitte jamais le serveur.
"""

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ...container import Container
from ...core.exceptions import TranslationError
from ..deps import get_container

router = APIRouter(prefix="/api")


@router.post("/translate")
async def translate(
    request: Request,
    container: Container = Depends(get_container),
) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    text = body.get("text")
    target = body.get("target")
    source = body.get("source") or "en"
    if not text or not target:
        return JSONResponse({"error": "Missing 'text' or 'target'."}, status_code=400)

    client = container.google_translate_client()
    try:
        translated = await client.translate(str(text), str(target), str(source))
    except TranslationError as exc:
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code or 500)
    except httpx.HTTPError as exc:
        logger.error("Service de traduction injoignable", error=str(exc))
        return JSONResponse({"error": str(exc) or "Translate error"}, status_code=500)

    return JSONResponse({"text": translated})
