"""
Proxy clé-valeur du catalogue : GET/POST /api/db.

Tout le catalogue est rangé sous une seule clé. La lecture est publique ;
l'écriture exige le mot de passe admin et remplace le blob entier.
"""

import secrets

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ...config import Settings
from ...container import Container
from ..deps import get_container, get_settings

router = APIRouter(prefix="/api")

_NO_STORE = {"Cache-Control": "no-store"}


@router.get("/db")
async def read_db(container: Container = Depends(get_container)) -> JSONResponse:
    """Retourne le blob catalogue, `{series: []}` si rien n'est stocké."""
    data = await container.kv_blob_store().read()
    return JSONResponse(data, headers=_NO_STORE)


@router.post("/db")
async def write_db(
    request: Request,
    container: Container = Depends(get_container),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Remplace le blob si le mot de passe admin est correct."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    password = body.get("password")
    if not isinstance(password, str) or not secrets.compare_digest(
        password.encode("utf-8"), settings.admin_password.encode("utf-8")
    ):
        logger.warning("Écriture KV refusée : mot de passe invalide")
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    data = body.get("data")
    if not isinstance(data, dict):
        return JSONResponse({"error": "Invalid body"}, status_code=400)

    await container.kv_blob_store().write(data)
    return JSONResponse({"ok": True})
