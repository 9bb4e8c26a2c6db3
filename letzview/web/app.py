"""
Application FastAPI de LetzView.

Initialise l'application web avec le Container DI et monte les routes :
proxy KV (/api/db), proxy de traduction (/api/translate) et catalogue
en lecture (/catalog).
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from ..container import Container
from .routes.catalog import router as catalog_router
from .routes.kv import router as kv_router
from .routes.translate import router as translate_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container à utiliser ; un Container neuf est créé au
            démarrage si absent
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au démarrage et le ferme à l'arrêt."""
        app_container = container or Container()
        if app_container.config().storage_backend != "kv":
            app_container.database.init()
        app.state.container = app_container
        logger.info(
            "Application démarrée",
            storage=app_container.config().storage_backend,
        )
        yield
        await app_container.google_translate_client().close()
        await app_container.kv_client().close()
        app_container.kv_blob_store().close()
        app_container.shutdown_resources()

    application = FastAPI(title="LetzView", lifespan=lifespan)
    application.include_router(kv_router)
    application.include_router(translate_router)
    application.include_router(catalog_router)
    return application


app = create_app()
