"""
Dépendances partagées de l'application web.

Le Container DI est attaché à app.state par le lifespan ; les routes le
récupèrent via ces dépendances FastAPI.
"""

from fastapi import Request

from ..config import Settings
from ..container import Container


def get_container(request: Request) -> Container:
    """Container DI de l'application."""
    return request.app.state.container


def get_settings(request: Request) -> Settings:
    """Paramètres de l'application."""
    return get_container(request).config()
