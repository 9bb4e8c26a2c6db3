"""
Utilitaires partages pour les commandes CLI de LetzView.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- catalog_errors : affichage des erreurs du catalogue et sortie en code 1
- admin_store : connexion admin et chargement du catalogue
- parse_audio_tracks / parse_subtitle_tracks : options "cle=url"
- localized_input : saisie CLI -> texte localise (traduction optionnelle)
"""

from contextlib import contextmanager
from functools import wraps
from typing import Iterable, Iterator, Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from letzview.container import Container
from letzview.core.entities.catalog import AudioTrack, SubtitleTrack
from letzview.core.exceptions import CatalogError
from letzview.core.ports.auth import Credentials
from letzview.core.value_objects.localized_text import LocalizedText
from letzview.services.catalog import CatalogStore, clean_localized
from letzview.services.translation import prefill_translations

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("letzview")
    try:
        yield
    finally:
        loguru_logger.enable("letzview")


def with_container():
    """
    Decorateur qui injecte un container initialise en premier argument.

    La base de donnees n'est initialisee que pour les formes de stockage
    en documents (le backend kv passe par le proxy HTTP).

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if container.config().storage_backend != "kv":
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.translate_proxy_client().close()
                await container.kv_client().close()
                container.shutdown_resources()
        return wrapper
    return decorator


@contextmanager
def catalog_errors() -> Iterator[None]:
    """Affiche une erreur du catalogue en rouge et sort avec le code 1."""
    try:
        yield
    except CatalogError as exc:
        console.print(f"[red]Erreur :[/red] {exc}")
        if exc.__cause__ is not None:
            console.print(f"[dim]{exc.__cause__}[/dim]")
        raise typer.Exit(code=1)


async def admin_store(container: Container, password: str) -> CatalogStore:
    """
    Connecte l'administrateur puis charge le catalogue.

    Raises:
        UnauthorizedError: Mot de passe refuse
    """
    container.auth_provider().login(Credentials(username="admin", password=password))
    store = container.catalog_store()
    await store.fetch_catalog()
    return store


def _split_pairs(values: Iterable[str], option: str) -> list[tuple[str, str]]:
    pairs = []
    for value in values:
        key, sep, url = value.partition("=")
        if not sep or not key.strip() or not url.strip():
            raise typer.BadParameter(f"format attendu cle=url : {value!r}", param_hint=option)
        pairs.append((key.strip(), url.strip()))
    return pairs


def parse_audio_tracks(values: Optional[list[str]]) -> Optional[list[AudioTrack]]:
    """Options --audio "Libelle=url" -> pistes audio (None si absentes)."""
    if not values:
        return None
    return [AudioTrack(label, url) for label, url in _split_pairs(values, "--audio")]


def parse_subtitle_tracks(values: Optional[list[str]]) -> Optional[list[SubtitleTrack]]:
    """Options --subtitle "lang=url" -> sous-titres (None si absents)."""
    if not values:
        return None
    return [SubtitleTrack(lang, url) for lang, url in _split_pairs(values, "--subtitle")]


async def localized_input(
    container: Container,
    text: Optional[str],
    lang: Optional[str],
    translate: bool,
) -> Optional[LocalizedText]:
    """
    Convertit une saisie CLI en texte localise.

    Sans langue, le texte reste brut. Avec --translate, les autres langues
    supportees sont pre-remplies via le proxy de traduction ; un echec de
    traduction n'empeche jamais l'enregistrement.
    """
    if text is None:
        return None
    if lang is None and not translate:
        return clean_localized(text)

    settings = container.config()
    source = lang or settings.default_language
    value = clean_localized({source: text})
    if translate:
        value = await prefill_translations(
            value,
            container.translate_proxy_client(),
            source_lang=source,
            target_langs=settings.supported_languages,
        )
    return value
