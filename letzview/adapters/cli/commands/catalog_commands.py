"""
Commande CLI d'affichage du catalogue (lecture seule, sans connexion).
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.tree import Tree

from letzview.adapters.cli.helpers import console, suppress_loguru, with_container
from letzview.core.entities.catalog import Series
from letzview.core.value_objects.localized_text import resolve


def build_catalog_tree(
    series_list: list[Series], lang: str, fallback: tuple[str, ...]
) -> Tree:
    """Construit l'arbre Rich Series -> Season -> Episode avec les ids."""
    tree = Tree(f"[bold blue]Catalogue ({len(series_list)} séries)[/bold blue]")
    for series in series_list:
        series_node = tree.add(
            f"[bold]{resolve(series.title, lang, fallback)}[/bold] [dim]{series.id}[/dim]"
        )
        for season in series.seasons:
            season_node = series_node.add(f"Saison {season.number} [dim]{season.id}[/dim]")
            for episode in season.episodes:
                extras = []
                if episode.audios:
                    extras.append("audio: " + ", ".join(t.label for t in episode.audios))
                if episode.subtitles:
                    extras.append("st: " + ", ".join(t.lang for t in episode.subtitles))
                suffix = f" [cyan]({'; '.join(extras)})[/cyan]" if extras else ""
                season_node.add(
                    f"E{episode.number:02d} {resolve(episode.title, lang, fallback)}"
                    f" [dim]{episode.id}[/dim]{suffix}"
                )
    return tree


def catalog(
    lang: Annotated[
        Optional[str], typer.Option("--lang", "-l", help="Langue d'affichage")
    ] = None,
    query: Annotated[
        Optional[str], typer.Option("--query", "-q", help="Filtre titre/description")
    ] = None,
) -> None:
    """Affiche le catalogue (séries, saisons, épisodes et leurs ids)."""
    asyncio.run(_catalog_async(lang, query))


@with_container()
async def _catalog_async(container, lang: Optional[str], query: Optional[str]) -> None:
    """Implementation async de la commande catalog."""
    settings = container.config()
    lang = lang or settings.default_language
    store = container.catalog_store()

    with suppress_loguru():
        await store.fetch_catalog()
        results = store.search(query or "", lang)
        if not results:
            console.print("[yellow]Aucune série.[/yellow]")
            return
        console.print(build_catalog_tree(results, lang, settings.fallback_languages))
