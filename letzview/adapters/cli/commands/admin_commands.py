"""
Commandes CLI d'administration du catalogue.

Trois groupes Typer : series, season, episode. Chaque commande connecte
l'administrateur (mot de passe admin), recharge le catalogue puis applique
une seule mutation. Les suppressions demandent confirmation sauf --yes.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.prompt import Confirm

from letzview.adapters.cli.helpers import (
    admin_store,
    catalog_errors,
    console,
    localized_input,
    parse_audio_tracks,
    parse_subtitle_tracks,
    with_container,
)
from letzview.core.value_objects.localized_text import resolve

series_app = typer.Typer(name="series", help="Gestion des séries", rich_markup_mode="rich")
season_app = typer.Typer(name="season", help="Gestion des saisons", rich_markup_mode="rich")
episode_app = typer.Typer(name="episode", help="Gestion des épisodes", rich_markup_mode="rich")

PasswordOption = Annotated[
    str,
    typer.Option("--password", "-p", prompt=True, hide_input=True, help="Mot de passe admin"),
]
LangOption = Annotated[
    Optional[str],
    typer.Option("--lang", "-l", help="Langue des textes saisis (texte brut si absent)"),
]
TranslateOption = Annotated[
    bool,
    typer.Option("--translate", help="Pré-remplit les autres langues via le proxy de traduction"),
]
YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Ne pas demander de confirmation")]


def _confirm(message: str, yes: bool) -> None:
    if yes:
        return
    if not Confirm.ask(f"[bold]{message}[/bold]", default=False):
        console.print("[yellow]Annulé.[/yellow]")
        raise typer.Exit(0)


def _not_found(what: str) -> None:
    console.print(f"[yellow]{what} introuvable.[/yellow]")
    raise typer.Exit(code=1)


# ============================================================================
# Séries
# ============================================================================


@series_app.command("add")
def series_add(
    title: Annotated[str, typer.Argument(help="Titre de la série")],
    password: PasswordOption,
    description: Annotated[str, typer.Option("--description", "-d")] = "",
    poster: Annotated[str, typer.Option("--poster", help="URL de l'affiche")] = "",
    backdrop: Annotated[str, typer.Option("--backdrop", help="URL de l'image de fond")] = "",
    lang: LangOption = None,
    translate: TranslateOption = False,
) -> None:
    """Crée une série vide et affiche son id."""
    asyncio.run(_series_add_async(title, password, description, poster, backdrop, lang, translate))


@with_container()
async def _series_add_async(
    container, title, password, description, poster, backdrop, lang, translate
) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        series_id = await store.create_series(
            title=await localized_input(container, title, lang, translate),
            description=await localized_input(container, description, lang, translate),
            poster_url=poster,
            backdrop_url=backdrop,
        )
    console.print(f"[green]Série créée :[/green] {series_id}")


@series_app.command("edit")
def series_edit(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    password: PasswordOption,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    poster: Annotated[Optional[str], typer.Option("--poster")] = None,
    backdrop: Annotated[Optional[str], typer.Option("--backdrop")] = None,
    lang: LangOption = None,
    translate: TranslateOption = False,
) -> None:
    """Modifie titre, description ou images d'une série."""
    asyncio.run(
        _series_edit_async(series_id, password, title, description, poster, backdrop, lang, translate)
    )


@with_container()
async def _series_edit_async(
    container, series_id, password, title, description, poster, backdrop, lang, translate
) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        updated = await store.update_series(
            series_id,
            title=await localized_input(container, title, lang, translate),
            description=await localized_input(container, description, lang, translate),
            poster_url=poster,
            backdrop_url=backdrop,
        )
    if updated is None:
        _not_found("Série")
    console.print(f"[green]Série modifiée :[/green] {series_id}")


@series_app.command("delete")
def series_delete(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    password: PasswordOption,
    yes: YesOption = False,
) -> None:
    """Supprime une série avec toutes ses saisons et épisodes."""
    _confirm(f"Supprimer la série {series_id} et tout son contenu ?", yes)
    asyncio.run(_series_delete_async(series_id, password))


@with_container()
async def _series_delete_async(container, series_id, password) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        deleted = await store.delete_series(series_id)
    if not deleted:
        _not_found("Série")
    console.print(f"[green]Série supprimée :[/green] {series_id}")


# ============================================================================
# Saisons
# ============================================================================


@season_app.command("add")
def season_add(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    password: PasswordOption,
    number: Annotated[
        Optional[int], typer.Option("--number", "-n", help="Numéro (défaut : dernier + 1)")
    ] = None,
) -> None:
    """Ajoute une saison vide à une série."""
    asyncio.run(_season_add_async(series_id, password, number))


@with_container()
async def _season_add_async(container, series_id, password, number) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        season = await store.add_season(series_id, number)
    if season is None:
        _not_found("Série")
    console.print(f"[green]Saison {season.number} ajoutée :[/green] {season.id}")


@season_app.command("delete")
def season_delete(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    season_id: Annotated[str, typer.Argument(help="Id de la saison")],
    password: PasswordOption,
    yes: YesOption = False,
) -> None:
    """Supprime une saison et ses épisodes."""
    _confirm(f"Supprimer la saison {season_id} et ses épisodes ?", yes)
    asyncio.run(_season_delete_async(series_id, season_id, password))


@with_container()
async def _season_delete_async(container, series_id, season_id, password) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        deleted = await store.delete_season(series_id, season_id)
    if not deleted:
        _not_found("Saison")
    console.print(f"[green]Saison supprimée :[/green] {season_id}")


# ============================================================================
# Épisodes
# ============================================================================


@episode_app.command("add")
def episode_add(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    season_id: Annotated[str, typer.Argument(help="Id de la saison")],
    title: Annotated[str, typer.Argument(help="Titre de l'épisode")],
    password: PasswordOption,
    video: Annotated[str, typer.Option("--video", "-v", help="URL de la vidéo principale")] = "",
    description: Annotated[str, typer.Option("--description", "-d")] = "",
    number: Annotated[
        Optional[int], typer.Option("--number", "-n", help="Numéro (défaut : dernier + 1)")
    ] = None,
    audio: Annotated[
        Optional[list[str]], typer.Option("--audio", "-a", help='Piste audio "Libellé=url"')
    ] = None,
    subtitle: Annotated[
        Optional[list[str]], typer.Option("--subtitle", "-s", help='Sous-titres "lang=url"')
    ] = None,
    lang: LangOption = None,
    translate: TranslateOption = False,
) -> None:
    """Ajoute un épisode à une saison."""
    audios = parse_audio_tracks(audio) or []
    subtitles = parse_subtitle_tracks(subtitle) or []
    asyncio.run(
        _episode_add_async(
            series_id, season_id, title, password, video, description, number,
            audios, subtitles, lang, translate,
        )
    )


@with_container()
async def _episode_add_async(
    container, series_id, season_id, title, password, video, description, number,
    audios, subtitles, lang, translate,
) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        episode = await store.add_episode(
            series_id,
            season_id,
            title=await localized_input(container, title, lang, translate),
            video_url=video,
            description=await localized_input(container, description, lang, translate),
            number=number,
            audios=audios,
            subtitles=subtitles,
        )
    if episode is None:
        _not_found("Saison")
    settings = container.config()
    console.print(
        f"[green]Épisode {episode.number} ajouté :[/green] "
        f"{resolve(episode.title, settings.default_language)} ({episode.id})"
    )


@episode_app.command("edit")
def episode_edit(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    season_id: Annotated[str, typer.Argument(help="Id de la saison")],
    episode_id: Annotated[str, typer.Argument(help="Id de l'épisode")],
    password: PasswordOption,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    video: Annotated[Optional[str], typer.Option("--video", "-v")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    number: Annotated[Optional[int], typer.Option("--number", "-n")] = None,
    audio: Annotated[
        Optional[list[str]], typer.Option("--audio", "-a", help="Remplace les pistes audio")
    ] = None,
    subtitle: Annotated[
        Optional[list[str]], typer.Option("--subtitle", "-s", help="Remplace les sous-titres")
    ] = None,
    lang: LangOption = None,
    translate: TranslateOption = False,
) -> None:
    """Modifie un épisode (seuls les champs fournis changent)."""
    audios = parse_audio_tracks(audio)
    subtitles = parse_subtitle_tracks(subtitle)
    asyncio.run(
        _episode_edit_async(
            series_id, season_id, episode_id, password, title, video, description,
            number, audios, subtitles, lang, translate,
        )
    )


@with_container()
async def _episode_edit_async(
    container, series_id, season_id, episode_id, password, title, video, description,
    number, audios, subtitles, lang, translate,
) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        episode = await store.patch_episode(
            series_id,
            season_id,
            episode_id,
            title=await localized_input(container, title, lang, translate),
            description=await localized_input(container, description, lang, translate),
            video_url=video,
            number=number,
            audios=audios,
            subtitles=subtitles,
        )
    if episode is None:
        _not_found("Épisode")
    console.print(f"[green]Épisode modifié :[/green] {episode_id}")


@episode_app.command("delete")
def episode_delete(
    series_id: Annotated[str, typer.Argument(help="Id de la série")],
    season_id: Annotated[str, typer.Argument(help="Id de la saison")],
    episode_id: Annotated[str, typer.Argument(help="Id de l'épisode")],
    password: PasswordOption,
    yes: YesOption = False,
) -> None:
    """Supprime un épisode."""
    _confirm(f"Supprimer l'épisode {episode_id} ?", yes)
    asyncio.run(_episode_delete_async(series_id, season_id, episode_id, password))


@with_container()
async def _episode_delete_async(container, series_id, season_id, episode_id, password) -> None:
    with catalog_errors():
        store = await admin_store(container, password)
        deleted = await store.delete_episode(series_id, season_id, episode_id)
    if not deleted:
        _not_found("Épisode")
    console.print(f"[green]Épisode supprimé :[/green] {episode_id}")
