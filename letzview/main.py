"""
Point d'entrée CLI de LetzView.

Configure le logging et fournit les commandes d'administration du catalogue,
l'affichage du catalogue et le lancement du serveur web.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import catalog, episode_app, season_app, series_app
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="letzview",
    help="Administration du catalogue LetzView",
)


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """LetzView - Catalogue de séries multilingue."""
    settings = Settings()
    if quiet:
        log_level = "ERROR"
    elif verbose:
        log_level = "DEBUG"
    else:
        log_level = settings.log_level
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Lecture du catalogue
app.command()(catalog)

# Administration
app.add_typer(series_app, name="series")
app.add_typer(season_app, name="season")
app.add_typer(episode_app, name="episode")


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = Settings()
    logger.info("Configuration LetzView")
    typer.echo(f"Stockage : {config.storage_backend}")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Proxy KV : {config.kv_proxy_url}")
    typer.echo(f"Langues : {', '.join(config.supported_languages)} (défaut {config.default_language})")
    typer.echo(f"Traduction : {'activée' if config.translate_enabled else 'désactivée'}")
    typer.echo(
        f"Synchro audio : {config.drift_interval_seconds}s, "
        f"tolérance {config.drift_tolerance_seconds}s"
    )
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"LetzView v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web (proxies /api et catalogue public)."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("letzview.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
