"""Sous-package CLI commands - re-exporte les commandes publiques."""

from letzview.adapters.cli.commands.admin_commands import (
    episode_app,
    season_app,
    series_app,
)
from letzview.adapters.cli.commands.catalog_commands import (
    build_catalog_tree,
    catalog,
)

__all__ = [
    # lecture
    "build_catalog_tree",
    "catalog",
    # administration
    "episode_app",
    "season_app",
    "series_app",
]
