"""
Services applicatifs.

- CatalogStore : catalogue en mémoire, mutations copie -> écriture -> remplacement
- SyncedPlayer : lecteur vidéo + audio secondaire synchronisés
- BrowseSession : sélection et lecteur d'un spectateur
- prefill_translations : pré-remplissage des langues alternatives
"""

from letzview.services.browse import BrowseSession
from letzview.services.catalog import CatalogStore
from letzview.services.player import PlayerState, SyncedPlayer
from letzview.services.translation import prefill_translations

__all__ = [
    "BrowseSession",
    "CatalogStore",
    "PlayerState",
    "SyncedPlayer",
    "prefill_translations",
]
