"""
Session de navigation d'un spectateur.

Garde la série sélectionnée par son id (jamais par position) et le lecteur
ouvert. La sélection est relue dans l'arbre courant du catalogue à chaque
accès : une série supprimée entre-temps efface simplement la sélection.
"""

from typing import Optional

from loguru import logger

from letzview.core.entities.catalog import Series
from letzview.core.ports.media import IMediaElement
from letzview.services.catalog import CatalogStore
from letzview.services.player import SyncedPlayer
from letzview.utils.constants import (
    DEFAULT_LANGUAGE,
    DRIFT_INTERVAL_SECONDS,
    DRIFT_TOLERANCE_SECONDS,
)


class BrowseSession:
    """Sélection courante et lecteur d'un spectateur."""

    def __init__(
        self,
        store: CatalogStore,
        language: str = DEFAULT_LANGUAGE,
        drift_interval: float = DRIFT_INTERVAL_SECONDS,
        drift_tolerance: float = DRIFT_TOLERANCE_SECONDS,
    ) -> None:
        self.store = store
        self.language = language
        self._drift_interval = drift_interval
        self._drift_tolerance = drift_tolerance
        self._selected_id: Optional[str] = None
        self._player: Optional[SyncedPlayer] = None

    @property
    def player(self) -> Optional[SyncedPlayer]:
        return self._player

    def search(self, query: str) -> list[Series]:
        return self.store.search(query, self.language)

    def select_series(self, series_id: str) -> Optional[Series]:
        """Sélectionne une série ; un id inconnu efface la sélection."""
        self.close_player()
        self._selected_id = series_id
        return self.selected_series

    @property
    def selected_series(self) -> Optional[Series]:
        if self._selected_id is None:
            return None
        series = self.store.get_series(self._selected_id)
        if series is None:
            logger.debug("Sélection effacée : série absente", series_id=self._selected_id)
            self._selected_id = None
            self.close_player()
        return series

    def open_episode(
        self, episode_id: str, video: IMediaElement, audio: IMediaElement
    ) -> Optional[SyncedPlayer]:
        """
        Ouvre le lecteur sur un épisode de la série sélectionnée.

        Le lecteur précédent est fermé. None si l'épisode est introuvable.
        """
        series = self.selected_series
        found = series.find_episode(episode_id) if series else None
        if found is None:
            return None

        self.close_player()
        _, episode = found
        self._player = SyncedPlayer(
            episode,
            video,
            audio,
            drift_interval=self._drift_interval,
            drift_tolerance=self._drift_tolerance,
        )
        return self._player

    def close_player(self) -> None:
        if self._player is not None:
            self._player.close()
            self._player = None
