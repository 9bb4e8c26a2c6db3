"""
Backend catalogue "sous-documents".

Reprend la forme historique du catalogue dans la base documentaire :

    series/{id}                                   {id, title, description, posterUrl, backdropUrl}
    series/{id}/seasons/{number}                  {id, number}
    series/{id}/seasons/{number}/episodes/{num}   {id, number, title, ..., audios, subtitles}

Le magasin ne supprime pas les sous-collections d'un document supprimé :
la cascade (épisodes, puis saisons, puis série) est faite ici, et
l'enregistrement d'une série retire les sous-documents devenus orphelins.
"""

from loguru import logger

from letzview.adapters.storage.documents import (
    episode_from_document,
    episode_to_document,
    season_from_document,
    season_to_document,
    series_from_document,
    series_to_document,
)
from letzview.core.entities.catalog import Series
from letzview.core.ports.catalog import ICatalogBackend
from letzview.core.ports.document_store import IDocumentStore
from letzview.core.value_objects.localized_text import resolve
from letzview.utils.constants import DEFAULT_LANGUAGE, SERIES_COLLECTION
from letzview.utils.helpers import search_key


class SubDocumentCatalogBackend(ICatalogBackend):
    """
    Catalogue réparti en documents série / saison / épisode.

    Les séries sont retournées triées par titre (langue par défaut).
    """

    def __init__(
        self,
        store: IDocumentStore,
        collection: str = SERIES_COLLECTION,
        sort_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self._store = store
        self._collection = collection
        self._sort_language = sort_language

    def _series_path(self, series_id: str) -> str:
        return f"{self._collection}/{series_id}"

    async def load_catalog(self) -> list[Series]:
        catalog = []
        for series_snap in await self._store.get(self._collection):
            seasons = []
            for season_snap in await self._store.get(f"{series_snap.path}/seasons"):
                episode_snaps = await self._store.query(
                    f"{season_snap.path}/episodes", order_by="number"
                )
                episodes = [episode_from_document(e.data, doc_id=e.id) for e in episode_snaps]
                seasons.append(
                    season_from_document(season_snap.data, doc_id=season_snap.id, episodes=episodes)
                )
            catalog.append(
                series_from_document(series_snap.data, doc_id=series_snap.id, seasons=seasons)
            )

        catalog.sort(key=lambda s: search_key(resolve(s.title, self._sort_language)))
        return catalog

    async def save_series(self, series: Series) -> None:
        root = self._series_path(series.id)
        await self._store.set(root, series_to_document(series, include_seasons=False))

        previous_seasons = {snap.path for snap in await self._store.get(f"{root}/seasons")}
        written_seasons: set[str] = set()
        for season in series.seasons:
            season_path = f"{root}/seasons/{season.number}"
            written_seasons.add(season_path)
            await self._store.set(season_path, season_to_document(season, include_episodes=False))

            previous_episodes = {
                snap.path for snap in await self._store.get(f"{season_path}/episodes")
            }
            written_episodes: set[str] = set()
            for episode in season.episodes:
                episode_path = f"{season_path}/episodes/{episode.number}"
                written_episodes.add(episode_path)
                await self._store.set(episode_path, episode_to_document(episode))

            for orphan in sorted(previous_episodes - written_episodes):
                await self._store.delete(orphan)

        orphan_seasons = sorted(previous_seasons - written_seasons)
        if orphan_seasons:
            await self._delete_seasons(orphan_seasons)

        logger.debug(
            "Série enregistrée (sous-documents)",
            series_id=series.id,
            orphans_removed=len(orphan_seasons),
        )

    async def delete_series(self, series_id: str) -> None:
        root = self._series_path(series_id)
        season_paths = [snap.path for snap in await self._store.get(f"{root}/seasons")]
        await self._delete_seasons(season_paths)
        await self._store.delete(root)
        logger.debug("Série supprimée en cascade", series_id=series_id, seasons=len(season_paths))

    async def _delete_seasons(self, season_paths: list[str]) -> None:
        """Supprime tous les épisodes des saisons, puis les saisons."""
        for season_path in season_paths:
            for episode_snap in await self._store.get(f"{season_path}/episodes"):
                await self._store.delete(episode_snap.path)
        for season_path in season_paths:
            await self._store.delete(season_path)
