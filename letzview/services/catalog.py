"""
Service catalogue : source de vérité de l'arbre Series -> Season -> Episode.

Toutes les lectures (spectateurs) et toutes les mutations (administration)
passent par CatalogStore. Une mutation suit toujours le même schéma :

    copie profonde de l'arbre -> recherche de la cible par id -> mutation
    -> écriture de la série concernée -> remplacement de l'arbre

L'arbre visible n'est remplacé qu'après une écriture réussie : un lecteur
voit l'ancien arbre ou le nouveau, jamais un état intermédiaire, et un
échec distant ne laisse aucune modification locale.

Limite connue : pas de jeton de version. Deux administrateurs qui modifient
la même série en parallèle se marchent dessus (le dernier écrit gagne), et
le service ne sérialise pas les appels concurrents.
"""

import copy
import uuid
from typing import Any, Callable, Iterable, Optional, TypeVar

from loguru import logger

from letzview.core.entities.catalog import (
    AudioTrack,
    Episode,
    Season,
    Series,
    SubtitleTrack,
    drop_incomplete_tracks,
    next_episode_number,
    next_season_number,
    sort_tree,
)
from letzview.core.exceptions import (
    CatalogValidationError,
    DuplicateEpisodeError,
    DuplicateSeasonError,
    RemoteWriteError,
    UnauthorizedError,
)
from letzview.core.ports.auth import IAuthProvider
from letzview.core.ports.catalog import ICatalogBackend
from letzview.core.value_objects.localized_text import (
    LocalizedMap,
    LocalizedText,
    PlainText,
    is_blank,
    localized_from_raw,
    resolve,
)
from letzview.utils.constants import DEFAULT_LANGUAGE
from letzview.utils.helpers import clean_text, search_key

T = TypeVar("T")

# Cible introuvable dans la copie : la mutation ne fait rien
_NOT_FOUND = object()


def new_catalog_id() -> str:
    """Identifiant aléatoire unique attribué côté client."""
    return str(uuid.uuid4())


def clean_localized(raw: Any) -> LocalizedText:
    """Convertit une saisie (str, dict, LocalizedText) en texte localisé nettoyé."""
    value = localized_from_raw(raw)
    if isinstance(value, PlainText):
        return PlainText(clean_text(value.value))
    return LocalizedMap({lang: clean_text(text) for lang, text in value.values.items()})


def _require_text(field: str, value: LocalizedText) -> None:
    if is_blank(value):
        raise CatalogValidationError(field, f"{field} is required")


def _require_url(field: str, url: str) -> str:
    url = clean_text(url)
    if not url:
        raise CatalogValidationError(field, f"{field} is required")
    return url


def _require_number(field: str, number: Any) -> int:
    if isinstance(number, bool) or not isinstance(number, int) or number < 1:
        raise CatalogValidationError(field, f"{field} must be a positive integer")
    return number


def _validate_series(series: Series) -> None:
    """Vérifie une série complète avant écriture."""
    _require_text("title", series.title)
    season_numbers: set[int] = set()
    for season in series.seasons:
        _require_number("season number", season.number)
        if season.number in season_numbers:
            raise DuplicateSeasonError(series.id, season.number)
        season_numbers.add(season.number)

        episode_numbers: set[int] = set()
        for episode in season.episodes:
            _require_number("episode number", episode.number)
            if episode.number in episode_numbers:
                raise DuplicateEpisodeError(season.id, episode.number)
            episode_numbers.add(episode.number)
            _require_text("episode title", episode.title)
            episode.video_url = _require_url("video_url", episode.video_url)


class CatalogStore:
    """
    Client du catalogue avec arbre en mémoire.

    Les objets retournés par les mutations sont des copies. L'arbre lu via
    `series` n'est jamais modifié en place : chaque mutation réussie le
    remplace par un nouvel arbre.

    Attributes:
        language: Langue utilisée pour la recherche par défaut
        fallback_languages: Chaîne de repli de résolution des textes
    """

    def __init__(
        self,
        backend: ICatalogBackend,
        auth: Optional[IAuthProvider] = None,
        id_factory: Callable[[], str] = new_catalog_id,
        fallback_languages: Iterable[str] = (DEFAULT_LANGUAGE,),
    ) -> None:
        """
        Args:
            backend: Persistance du catalogue
            auth: Fournisseur d'auth ; si fourni, les mutations exigent un
                utilisateur connecté
            id_factory: Générateur d'identifiants (séries, saisons, épisodes)
            fallback_languages: Langues de repli pour la recherche
        """
        self._backend = backend
        self._auth = auth
        self._new_id = id_factory
        self.fallback_languages = tuple(fallback_languages)
        self._series: list[Series] = []

    # ========================================================================
    # Lecture
    # ========================================================================

    @property
    def series(self) -> list[Series]:
        """Arbre courant (lecture seule)."""
        return list(self._series)

    def get_series(self, series_id: str) -> Optional[Series]:
        return next((s for s in self._series if s.id == series_id), None)

    async def fetch_catalog(self) -> list[Series]:
        """
        Recharge le catalogue depuis le backend.

        Ne lève jamais : un catalogue absent donne une liste vide, et un
        échec de lecture est journalisé puis le dernier arbre connu
        (vide au démarrage) est retourné.
        """
        try:
            catalog = await self._backend.load_catalog()
        except Exception as exc:
            logger.warning("Lecture du catalogue impossible", error=str(exc))
            return list(self._series)

        self._series = [sort_tree(series) for series in catalog or []]
        logger.debug("Catalogue chargé", series=len(self._series))
        return list(self._series)

    def search(self, query: str, lang: str = DEFAULT_LANGUAGE) -> list[Series]:
        """
        Filtre les séries dont le titre ou la description contient `query`.

        Comparaison insensible à la casse et aux accents, sur les textes
        résolus dans `lang`. Requête vide -> toutes les séries.
        """
        needle = search_key(query or "")
        if not needle:
            return list(self._series)
        return [
            series
            for series in self._series
            if needle in search_key(resolve(series.title, lang, self.fallback_languages))
            or needle in search_key(resolve(series.description, lang, self.fallback_languages))
        ]

    # ========================================================================
    # Séries
    # ========================================================================

    async def save_series(self, series: Series) -> None:
        """
        Enregistre une série complète (upsert par id).

        Idempotent : enregistrer deux fois le même objet donne le même état.
        Les pistes incomplètes sont retirées avant écriture.
        """
        self._require_admin()
        candidate = sort_tree(copy.deepcopy(series))
        for season in candidate.seasons:
            for episode in season.episodes:
                drop_incomplete_tracks(episode)
        _validate_series(candidate)

        await self._persist("save", candidate)

        draft = copy.deepcopy(self._series)
        for index, existing in enumerate(draft):
            if existing.id == candidate.id:
                draft[index] = candidate
                break
        else:
            draft.append(candidate)
        self._series = draft

    async def create_series(
        self,
        title: Any,
        description: Any = "",
        poster_url: str = "",
        backdrop_url: str = "",
    ) -> str:
        """
        Crée une série vide et retourne son id.

        Raises:
            CatalogValidationError: Titre vide
        """
        self._require_admin()
        series = Series(
            id=self._new_id(),
            title=clean_localized(title),
            description=clean_localized(description),
            poster_url=clean_text(poster_url),
            backdrop_url=clean_text(backdrop_url),
        )
        _require_text("title", series.title)

        await self._persist("create", series)

        draft = copy.deepcopy(self._series)
        draft.append(series)
        self._series = draft
        logger.info("Série créée", series_id=series.id)
        return series.id

    async def update_series(
        self,
        series_id: str,
        title: Any = None,
        description: Any = None,
        poster_url: Optional[str] = None,
        backdrop_url: Optional[str] = None,
    ) -> Optional[Series]:
        """Modifie les champs d'une série (None = inchangé)."""
        new_title = clean_localized(title) if title is not None else None
        if new_title is not None:
            _require_text("title", new_title)

        def mutate(series: Series) -> Series:
            if new_title is not None:
                series.title = new_title
            if description is not None:
                series.description = clean_localized(description)
            if poster_url is not None:
                series.poster_url = clean_text(poster_url)
            if backdrop_url is not None:
                series.backdrop_url = clean_text(backdrop_url)
            return series

        return await self._commit("update", series_id, mutate)

    async def delete_series(self, series_id: str) -> bool:
        """
        Supprime une série et tout son contenu.

        Returns:
            False si la série n'existe pas (rien n'est fait)
        """
        self._require_admin()
        if self.get_series(series_id) is None:
            logger.debug("Suppression ignorée : série inconnue", series_id=series_id)
            return False

        try:
            await self._backend.delete_series(series_id)
        except Exception as exc:
            logger.error("Échec de suppression distante", series_id=series_id, error=str(exc))
            raise RemoteWriteError("delete", series_id) from exc

        self._series = [copy.deepcopy(s) for s in self._series if s.id != series_id]
        logger.info("Série supprimée", series_id=series_id)
        return True

    # ========================================================================
    # Saisons
    # ========================================================================

    async def add_season(self, series_id: str, number: Optional[int] = None) -> Optional[Season]:
        """
        Ajoute une saison vide.

        Args:
            series_id: Série parente
            number: Numéro explicite ; None = max des numéros existants + 1

        Raises:
            DuplicateSeasonError: Numéro explicite déjà pris
        """
        if number is not None:
            _require_number("season number", number)

        def mutate(series: Series) -> Season:
            season_number = next_season_number(series) if number is None else number
            if any(s.number == season_number for s in series.seasons):
                raise DuplicateSeasonError(series.id, season_number)
            season = Season(id=self._new_id(), number=season_number)
            series.seasons.append(season)
            return season

        return await self._commit("add_season", series_id, mutate)

    async def delete_season(self, series_id: str, season_id: str) -> bool:
        """Supprime une saison et ses épisodes. False si introuvable."""

        def mutate(series: Series) -> Any:
            season = series.find_season(season_id)
            if season is None:
                return _NOT_FOUND
            series.seasons.remove(season)
            return True

        return bool(await self._commit("delete_season", series_id, mutate))

    # ========================================================================
    # Épisodes
    # ========================================================================

    async def add_episode(
        self,
        series_id: str,
        season_id: str,
        title: Any,
        video_url: str,
        description: Any = "",
        number: Optional[int] = None,
        audios: Iterable[AudioTrack] = (),
        subtitles: Iterable[SubtitleTrack] = (),
    ) -> Optional[Episode]:
        """
        Ajoute un épisode à une saison.

        Le numéro vaut par défaut max + 1 (donc 1 pour le premier épisode).

        Raises:
            CatalogValidationError: Titre ou URL vidéo vide
            DuplicateEpisodeError: Numéro explicite déjà pris
        """
        episode_title = clean_localized(title)
        _require_text("episode title", episode_title)
        url = _require_url("video_url", video_url)
        if number is not None:
            _require_number("episode number", number)

        def mutate(series: Series) -> Any:
            season = series.find_season(season_id)
            if season is None:
                return _NOT_FOUND
            episode_number = next_episode_number(season) if number is None else number
            if any(ep.number == episode_number for ep in season.episodes):
                raise DuplicateEpisodeError(season.id, episode_number)
            episode = drop_incomplete_tracks(
                Episode(
                    id=self._new_id(),
                    number=episode_number,
                    title=episode_title,
                    description=clean_localized(description),
                    video_url=url,
                    audios=[AudioTrack(t.label.strip(), t.url.strip()) for t in audios],
                    subtitles=[SubtitleTrack(t.lang.strip(), t.url.strip()) for t in subtitles],
                )
            )
            season.episodes.append(episode)
            return episode

        return await self._commit("add_episode", series_id, mutate)

    async def patch_episode(
        self,
        series_id: str,
        season_id: str,
        episode_id: str,
        title: Any = None,
        description: Any = None,
        video_url: Optional[str] = None,
        number: Optional[int] = None,
        audios: Optional[Iterable[AudioTrack]] = None,
        subtitles: Optional[Iterable[SubtitleTrack]] = None,
    ) -> Optional[Episode]:
        """Modifie un épisode (None = inchangé). None si introuvable."""
        new_title = clean_localized(title) if title is not None else None
        if new_title is not None:
            _require_text("episode title", new_title)
        new_url = _require_url("video_url", video_url) if video_url is not None else None
        if number is not None:
            _require_number("episode number", number)

        def mutate(series: Series) -> Any:
            season = series.find_season(season_id)
            episode = season.find_episode(episode_id) if season else None
            if episode is None:
                return _NOT_FOUND
            if number is not None and number != episode.number:
                if any(ep.number == number for ep in season.episodes):
                    raise DuplicateEpisodeError(season.id, number)
                episode.number = number
            if new_title is not None:
                episode.title = new_title
            if description is not None:
                episode.description = clean_localized(description)
            if new_url is not None:
                episode.video_url = new_url
            if audios is not None:
                episode.audios = [AudioTrack(t.label.strip(), t.url.strip()) for t in audios]
            if subtitles is not None:
                episode.subtitles = [SubtitleTrack(t.lang.strip(), t.url.strip()) for t in subtitles]
            return drop_incomplete_tracks(episode)

        return await self._commit("patch_episode", series_id, mutate)

    async def delete_episode(self, series_id: str, season_id: str, episode_id: str) -> bool:
        """Supprime un épisode. False si introuvable."""

        def mutate(series: Series) -> Any:
            season = series.find_season(season_id)
            episode = season.find_episode(episode_id) if season else None
            if episode is None:
                return _NOT_FOUND
            season.episodes.remove(episode)
            return True

        return bool(await self._commit("delete_episode", series_id, mutate))

    # ========================================================================
    # Interne
    # ========================================================================

    def _require_admin(self) -> None:
        if self._auth is not None and self._auth.current_user is None:
            raise UnauthorizedError("Admin login required")

    async def _persist(self, operation: str, series: Series) -> None:
        try:
            await self._backend.save_series(series)
        except Exception as exc:
            logger.error(
                "Échec d'écriture distante",
                operation=operation,
                series_id=series.id,
                error=str(exc),
            )
            raise RemoteWriteError(operation, series.id) from exc

    async def _commit(
        self, operation: str, series_id: str, mutate: Callable[[Series], T]
    ) -> Optional[T]:
        """
        Copie, mute, écrit, puis remplace l'arbre.

        Returns:
            Copie du résultat de `mutate`, ou None si la série (ou la cible
            dans la série) est introuvable
        """
        self._require_admin()
        draft = copy.deepcopy(self._series)
        series = next((s for s in draft if s.id == series_id), None)
        if series is None:
            logger.debug("Mutation ignorée : série inconnue", operation=operation, series_id=series_id)
            return None

        result = mutate(series)
        if result is _NOT_FOUND:
            logger.debug("Mutation ignorée : cible inconnue", operation=operation, series_id=series_id)
            return None

        sort_tree(series)
        await self._persist(operation, series)
        self._series = draft
        logger.info("Catalogue modifié", operation=operation, series_id=series_id)
        return copy.deepcopy(result)
