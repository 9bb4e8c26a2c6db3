"""
Entités du catalogue.

Arbre Series -> Season -> Episode tel qu'affiché aux spectateurs et modifié
par l'administration. Les saisons et épisodes sont embarqués dans leur série :
une série est l'unité de lecture et d'écriture du catalogue.
"""

from dataclasses import dataclass, field

from letzview.core.value_objects.localized_text import LocalizedText, PlainText


@dataclass
class AudioTrack:
    """
    Piste audio complète alternative (doublage).

    Attributes:
        label: Libellé affiché dans le sélecteur (ex: "Lëtzebuergesch")
        url: URL du fichier audio
    """

    label: str = ""
    url: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.label.strip() and self.url.strip())


@dataclass
class SubtitleTrack:
    """
    Piste de sous-titres.

    Attributes:
        lang: Code langue (sert aussi de valeur de sélection)
        url: URL du fichier WebVTT
    """

    lang: str = ""
    url: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.lang.strip() and self.url.strip())


@dataclass
class Episode:
    """
    Épisode jouable d'une saison.

    Attributes:
        id: Identifiant stable (seule référence utilisée par l'interface)
        number: Numéro dans la saison (>= 1, unique dans la saison)
        title: Titre localisé
        description: Résumé localisé
        video_url: URL de la vidéo principale (obligatoire)
        audios: Pistes audio alternatives
        subtitles: Pistes de sous-titres
    """

    id: str
    number: int
    title: LocalizedText = field(default_factory=PlainText)
    description: LocalizedText = field(default_factory=PlainText)
    video_url: str = ""
    audios: list[AudioTrack] = field(default_factory=list)
    subtitles: list[SubtitleTrack] = field(default_factory=list)


@dataclass
class Season:
    """
    Saison numérotée d'une série.

    Attributes:
        id: Identifiant stable
        number: Numéro dans la série (>= 1, unique dans la série)
        episodes: Épisodes, présentés par numéro croissant
    """

    id: str
    number: int
    episodes: list[Episode] = field(default_factory=list)

    def find_episode(self, episode_id: str) -> Episode | None:
        return next((ep for ep in self.episodes if ep.id == episode_id), None)


@dataclass
class Series:
    """
    Série du catalogue.

    Attributes:
        id: Identifiant immuable, attribué à la création
        title: Titre localisé
        description: Description localisée
        poster_url: Affiche (format portrait)
        backdrop_url: Image de fond (format paysage)
        seasons: Saisons, présentées par numéro croissant
    """

    id: str
    title: LocalizedText = field(default_factory=PlainText)
    description: LocalizedText = field(default_factory=PlainText)
    poster_url: str = ""
    backdrop_url: str = ""
    seasons: list[Season] = field(default_factory=list)

    def find_season(self, season_id: str) -> Season | None:
        return next((s for s in self.seasons if s.id == season_id), None)

    def find_episode(self, episode_id: str) -> tuple[Season, Episode] | None:
        """Cherche un épisode dans toutes les saisons."""
        for season in self.seasons:
            episode = season.find_episode(episode_id)
            if episode is not None:
                return season, episode
        return None


def next_season_number(series: Series) -> int:
    """Numéro proposé pour l'ajout rapide d'une saison : max + 1."""
    return max((s.number for s in series.seasons), default=0) + 1


def next_episode_number(season: Season) -> int:
    """Numéro proposé pour un nouvel épisode : max + 1."""
    return max((ep.number for ep in season.episodes), default=0) + 1


def drop_incomplete_tracks(episode: Episode) -> Episode:
    """Retire les pistes audio et sous-titres incomplètes (en place)."""
    episode.audios = [track for track in episode.audios if track.is_complete]
    episode.subtitles = [track for track in episode.subtitles if track.is_complete]
    return episode


def sort_tree(series: Series) -> Series:
    """Trie saisons et épisodes par numéro croissant (en place)."""
    series.seasons.sort(key=lambda s: s.number)
    for season in series.seasons:
        season.episodes.sort(key=lambda ep: ep.number)
    return series
