"""
Conversion entre entités du catalogue et documents JSON.

Le format JSON (camelCase) est partagé par le magasin de documents et le
blob du proxy KV :

    {id, title, description, posterUrl, backdropUrl,
     seasons: [{id, number, episodes: [{id, number, title, description,
                videoUrl, audios: [{label, url}], subtitles: [{lang, url}]}]}]}

La lecture complète les champs absents (chaînes vides, listes vides),
accepte l'ancien champ `coverUrl` pour l'affiche, et trie saisons et
épisodes par numéro. L'écriture retire les pistes incomplètes.
"""

from typing import Any, Optional

from letzview.core.entities.catalog import (
    AudioTrack,
    Episode,
    Season,
    Series,
    SubtitleTrack,
    sort_tree,
)
from letzview.core.value_objects.localized_text import localized_from_raw, localized_to_raw


def _as_int(value: Any, fallback: Any = None) -> int:
    """Numéro stocké, avec repli sur l'id du document s'il est numérique."""
    for candidate in (value, fallback):
        if isinstance(candidate, bool):
            continue
        if isinstance(candidate, int):
            return candidate
        if isinstance(candidate, float) and candidate.is_integer():
            return int(candidate)
        if isinstance(candidate, str) and candidate.strip().isdigit():
            return int(candidate)
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _tracks_to_raw(tracks: list, keys: tuple[str, str]) -> list[dict[str, str]]:
    return [
        {keys[0]: getattr(track, keys[0]), keys[1]: track.url}
        for track in tracks
        if track.is_complete
    ]


# ============================================================================
# Entités -> documents
# ============================================================================


def episode_to_document(episode: Episode) -> dict[str, Any]:
    return {
        "id": episode.id,
        "number": episode.number,
        "title": localized_to_raw(episode.title),
        "description": localized_to_raw(episode.description),
        "videoUrl": episode.video_url,
        "audios": _tracks_to_raw(episode.audios, ("label", "url")),
        "subtitles": _tracks_to_raw(episode.subtitles, ("lang", "url")),
    }


def season_to_document(season: Season, include_episodes: bool = True) -> dict[str, Any]:
    document: dict[str, Any] = {"id": season.id, "number": season.number}
    if include_episodes:
        episodes = sorted(season.episodes, key=lambda ep: ep.number)
        document["episodes"] = [episode_to_document(ep) for ep in episodes]
    return document


def series_to_document(series: Series, include_seasons: bool = True) -> dict[str, Any]:
    """
    Convertit une série en document.

    Args:
        series: Série à convertir
        include_seasons: False pour le document racine de la forme
            sous-documents (saisons stockées à part)
    """
    document: dict[str, Any] = {
        "id": series.id,
        "title": localized_to_raw(series.title),
        "description": localized_to_raw(series.description),
        "posterUrl": series.poster_url,
        "backdropUrl": series.backdrop_url,
    }
    if include_seasons:
        seasons = sorted(series.seasons, key=lambda s: s.number)
        document["seasons"] = [season_to_document(s) for s in seasons]
    return document


# ============================================================================
# Documents -> entités
# ============================================================================


def episode_from_document(data: dict[str, Any], doc_id: Optional[str] = None) -> Episode:
    audios = [
        AudioTrack(label=_as_str(raw.get("label")), url=_as_str(raw.get("url")))
        for raw in data.get("audios") or []
        if isinstance(raw, dict)
    ]
    subtitles = [
        SubtitleTrack(lang=_as_str(raw.get("lang")), url=_as_str(raw.get("url")))
        for raw in data.get("subtitles") or []
        if isinstance(raw, dict)
    ]
    return Episode(
        id=_as_str(data.get("id")) or str(doc_id or ""),
        number=_as_int(data.get("number"), doc_id),
        title=localized_from_raw(data.get("title") or ""),
        description=localized_from_raw(data.get("description") or ""),
        video_url=_as_str(data.get("videoUrl")),
        audios=audios,
        subtitles=subtitles,
    )


def season_from_document(
    data: dict[str, Any],
    doc_id: Optional[str] = None,
    episodes: Optional[list[Episode]] = None,
) -> Season:
    """
    Convertit un document saison.

    Args:
        data: Contenu du document
        doc_id: Id du document (sert de numéro de repli)
        episodes: Épisodes lus à part (forme sous-documents) ; sinon lus
            dans `data["episodes"]`
    """
    number = _as_int(data.get("number"), doc_id)
    if episodes is None:
        episodes = [
            episode_from_document(raw)
            for raw in data.get("episodes") or []
            if isinstance(raw, dict)
        ]
    return Season(
        id=_as_str(data.get("id")) or f"season-{number}",
        number=number,
        episodes=sorted(episodes, key=lambda ep: ep.number),
    )


def series_from_document(
    data: dict[str, Any],
    doc_id: Optional[str] = None,
    seasons: Optional[list[Season]] = None,
) -> Series:
    """
    Convertit un document série, valeurs par défaut comprises.

    Args:
        data: Contenu du document
        doc_id: Id du document, prioritaire sur `data["id"]`
        seasons: Saisons lues à part (forme sous-documents)
    """
    if seasons is None:
        seasons = [
            season_from_document(raw)
            for raw in data.get("seasons") or []
            if isinstance(raw, dict)
        ]
    series = Series(
        id=str(doc_id) if doc_id else _as_str(data.get("id")),
        title=localized_from_raw(data.get("title") or ""),
        description=localized_from_raw(data.get("description") or ""),
        poster_url=_as_str(data.get("posterUrl")) or _as_str(data.get("coverUrl")),
        backdrop_url=_as_str(data.get("backdropUrl")),
        seasons=seasons,
    )
    return sort_tree(series)
