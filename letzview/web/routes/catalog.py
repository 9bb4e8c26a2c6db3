"""
Catalogue côté spectateur (lecture seule, JSON).

Les textes localisés sont résolus dans la langue demandée avec repli sur
la langue par défaut. La recherche filtre sur le titre et la description.
"""

from typing import Any, Optional, Sequence

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...config import Settings
from ...container import Container
from ...core.entities.catalog import Episode, Series
from ...core.value_objects.localized_text import resolve
from ..deps import get_container, get_settings

router = APIRouter(prefix="/catalog")


def _episode_view(episode: Episode, lang: str, fallback: Sequence[str]) -> dict[str, Any]:
    return {
        "id": episode.id,
        "number": episode.number,
        "title": resolve(episode.title, lang, fallback),
        "description": resolve(episode.description, lang, fallback),
        "videoUrl": episode.video_url,
        "audios": [{"label": t.label, "url": t.url} for t in episode.audios],
        "subtitles": [{"lang": t.lang, "url": t.url} for t in episode.subtitles],
    }


def series_summary(series: Series, lang: str, fallback: Sequence[str]) -> dict[str, Any]:
    """Vue carte d'une série (grille du catalogue)."""
    return {
        "id": series.id,
        "title": resolve(series.title, lang, fallback),
        "description": resolve(series.description, lang, fallback),
        "posterUrl": series.poster_url,
        "backdropUrl": series.backdrop_url,
        "seasonCount": len(series.seasons),
    }


def series_detail(series: Series, lang: str, fallback: Sequence[str]) -> dict[str, Any]:
    """Vue complète d'une série avec saisons et épisodes."""
    view = series_summary(series, lang, fallback)
    view["seasons"] = [
        {
            "id": season.id,
            "number": season.number,
            "episodes": [_episode_view(ep, lang, fallback) for ep in season.episodes],
        }
        for season in series.seasons
    ]
    return view


@router.get("")
async def list_series(
    lang: Optional[str] = None,
    q: str = "",
    container: Container = Depends(get_container),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Liste les séries, filtrées par `q` si fourni."""
    lang = lang or settings.default_language
    store = container.catalog_store()
    await store.fetch_catalog()
    results = store.search(q, lang)
    return JSONResponse(
        {
            "lang": lang,
            "series": [series_summary(s, lang, settings.fallback_languages) for s in results],
        }
    )


@router.get("/series/{series_id}")
async def get_series(
    series_id: str,
    lang: Optional[str] = None,
    container: Container = Depends(get_container),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    lang = lang or settings.default_language
    store = container.catalog_store()
    await store.fetch_catalog()
    series = store.get_series(series_id)
    if series is None:
        return JSONResponse({"error": "Not found"}, status_code=404)
    return JSONResponse(series_detail(series, lang, settings.fallback_languages))
