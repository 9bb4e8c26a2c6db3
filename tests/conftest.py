"""
Fixtures pytest partagees pour les tests LetzView.

Ce module contient les fixtures communes utilisees dans les tests:
- Horloge manuelle pour les elements media simules
- Magasin de documents en memoire et backends de catalogue
- CatalogStore pret a l'emploi (avec ou sans auth)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from letzview.adapters.auth import PasswordAuthProvider
from letzview.adapters.storage import EmbeddedCatalogBackend, InMemoryDocumentStore
from letzview.config import Settings
from letzview.core.entities.catalog import AudioTrack, Episode, Season, Series, SubtitleTrack
from letzview.core.ports.auth import Credentials
from letzview.core.ports.catalog import ICatalogBackend
from letzview.core.value_objects.localized_text import LocalizedMap, PlainText
from letzview.services.catalog import CatalogStore


class ManualClock:
    """Horloge monotone avancee a la main."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Ids deterministes : S1, S2, ..."""
    counter = {"n": 0}

    def factory() -> str:
        counter["n"] += 1
        return f"S{counter['n']}"

    return factory


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def embedded_backend(memory_store: InMemoryDocumentStore) -> EmbeddedCatalogBackend:
    return EmbeddedCatalogBackend(memory_store)


@pytest.fixture
def store(embedded_backend: EmbeddedCatalogBackend, id_factory) -> CatalogStore:
    """CatalogStore sans auth sur un magasin en memoire."""
    return CatalogStore(embedded_backend, id_factory=id_factory)


@pytest.fixture
def auth_provider() -> PasswordAuthProvider:
    return PasswordAuthProvider(admin_password="secret")


@pytest.fixture
def logged_in_auth(auth_provider: PasswordAuthProvider) -> PasswordAuthProvider:
    auth_provider.login(Credentials(username="admin", password="secret"))
    return auth_provider


@pytest.fixture
def failing_backend() -> AsyncMock:
    """Backend dont les ecritures echouent (lecture vide)."""
    backend = AsyncMock(spec=ICatalogBackend)
    backend.load_catalog.return_value = []
    backend.save_series.side_effect = ConnectionError("network down")
    backend.delete_series.side_effect = ConnectionError("network down")
    return backend


@pytest.fixture
def sample_episode() -> Episode:
    return Episode(
        id="ep-1",
        number=1,
        title=LocalizedMap({"en": "Pilot", "fr": "Pilote"}),
        description=PlainText("First episode"),
        video_url="https://cdn.example/pilot.mp4",
        audios=[
            AudioTrack(label="Lëtzebuergesch", url="https://cdn.example/pilot.lb.mp3"),
            AudioTrack(label="Français", url="https://cdn.example/pilot.fr.mp3"),
        ],
        subtitles=[
            SubtitleTrack(lang="fr", url="https://cdn.example/pilot.fr.vtt"),
            SubtitleTrack(lang="de", url="https://cdn.example/pilot.de.vtt"),
        ],
    )


@pytest.fixture
def sample_series(sample_episode: Episode) -> Series:
    return Series(
        id="series-1",
        title=LocalizedMap({"en": "The Valley", "fr": "La Vallée"}),
        description=LocalizedMap({"en": "A quiet village", "fr": "Un village tranquille"}),
        poster_url="https://cdn.example/poster.jpg",
        backdrop_url="https://cdn.example/backdrop.jpg",
        seasons=[
            Season(id="season-2", number=2),
            Season(id="season-1", number=1, episodes=[sample_episode]),
        ],
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isoles dans un repertoire temporaire."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'letzview.db'}",
        kv_dir=tmp_path / "kv",
        log_file=tmp_path / "logs" / "letzview.log",
        admin_password="secret",
        google_translate_api_key=None,
    )
