"""
Tests unitaires pour SubDocumentCatalogBackend.

Disposition : series/{id}, series/{id}/seasons/{n}, .../episodes/{m}.
Tests couvrant l'ecriture des sous-documents, le retrait des orphelins,
la suppression en cascade et le tri par titre.
"""

import copy

import pytest

from letzview.adapters.storage import InMemoryDocumentStore, SubDocumentCatalogBackend
from letzview.core.entities.catalog import Episode, Season, Series
from letzview.core.value_objects.localized_text import LocalizedMap, PlainText


@pytest.fixture
def backend(memory_store: InMemoryDocumentStore) -> SubDocumentCatalogBackend:
    return SubDocumentCatalogBackend(memory_store)


class TestSave:
    """Tests pour save_series."""

    @pytest.mark.asyncio
    async def test_writes_one_document_per_node(
        self,
        backend: SubDocumentCatalogBackend,
        memory_store: InMemoryDocumentStore,
        sample_series: Series,
    ) -> None:
        await backend.save_series(sample_series)

        assert memory_store.paths == [
            "series/series-1",
            "series/series-1/seasons/1",
            "series/series-1/seasons/1/episodes/1",
            "series/series-1/seasons/2",
        ]
        root = (await memory_store.get_one("series/series-1")).data
        assert "seasons" not in root

    @pytest.mark.asyncio
    async def test_removed_episode_is_deleted(
        self,
        backend: SubDocumentCatalogBackend,
        memory_store: InMemoryDocumentStore,
        sample_series: Series,
    ) -> None:
        await backend.save_series(sample_series)
        updated = copy.deepcopy(sample_series)
        updated.find_season("season-1").episodes.clear()

        await backend.save_series(updated)

        assert "series/series-1/seasons/1/episodes/1" not in memory_store.paths

    @pytest.mark.asyncio
    async def test_removed_season_is_deleted_with_episodes(
        self,
        backend: SubDocumentCatalogBackend,
        memory_store: InMemoryDocumentStore,
        sample_series: Series,
    ) -> None:
        await backend.save_series(sample_series)
        updated = copy.deepcopy(sample_series)
        updated.seasons = [s for s in updated.seasons if s.number == 2]

        await backend.save_series(updated)

        assert memory_store.paths == ["series/series-1", "series/series-1/seasons/2"]


class TestLoad:
    """Tests pour load_catalog."""

    @pytest.mark.asyncio
    async def test_round_trip(
        self, backend: SubDocumentCatalogBackend, sample_series: Series
    ) -> None:
        await backend.save_series(sample_series)

        [loaded] = await backend.load_catalog()

        assert loaded.id == "series-1"
        assert [s.number for s in loaded.seasons] == [1, 2]
        assert loaded.seasons[0].id == "season-1"
        episode = loaded.seasons[0].episodes[0]
        assert episode.id == "ep-1"
        assert [t.label for t in episode.audios] == ["Lëtzebuergesch", "Français"]

    @pytest.mark.asyncio
    async def test_episodes_ordered_numerically(
        self, backend: SubDocumentCatalogBackend
    ) -> None:
        season = Season(
            id="s1",
            number=1,
            episodes=[Episode(id=f"e{n}", number=n, video_url="v") for n in (10, 2, 1)],
        )
        await backend.save_series(Series(id="a", title=PlainText("A"), seasons=[season]))

        [loaded] = await backend.load_catalog()
        assert [e.number for e in loaded.seasons[0].episodes] == [1, 2, 10]

    @pytest.mark.asyncio
    async def test_series_sorted_by_title(
        self, backend: SubDocumentCatalogBackend
    ) -> None:
        await backend.save_series(Series(id="1", title=PlainText("Zorro")))
        await backend.save_series(Series(id="2", title=LocalizedMap({"en": "Éclipse"})))
        await backend.save_series(Series(id="3", title=PlainText("alpha")))

        catalog = await backend.load_catalog()
        assert [s.id for s in catalog] == ["3", "2", "1"]

    @pytest.mark.asyncio
    async def test_legacy_season_without_id(
        self, backend: SubDocumentCatalogBackend, memory_store: InMemoryDocumentStore
    ) -> None:
        await memory_store.set("series/a", {"title": "Old"})
        await memory_store.set("series/a/seasons/1", {"number": 1})

        [loaded] = await backend.load_catalog()
        assert loaded.seasons[0].id == "season-1"


class TestDelete:
    """Tests pour delete_series (cascade explicite)."""

    @pytest.mark.asyncio
    async def test_cascade_removes_all_children(
        self,
        backend: SubDocumentCatalogBackend,
        memory_store: InMemoryDocumentStore,
        sample_series: Series,
    ) -> None:
        await backend.save_series(sample_series)
        await backend.save_series(Series(id="other", title=PlainText("Other")))

        await backend.delete_series("series-1")

        assert memory_store.paths == ["series/other"]
