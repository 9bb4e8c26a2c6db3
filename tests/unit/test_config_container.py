"""
Tests de la configuration (pydantic-settings) et du Container DI.
"""

from pathlib import Path

import pytest
from dependency_injector import providers
from pydantic import ValidationError

from letzview.adapters.storage.embedded import EmbeddedCatalogBackend
from letzview.adapters.storage.kv import KVCatalogBackend
from letzview.adapters.storage.subdocuments import SubDocumentCatalogBackend
from letzview.config import Settings
from letzview.container import Container


class TestSettings:
    """Tests pour Settings."""

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("LETZVIEW_STORAGE_BACKEND", raising=False)
        settings = Settings(_env_file=None)

        assert settings.storage_backend == "embedded"
        assert settings.default_language == "en"
        assert settings.drift_interval_seconds == 0.5
        assert settings.drift_tolerance_seconds == 0.3
        assert settings.fallback_languages == ("en",)
        assert settings.translate_enabled is False

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("LETZVIEW_STORAGE_BACKEND", "kv")
        monkeypatch.setenv("LETZVIEW_GOOGLE_TRANSLATE_API_KEY", "key")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "kv"
        assert settings.translate_enabled is True

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, storage_backend="firestore")

    def test_tolerance_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, drift_tolerance_seconds=0)

    def test_paths_expanded(self) -> None:
        settings = Settings(_env_file=None, log_file="~/letzview.log")
        assert settings.log_file == Path.home() / "letzview.log"


class TestContainer:
    """Tests pour le choix du backend du catalogue."""

    @pytest.mark.parametrize(
        "backend, expected",
        [
            ("embedded", EmbeddedCatalogBackend),
            ("subdocuments", SubDocumentCatalogBackend),
            ("kv", KVCatalogBackend),
        ],
    )
    def test_backend_selection(self, test_settings, backend, expected) -> None:
        container = Container()
        container.config.override(
            providers.Object(test_settings.model_copy(update={"storage_backend": backend}))
        )

        assert isinstance(container.catalog_backend(), expected)
        container.shutdown_resources()

    def test_catalog_store_is_shared(self, test_settings) -> None:
        container = Container()
        container.config.override(providers.Object(test_settings))

        assert container.catalog_store() is container.catalog_store()
        assert container.catalog_store().fallback_languages == ("en",)
        container.shutdown_resources()
