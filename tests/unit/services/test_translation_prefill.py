"""
Tests unitaires pour prefill_translations.

Le traducteur est un AsyncMock de ITranslator : aucun appel reseau.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from letzview.core.exceptions import TranslationError
from letzview.core.ports.translator import ITranslator
from letzview.core.value_objects.localized_text import LocalizedMap, PlainText
from letzview.services.translation import prefill_translations


@pytest.fixture
def translator() -> AsyncMock:
    mock = AsyncMock(spec=ITranslator)

    async def fake_translate(text: str, target: str, source: str = "en") -> str:
        return f"{text} [{target}]"

    mock.translate.side_effect = fake_translate
    return mock


class TestPrefillTranslations:
    """Tests pour prefill_translations."""

    @pytest.mark.asyncio
    async def test_fills_missing_languages(self, translator: AsyncMock) -> None:
        value = LocalizedMap({"en": "Pilot", "fr": "Pilote"})

        result = await prefill_translations(value, translator, "en", ["en", "fr", "de", "lb"])

        assert result.values == {
            "en": "Pilot",
            "fr": "Pilote",
            "de": "Pilot [de]",
            "lb": "Pilot [lb]",
        }
        assert translator.translate.await_count == 2

    @pytest.mark.asyncio
    async def test_plain_text_becomes_source_language(self, translator: AsyncMock) -> None:
        result = await prefill_translations(PlainText("Pilot"), translator, "en", ["fr"])
        assert result == LocalizedMap({"en": "Pilot", "fr": "Pilot [fr]"})

    @pytest.mark.asyncio
    async def test_failure_does_not_block(self, translator: AsyncMock) -> None:
        """Une langue en echec est ignoree, les autres sont remplies."""

        async def flaky(text: str, target: str, source: str = "en") -> str:
            if target == "de":
                raise TranslationError("Missing translate API key", status_code=500)
            if target == "lb":
                raise httpx.ConnectError("unreachable")
            return f"{text} [{target}]"

        translator.translate.side_effect = flaky
        value = LocalizedMap({"en": "Pilot"})

        result = await prefill_translations(value, translator, "en", ["fr", "de", "lb"])

        assert result.values == {"en": "Pilot", "fr": "Pilot [fr]"}

    @pytest.mark.asyncio
    async def test_empty_source_returns_value_unchanged(self, translator: AsyncMock) -> None:
        value = LocalizedMap({"fr": "Pilote"})
        assert await prefill_translations(value, translator, "en", ["de"]) is value
        translator.translate.assert_not_awaited()
