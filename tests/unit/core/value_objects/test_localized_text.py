"""
Tests unitaires pour les textes localises.

Tests couvrant:
- resolve : langue demandee, repli, premiere entree non vide, ""
- conversion depuis/vers la forme stockee (str ou dict)
- is_blank / languages_of
"""

import pytest

from letzview.core.value_objects import (
    LocalizedMap,
    PlainText,
    is_blank,
    languages_of,
    localized_from_raw,
    localized_to_raw,
    resolve,
)


class TestResolve:
    """Tests pour resolve()."""

    def test_plain_text_ignores_language(self) -> None:
        """Un texte brut est identique dans toutes les langues."""
        assert resolve(PlainText("Demo"), "fr") == "Demo"
        assert resolve(PlainText("Demo"), "lb") == "Demo"

    def test_requested_language_wins(self) -> None:
        value = LocalizedMap({"en": "Pilot", "fr": "Pilote"})
        assert resolve(value, "fr") == "Pilote"

    def test_falls_back_to_english(self) -> None:
        """Langue absente -> anglais."""
        value = LocalizedMap({"fr": "Pilote", "en": "Pilot"})
        assert resolve(value, "de") == "Pilot"

    def test_falls_back_to_first_non_empty_entry(self) -> None:
        value = LocalizedMap({"de": "", "lb": "Pilotfolleg", "fr": "Pilote"})
        assert resolve(value, "it") == "Pilotfolleg"

    def test_empty_entry_counts_as_missing(self) -> None:
        value = LocalizedMap({"fr": "", "en": "Pilot"})
        assert resolve(value, "fr") == "Pilot"

    def test_custom_fallback_chain(self) -> None:
        value = LocalizedMap({"en": "Pilot", "de": "Pilotfolge"})
        assert resolve(value, "lb", fallback_chain=("de", "en")) == "Pilotfolge"

    @pytest.mark.parametrize("value", [None, LocalizedMap({}), LocalizedMap({"en": ""})])
    def test_nothing_to_resolve_gives_empty_string(self, value) -> None:
        assert resolve(value, "en") == ""


class TestStoredForm:
    """Tests pour localized_from_raw / localized_to_raw."""

    def test_string_becomes_plain_text(self) -> None:
        assert localized_from_raw("Demo") == PlainText("Demo")

    def test_dict_becomes_localized_map(self) -> None:
        value = localized_from_raw({"en": "Demo", "fr": "Démo"})
        assert isinstance(value, LocalizedMap)
        assert resolve(value, "fr") == "Démo"

    def test_non_text_entries_are_dropped(self) -> None:
        value = localized_from_raw({"en": "Demo", "fr": None, "de": 3})
        assert localized_to_raw(value) == {"en": "Demo"}

    def test_none_becomes_empty_plain_text(self) -> None:
        assert localized_from_raw(None) == PlainText("")

    def test_to_raw_keeps_shape(self) -> None:
        assert localized_to_raw(PlainText("Demo")) == "Demo"
        assert localized_to_raw(LocalizedMap({"en": "Demo"})) == {"en": "Demo"}


class TestHelpers:
    """Tests pour is_blank, languages_of et with_translation."""

    def test_is_blank(self) -> None:
        assert is_blank(PlainText("  "))
        assert is_blank(LocalizedMap({"en": "", "fr": " "}))
        assert not is_blank(LocalizedMap({"fr": "Pilote"}))

    def test_languages_of_lists_filled_languages(self) -> None:
        value = LocalizedMap({"en": "Pilot", "fr": "", "lb": "Pilotfolleg"})
        assert languages_of(value) == ("en", "lb")
        assert languages_of(PlainText("Pilot")) == ()

    def test_with_translation_returns_copy(self) -> None:
        original = LocalizedMap({"en": "Pilot"})
        updated = original.with_translation("fr", "Pilote")
        assert resolve(updated, "fr") == "Pilote"
        assert "fr" not in original.values
