"""
Tests des commandes CLI d'administration (CliRunner).

Les commandes tournent contre un vrai Container : base SQLite et logs dans
un repertoire temporaire via les variables LETZVIEW_*.
"""

import json
import re

import httpx
import pytest
import respx
import typer
from typer.testing import CliRunner

from letzview.adapters.cli.helpers import parse_audio_tracks, parse_subtitle_tracks
from letzview.core.entities.catalog import AudioTrack, SubtitleTrack
from letzview.main import app

runner = CliRunner()

_ID = r"([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})"
TRANSLATE_PROXY = "http://translate.test"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Base, blob KV et logs dans tmp_path."""
    monkeypatch.setenv("LETZVIEW_DATABASE_URL", f"sqlite:///{tmp_path / 'letzview.db'}")
    monkeypatch.setenv("LETZVIEW_STORAGE_BACKEND", "embedded")
    monkeypatch.setenv("LETZVIEW_KV_DIR", str(tmp_path / "kv"))
    monkeypatch.setenv("LETZVIEW_LOG_FILE", str(tmp_path / "logs" / "letzview.log"))
    monkeypatch.setenv("LETZVIEW_ADMIN_PASSWORD", "secret")
    monkeypatch.setenv("LETZVIEW_TRANSLATE_PROXY_URL", TRANSLATE_PROXY)


def _invoke(*args: str, input: str | None = None):
    return runner.invoke(app, list(args), input=input)


def _create_series(title: str = "Demo") -> str:
    result = _invoke("series", "add", title, "-p", "secret")
    assert result.exit_code == 0, result.output
    return re.search(_ID, result.output).group(1)


def _add_season(series_id: str) -> str:
    result = _invoke("season", "add", series_id, "-p", "secret")
    assert result.exit_code == 0, result.output
    return re.search(_ID, result.output).group(1)


class TestSeriesCommands:
    """Tests pour letzview series."""

    def test_add_and_list(self) -> None:
        series_id = _create_series("Demo")

        result = _invoke("catalog")

        assert result.exit_code == 0
        assert "Demo" in result.output
        assert series_id in result.output

    def test_wrong_password(self) -> None:
        result = _invoke("series", "add", "Demo", "-p", "wrong")
        assert result.exit_code == 1
        assert "Erreur" in result.output
        assert "Aucune série" in _invoke("catalog").output

    def test_blank_title(self) -> None:
        result = _invoke("series", "add", "  ", "-p", "secret")
        assert result.exit_code == 1
        assert "title" in result.output

    def test_edit(self) -> None:
        series_id = _create_series("Demo")
        result = _invoke("series", "edit", series_id, "--title", "Demo 2", "-p", "secret")
        assert result.exit_code == 0
        assert "Demo 2" in _invoke("catalog").output

    def test_edit_unknown(self) -> None:
        result = _invoke("series", "edit", "missing", "--title", "X", "-p", "secret")
        assert result.exit_code == 1
        assert "introuvable" in result.output

    def test_delete_with_yes(self) -> None:
        series_id = _create_series("Demo")
        result = _invoke("series", "delete", series_id, "--yes", "-p", "secret")
        assert result.exit_code == 0
        assert series_id not in _invoke("catalog").output

    def test_delete_cancelled(self) -> None:
        series_id = _create_series("Demo")
        result = _invoke("series", "delete", series_id, "-p", "secret", input="n\n")
        assert "Annulé" in result.output
        assert series_id in _invoke("catalog").output


class TestSeasonAndEpisodeCommands:
    """Tests pour letzview season / episode."""

    def test_demo_pilot_scenario(self) -> None:
        series_id = _create_series("Demo")
        season_id = _add_season(series_id)

        second = _invoke("season", "add", series_id, "-p", "secret")
        assert "Saison 2" in second.output

        result = _invoke(
            "episode", "add", series_id, season_id, "Pilot",
            "--video", "https://x/p.mp4",
            "--audio", "Lëtzebuergesch=https://x/lb.mp3",
            "--subtitle", "fr=https://x/fr.vtt",
            "-p", "secret",
        )
        assert result.exit_code == 0, result.output
        assert "Épisode 1 ajouté" in result.output

        listing = _invoke("catalog").output
        assert "Saison 1" in listing and "Saison 2" in listing
        assert "E01 Pilot" in listing
        assert "Lëtzebuergesch" in listing

    def test_episode_without_video(self) -> None:
        series_id = _create_series("Demo")
        season_id = _add_season(series_id)
        result = _invoke("episode", "add", series_id, season_id, "Pilot", "-p", "secret")
        assert result.exit_code == 1
        assert "video_url" in result.output

    def test_duplicate_season_number(self) -> None:
        series_id = _create_series("Demo")
        _invoke("season", "add", series_id, "-n", "1", "-p", "secret")
        result = _invoke("season", "add", series_id, "-n", "1", "-p", "secret")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_edit_and_delete_episode(self) -> None:
        series_id = _create_series("Demo")
        season_id = _add_season(series_id)
        added = _invoke(
            "episode", "add", series_id, season_id, "Pilot", "--video", "https://x/p.mp4",
            "-p", "secret",
        )
        episode_id = re.search(_ID, added.output).group(1)

        edited = _invoke(
            "episode", "edit", series_id, season_id, episode_id, "--title", "Opening",
            "-p", "secret",
        )
        assert edited.exit_code == 0
        assert "Opening" in _invoke("catalog").output

        deleted = _invoke(
            "episode", "delete", series_id, season_id, episode_id, "-y", "-p", "secret"
        )
        assert deleted.exit_code == 0
        assert "Opening" not in _invoke("catalog").output

    def test_delete_season(self) -> None:
        series_id = _create_series("Demo")
        season_id = _add_season(series_id)
        result = _invoke("season", "delete", series_id, season_id, "-y", "-p", "secret")
        assert result.exit_code == 0
        assert "Saison 1" not in _invoke("catalog").output


class TestTranslatedInput:
    """Option --translate : pre-remplissage via le proxy de traduction."""

    def test_translate_fills_other_languages(self) -> None:
        with respx.mock:
            def translated(request: httpx.Request) -> httpx.Response:
                if json.loads(request.content)["target"] == "fr":
                    return httpx.Response(200, json={"text": "La Vallée"})
                return httpx.Response(500, json={"error": "Missing translate API key"})

            respx.post(f"{TRANSLATE_PROXY}/api/translate").mock(side_effect=translated)
            result = _invoke(
                "series", "add", "The Valley", "--lang", "en", "--translate", "-p", "secret"
            )

        assert result.exit_code == 0, result.output
        assert "La Vallée" in _invoke("catalog", "--lang", "fr").output
        assert "The Valley" in _invoke("catalog", "--lang", "de").output


class TestTrackParsing:
    """Tests pour parse_audio_tracks / parse_subtitle_tracks."""

    def test_parse_audio(self) -> None:
        assert parse_audio_tracks(["LB=https://x/lb.mp3"]) == [
            AudioTrack("LB", "https://x/lb.mp3")
        ]
        assert parse_audio_tracks(None) is None

    def test_url_may_contain_equals(self) -> None:
        [track] = parse_subtitle_tracks(["fr=https://x/st?lang=fr"])
        assert track == SubtitleTrack("fr", "https://x/st?lang=fr")

    def test_malformed_value(self) -> None:
        with pytest.raises(typer.BadParameter):
            parse_audio_tracks(["no-separator"])


class TestInfoCommands:
    """Tests pour info / version."""

    def test_version(self) -> None:
        result = _invoke("version")
        assert result.exit_code == 0
        assert "LetzView v0.1.0" in result.output

    def test_info(self) -> None:
        result = _invoke("info")
        assert result.exit_code == 0
        assert "Stockage : embedded" in result.output
        assert "tolérance 0.3s" in result.output
