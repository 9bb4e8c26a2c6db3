"""
Lecteur double piste synchronisé.

Pilote une vidéo principale (avec son audio intégré) et un élément audio
secondaire (doublage dans une autre langue). La vidéo est toujours la
référence : l'audio secondaire suit ses événements (lecture, pause, saut,
vitesse) et une boucle de correction de dérive le recale périodiquement.

Ordre des commutations audio : couper l'ancienne piste, recibler et
positionner la nouvelle, puis la lancer. Les deux pistes ne sont jamais
audibles en même temps.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Union

from loguru import logger

from letzview.core.entities.catalog import Episode, SubtitleTrack
from letzview.core.ports.media import IMediaElement
from letzview.utils.constants import (
    AUDIO_PRIMARY,
    DRIFT_INTERVAL_SECONDS,
    DRIFT_TOLERANCE_SECONDS,
    SUBTITLES_OFF,
)

AudioSelection = Union[str, int]


@dataclass(frozen=True)
class PlayerState:
    """
    Instantané de l'état du lecteur.

    Attributes:
        audio_selection: "primary" ou index dans episode.audios
        subtitle_selection: "off" ou code langue
        primary_position: Position de la vidéo (secondes)
        secondary_position: Position de l'audio secondaire (secondes)
        playing: Vrai si la vidéo est en lecture
    """

    audio_selection: AudioSelection
    subtitle_selection: str
    primary_position: float
    secondary_position: float
    playing: bool


class SyncedPlayer:
    """
    Lecteur d'un épisode avec piste audio alternative optionnelle.

    Le lecteur possède la tâche de correction de dérive : elle n'existe que
    tant qu'une piste secondaire est sélectionnée, et close() l'annule.
    """

    def __init__(
        self,
        episode: Episode,
        video: IMediaElement,
        audio: IMediaElement,
        drift_interval: float = DRIFT_INTERVAL_SECONDS,
        drift_tolerance: float = DRIFT_TOLERANCE_SECONDS,
    ) -> None:
        """
        Args:
            episode: Épisode à lire (vidéo, audios, sous-titres)
            video: Élément principal, source de vérité
            audio: Élément secondaire, toujours piloté par la vidéo
            drift_interval: Période de la boucle de correction (secondes)
            drift_tolerance: Écart toléré avant recalage forcé (secondes)
        """
        self.episode = episode
        self.video = video
        self.audio = audio
        self.drift_interval = drift_interval
        self.drift_tolerance = drift_tolerance

        self._audio_selection: AudioSelection = AUDIO_PRIMARY
        self._subtitle_selection = SUBTITLES_OFF
        self._drift_task: Optional[asyncio.Task] = None
        self._closed = False

        self._handlers = {
            "play": self._on_play,
            "pause": self._on_pause,
            "seeking": self._on_seeking,
            "ratechange": self._on_ratechange,
        }
        for event, handler in self._handlers.items():
            self.video.add_listener(event, handler)

        self.audio.muted = True
        self.video.muted = False
        self.video.src = episode.video_url

    # ========================================================================
    # État
    # ========================================================================

    @property
    def audio_selection(self) -> AudioSelection:
        return self._audio_selection

    @property
    def subtitle_selection(self) -> str:
        return self._subtitle_selection

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def drift_task(self) -> Optional[asyncio.Task]:
        """Tâche de correction en cours, None en mode primaire."""
        return self._drift_task

    @property
    def state(self) -> PlayerState:
        return PlayerState(
            audio_selection=self._audio_selection,
            subtitle_selection=self._subtitle_selection,
            primary_position=self.video.current_time,
            secondary_position=self.audio.current_time,
            playing=not self.video.paused,
        )

    @property
    def active_subtitle(self) -> Optional[SubtitleTrack]:
        if self._subtitle_selection == SUBTITLES_OFF:
            return None
        return next(
            (t for t in self.episode.subtitles if t.lang == self._subtitle_selection),
            None,
        )

    # ========================================================================
    # Commandes
    # ========================================================================

    def play(self) -> None:
        self.video.play()

    def pause(self) -> None:
        self.video.pause()

    def seek(self, seconds: float) -> None:
        self.video.current_time = seconds

    def set_rate(self, rate: float) -> None:
        self.video.playback_rate = rate

    def select_audio(self, target: AudioSelection) -> None:
        """
        Choisit la piste audio : "primary" ou index dans episode.audios.

        Un index invalide (ou un épisode sans pistes alternatives) ne fait
        rien. Un index peut être donné sous forme de chaîne ("0").
        """
        if self._closed:
            return
        if target == AUDIO_PRIMARY:
            self._select_primary()
            return

        index = self._parse_index(target)
        if index is None:
            logger.debug("Piste audio ignorée", target=target, audios=len(self.episode.audios))
            return
        self._select_secondary(index)

    def select_subtitle(self, lang: str) -> None:
        """Active les sous-titres `lang`, ou les désactive avec "off"."""
        if self._closed:
            return
        if lang == SUBTITLES_OFF or any(t.lang == lang for t in self.episode.subtitles):
            self._subtitle_selection = lang
        else:
            logger.debug("Sous-titres inconnus", lang=lang)

    def resync(self) -> bool:
        """
        Aligne l'audio secondaire sur la vidéo.

        Recopie l'état lecture/pause, puis recale la position si l'écart
        dépasse la tolérance (recalage franc, sans rattrapage progressif).

        Returns:
            True si la position a été recalée
        """
        if self._closed or self._audio_selection == AUDIO_PRIMARY:
            return False

        if self.video.paused and not self.audio.paused:
            self.audio.pause()
        elif not self.video.paused and self.audio.paused:
            self.audio.play()

        drift = self.audio.current_time - self.video.current_time
        if abs(drift) > self.drift_tolerance:
            logger.debug("Recalage audio", drift=round(drift, 3))
            self.audio.current_time = self.video.current_time
            return True
        return False

    def close(self) -> None:
        """Arrête la correction, détache les écouteurs et libère les deux éléments."""
        if self._closed:
            return
        self._stop_drift_loop()
        for event, handler in self._handlers.items():
            self.video.remove_listener(event, handler)
        self.audio.release()
        self.video.release()
        self._closed = True
        logger.debug("Lecteur fermé", episode_id=self.episode.id)

    # ========================================================================
    # Commutation audio
    # ========================================================================

    def _parse_index(self, target: AudioSelection) -> Optional[int]:
        if isinstance(target, bool):
            return None
        if isinstance(target, str):
            if not target.isdigit():
                return None
            target = int(target)
        if not isinstance(target, int) or not 0 <= target < len(self.episode.audios):
            return None
        return target

    def _select_primary(self) -> None:
        self.audio.muted = True
        self.audio.pause()
        self.video.muted = False
        self._stop_drift_loop()
        self._audio_selection = AUDIO_PRIMARY
        logger.debug("Audio principal", episode_id=self.episode.id)

    def _select_secondary(self, index: int) -> None:
        track = self.episode.audios[index]

        self.video.muted = True
        self.audio.pause()
        self.audio.src = track.url
        self.audio.muted = False
        self.audio.current_time = self.video.current_time
        self.audio.playback_rate = self.video.playback_rate
        if not self.video.paused:
            self.audio.play()

        self._audio_selection = index
        self._start_drift_loop()
        logger.debug("Audio secondaire", episode_id=self.episode.id, label=track.label)

    # ========================================================================
    # Boucle de dérive
    # ========================================================================

    def _start_drift_loop(self) -> None:
        if self._drift_task is not None and not self._drift_task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Pas de boucle asyncio : correction de dérive inactive")
            return
        self._drift_task = loop.create_task(self._drift_loop())

    def _stop_drift_loop(self) -> None:
        if self._drift_task is not None:
            self._drift_task.cancel()
            self._drift_task = None

    async def _drift_loop(self) -> None:
        while True:
            await asyncio.sleep(self.drift_interval)
            self.resync()

    # ========================================================================
    # Événements de la vidéo
    # ========================================================================

    def _on_play(self) -> None:
        if self._audio_selection == AUDIO_PRIMARY:
            return
        self.audio.current_time = self.video.current_time
        self.audio.play()

    def _on_pause(self) -> None:
        self.audio.pause()

    def _on_seeking(self) -> None:
        if self._audio_selection != AUDIO_PRIMARY:
            self.audio.current_time = self.video.current_time

    def _on_ratechange(self) -> None:
        self.audio.playback_rate = self.video.playback_rate
