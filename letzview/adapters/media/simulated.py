"""
Élément média simulé, piloté par une horloge.

Implémentation sans décodage de IMediaElement : la position avance avec
l'horloge pendant la lecture, multipliée par la vitesse et par un facteur
de dérive optionnel. Sert au lecteur sans interface et aux tests de
synchronisation (une horloge manuelle rend la dérive reproductible).
"""

import time
from collections import defaultdict
from typing import Callable, Optional

from loguru import logger

from letzview.core.ports.media import MEDIA_EVENTS, IMediaElement, MediaListener


class SimulatedMediaElement(IMediaElement):
    """
    Élément média dont le temps est calculé à partir d'une horloge.

    Attributes:
        name: Nom utilisé dans les logs ("video", "audio")
        skew: Facteur de dérive de l'horloge interne (1.0 = aucune dérive)
        released: Vrai après release()
    """

    def __init__(
        self,
        name: str = "media",
        clock: Callable[[], float] = time.monotonic,
        skew: float = 1.0,
        duration: Optional[float] = None,
    ) -> None:
        """
        Args:
            name: Nom de l'élément dans les logs
            clock: Source de temps en secondes (monotone)
            skew: Facteur appliqué à l'avancement (ex: 1.01 = 1 % trop rapide)
            duration: Durée du média ; la position est bornée si renseignée
        """
        self.name = name
        self.skew = skew
        self.released = False
        self._clock = clock
        self._duration = duration
        self._src: Optional[str] = None
        self._position = 0.0
        self._anchor: Optional[float] = None  # None = en pause
        self._muted = False
        self._rate = 1.0
        self._listeners: dict[str, list[MediaListener]] = defaultdict(list)

    # -- propriétés ---------------------------------------------------------

    @property
    def src(self) -> Optional[str]:
        return self._src

    @src.setter
    def src(self, url: Optional[str]) -> None:
        # Changer de source remet l'élément au début, en pause
        self._src = url
        self._position = 0.0
        self._anchor = None

    @property
    def current_time(self) -> float:
        position = self._position
        if self._anchor is not None:
            position += (self._clock() - self._anchor) * self._rate * self.skew
        if self._duration is not None:
            position = min(position, self._duration)
        return position

    @current_time.setter
    def current_time(self, seconds: float) -> None:
        self._position = max(0.0, float(seconds))
        if self._anchor is not None:
            self._anchor = self._clock()
        self._emit("seeking")

    @property
    def paused(self) -> bool:
        return self._anchor is None

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._muted = bool(value)

    @property
    def playback_rate(self) -> float:
        return self._rate

    @playback_rate.setter
    def playback_rate(self, rate: float) -> None:
        if rate == self._rate:
            return
        self._freeze()
        self._rate = float(rate)
        self._emit("ratechange")

    # -- commandes ----------------------------------------------------------

    def play(self) -> None:
        if self._src is None:
            logger.debug("Lecture ignorée : aucune source", element=self.name)
            return
        if self._anchor is None:
            self._anchor = self._clock()
            self._emit("play")

    def pause(self) -> None:
        if self._anchor is not None:
            self._freeze()
            self._anchor = None
            self._emit("pause")

    def add_listener(self, event: str, callback: MediaListener) -> None:
        if event not in MEDIA_EVENTS:
            raise ValueError(f"Événement média inconnu : {event!r}")
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: MediaListener) -> None:
        if callback in self._listeners.get(event, []):
            self._listeners[event].remove(callback)

    def release(self) -> None:
        self._anchor = None
        self._src = None
        self._listeners.clear()
        self.released = True

    # -- interne ------------------------------------------------------------

    def _freeze(self) -> None:
        """Fige la position courante comme nouvelle origine."""
        self._position = self.current_time
        if self._anchor is not None:
            self._anchor = self._clock()

    def _emit(self, event: str) -> None:
        for callback in list(self._listeners.get(event, [])):
            callback()
