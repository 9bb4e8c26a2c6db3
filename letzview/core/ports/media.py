"""
Interface port pour les éléments média (vidéo principale, audio secondaire).

Modélise le sous-ensemble d'un élément média HTML utilisé par le lecteur :
source, position, pause, sourdine, vitesse, et événements.
"""

from abc import ABC, abstractmethod
from typing import Callable

# Événements émis par un élément média
MEDIA_EVENTS = ("play", "pause", "seeking", "ratechange")

MediaListener = Callable[[], None]


class IMediaElement(ABC):
    """
    Élément média pilotable.

    Les setters de `current_time` et `playback_rate` émettent respectivement
    "seeking" et "ratechange" ; `play()` et `pause()` émettent "play" et
    "pause" quand l'état change.
    """

    @property
    @abstractmethod
    def src(self) -> str | None:
        ...

    @src.setter
    @abstractmethod
    def src(self, url: str | None) -> None:
        ...

    @property
    @abstractmethod
    def current_time(self) -> float:
        """Position de lecture en secondes."""
        ...

    @current_time.setter
    @abstractmethod
    def current_time(self, seconds: float) -> None:
        ...

    @property
    @abstractmethod
    def paused(self) -> bool:
        ...

    @property
    @abstractmethod
    def muted(self) -> bool:
        ...

    @muted.setter
    @abstractmethod
    def muted(self, value: bool) -> None:
        ...

    @property
    @abstractmethod
    def playback_rate(self) -> float:
        ...

    @playback_rate.setter
    @abstractmethod
    def playback_rate(self, rate: float) -> None:
        ...

    @abstractmethod
    def play(self) -> None:
        ...

    @abstractmethod
    def pause(self) -> None:
        ...

    @abstractmethod
    def add_listener(self, event: str, callback: MediaListener) -> None:
        ...

    @abstractmethod
    def remove_listener(self, event: str, callback: MediaListener) -> None:
        ...

    @abstractmethod
    def release(self) -> None:
        """Libère la ressource (arrêt, source vidée, écouteurs retirés)."""
        ...
