"""Éléments média implémentant IMediaElement."""

from letzview.adapters.media.simulated import SimulatedMediaElement

__all__ = ["SimulatedMediaElement"]
