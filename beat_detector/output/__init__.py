"""Output layer - beat map export."""

from .beatmap import BeatMapExporter

__all__ = [
    "BeatMapExporter",
]
