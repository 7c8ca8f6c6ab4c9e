"""Data types flowing through the beat detection pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np


class DetectionMethod(Enum):
    """Feature used to find beats."""

    ENERGY = "energy"
    SPECTRAL = "spectral"
    ONSET = "onset"
    AUTO = "auto"

    @property
    def display_name(self) -> str:
        """Human readable name (e.g., 'Energy-based')."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    DetectionMethod.ENERGY: "Energy-based",
    DetectionMethod.SPECTRAL: "Spectral flux",
    DetectionMethod.ONSET: "Onset detection",
    DetectionMethod.AUTO: "Automatic",
}


@dataclass
class AudioFrame:
    """One block of decoded PCM samples.

    Samples are stored interleaved as ``(nb_samples, nb_channels)``.
    """

    samples: np.ndarray
    sample_rate: int
    timestamp: float = 0.0  # Start time in seconds

    @property
    def nb_samples(self) -> int:
        return int(self.samples.shape[0])

    @property
    def nb_channels(self) -> int:
        return int(self.samples.shape[1]) if self.samples.ndim > 1 else 1

    @property
    def duration(self) -> float:
        """Frame duration in seconds."""
        return self.nb_samples / self.sample_rate

    @classmethod
    def from_planar(
        cls, planar: np.ndarray, sample_rate: int, timestamp: float = 0.0
    ) -> "AudioFrame":
        """Build a frame from channel-major ``(channels, samples)`` data."""
        planar = np.atleast_2d(planar)
        return cls(samples=planar.T, sample_rate=sample_rate, timestamp=timestamp)


@dataclass(frozen=True)
class FeatureSample:
    """Scalar detection feature computed for one frame."""

    timestamp: float
    value: float


@dataclass(frozen=True)
class Beat:
    """A detected beat."""

    timestamp: float  # Seconds
    strength: float  # z-score of the feature at the peak
    confidence: float  # 0.0 to 1.0


@dataclass
class Analysis:
    """Result of one beat detection run."""

    bpm: float
    confidence: float
    beats: List[Beat] = field(default_factory=list)
    avg_beat_interval: float = 0.0
    tempo_stability: float = 0.0
    method: Optional[DetectionMethod] = None

    @property
    def beat_times(self) -> np.ndarray:
        """Beat positions in seconds."""
        return np.array([b.timestamp for b in self.beats], dtype=np.float64)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "bpm": self.bpm,
            "confidence": self.confidence,
            "avg_beat_interval": self.avg_beat_interval,
            "tempo_stability": self.tempo_stability,
            "method": self.method.value if self.method else None,
            "beats": [
                {
                    "timestamp": b.timestamp,
                    "strength": b.strength,
                    "confidence": b.confidence,
                }
                for b in self.beats
            ],
        }
