"""Analysis layer - beat detection pipeline.

- Method selection
- Feature extraction (energy, spectral flux, onset)
- Adaptive thresholding and peak picking
- Tempo estimation and confidence scoring
"""

from .selector import select_method
from .features import (
    EnergyExtractor,
    SpectralFluxExtractor,
    OnsetExtractor,
    create_extractor,
)
from .threshold import AdaptiveThreshold, ThresholdStats
from .peaks import PeakPicker
from .onset import OnsetDetector
from .tempo import TempoEstimator, TempoEstimate
from .confidence import ConfidenceScorer
from .detector import BeatDetector, analyze

__all__ = [
    "select_method",
    "EnergyExtractor",
    "SpectralFluxExtractor",
    "OnsetExtractor",
    "create_extractor",
    "AdaptiveThreshold",
    "ThresholdStats",
    "PeakPicker",
    "OnsetDetector",
    "TempoEstimator",
    "TempoEstimate",
    "ConfidenceScorer",
    "BeatDetector",
    "analyze",
]
