"""Overall confidence scoring and BPM range clamping."""

from typing import List, Optional

from ..core import Analysis, Beat, DetectionMethod
from ..core.constants import (
    BEAT_COUNT_SATURATION,
    BEAT_COUNT_WEIGHT,
    STABILITY_WEIGHT,
)
from .tempo import TempoEstimate


class ConfidenceScorer:
    """Combine tempo stability and beat count into the final Analysis."""

    def __init__(self, min_bpm: float, max_bpm: float):
        self.min_bpm = min_bpm
        self.max_bpm = max_bpm

    def score(
        self,
        beats: List[Beat],
        estimate: Optional[TempoEstimate],
        method: Optional[DetectionMethod] = None,
    ) -> Analysis:
        """
        Build the Analysis for a set of beats.

        Without an estimate (fewer than two beats) the result has zero
        BPM, confidence and stability.

        Note that clamping can raise a very slow tempo up to min_bpm.
        """
        if estimate is None:
            return Analysis(bpm=0.0, confidence=0.0, beats=list(beats), method=method)

        beat_count_factor = min(len(beats) / BEAT_COUNT_SATURATION, 1.0)
        confidence = (
            STABILITY_WEIGHT * estimate.stability + BEAT_COUNT_WEIGHT * beat_count_factor
        )
        bpm = min(max(estimate.bpm, self.min_bpm), self.max_bpm)

        return Analysis(
            bpm=bpm,
            confidence=confidence,
            beats=list(beats),
            avg_beat_interval=estimate.avg_interval,
            tempo_stability=estimate.stability,
            method=method,
        )
