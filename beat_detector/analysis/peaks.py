"""Peak picking over a thresholded feature series."""

import logging
from typing import List

import numpy as np

from ..core import Beat
from ..core.constants import EPSILON, STRENGTH_TO_CONFIDENCE
from .threshold import ThresholdStats

logger = logging.getLogger(__name__)


class PeakPicker:
    """Select strict local maxima above a threshold, spaced in time."""

    def __init__(self, min_beat_interval: float):
        self.min_beat_interval = min_beat_interval

    def pick(
        self,
        values: np.ndarray,
        timestamps: np.ndarray,
        stats: ThresholdStats,
    ) -> List[Beat]:
        """
        Find beats in a feature series.

        A sample is a beat when it is strictly greater than both
        neighbours (plateaus never qualify), exceeds the threshold, and
        lies at least ``min_beat_interval`` after the previous beat. The
        first and last samples are never beats.

        Args:
            values: Feature series
            timestamps: Timestamp of each feature sample (seconds)
            stats: Statistics from AdaptiveThreshold

        Returns:
            Beats in timestamp order
        """
        values = np.asarray(values, dtype=np.float64)
        timestamps = np.asarray(timestamps, dtype=np.float64)
        if len(values) < 3:
            return []

        inner = values[1:-1]
        is_candidate = (
            (inner > values[:-2])
            & (inner > values[2:])
            & (inner > stats.threshold)
        )
        candidates = np.flatnonzero(is_candidate) + 1

        beats: List[Beat] = []
        last_beat_time = -self.min_beat_interval

        for i in candidates:
            t = float(timestamps[i])
            if t - last_beat_time < self.min_beat_interval:
                continue

            strength = (float(values[i]) - stats.mean) / (stats.std + EPSILON)
            confidence = min(max(strength / STRENGTH_TO_CONFIDENCE, 0.0), 1.0)
            beats.append(Beat(timestamp=t, strength=strength, confidence=confidence))
            last_beat_time = t
            logger.debug("Beat at %.3fs (strength %.2f)", t, strength)

        return beats
