"""Tempo estimation from inter-beat intervals."""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..core import Beat
from ..core.constants import OUTLIER_TOLERANCE


@dataclass
class TempoEstimate:
    """Container for tempo estimation results."""

    bpm: float  # Unclamped, from the median interval
    median_interval: float
    avg_interval: float  # Mean of intervals surviving the outlier filter
    stability: float  # 0.0 to 1.0
    intervals: np.ndarray  # All inter-beat intervals, in beat order
    filtered_intervals: np.ndarray


class TempoEstimator:
    """Estimate tempo and its stability from beat timestamps."""

    def __init__(self, outlier_tolerance: float = OUTLIER_TOLERANCE):
        """
        Initialize TempoEstimator.

        Args:
            outlier_tolerance: Intervals further than this fraction of the
                median from the median are ignored for averaging
        """
        self.outlier_tolerance = outlier_tolerance

    @staticmethod
    def median_interval(intervals: np.ndarray) -> float:
        """Median with the upper middle element for even counts."""
        ordered = np.sort(intervals)
        return float(ordered[len(ordered) // 2])

    def estimate(self, beats: Sequence[Beat]) -> Optional[TempoEstimate]:
        """
        Estimate tempo.

        Args:
            beats: Beats in timestamp order

        Returns:
            TempoEstimate, or None with fewer than two beats
        """
        if len(beats) < 2:
            return None

        times = np.array([b.timestamp for b in beats], dtype=np.float64)
        intervals = np.diff(times)

        median = self.median_interval(intervals)
        bpm = 60.0 / median

        # The median itself always survives, so this is never empty
        keep = np.abs(intervals - median) <= self.outlier_tolerance * median
        filtered = intervals[keep]

        avg_interval = float(np.mean(filtered))
        std = float(np.std(filtered))
        stability = 1.0 - min(std / avg_interval, 1.0)

        return TempoEstimate(
            bpm=bpm,
            median_interval=median,
            avg_interval=avg_interval,
            stability=stability,
            intervals=intervals,
            filtered_intervals=filtered,
        )
