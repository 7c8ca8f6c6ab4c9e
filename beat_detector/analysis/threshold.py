"""Adaptive threshold over a complete feature series."""

from dataclasses import dataclass

import numpy as np

from ..core import DetectionMethod
from ..core.constants import ENERGY_THRESHOLD_K, SPECTRAL_THRESHOLD_K


@dataclass(frozen=True)
class ThresholdStats:
    """Feature statistics and the derived detection threshold."""

    mean: float
    std: float
    threshold: float


class AdaptiveThreshold:
    """threshold = mean + k * sensitivity * std (population std)."""

    K_FACTORS = {
        DetectionMethod.ENERGY: ENERGY_THRESHOLD_K,
        DetectionMethod.SPECTRAL: SPECTRAL_THRESHOLD_K,
    }

    def __init__(self, k: float):
        self.k = k

    @classmethod
    def for_method(cls, method: DetectionMethod) -> "AdaptiveThreshold":
        try:
            return cls(cls.K_FACTORS[method])
        except KeyError:
            raise ValueError(f"{method.display_name} does not use an adaptive threshold") from None

    def compute(self, values: np.ndarray, sensitivity: float) -> ThresholdStats:
        """
        Compute the threshold for a feature series.

        Args:
            values: Non-empty feature series
            sensitivity: 0.0 (threshold at the mean) to 1.0

        Returns:
            ThresholdStats
        """
        values = np.asarray(values, dtype=np.float64)
        mean = float(np.mean(values))
        std = float(np.std(values))
        return ThresholdStats(
            mean=mean,
            std=std,
            threshold=mean + self.k * sensitivity * std,
        )
