"""Detection parameters and their parsers."""

import math
from dataclasses import dataclass
from typing import Tuple, Union

from .constants import (
    DEFAULT_MAX_BPM,
    DEFAULT_MIN_BEAT_INTERVAL,
    DEFAULT_MIN_BPM,
    DEFAULT_SENSITIVITY,
)
from .errors import ConfigError
from .types import DetectionMethod


def parse_method(name: str) -> DetectionMethod:
    """Parse a method name (energy, spectral, onset, auto)."""
    try:
        return DetectionMethod(name.strip().lower())
    except ValueError:
        raise ConfigError(f"Invalid detection method: {name}") from None


def parse_float(name: str, value: str) -> float:
    """Parse a numeric option value."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid {name}: {value}") from None
    if not math.isfinite(number):
        raise ConfigError(f"Invalid {name}: {value}")
    return number


def parse_bpm_range(value: str) -> Tuple[float, float]:
    """Parse a 'MIN-MAX' BPM range (e.g., '120-180')."""
    low, sep, high = value.partition("-")
    if not sep:
        raise ConfigError("Invalid BPM range format (use min-max)")
    return parse_float("BPM range", low), parse_float("BPM range", high)


@dataclass
class DetectionParams:
    """Configuration for a beat detection run.

    Attributes:
        method: Detection method, or AUTO to choose from the sample rate
        sensitivity: Threshold aggressiveness, 0.0 to 1.0 (default: 0.5)
        min_bpm: Lower BPM clamp (default: 60)
        max_bpm: Upper BPM clamp (default: 200)
        min_beat_interval: Minimum time between beats in seconds (default: 0.3)
    """

    method: Union[DetectionMethod, str] = DetectionMethod.AUTO
    sensitivity: float = DEFAULT_SENSITIVITY
    min_bpm: float = DEFAULT_MIN_BPM
    max_bpm: float = DEFAULT_MAX_BPM
    min_beat_interval: float = DEFAULT_MIN_BEAT_INTERVAL

    def __post_init__(self):
        if isinstance(self.method, str):
            self.method = parse_method(self.method)

        for name in ("sensitivity", "min_bpm", "max_bpm", "min_beat_interval"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be a finite number")

        if not 0.0 <= self.sensitivity <= 1.0:
            raise ConfigError(
                f"Sensitivity must be between 0 and 1, got {self.sensitivity}"
            )
        if self.min_bpm <= 0 or self.max_bpm <= 0:
            raise ConfigError("BPM range must be positive")
        if self.min_bpm > self.max_bpm:
            raise ConfigError(
                f"Invalid BPM range: {self.min_bpm:g}-{self.max_bpm:g}"
            )
        if self.min_beat_interval < 0:
            raise ConfigError("Minimum beat interval must not be negative")
