"""Core types, configuration and errors for Beat Detector."""

from .types import AudioFrame, FeatureSample, Beat, Analysis, DetectionMethod
from .config import DetectionParams, parse_method, parse_bpm_range, parse_float
from .errors import BeatDetectorError, InputError, ConfigError, UpstreamError
from .constants import (
    DEFAULT_FRAME_SIZE,
    DEFAULT_SENSITIVITY,
    DEFAULT_MIN_BPM,
    DEFAULT_MAX_BPM,
    DEFAULT_MIN_BEAT_INTERVAL,
)

__all__ = [
    "AudioFrame",
    "FeatureSample",
    "Beat",
    "Analysis",
    "DetectionMethod",
    "DetectionParams",
    "parse_method",
    "parse_bpm_range",
    "parse_float",
    "BeatDetectorError",
    "InputError",
    "ConfigError",
    "UpstreamError",
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_SENSITIVITY",
    "DEFAULT_MIN_BPM",
    "DEFAULT_MAX_BPM",
    "DEFAULT_MIN_BEAT_INTERVAL",
]
