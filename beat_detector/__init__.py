"""Beat Detector - offline beat and tempo detection.

Architecture Layers:
    1. core/      - Data types, detection parameters, errors, constants
    2. input/     - Audio sources and framing
    3. analysis/  - Features, thresholding, peak picking, tempo, confidence
    4. output/    - Beat map export
"""

__version__ = "0.1.0"

# Core types
from .core import (
    Analysis,
    AudioFrame,
    Beat,
    DetectionMethod,
    DetectionParams,
    FeatureSample,
    BeatDetectorError,
    ConfigError,
    InputError,
    UpstreamError,
)

# Input layer
from .input import ArraySource, FileSource

# Analysis layer
from .analysis import BeatDetector, analyze

# Output layer
from .output import BeatMapExporter

__all__ = [
    # Core
    "Analysis",
    "AudioFrame",
    "Beat",
    "DetectionMethod",
    "DetectionParams",
    "FeatureSample",
    "BeatDetectorError",
    "ConfigError",
    "InputError",
    "UpstreamError",
    # Input
    "ArraySource",
    "FileSource",
    # Analysis
    "BeatDetector",
    "analyze",
    # Output
    "BeatMapExporter",
]
