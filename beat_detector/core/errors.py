"""Error types raised by Beat Detector."""


class BeatDetectorError(Exception):
    """Base class for all beat detector failures."""


class InputError(BeatDetectorError):
    """The audio source is missing or produced no usable audio."""


class ConfigError(BeatDetectorError):
    """Invalid detection parameters or command-line arguments."""


class UpstreamError(BeatDetectorError):
    """The decoding library failed to open, read or write media."""
