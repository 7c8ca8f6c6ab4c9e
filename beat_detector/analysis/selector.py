"""Automatic detection method selection."""

from ..core import DetectionMethod
from ..core.constants import ONSET_MIN_SAMPLE_RATE


def select_method(method: DetectionMethod, sample_rate: int) -> DetectionMethod:
    """
    Resolve AUTO to a concrete detection method.

    High quality audio (>= 44.1 kHz) gets onset detection, anything
    lower falls back to energy. Spectral flux is only used on request.

    Args:
        method: Requested method
        sample_rate: Sample rate of the source in Hz

    Returns:
        The method to run
    """
    if method is not DetectionMethod.AUTO:
        return method
    if sample_rate >= ONSET_MIN_SAMPLE_RATE:
        return DetectionMethod.ONSET
    return DetectionMethod.ENERGY
