"""Per-frame feature extraction for beat detection.

Each extractor turns one AudioFrame into at most one FeatureSample:
- EnergyExtractor: RMS over all channels and samples
- SpectralFluxExtractor: rectified change of a 32-band magnitude profile
- OnsetExtractor: RMS after a 200 Hz high-pass pre-emphasis
"""

from typing import Optional, Union

import numpy as np
from scipy import signal

from ..core import AudioFrame, DetectionMethod, FeatureSample, InputError
from ..core.constants import (
    ONSET_HIGHPASS_HZ,
    S16_SCALE,
    S32_SCALE,
    SPECTRAL_BANDS,
)


def to_float(samples: np.ndarray) -> np.ndarray:
    """Convert PCM samples to float64 in [-1, 1]."""
    if samples.dtype == np.int16:
        return samples.astype(np.float64) / S16_SCALE
    if samples.dtype == np.int32:
        return samples.astype(np.float64) / S32_SCALE
    return samples.astype(np.float64)


def rms(samples: np.ndarray) -> float:
    """Root mean square over every channel and sample."""
    x = to_float(samples)
    return float(np.sqrt(np.mean(np.square(x))))


def band_spectrum(samples: np.ndarray, n_bands: int = SPECTRAL_BANDS) -> np.ndarray:
    """
    Compute a coarse magnitude profile of a frame.

    The frame is cut into ``n_bands`` contiguous bands of equal length,
    the last band taking the remainder. Each band holds the mean
    absolute sample value across channels.

    Args:
        samples: Frame samples (samples, channels)
        n_bands: Number of bands

    Returns:
        Band magnitudes [n_bands]
    """
    x = np.abs(to_float(samples))
    if x.ndim == 1:
        x = x[:, np.newaxis]

    n = x.shape[0]
    band_size = n // n_bands
    spectrum = np.zeros(n_bands, dtype=np.float64)

    for band in range(n_bands):
        start = band * band_size
        end = n if band == n_bands - 1 else start + band_size
        if end > start:
            spectrum[band] = x[start:end].mean()

    return spectrum


def spectral_flux(previous: np.ndarray, current: np.ndarray) -> float:
    """Half-wave rectified L2 distance between two spectra."""
    rise = np.maximum(current - previous, 0.0)
    return float(np.sqrt(np.sum(np.square(rise))))


class EnergyExtractor:
    """Frame energy (RMS)."""

    def step(self, frame: AudioFrame) -> Optional[FeatureSample]:
        return FeatureSample(frame.timestamp, rms(frame.samples))


class SpectralFluxExtractor:
    """Spectral flux against the previous frame.

    The first frame only primes the history and emits nothing.
    """

    def __init__(self, n_bands: int = SPECTRAL_BANDS):
        self.n_bands = n_bands
        self._previous: Optional[np.ndarray] = None

    def step(self, frame: AudioFrame) -> Optional[FeatureSample]:
        spectrum = band_spectrum(frame.samples, self.n_bands)
        previous, self._previous = self._previous, spectrum

        if previous is None:
            return None
        return FeatureSample(frame.timestamp, spectral_flux(previous, spectrum))


class OnsetExtractor:
    """Transient energy: RMS of the high-pass filtered frame.

    A first-order Butterworth high-pass runs continuously across frames,
    one filter state per channel, starting from rest.
    """

    def __init__(self, sample_rate: int, cutoff: float = ONSET_HIGHPASS_HZ):
        """
        Initialize OnsetExtractor.

        Args:
            sample_rate: Sample rate in Hz
            cutoff: High-pass cutoff frequency in Hz

        Raises:
            InputError: If the cutoff is not below the Nyquist frequency
        """
        if cutoff >= sample_rate / 2:
            raise InputError(
                f"Sample rate {sample_rate} Hz is too low for a {cutoff:g} Hz "
                "onset pre-emphasis filter"
            )

        self.sample_rate = sample_rate
        self.cutoff = cutoff
        self._b, self._a = signal.butter(1, cutoff, btype="highpass", fs=sample_rate)
        self._zi: Optional[np.ndarray] = None

    def filter(self, samples: np.ndarray) -> np.ndarray:
        """Apply the pre-emphasis filter, carrying state to the next call."""
        x = to_float(samples)
        if x.ndim == 1:
            x = x[:, np.newaxis]

        if self._zi is None or self._zi.shape[1] != x.shape[1]:
            order = max(len(self._a), len(self._b)) - 1
            self._zi = np.zeros((order, x.shape[1]), dtype=np.float64)

        y, self._zi = signal.lfilter(self._b, self._a, x, axis=0, zi=self._zi)
        return y

    def step(self, frame: AudioFrame) -> Optional[FeatureSample]:
        return FeatureSample(frame.timestamp, rms(self.filter(frame.samples)))


Extractor = Union[EnergyExtractor, SpectralFluxExtractor, OnsetExtractor]


def create_extractor(method: DetectionMethod, sample_rate: int) -> Extractor:
    """Build the extractor for a concrete (non-AUTO) method."""
    if method is DetectionMethod.ENERGY:
        return EnergyExtractor()
    if method is DetectionMethod.SPECTRAL:
        return SpectralFluxExtractor()
    if method is DetectionMethod.ONSET:
        return OnsetExtractor(sample_rate)
    raise ValueError(f"No feature extractor for {method}")
