"""Fixed-threshold onset beats."""

import logging
from typing import Iterable, List, Optional

from ..core import Beat, FeatureSample
from ..core.constants import ONSET_CONFIDENCE, ONSET_THRESHOLD_SCALE

logger = logging.getLogger(__name__)


class OnsetDetector:
    """Emit a beat whenever pre-emphasised energy crosses a fixed level.

    Unlike the energy and spectral paths there is no adaptive threshold
    and no peak test: a frame is a beat when its feature exceeds
    ``0.3 * sensitivity`` and the minimum interval has elapsed. Strength
    is the raw feature value and confidence is fixed at 0.8.
    """

    def __init__(self, sensitivity: float, min_beat_interval: float):
        self.threshold = ONSET_THRESHOLD_SCALE * sensitivity
        self.min_beat_interval = min_beat_interval
        self._last_beat_time = -min_beat_interval

    def process(self, sample: FeatureSample) -> Optional[Beat]:
        """Return a beat for this feature sample, or None."""
        if sample.value <= self.threshold:
            return None
        if sample.timestamp - self._last_beat_time < self.min_beat_interval:
            return None

        self._last_beat_time = sample.timestamp
        logger.debug("Onset at %.3fs (energy %.4f)", sample.timestamp, sample.value)
        return Beat(
            timestamp=sample.timestamp,
            strength=sample.value,
            confidence=ONSET_CONFIDENCE,
        )

    def detect(self, samples: Iterable[FeatureSample]) -> List[Beat]:
        """Run over a whole feature sequence."""
        beats = []
        for sample in samples:
            beat = self.process(sample)
            if beat is not None:
                beats.append(beat)
        return beats
