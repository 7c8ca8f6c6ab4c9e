"""Beat detection pipeline.

Runs one pass over the audio:
    frames -> method selection -> features -> threshold -> peaks
           -> tempo -> confidence
The onset method skips threshold and peak picking; its beats come
straight from OnsetDetector.
"""

import itertools
import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from ..core import (
    Analysis,
    AudioFrame,
    Beat,
    DetectionMethod,
    DetectionParams,
    InputError,
)
from ..input import AudioSource, iter_frames, stamp_frames
from .confidence import ConfidenceScorer
from .features import create_extractor
from .onset import OnsetDetector
from .peaks import PeakPicker
from .selector import select_method
from .tempo import TempoEstimator
from .threshold import AdaptiveThreshold

logger = logging.getLogger(__name__)

FrameInput = Union[AudioSource, Iterable[AudioFrame]]


class BeatDetector:
    """Detect beats and tempo in decoded audio."""

    def __init__(self, params: Optional[DetectionParams] = None):
        self.params = params or DetectionParams()

    def analyze(self, source: FrameInput) -> Analysis:
        """
        Analyze a complete audio stream.

        Args:
            source: An AudioSource, or any iterable of AudioFrame objects
                sharing one sample rate (their timestamps are recomputed)

        Returns:
            Analysis (bpm == 0 when fewer than two beats were found)

        Raises:
            InputError: If the source yields no audio, or its sample rate
                changes mid-stream
        """
        frames, sample_rate = self._open(source)
        method = select_method(self.params.method, sample_rate)
        logger.debug("Detection method: %s", method.display_name)

        if method is DetectionMethod.ONSET:
            beats = self._detect_onsets(frames, sample_rate)
        else:
            beats = self._detect_peaks(frames, sample_rate, method)

        return self._score(beats, method)

    def _open(self, source: FrameInput) -> Tuple[Iterator[AudioFrame], int]:
        if isinstance(source, AudioSource):
            return iter_frames(source), source.sample_rate

        # Peek for the sample rate; frames are re-timed from their sample counts
        frames = iter(source)
        first = next(frames, None)
        if first is None:
            raise InputError("No audio data processed")
        if first.sample_rate <= 0:
            raise InputError(f"Invalid sample rate: {first.sample_rate}")
        return stamp_frames(itertools.chain([first], frames)), first.sample_rate

    def _extract(
        self, frames: Iterator[AudioFrame], sample_rate: int, method: DetectionMethod
    ) -> Tuple[np.ndarray, np.ndarray, float]:
        extractor = create_extractor(method, sample_rate)
        values: List[float] = []
        timestamps: List[float] = []
        end_time = 0.0

        for frame in frames:
            sample = extractor.step(frame)
            if sample is not None:
                values.append(sample.value)
                timestamps.append(sample.timestamp)
            end_time = frame.timestamp + frame.duration

        return np.array(values), np.array(timestamps), end_time

    def _detect_peaks(
        self, frames: Iterator[AudioFrame], sample_rate: int, method: DetectionMethod
    ) -> List[Beat]:
        if method is DetectionMethod.SPECTRAL:
            logger.info("Analyzing spectral flux...")
            label = "Flux"
        else:
            logger.info("Analyzing audio energy...")
            label = "Energy"

        values, timestamps, end_time = self._extract(frames, sample_rate, method)
        if len(values) == 0:
            kind = "spectral" if method is DetectionMethod.SPECTRAL else "audio"
            raise InputError(f"No {kind} data processed")
        logger.info("Processed %.2f seconds of audio", end_time)

        stats = AdaptiveThreshold.for_method(method).compute(values, self.params.sensitivity)
        logger.info("%s threshold: %.6f", label, stats.threshold)

        beats = PeakPicker(self.params.min_beat_interval).pick(values, timestamps, stats)
        logger.info("Found %d beats", len(beats))
        return beats

    def _detect_onsets(self, frames: Iterator[AudioFrame], sample_rate: int) -> List[Beat]:
        logger.info("Detecting onsets...")
        extractor = create_extractor(DetectionMethod.ONSET, sample_rate)
        detector = OnsetDetector(self.params.sensitivity, self.params.min_beat_interval)
        beats: List[Beat] = []
        end_time = 0.0

        for frame in frames:
            beat = detector.process(extractor.step(frame))
            if beat is not None:
                beats.append(beat)
            end_time = frame.timestamp + frame.duration

        logger.info("Processed %.2f seconds of audio", end_time)
        logger.info("Detected %d potential beats", len(beats))
        return beats

    def _score(self, beats: List[Beat], method: DetectionMethod) -> Analysis:
        estimate = TempoEstimator().estimate(beats)
        if estimate is None:
            logger.warning("Not enough beats detected for BPM calculation")

        scorer = ConfidenceScorer(self.params.min_bpm, self.params.max_bpm)
        return scorer.score(beats, estimate, method)


def analyze(source: FrameInput, params: Optional[DetectionParams] = None) -> Analysis:
    """Detect beats and tempo; see BeatDetector.analyze."""
    return BeatDetector(params).analyze(source)
