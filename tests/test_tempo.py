"""Tests for tempo estimation, confidence scoring and onset beats."""

import numpy as np
import pytest

from beat_detector.analysis import ConfidenceScorer, OnsetDetector, TempoEstimator
from beat_detector.core import Beat, DetectionMethod, FeatureSample


def beats_at(*times):
    return [Beat(timestamp=t, strength=1.0, confidence=0.5) for t in times]


class TestTempoEstimator:
    """Median interval, outlier filter and stability."""

    def test_needs_two_beats(self):
        assert TempoEstimator().estimate([]) is None
        assert TempoEstimator().estimate(beats_at(1.0)) is None

    def test_regular_beats(self):
        estimate = TempoEstimator().estimate(beats_at(0.0, 0.5, 1.0, 1.5, 2.0))
        assert estimate.bpm == pytest.approx(120.0)
        assert estimate.avg_interval == pytest.approx(0.5)
        assert estimate.stability == pytest.approx(1.0)

    def test_even_count_uses_upper_median(self):
        estimate = TempoEstimator().estimate(beats_at(0.0, 0.4, 1.0))
        assert estimate.median_interval == pytest.approx(0.6)
        assert estimate.bpm == pytest.approx(100.0)

    def test_outliers_excluded_from_average(self):
        estimate = TempoEstimator().estimate(beats_at(0.0, 0.5, 1.0, 1.5, 2.5))
        assert estimate.median_interval == pytest.approx(0.5)
        assert len(estimate.intervals) == 4
        assert len(estimate.filtered_intervals) == 3
        assert estimate.avg_interval == pytest.approx(0.5)

    def test_tolerance_boundary_is_inclusive(self):
        # 0.625 is 25% above the 0.5 median, inside the 30% tolerance
        estimate = TempoEstimator().estimate(beats_at(0.0, 0.5, 1.0, 1.625))
        assert len(estimate.filtered_intervals) == 3

    def test_stability_drops_with_jitter(self):
        steady = TempoEstimator().estimate(beats_at(0.0, 0.5, 1.0, 1.5, 2.0))
        jittery = TempoEstimator().estimate(beats_at(0.0, 0.45, 1.0, 1.45, 2.0))
        assert jittery.stability < steady.stability

        intervals = np.array([0.45, 0.55, 0.45, 0.55])
        expected = 1.0 - np.std(intervals) / np.mean(intervals)
        assert jittery.stability == pytest.approx(expected)

    def test_median_always_survives(self):
        estimate = TempoEstimator().estimate(beats_at(0.0, 0.1, 5.0, 5.2))
        assert len(estimate.filtered_intervals) >= 1
        assert estimate.median_interval in estimate.filtered_intervals


class TestConfidenceScorer:
    """Confidence combination and BPM clamping."""

    def test_no_estimate_gives_empty_analysis(self):
        beats = beats_at(1.0)
        analysis = ConfidenceScorer(60, 200).score(beats, None, DetectionMethod.ENERGY)
        assert analysis.bpm == 0
        assert analysis.confidence == 0
        assert analysis.tempo_stability == 0
        assert analysis.avg_beat_interval == 0
        assert analysis.beats == beats
        assert analysis.method is DetectionMethod.ENERGY

    def test_confidence_weights(self):
        beats = beats_at(*[i * 0.5 for i in range(11)])
        estimate = TempoEstimator().estimate(beats)
        analysis = ConfidenceScorer(60, 200).score(beats, estimate)
        assert analysis.confidence == pytest.approx(0.7 * 1.0 + 0.3 * (11 / 20))

    def test_beat_count_factor_saturates(self):
        beats = beats_at(*[i * 0.5 for i in range(40)])
        estimate = TempoEstimator().estimate(beats)
        analysis = ConfidenceScorer(60, 200).score(beats, estimate)
        assert analysis.confidence == pytest.approx(1.0)
        assert analysis.confidence <= 1.0

    def test_fast_tempo_clamped_to_max(self):
        beats = beats_at(0.0, 0.2, 0.4, 0.6)
        analysis = ConfidenceScorer(60, 200).score(beats, TempoEstimator().estimate(beats))
        assert analysis.bpm == 200

    def test_slow_tempo_raised_to_min(self):
        beats = beats_at(0.0, 2.5, 5.0)
        analysis = ConfidenceScorer(60, 200).score(beats, TempoEstimator().estimate(beats))
        assert analysis.bpm == 60
        assert analysis.avg_beat_interval == pytest.approx(2.5)


class TestOnsetDetector:
    """Fixed-threshold onset beats."""

    def test_threshold_and_spacing(self):
        detector = OnsetDetector(sensitivity=0.5, min_beat_interval=0.3)
        samples = [
            FeatureSample(0.0, 0.1),   # below 0.15
            FeatureSample(0.1, 0.2),   # beat
            FeatureSample(0.2, 0.9),   # too close
            FeatureSample(0.5, 0.5),   # beat
        ]
        beats = detector.detect(samples)
        assert [b.timestamp for b in beats] == [0.1, 0.5]
        assert [b.strength for b in beats] == [0.2, 0.5]
        assert all(b.confidence == 0.8 for b in beats)

    def test_first_beat_allowed_at_zero(self):
        detector = OnsetDetector(sensitivity=0.5, min_beat_interval=0.3)
        assert detector.process(FeatureSample(0.0, 1.0)) is not None

    def test_zero_sensitivity_accepts_any_energy(self):
        detector = OnsetDetector(sensitivity=0.0, min_beat_interval=0.3)
        assert detector.process(FeatureSample(0.0, 0.0)) is None
        assert detector.process(FeatureSample(0.0, 1e-6)) is not None
