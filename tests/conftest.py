"""Shared test fixtures for beat detector tests."""

import numpy as np
import pytest

from beat_detector import ArraySource, DetectionParams, analyze
from generate_test_audio import SR, generate_click_track, regular_clicks


def run(audio: np.ndarray, sr: int = SR, **params):
    """Analyze an in-memory signal with the given DetectionParams fields."""
    return analyze(ArraySource(audio, sr), DetectionParams(**params))


def assert_invariants(analysis, params: DetectionParams):
    """Properties every successful analysis must satisfy."""
    times = [b.timestamp for b in analysis.beats]
    for earlier, later in zip(times, times[1:]):
        assert later > earlier
        assert later - earlier >= params.min_beat_interval

    assert 0.0 <= analysis.confidence <= 1.0
    assert 0.0 <= analysis.tempo_stability <= 1.0
    assert analysis.bpm == 0 or params.min_bpm <= analysis.bpm <= params.max_bpm
    if len(analysis.beats) >= 2:
        assert analysis.avg_beat_interval > 0


@pytest.fixture
def sample_rate():
    return SR


@pytest.fixture
def frame_duration(sample_rate):
    return 1024 / sample_rate


@pytest.fixture
def click_track_120():
    """8 s of 0.9 impulses every 0.5 s (t = 0.0 ... 7.5)."""
    return generate_click_track(regular_clicks(0.5, 8.0), 8.0)


@pytest.fixture
def accented_click_track():
    """8 s of clicks every 0.5 s alternating loud (0.9) and quiet (0.1)."""
    times = regular_clicks(0.5, 8.0)
    amplitudes = [0.9 if i % 2 == 0 else 0.1 for i in range(len(times))]
    return generate_click_track(times, 8.0, amplitudes=amplitudes)


@pytest.fixture
def noisy_track():
    """Low-level noise with irregular louder hits."""
    rng = np.random.default_rng(0)
    audio = (rng.standard_normal(SR * 6) * 0.02).astype(np.float32)
    for t in rng.uniform(0.0, 5.9, size=25):
        pos = int(t * SR)
        audio[pos:pos + 200] += rng.uniform(0.2, 0.8)
    return np.clip(audio, -1.0, 1.0)
