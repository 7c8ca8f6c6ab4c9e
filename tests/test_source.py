"""Tests for audio sources and framing."""

import numpy as np
import pytest
import soundfile as sf

from beat_detector.core import AudioFrame, InputError, UpstreamError
from beat_detector.input import ArraySource, FileSource, iter_frames, stamp_frames
from generate_test_audio import SR, generate_click_track, regular_clicks, save_wav


class TestArraySource:
    def test_mono_blocks(self):
        source = ArraySource(np.zeros(2500, dtype=np.float32), SR, frame_size=1024)
        blocks = list(source.blocks())
        assert [len(b) for b in blocks] == [1024, 1024, 452]
        assert all(b.shape[1] == 1 for b in blocks)
        assert source.channels == 1

    def test_interleaved_stereo(self):
        source = ArraySource(np.zeros((100, 2), dtype=np.float32), 8000, frame_size=64)
        assert source.channels == 2
        assert source.duration == pytest.approx(100 / 8000)

    def test_rejects_bad_shapes(self):
        with pytest.raises(InputError):
            ArraySource(np.zeros((2, 2, 2)), SR)
        with pytest.raises(InputError):
            ArraySource(np.zeros(10), SR, frame_size=0)


class TestIterFrames:
    """Timestamps from accumulated sample counts."""

    def test_timestamps_accumulate(self):
        source = ArraySource(np.zeros(2500, dtype=np.float32), 1000, frame_size=1024)
        frames = list(iter_frames(source))
        assert [f.timestamp for f in frames] == [0.0, 1.024, 2.048]
        assert [f.nb_samples for f in frames] == [1024, 1024, 452]
        assert all(f.sample_rate == 1000 for f in frames)

    def test_timestamps_strictly_increase(self):
        frames = list(iter_frames(ArraySource(np.zeros(SR * 3), SR)))
        times = [f.timestamp for f in frames]
        assert all(b > a for a, b in zip(times, times[1:]))

    def test_empty_source_raises_after_exhaustion(self):
        frames = iter_frames(ArraySource(np.zeros(0), SR))
        with pytest.raises(InputError, match="No audio"):
            next(frames)

    def test_invalid_sample_rate(self):
        with pytest.raises(InputError):
            list(iter_frames(ArraySource(np.zeros(10), 0)))


class TestStampFrames:
    """Re-timing caller-built frames."""

    def test_existing_timestamps_replaced(self):
        frames = [
            AudioFrame(samples=np.zeros((500, 1)), sample_rate=1000, timestamp=7.0),
            AudioFrame(samples=np.zeros((0, 1)), sample_rate=1000),
            AudioFrame(samples=np.zeros((250, 1)), sample_rate=1000),
            AudioFrame(samples=np.zeros((250, 1)), sample_rate=1000),
        ]
        stamped = list(stamp_frames(frames))
        assert [f.timestamp for f in stamped] == [0.0, 0.5, 0.75]
        assert frames[0].timestamp == 7.0

    def test_sample_rate_change(self):
        frames = [
            AudioFrame(samples=np.zeros((10, 1)), sample_rate=1000),
            AudioFrame(samples=np.zeros((10, 1)), sample_rate=2000),
        ]
        with pytest.raises(InputError, match="Sample rate changed"):
            list(stamp_frames(frames))

    def test_no_samples(self):
        with pytest.raises(InputError, match="No audio"):
            list(stamp_frames([AudioFrame(samples=np.zeros((0, 1)), sample_rate=1000)]))


class TestAudioFrame:
    def test_planar_layout(self):
        planar = np.zeros((2, 300), dtype=np.float32)
        frame = AudioFrame.from_planar(planar, 48000, timestamp=0.5)
        assert frame.nb_samples == 300
        assert frame.nb_channels == 2
        assert frame.duration == pytest.approx(300 / 48000)


class TestFileSource:
    """Decoding files from disk."""

    def test_reads_wav_in_blocks(self, tmp_path):
        audio = generate_click_track(regular_clicks(0.5, 2.0), 2.0)
        path = save_wav(tmp_path / "clicks.wav", audio)

        with FileSource(path) as source:
            assert source.sample_rate == SR
            assert source.channels == 1
            assert source.duration == pytest.approx(2.0)
            blocks = list(source.blocks())

        assert all(b.dtype == np.float32 for b in blocks)
        decoded = np.concatenate(blocks)[:, 0]
        np.testing.assert_allclose(decoded, audio, atol=1e-4)

    def test_reads_stereo_flac(self, tmp_path):
        path = tmp_path / "stereo.flac"
        sf.write(str(path), np.zeros((4096, 2)), 22050)

        with FileSource(path, frame_size=1000) as source:
            frames = list(iter_frames(source))

        assert source.channels == 2
        assert [f.nb_samples for f in frames] == [1000, 1000, 1000, 1000, 96]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="File not found"):
            FileSource(tmp_path / "nope.wav")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.wav"
        path.write_bytes(b"this is not audio at all")
        with pytest.raises(UpstreamError):
            FileSource(path)
