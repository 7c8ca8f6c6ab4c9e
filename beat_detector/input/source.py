"""Audio sources and the frame adapter feeding the detector."""

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

import librosa
import numpy as np
import soundfile as sf

from ..core import AudioFrame, DEFAULT_FRAME_SIZE, InputError, UpstreamError

logger = logging.getLogger(__name__)


class AudioSource(ABC):
    """Producer of decoded sample blocks shaped (samples, channels)."""

    sample_rate: int
    channels: int

    @property
    def duration(self) -> float:
        """Duration in seconds, 0.0 when unknown."""
        return 0.0

    @abstractmethod
    def blocks(self) -> Iterator[np.ndarray]:
        """Yield consecutive sample blocks in decode order."""
        pass


class ArraySource(AudioSource):
    """Serve an in-memory signal in fixed-size blocks."""

    def __init__(
        self,
        audio: np.ndarray,
        sample_rate: int,
        frame_size: int = DEFAULT_FRAME_SIZE,
    ):
        """
        Initialize ArraySource.

        Args:
            audio: Mono array, or interleaved array shaped (samples, channels).
                Float samples are expected in [-1, 1]; int16/int32 are accepted.
            sample_rate: Sample rate in Hz
            frame_size: Samples per block
        """
        audio = np.asarray(audio)
        if audio.ndim == 1:
            audio = audio[:, np.newaxis]
        if audio.ndim != 2:
            raise InputError(f"Expected 1-D or 2-D audio, got shape {audio.shape}")
        if frame_size <= 0:
            raise InputError(f"Frame size must be positive, got {frame_size}")

        self.audio = audio
        self.sample_rate = int(sample_rate)
        self.channels = int(audio.shape[1])
        self.frame_size = frame_size

    @property
    def duration(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return len(self.audio) / self.sample_rate

    def blocks(self) -> Iterator[np.ndarray]:
        for start in range(0, len(self.audio), self.frame_size):
            yield self.audio[start:start + self.frame_size]


class FileSource(AudioSource):
    """Decode an audio file lazily, block by block.

    Files are read through libsndfile. Containers it cannot open
    (m4a, mp4, ...) are decoded whole by librosa at their native
    rate and channel count.
    """

    def __init__(self, path: Union[str, Path], frame_size: int = DEFAULT_FRAME_SIZE):
        """
        Open an audio file.

        Args:
            path: Path to audio file
            frame_size: Samples per block

        Raises:
            InputError: If the file doesn't exist
            UpstreamError: If no decoder can open the file
        """
        self.path = Path(path)
        self.frame_size = frame_size
        self._file: Optional[sf.SoundFile] = None
        self._decoded: Optional[np.ndarray] = None

        if not self.path.exists():
            raise InputError(f"File not found: {self.path}")

        try:
            self._file = sf.SoundFile(str(self.path))
        except RuntimeError as sf_error:
            logger.debug("libsndfile cannot open %s (%s), trying librosa", self.path, sf_error)
            self._open_with_librosa()
            return

        self.sample_rate = self._file.samplerate
        self.channels = self._file.channels

    def _open_with_librosa(self) -> None:
        try:
            audio, sr = librosa.load(str(self.path), sr=None, mono=False)
        except Exception as e:
            raise UpstreamError(f"Failed to open {self.path}: {e}") from e

        self._decoded = np.atleast_2d(audio).T
        self.sample_rate = int(sr)
        self.channels = int(self._decoded.shape[1])

    @property
    def duration(self) -> float:
        if self._file is not None:
            return self._file.frames / self._file.samplerate
        return len(self._decoded) / self.sample_rate

    def blocks(self) -> Iterator[np.ndarray]:
        if self._decoded is not None:
            yield from ArraySource(self._decoded, self.sample_rate, self.frame_size).blocks()
            return

        try:
            self._file.seek(0)
            for block in self._file.blocks(
                blocksize=self.frame_size, dtype="float32", always_2d=True
            ):
                yield block
        except RuntimeError as e:
            raise UpstreamError(f"Failed to decode {self.path}: {e}") from e

    def close(self) -> None:
        if self._file is not None:
            self._file.close()

    def __enter__(self) -> "FileSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def iter_frames(source: AudioSource) -> Iterator[AudioFrame]:
    """
    Present a source as timestamped frames.

    Args:
        source: Audio source (not owned)

    Yields:
        AudioFrame per non-empty block

    Raises:
        InputError: If the source has no usable format or yields no audio
    """
    sample_rate = source.sample_rate
    if sample_rate <= 0:
        raise InputError(f"Invalid sample rate: {sample_rate}")
    if source.channels <= 0:
        raise InputError(f"Invalid channel count: {source.channels}")

    blocks = (AudioFrame(samples=block, sample_rate=sample_rate) for block in source.blocks())
    yield from stamp_frames(blocks)


def stamp_frames(frames: Iterable[AudioFrame]) -> Iterator[AudioFrame]:
    """
    Re-time frames from the running sample count.

    Frame k starts at the total samples of frames 0..k-1 divided by the
    sample rate. Timestamps already on the frames are ignored.

    Args:
        frames: Frames sharing one sample rate

    Yields:
        Copies of the non-empty frames with their start times set

    Raises:
        InputError: If the sample rate is invalid or changes mid-stream,
            or no samples arrive
    """
    sample_rate = None
    samples_seen = 0

    for frame in frames:
        if sample_rate is None:
            sample_rate = frame.sample_rate
            if sample_rate <= 0:
                raise InputError(f"Invalid sample rate: {sample_rate}")
        elif frame.sample_rate != sample_rate:
            raise InputError(
                f"Sample rate changed mid-stream: {sample_rate} Hz -> {frame.sample_rate} Hz"
            )

        if frame.nb_samples == 0:
            continue
        yield replace(frame, timestamp=samples_seen / sample_rate)
        samples_seen += frame.nb_samples

    if samples_seen == 0:
        raise InputError("No audio data processed")
