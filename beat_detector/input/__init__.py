"""Input layer - audio sources and framing."""

from .source import AudioSource, ArraySource, FileSource, iter_frames, stamp_frames

__all__ = [
    "AudioSource",
    "ArraySource",
    "FileSource",
    "iter_frames",
    "stamp_frames",
]
