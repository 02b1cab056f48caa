"""Acoustic-model feature configuration.

The constants here are fixed by the speech-recognition model that consumes
the features. Changing any of them changes the shape or the meaning of
the produced tensor.
"""

import dataclasses
from dataclasses import dataclass

SAMPLE_RATE = 16000
N_MELS = 80
N_FFT = 400
HOP_LENGTH = 160
MAX_FRAMES = 3000


def _check_positive_int(name: str, value, minimum: int = 1) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(
            f"{name} must be int, got {type(value).__name__}"
        )
    if value < minimum:
        if minimum == 1:
            raise ValueError(f"{name} must be positive, got {value}")
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class FeatureConfig:
    """Model-contracted feature extraction constants.

    Attributes:
        sample_rate: Target sample rate in Hz (default: 16000)
        n_mels: Number of mel bands (default: 80)
        n_fft: FFT / analysis window size in samples (default: 400)
        hop_length: Stride between frames in samples (default: 160)
        max_frames: Hard ceiling on frames per spectrogram (default: 3000)

    Raises:
        TypeError: If any value is not an int
        ValueError: If any value is out of range
    """
    sample_rate: int = SAMPLE_RATE
    n_mels: int = N_MELS
    n_fft: int = N_FFT
    hop_length: int = HOP_LENGTH
    max_frames: int = MAX_FRAMES

    def __post_init__(self):
        _check_positive_int("sample_rate", self.sample_rate)
        _check_positive_int("n_mels", self.n_mels)
        _check_positive_int("n_fft", self.n_fft, minimum=2)
        _check_positive_int("hop_length", self.hop_length)
        _check_positive_int("max_frames", self.max_frames)

    @property
    def n_freqs(self) -> int:
        """Number of non-redundant FFT bins."""
        return self.n_fft // 2 + 1

    @property
    def chunk_length(self) -> float:
        """Seconds of audio covered by max_frames hops."""
        return self.max_frames * self.hop_length / self.sample_rate

    @property
    def n_samples(self) -> int:
        """Samples per chunk_length at sample_rate."""
        return self.max_frames * self.hop_length

    def for_n_mels(self, n_mels: int) -> "FeatureConfig":
        """Return a copy with a different mel band count.

        Older Whisper checkpoints use 80 bands, large-v3 uses 128.
        """
        return dataclasses.replace(self, n_mels=n_mels)
