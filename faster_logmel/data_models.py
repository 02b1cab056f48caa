"""Core data models for faster-logmel.

This module defines the data structures that flow through the feature
extraction pipeline: decoded audio signals, analysis frames, the mel
filterbank, the final log-mel spectrogram and extraction metadata.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np
import torch

SUPPORTED_BIT_DEPTHS = (8, 16, 24, 32)


@dataclass
class Signal:
    """Represents a decoded PCM waveform.

    Attributes:
        samples: Samples normalized to [-1, 1] as a 1D float32 numpy array
        sample_rate: Sample rate in Hz
    """
    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        if not isinstance(self.sample_rate, int) or isinstance(self.sample_rate, bool):
            raise TypeError(
                f"sample_rate must be int, got {type(self.sample_rate).__name__}"
            )
        if self.sample_rate <= 0:
            raise ValueError(
                f"sample_rate must be positive, got {self.sample_rate}"
            )
        samples = np.asarray(self.samples)
        if samples.ndim != 1:
            raise ValueError(
                f"samples must be 1-dimensional, got shape {samples.shape}"
            )
        self.samples = samples.astype(np.float32, copy=False)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return len(self.samples) / self.sample_rate

    def __len__(self) -> int:
        return len(self.samples)

    @classmethod
    def from_pcm(
        cls,
        pcm: np.ndarray,
        bit_depth: int,
        sample_rate: int,
    ) -> "Signal":
        """Build a signal from integer PCM samples.

        Samples are scaled by the largest positive value representable
        at the given bit depth, so full-scale input maps to [-1, 1].

        Args:
            pcm: Integer PCM samples (1D)
            bit_depth: Bits per sample (8, 16, 24 or 32)
            sample_rate: Sample rate in Hz

        Returns:
            Signal with float32 samples

        Raises:
            ValueError: If bit_depth is not supported
        """
        if bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ValueError(
                f"bit_depth must be one of {SUPPORTED_BIT_DEPTHS}, got {bit_depth}"
            )
        max_val = float((1 << (bit_depth - 1)) - 1)
        samples = np.asarray(pcm, dtype=np.float64) / max_val
        return cls(samples=samples.astype(np.float32), sample_rate=sample_rate)


@dataclass
class AudioChunk:
    """Represents a chunk of a long signal with its position.

    Attributes:
        audio: Audio samples as numpy array
        start_time: Start time in seconds relative to original audio
        end_time: End time in seconds relative to original audio
        chunk_index: Index in the sequence of chunks (0-based)
    """
    audio: np.ndarray
    start_time: float
    end_time: float
    chunk_index: int


@dataclass(frozen=True)
class Frame:
    """One windowed analysis segment.

    Attributes:
        index: Frame index
        offset: Start offset in samples
        samples: Windowed samples, zero beyond the end of the signal
    """
    index: int
    offset: int
    samples: np.ndarray


@dataclass(frozen=True)
class MelFilterBank:
    """Immutable triangular filter matrix mapping FFT bins to mel bands.

    Attributes:
        n_mels: Number of mel bands (rows)
        n_fft: FFT size the bins refer to
        sample_rate: Sample rate in Hz
        weights: Read-only array of shape (n_mels, n_fft // 2 + 1)
        bin_edges: Read-only array of n_mels + 2 FFT bin indices
    """
    n_mels: int
    n_fft: int
    sample_rate: int
    weights: np.ndarray = field(repr=False, compare=False)
    bin_edges: np.ndarray = field(repr=False, compare=False)

    @property
    def key(self) -> Tuple[int, int, int]:
        return (self.n_mels, self.n_fft, self.sample_rate)

    @property
    def n_freqs(self) -> int:
        return self.n_fft // 2 + 1


@dataclass
class MelSpectrogram:
    """Normalized log-mel feature tensor handed to the inference engine.

    Attributes:
        features: float32 array of shape (n_mels, n_frames), values in [-1, 0]
        sample_rate: Sample rate of the analysed signal in Hz
        hop_length: Stride between frames in samples
        start_time: Offset of the first frame in the original audio (seconds)
    """
    features: np.ndarray
    sample_rate: int
    hop_length: int
    start_time: float = 0.0

    @property
    def n_mels(self) -> int:
        return self.features.shape[0]

    @property
    def n_frames(self) -> int:
        return self.features.shape[1]

    @property
    def shape(self) -> Tuple[int, int, int]:
        return (1, self.n_mels, self.n_frames)

    def to_model_input(self) -> np.ndarray:
        """Return a contiguous float32 array of shape [1, n_mels, n_frames]."""
        return np.ascontiguousarray(
            self.features, dtype=np.float32
        ).reshape(self.shape)

    def flatten(self) -> np.ndarray:
        """Return the features flattened in row-major order."""
        return self.to_model_input().ravel()

    def to_tensor(self, device: Optional[str] = None) -> torch.Tensor:
        """Return the features as a [1, n_mels, n_frames] torch tensor."""
        tensor = torch.from_numpy(self.to_model_input())
        if device is not None:
            tensor = tensor.to(device)
        return tensor


@dataclass
class ExtractionInfo:
    """Metadata about one extraction request.

    Attributes:
        duration: Input audio duration in seconds
        source_sample_rate: Sample rate of the input before resampling
        num_frames: Total frames produced across all spectrograms
        num_chunks: Number of spectrograms produced
        device: Device used for the spectral transform
        processing_time: Wall-clock time for the request in seconds
    """
    duration: float
    source_sample_rate: int
    num_frames: int
    num_chunks: int
    device: str
    processing_time: float
