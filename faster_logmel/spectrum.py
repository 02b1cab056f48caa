"""Frame-based spectral analysis.

This module splits a signal into overlapping, windowed frames and computes
one magnitude spectrum of n_fft // 2 + 1 bins per frame. Frames are cut
from a single zero-padded buffer, so frames that run past the end of the
signal keep their full length and read zeros for the missing samples.
"""

import logging
import time
from typing import Iterator, Optional, Tuple

import numpy as np
import torch

from .data_models import Frame
from .window import Windower

logger = logging.getLogger(__name__)

METHODS = ("fft", "dft")


class FrameSpectrumExtractor:
    """Computes per-frame magnitude spectra.

    Two interchangeable methods are available. "fft" runs torch.fft.rfft
    over batches of frames on the configured device. "dft" accumulates the
    discrete Fourier transform by direct summation and serves as the
    reference the FFT path is validated against.

    Attributes:
        n_fft: Frame and FFT size in samples
        hop_length: Stride between frame start offsets in samples
        max_frames: Hard ceiling on the number of frames
        method: "fft" or "dft"
        device: Device for the spectral transform ("cpu" or "cuda")
        batch_size: Number of frames transformed per batch
        windower: Window applied to every frame
    """

    def __init__(
        self,
        n_fft: int = 400,
        hop_length: int = 160,
        max_frames: int = 3000,
        windower: Optional[Windower] = None,
        method: str = "fft",
        device: str = "cpu",
        batch_size: int = 500,
    ):
        """Initialize frame spectrum extractor.

        Args:
            n_fft: Frame and FFT size in samples (default: 400)
            hop_length: Hop size in samples (default: 160)
            max_frames: Frame count ceiling (default: 3000)
            windower: Prebuilt window of length n_fft (default: Hann of n_fft)
            method: "fft" or "dft" (default: "fft")
            device: "cpu" or "cuda" (default: "cpu")
            batch_size: Frames per batch (default: 500)

        Raises:
            TypeError: If arguments have invalid types
            ValueError: If arguments are out of range
            RuntimeError: If CUDA is requested but not available
        """
        for name, value in (
            ("n_fft", n_fft),
            ("hop_length", hop_length),
            ("max_frames", max_frames),
            ("batch_size", batch_size),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(
                    f"{name} must be int, got {type(value).__name__}"
                )
        if n_fft < 2:
            raise ValueError(f"n_fft must be >= 2, got {n_fft}")
        if hop_length < 1:
            raise ValueError(f"hop_length must be positive, got {hop_length}")
        if max_frames < 1:
            raise ValueError(f"max_frames must be positive, got {max_frames}")
        if batch_size < 1:
            raise ValueError(
                f"batch_size must be positive integer, got {batch_size}"
            )
        if method not in METHODS:
            raise ValueError(
                f"method must be 'fft' or 'dft', got '{method}'"
            )
        if not isinstance(device, str):
            raise TypeError(
                f"device must be str, got {type(device).__name__}"
            )
        if device not in ["cuda", "cpu"]:
            raise ValueError(
                f"device must be 'cuda' or 'cpu', got '{device}'"
            )
        if device == "cuda" and not torch.cuda.is_available():
            raise RuntimeError(
                "CUDA device requested but not available. "
                "Install CUDA toolkit or use device='cpu'"
            )

        if windower is None:
            windower = Windower(n_fft)
        if len(windower) != n_fft:
            raise ValueError(
                f"window length ({len(windower)}) must equal n_fft ({n_fft})"
            )

        self.n_fft = n_fft
        self.hop_length = hop_length
        self.max_frames = max_frames
        self.method = method
        self.device = device
        self.batch_size = batch_size
        self.windower = windower

        self._device = torch.device(device)
        self._window = torch.tensor(
            np.array(windower.window), dtype=torch.float64
        ).to(self._device)

        self._cos_basis = None
        self._sin_basis = None
        if method == "dft":
            # angles[j, k] = -2*pi*k*j / N
            j = np.arange(n_fft, dtype=np.float64)[:, None]
            k = np.arange(self.n_freqs, dtype=np.float64)[None, :]
            angles = -2.0 * np.pi * k * j / n_fft
            self._cos_basis = np.cos(angles)
            self._sin_basis = np.sin(angles)

    @property
    def n_freqs(self) -> int:
        return self.n_fft // 2 + 1

    def num_frames(self, signal_length: int) -> int:
        """Frame count for a signal of signal_length samples.

        Never below 1 and never above max_frames.
        """
        n_frames = (signal_length - self.n_fft) // self.hop_length
        return max(1, min(self.max_frames, n_frames))

    def pad_signal(self, samples: np.ndarray, n_frames: int) -> np.ndarray:
        """Copy samples into a zero-filled buffer covering n_frames frames."""
        needed = (n_frames - 1) * self.hop_length + self.n_fft
        buffer = np.zeros(needed, dtype=np.float64)
        length = min(len(samples), needed)
        buffer[:length] = samples[:length]
        return buffer

    def iter_frames(self, samples: np.ndarray) -> Iterator[Frame]:
        """Yield every windowed analysis frame of samples in order."""
        n_frames = self.num_frames(len(samples))
        buffer = self.pad_signal(samples, n_frames)
        for index in range(n_frames):
            offset = index * self.hop_length
            yield Frame(
                index=index,
                offset=offset,
                samples=self.windower.apply(buffer[offset:offset + self.n_fft]),
            )

    def iter_spectra(
        self,
        samples: np.ndarray,
        timeout: Optional[float] = None,
    ) -> Iterator[Tuple[int, torch.Tensor]]:
        """Yield magnitude spectra batch by batch.

        Args:
            samples: Signal samples (1D) at the analysis sample rate
            timeout: Optional time budget in seconds, checked between batches

        Yields:
            (first_frame_index, magnitudes) where magnitudes is a float64
            tensor of shape [batch, n_fft // 2 + 1] on the configured device

        Raises:
            ValueError: If samples is not 1-dimensional
            TimeoutError: If the time budget runs out before all batches
            RuntimeError: If the device runs out of memory
        """
        if samples.ndim != 1:
            raise ValueError(
                f"samples must be 1-dimensional, got shape {samples.shape}"
            )

        deadline = None if timeout is None else time.monotonic() + timeout
        n_frames = self.num_frames(len(samples))

        if self.method == "dft":
            batches = self._dft_batches(samples, n_frames)
        else:
            batches = self._fft_batches(samples, n_frames)

        done = 0
        while True:
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(
                    f"Spectral analysis exceeded timeout of {timeout}s after "
                    f"{done} of {n_frames} frames"
                )
            try:
                start, magnitudes = next(batches)
            except StopIteration:
                break
            except RuntimeError as e:
                if "out of memory" in str(e).lower():
                    if torch.cuda.is_available():
                        torch.cuda.empty_cache()
                    raise RuntimeError(
                        f"Out of memory during spectral analysis. Try reducing "
                        f"batch_size from {self.batch_size} to "
                        f"{max(1, self.batch_size // 2)}"
                    ) from e
                raise
            done = start + magnitudes.shape[0]
            logger.debug(f"Analysed frames {start}-{done} of {n_frames}")
            yield start, magnitudes

    def extract(
        self,
        samples: np.ndarray,
        timeout: Optional[float] = None,
    ) -> np.ndarray:
        """Compute the magnitude spectrum of every frame.

        Args:
            samples: Signal samples (1D) at the analysis sample rate
            timeout: Optional time budget in seconds

        Returns:
            float64 array of shape (n_frames, n_fft // 2 + 1), non-negative
        """
        n_frames = self.num_frames(len(samples))
        spectra = np.empty((n_frames, self.n_freqs), dtype=np.float64)
        for start, magnitudes in self.iter_spectra(samples, timeout=timeout):
            spectra[start:start + magnitudes.shape[0]] = magnitudes.cpu().numpy()
        return spectra

    def _fft_batches(
        self,
        samples: np.ndarray,
        n_frames: int,
    ) -> Iterator[Tuple[int, torch.Tensor]]:
        buffer = self.pad_signal(samples, n_frames)
        frames = np.lib.stride_tricks.sliding_window_view(
            buffer, self.n_fft
        )[::self.hop_length][:n_frames]

        for start in range(0, n_frames, self.batch_size):
            end = min(start + self.batch_size, n_frames)
            batch = torch.from_numpy(
                np.ascontiguousarray(frames[start:end])
            ).to(self._device)
            spectrum = torch.fft.rfft(batch * self._window, n=self.n_fft, dim=-1)
            yield start, spectrum.abs()

    def _dft_batches(
        self,
        samples: np.ndarray,
        n_frames: int,
    ) -> Iterator[Tuple[int, torch.Tensor]]:
        batch = []
        batch_start = 0
        for frame in self.iter_frames(samples):
            re = frame.samples @ self._cos_basis
            im = frame.samples @ self._sin_basis
            batch.append(np.sqrt(re * re + im * im))
            if len(batch) == self.batch_size:
                yield batch_start, torch.from_numpy(np.stack(batch)).to(self._device)
                batch_start += len(batch)
                batch = []
        if batch:
            yield batch_start, torch.from_numpy(np.stack(batch)).to(self._device)
