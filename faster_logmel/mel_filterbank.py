"""Mel-scale triangular filterbank construction.

A filterbank is fully determined by (n_mels, n_fft, sample_rate), so built
filterbanks are immutable and cached by that key.
"""

import logging
import threading
from typing import Dict, Tuple

import numpy as np

from .data_models import MelFilterBank

logger = logging.getLogger(__name__)


def hz_to_mel(hz):
    """Convert frequency in Hz to the mel scale."""
    return 2595.0 * np.log10(1.0 + np.asarray(hz, dtype=np.float64) / 700.0)


def mel_to_hz(mel):
    """Convert mel-scale values back to Hz."""
    return 700.0 * (10.0 ** (np.asarray(mel, dtype=np.float64) / 2595.0) - 1.0)


def mel_bin_edges(n_mels: int, n_fft: int, sample_rate: int) -> np.ndarray:
    """FFT bin indices of the n_mels + 2 filter edges.

    Points are equally spaced in mel between 0 Hz and the Nyquist
    frequency, then mapped to bins with floor((n_fft + 1) * hz / rate).
    """
    mel_min = hz_to_mel(0.0)
    mel_max = hz_to_mel(sample_rate / 2.0)
    mel_points = mel_min + np.arange(n_mels + 2) * (mel_max - mel_min) / (n_mels + 1)
    hz_points = mel_to_hz(mel_points)
    return np.floor((n_fft + 1) * hz_points / sample_rate).astype(np.int64)


class MelFilterBankBuilder:
    """Builds and caches mel filterbanks.

    Filters rise linearly from 0 at edge m to 1 at edge m + 1 and fall back
    to 0 at edge m + 2. Bins past n_fft // 2 are dropped. The cache is safe
    to share between threads.
    """

    def __init__(self):
        self._cache: Dict[Tuple[int, int, int], MelFilterBank] = {}
        self._lock = threading.Lock()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self):
        """Drop every cached filterbank."""
        with self._lock:
            self._cache.clear()

    def build(
        self,
        n_mels: int = 80,
        n_fft: int = 400,
        sample_rate: int = 16000,
    ) -> MelFilterBank:
        """Return the filterbank for (n_mels, n_fft, sample_rate).

        Args:
            n_mels: Number of mel bands (default: 80)
            n_fft: FFT size (default: 400)
            sample_rate: Sample rate in Hz (default: 16000)

        Returns:
            Cached MelFilterBank with read-only weights

        Raises:
            TypeError: If any argument is not an integer
            ValueError: If n_mels or sample_rate is not positive, or n_fft < 2
        """
        for name, value in (
            ("n_mels", n_mels),
            ("n_fft", n_fft),
            ("sample_rate", sample_rate),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(
                    f"{name} must be int, got {type(value).__name__}"
                )
        if n_mels <= 0:
            raise ValueError(f"n_mels must be positive, got {n_mels}")
        if n_fft < 2:
            raise ValueError(f"n_fft must be >= 2, got {n_fft}")
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")

        key = (n_mels, n_fft, sample_rate)
        with self._lock:
            filterbank = self._cache.get(key)
            if filterbank is not None:
                logger.debug(f"Mel filterbank cache hit for {key}")
                return filterbank

            logger.debug(f"Mel filterbank cache miss for {key}, building")
            filterbank = self._create(n_mels, n_fft, sample_rate)
            self._cache[key] = filterbank
            return filterbank

    @staticmethod
    def _create(n_mels: int, n_fft: int, sample_rate: int) -> MelFilterBank:
        n_freqs = n_fft // 2 + 1
        edges = mel_bin_edges(n_mels, n_fft, sample_rate)
        weights = np.zeros((n_mels, n_freqs), dtype=np.float64)

        for m in range(n_mels):
            left, center, right = int(edges[m]), int(edges[m + 1]), int(edges[m + 2])
            for k in range(left, min(center, n_freqs)):
                weights[m, k] = (k - left) / (center - left)
            for k in range(center, min(right, n_freqs)):
                weights[m, k] = (right - k) / (right - center)

        weights.setflags(write=False)
        edges.setflags(write=False)
        return MelFilterBank(
            n_mels=n_mels,
            n_fft=n_fft,
            sample_rate=sample_rate,
            weights=weights,
            bin_edges=edges,
        )


default_builder = MelFilterBankBuilder()
