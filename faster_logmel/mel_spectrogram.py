"""Log-mel spectrogram computation.

This module composes the window, the frame spectrum extractor and the mel
filterbank into the normalized feature tensor consumed by the acoustic
model.
"""

import logging
from contextlib import nullcontext
from typing import Optional

import numpy as np
import torch

from .config import FeatureConfig
from .data_models import MelSpectrogram
from .mel_filterbank import MelFilterBankBuilder, default_builder
from .profiler import cuda_memory_manager
from .spectrum import FrameSpectrumExtractor
from .window import Windower

logger = logging.getLogger(__name__)

LOG_FLOOR = 1e-10
NORM_SCALE = 4.0
NORM_FLOOR = -1.0


def log_compress(energies: np.ndarray) -> np.ndarray:
    """Natural log of band energies, floored at log(1e-10)."""
    return np.log(np.where(energies > LOG_FLOOR, energies, LOG_FLOOR))


def normalize(log_spec: np.ndarray) -> np.ndarray:
    """Shift by the global maximum, divide by 4 and clamp below at -1.

    Only the lower bound is clamped. Every value is at most the global
    maximum, so the result never exceeds 0.
    """
    max_val = log_spec.max()
    normalized = (log_spec - max_val) / NORM_SCALE
    return np.maximum(normalized, NORM_FLOOR)


class MelSpectrogramComputer:
    """Turns resampled audio into a normalized log-mel spectrogram.

    The window and the filterbank are built once at construction and shared
    read-only by every call, so one computer can serve many requests with
    the same configuration.

    Attributes:
        config: Feature configuration
        windower: Hann window of config.n_fft
        extractor: Frame spectrum extractor
        filterbank: Mel filterbank for (n_mels, n_fft, sample_rate)
        device: Device used for the spectral transform
    """

    def __init__(
        self,
        config: Optional[FeatureConfig] = None,
        device: str = "cpu",
        batch_size: int = 500,
        method: str = "fft",
        filterbank_builder: Optional[MelFilterBankBuilder] = None,
    ):
        """Initialize mel spectrogram computer.

        Args:
            config: Feature configuration (default: FeatureConfig())
            device: "cpu" or "cuda" (default: "cpu")
            batch_size: Frames per spectral batch (default: 500)
            method: "fft" or "dft" (default: "fft")
            filterbank_builder: Filterbank cache (default: module-wide cache)

        Raises:
            TypeError: If config is not a FeatureConfig
            ValueError: If component parameters are invalid
            RuntimeError: If CUDA is requested but not available
        """
        if config is None:
            config = FeatureConfig()
        if not isinstance(config, FeatureConfig):
            raise TypeError(
                f"config must be FeatureConfig, got {type(config).__name__}"
            )
        if filterbank_builder is None:
            filterbank_builder = default_builder

        self.config = config
        self.device = device
        self.windower = Windower(config.n_fft)
        self.extractor = FrameSpectrumExtractor(
            n_fft=config.n_fft,
            hop_length=config.hop_length,
            max_frames=config.max_frames,
            windower=self.windower,
            method=method,
            device=device,
            batch_size=batch_size,
        )
        self.filterbank = filterbank_builder.build(
            n_mels=config.n_mels,
            n_fft=config.n_fft,
            sample_rate=config.sample_rate,
        )
        # [n_freqs, n_mels] so a batch of power spectra maps straight to bands
        self._filters = torch.tensor(
            np.array(self.filterbank.weights.T), dtype=torch.float64
        ).to(torch.device(device))

    def num_frames(self, num_samples: int) -> int:
        return self.extractor.num_frames(num_samples)

    def mel_energies(
        self,
        samples: np.ndarray,
        timeout: Optional[float] = None,
    ) -> np.ndarray:
        """Filterbank-weighted power per band and frame.

        Returns:
            float64 array of shape (n_mels, n_frames)
        """
        n_frames = self.num_frames(len(samples))
        energies = np.empty((self.config.n_mels, n_frames), dtype=np.float64)

        manager = cuda_memory_manager() if self.device == "cuda" else nullcontext()
        with manager:
            for start, magnitudes in self.extractor.iter_spectra(samples, timeout=timeout):
                power = magnitudes * magnitudes
                band_energy = power @ self._filters
                end = start + band_energy.shape[0]
                energies[:, start:end] = band_energy.T.cpu().numpy()

        return energies

    def compute(
        self,
        samples: np.ndarray,
        timeout: Optional[float] = None,
        start_time: float = 0.0,
    ) -> MelSpectrogram:
        """Compute the normalized log-mel spectrogram of samples.

        Args:
            samples: Samples (1D) already at config.sample_rate
            timeout: Optional time budget in seconds
            start_time: Position of samples in the original audio (seconds)

        Returns:
            MelSpectrogram with float32 features in [-1, 0]

        Raises:
            ValueError: If samples is not 1-dimensional
            TimeoutError: If the time budget runs out
        """
        if samples.ndim != 1:
            raise ValueError(
                f"samples must be 1-dimensional, got shape {samples.shape}"
            )

        available = (len(samples) - self.config.n_fft) // self.config.hop_length
        if available > self.config.max_frames:
            logger.warning(
                f"Input has {available} frames, keeping the first "
                f"{self.config.max_frames} ({self.config.chunk_length:.1f}s)"
            )

        energies = self.mel_energies(samples, timeout=timeout)
        features = normalize(log_compress(energies)).astype(np.float32)

        logger.debug(
            f"Computed log-mel spectrogram: {features.shape[0]} mel bands x "
            f"{features.shape[1]} frames"
        )

        return MelSpectrogram(
            features=features,
            sample_rate=self.config.sample_rate,
            hop_length=self.config.hop_length,
            start_time=start_time,
        )
