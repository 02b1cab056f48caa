"""Main API class for faster-logmel.

This module provides the LogMelExtractor class, the primary interface for
turning decoded audio into model-ready log-mel features. It validates
parameters, resamples input to the model rate, and drives the
spectrogram computation for single, long and batched requests.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple, Union

import numpy as np

from .chunker import AudioChunker
from .config import FeatureConfig
from .data_models import AudioChunk, ExtractionInfo, MelSpectrogram, Signal
from .mel_spectrogram import MelSpectrogramComputer
from .profiler import PerformanceProfiler
from .resampler import Resampler

logger = logging.getLogger(__name__)


class LogMelExtractor:
    """Main interface for faster-logmel functionality.

    Example:
        >>> extractor = LogMelExtractor(device="cpu")
        >>> signal = Signal(samples=audio, sample_rate=44100)
        >>> spectrogram, info = extractor.extract(signal)
        >>> spectrogram.shape
        (1, 80, 3000)

    Attributes:
        config: Feature configuration shared by every request
        device: Device used for the spectral transform
        batch_size: Frames per spectral batch
        method: Spectral method ("fft" or "dft")
        max_workers: Threads used by extract_batch
        resampler: Converts input audio to config.sample_rate
        computer: Log-mel spectrogram computer
        chunker: Splits long audio for extract_long
    """

    def __init__(
        self,
        config: Optional[FeatureConfig] = None,
        device: str = "cpu",
        batch_size: int = 500,
        method: str = "fft",
        max_workers: int = 1,
        chunk_overlap: float = 0.0,
    ):
        """Initialize log-mel extractor.

        Args:
            config: Feature configuration (default: FeatureConfig())
            device: Device to run on ("cuda" or "cpu")
            batch_size: Frames per spectral batch
            method: "fft" or "dft"
            max_workers: Threads used by extract_batch
            chunk_overlap: Overlap between chunks in extract_long, in seconds

        Raises:
            TypeError: If parameters have invalid types
            ValueError: If parameters are invalid
            RuntimeError: If CUDA is requested but not available
        """
        if config is None:
            config = FeatureConfig()

        if not isinstance(max_workers, int) or isinstance(max_workers, bool):
            raise TypeError(
                f"max_workers must be int, got {type(max_workers).__name__}"
            )
        if max_workers < 1:
            raise ValueError(
                f"max_workers must be positive integer, got {max_workers}"
            )

        if not isinstance(chunk_overlap, (int, float)):
            raise TypeError(
                f"chunk_overlap must be numeric, got {type(chunk_overlap).__name__}"
            )

        self.computer = MelSpectrogramComputer(
            config=config,
            device=device,
            batch_size=batch_size,
            method=method,
        )
        self.resampler = Resampler(target_rate=config.sample_rate)
        self.chunker = AudioChunker(
            chunk_length=config.chunk_length,
            overlap=chunk_overlap,
            sample_rate=config.sample_rate,
            lookahead=config.n_fft,
        )

        self.config = config
        self.device = device
        self.batch_size = batch_size
        self.method = method
        self.max_workers = max_workers

        logger.info(
            f"LogMelExtractor initialized: n_mels={config.n_mels}, "
            f"n_fft={config.n_fft}, hop_length={config.hop_length}, "
            f"device={device}, method={method}, batch_size={batch_size}"
        )

    def _prepare(
        self,
        audio: Union[Signal, np.ndarray],
        sample_rate: Optional[int],
    ) -> Tuple[np.ndarray, int]:
        """Validate audio and resample it to config.sample_rate."""
        if isinstance(audio, Signal):
            if sample_rate is not None and sample_rate != audio.sample_rate:
                raise ValueError(
                    f"sample_rate ({sample_rate}) does not match "
                    f"signal sample_rate ({audio.sample_rate})"
                )
            signal = audio
        elif isinstance(audio, np.ndarray):
            if sample_rate is None:
                raise ValueError(
                    "sample_rate is required when audio is a numpy array"
                )
            signal = Signal(samples=audio, sample_rate=sample_rate)
        else:
            raise TypeError(
                f"audio must be Signal or np.ndarray, "
                f"got {type(audio).__name__}"
            )

        samples = self.resampler.resample(signal.samples, signal.sample_rate)
        return samples, signal.sample_rate

    def _finish(
        self,
        spectrograms: List[MelSpectrogram],
        duration: float,
        source_rate: int,
        start_time: float,
    ) -> ExtractionInfo:
        processing_time = time.time() - start_time
        num_frames = sum(s.n_frames for s in spectrograms)

        stats = PerformanceProfiler.calculate_stats(
            audio_duration=duration,
            processing_time=processing_time,
            num_frames=num_frames,
            batch_size=self.batch_size,
            device=self.device,
        )
        logger.info(str(stats))

        return ExtractionInfo(
            duration=duration,
            source_sample_rate=source_rate,
            num_frames=num_frames,
            num_chunks=len(spectrograms),
            device=self.device,
            processing_time=processing_time,
        )

    def extract(
        self,
        audio: Union[Signal, np.ndarray],
        sample_rate: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Tuple[MelSpectrogram, ExtractionInfo]:
        """Compute one log-mel spectrogram for audio.

        Frames beyond config.max_frames are dropped.

        Args:
            audio: Signal, or 1D numpy array of samples in [-1, 1]
            sample_rate: Sample rate of a numpy array input in Hz
            timeout: Optional time budget in seconds

        Returns:
            spectrogram: Normalized log-mel features
            info: Extraction metadata

        Raises:
            TypeError: If audio has an unsupported type
            ValueError: If audio is not 1D or sample_rate is missing
            TimeoutError: If the time budget runs out
        """
        start_time = time.time()
        samples, source_rate = self._prepare(audio, sample_rate)
        duration = len(samples) / self.config.sample_rate

        spectrogram = self.computer.compute(samples, timeout=timeout)
        info = self._finish([spectrogram], duration, source_rate, start_time)
        return spectrogram, info

    def extract_long(
        self,
        audio: Union[Signal, np.ndarray],
        sample_rate: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Tuple[List[MelSpectrogram], ExtractionInfo]:
        """Compute one spectrogram per chunk_length window of audio.

        Each chunk but the last is analysed with n_fft samples of lookahead,
        so full chunks give exactly max_frames frames and the next chunk
        continues on the following frame.

        Args:
            audio: Signal, or 1D numpy array of samples in [-1, 1]
            sample_rate: Sample rate of a numpy array input in Hz
            timeout: Optional time budget in seconds for the whole request

        Returns:
            spectrograms: One spectrogram per chunk, in time order
            info: Extraction metadata

        Raises:
            TypeError: If audio has an unsupported type
            ValueError: If audio is not 1D or sample_rate is missing
            TimeoutError: If the time budget runs out
        """
        start_time = time.time()
        deadline = None if timeout is None else time.monotonic() + timeout
        samples, source_rate = self._prepare(audio, sample_rate)
        duration = len(samples) / self.config.sample_rate

        if len(samples) == 0:
            chunks = [AudioChunk(audio=samples, start_time=0.0, end_time=0.0, chunk_index=0)]
        else:
            chunks = self.chunker.chunk_audio(samples)
        spectrograms = []
        for chunk in chunks:
            remaining = None
            if deadline is not None:
                remaining = max(0.0, deadline - time.monotonic())
            spectrograms.append(
                self.computer.compute(
                    chunk.audio,
                    timeout=remaining,
                    start_time=chunk.start_time,
                )
            )

        info = self._finish(spectrograms, duration, source_rate, start_time)
        return spectrograms, info

    def extract_batch(
        self,
        signals: List[Signal],
        timeout: Optional[float] = None,
    ) -> List[Tuple[MelSpectrogram, ExtractionInfo]]:
        """Compute spectrograms for several signals.

        Requests run on a pool of max_workers threads and share the window
        and filterbank read-only.

        Args:
            signals: Signals to process
            timeout: Optional time budget in seconds per signal

        Returns:
            List of (spectrogram, info) tuples in the same order as signals

        Raises:
            TypeError: If signals is not a list or contains non-Signal items
            ValueError: If signals is empty
        """
        if not isinstance(signals, list):
            raise TypeError(
                f"signals must be list, got {type(signals).__name__}"
            )
        if not signals:
            raise ValueError("signals cannot be empty")
        for i, signal in enumerate(signals):
            if not isinstance(signal, Signal):
                raise TypeError(
                    f"signals[{i}] must be Signal, got {type(signal).__name__}"
                )

        if self.max_workers == 1:
            return [self.extract(signal, timeout=timeout) for signal in signals]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self.extract, signal, None, timeout)
                for signal in signals
            ]
            return [future.result() for future in futures]
