"""faster-logmel: log-mel feature extraction for speech recognition models.

This module turns decoded PCM audio into the fixed-shape, normalized
log-mel spectrogram tensor that Whisper-style acoustic models consume.

Example:
    >>> from faster_logmel import LogMelExtractor, Signal
    >>> extractor = LogMelExtractor(device="cpu")
    >>> spectrogram, info = extractor.extract(Signal(samples, 44100))
    >>> features = spectrogram.to_model_input()  # float32 [1, 80, n_frames]
"""

from .chunker import AudioChunker
from .config import FeatureConfig
from .data_models import (
    AudioChunk,
    ExtractionInfo,
    Frame,
    MelFilterBank,
    MelSpectrogram,
    Signal,
)
from .extractor import LogMelExtractor
from .mel_filterbank import MelFilterBankBuilder, hz_to_mel, mel_to_hz
from .mel_spectrogram import MelSpectrogramComputer, log_compress, normalize
from .profiler import PerformanceProfiler, PerformanceStats, cuda_memory_manager
from .resampler import Resampler
from .spectrum import FrameSpectrumExtractor
from .window import Windower, hann_window

__version__ = "0.1.0"

__all__ = [
    "AudioChunk",
    "AudioChunker",
    "ExtractionInfo",
    "FeatureConfig",
    "Frame",
    "FrameSpectrumExtractor",
    "LogMelExtractor",
    "MelFilterBank",
    "MelFilterBankBuilder",
    "MelSpectrogram",
    "MelSpectrogramComputer",
    "PerformanceProfiler",
    "PerformanceStats",
    "Resampler",
    "Signal",
    "Windower",
    "cuda_memory_manager",
    "hann_window",
    "hz_to_mel",
    "log_compress",
    "mel_to_hz",
    "normalize",
]
