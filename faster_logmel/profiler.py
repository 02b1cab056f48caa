"""Performance profiling utilities.

This module provides tools for measuring the throughput of the feature
extraction pipeline and for releasing GPU memory after device work.
"""

from contextlib import contextmanager
from dataclasses import dataclass

import torch


@dataclass
class PerformanceStats:
    """Performance statistics for one extraction.

    Attributes:
        audio_duration: Total audio duration in seconds
        processing_time: Wall-clock processing time in seconds
        rtf: Real-time factor (processing_time / audio_duration)
        throughput: Audio seconds processed per wall-clock second
        num_frames: Number of frames analysed
        batch_size: Frames per spectral batch
        device: Device used for the spectral transform
    """
    audio_duration: float
    processing_time: float
    rtf: float
    throughput: float
    num_frames: int
    batch_size: int
    device: str

    def __str__(self) -> str:
        return (
            f"Performance: {self.audio_duration:.1f}s audio in {self.processing_time:.3f}s "
            f"(RTF: {self.rtf:.4f}, throughput: {self.throughput:.1f}x, "
            f"frames: {self.num_frames}, batch_size: {self.batch_size}, device: {self.device})"
        )


class PerformanceProfiler:
    """Derives real-time factor and throughput from timings."""

    @staticmethod
    def calculate_stats(
        audio_duration: float,
        processing_time: float,
        num_frames: int,
        batch_size: int,
        device: str,
    ) -> PerformanceStats:
        """Calculate performance statistics.

        Args:
            audio_duration: Total audio duration in seconds
            processing_time: Wall-clock processing time in seconds
            num_frames: Number of frames analysed
            batch_size: Frames per spectral batch
            device: Device used for processing

        Returns:
            PerformanceStats object with calculated metrics
        """
        rtf = processing_time / audio_duration if audio_duration > 0 else 0.0
        throughput = audio_duration / processing_time if processing_time > 0 else 0.0

        return PerformanceStats(
            audio_duration=audio_duration,
            processing_time=processing_time,
            rtf=rtf,
            throughput=throughput,
            num_frames=num_frames,
            batch_size=batch_size,
            device=device,
        )


@contextmanager
def cuda_memory_manager():
    """Context manager for CUDA memory management.

    Ensures GPU memory is cleared after operations complete.

    Example:
        >>> with cuda_memory_manager():
        ...     spectrogram = computer.compute(samples)
    """
    try:
        yield
    finally:
        if torch.cuda.is_available():
            torch.cuda.empty_cache()
