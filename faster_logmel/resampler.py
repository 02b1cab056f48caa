"""Linear-interpolation sample-rate conversion."""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class Resampler:
    """Converts PCM samples from an arbitrary rate to a fixed target rate.

    Each output sample is a convex combination of the two nearest source
    samples. When the upper neighbour is past the end of the input the
    lower sample is used on its own.

    Attributes:
        target_rate: Output sample rate in Hz
    """

    def __init__(self, target_rate: int = 16000):
        """Initialize resampler.

        Args:
            target_rate: Output sample rate in Hz (default: 16000)

        Raises:
            TypeError: If target_rate is not an integer
            ValueError: If target_rate is not positive
        """
        if not isinstance(target_rate, int) or isinstance(target_rate, bool):
            raise TypeError(
                f"target_rate must be int, got {type(target_rate).__name__}"
            )
        if target_rate <= 0:
            raise ValueError(
                f"target_rate must be positive, got {target_rate}"
            )

        self.target_rate = target_rate

    def output_length(self, input_length: int, source_rate: int) -> int:
        """Number of samples produced for input_length samples at source_rate."""
        if source_rate == self.target_rate:
            return input_length
        ratio = source_rate / self.target_rate
        return int(input_length / ratio)

    def resample(
        self,
        samples: np.ndarray,
        source_rate: int,
    ) -> np.ndarray:
        """Resample samples from source_rate to the target rate.

        Args:
            samples: Audio samples (1D)
            source_rate: Sample rate of the input in Hz

        Returns:
            Resampled samples as float32. The input object itself is
            returned when source_rate already equals the target rate.

        Raises:
            TypeError: If source_rate is not an integer
            ValueError: If source_rate is not positive or samples is not 1D
        """
        if not isinstance(source_rate, int) or isinstance(source_rate, bool):
            raise TypeError(
                f"source_rate must be int, got {type(source_rate).__name__}"
            )
        if source_rate <= 0:
            raise ValueError(
                f"source_rate must be positive, got {source_rate}"
            )
        samples = np.asarray(samples)
        if samples.ndim != 1:
            raise ValueError(
                f"samples must be 1-dimensional, got shape {samples.shape}"
            )

        if source_rate == self.target_rate:
            return samples

        ratio = source_rate / self.target_rate
        new_length = self.output_length(len(samples), source_rate)
        result = np.zeros(new_length, dtype=np.float32)

        src_idx = np.arange(new_length, dtype=np.float64) * ratio
        lower = src_idx.astype(np.int64)
        frac = (src_idx - lower).astype(np.float32)
        source = samples.astype(np.float32, copy=False)

        both = lower + 1 < len(samples)
        result[both] = (
            source[lower[both]] * (1 - frac[both])
            + source[lower[both] + 1] * frac[both]
        )
        # Upper neighbour missing: hold the last sample.
        tail = ~both & (lower < len(samples))
        result[tail] = source[lower[tail]]

        logger.debug(
            f"Resampled {len(samples)} samples at {source_rate} Hz to "
            f"{new_length} samples at {self.target_rate} Hz"
        )
        return result
