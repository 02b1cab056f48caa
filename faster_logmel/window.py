"""Analysis window construction."""

import numpy as np


def hann_window(length: int) -> np.ndarray:
    """Symmetric Hann window: 0.5 * (1 - cos(2*pi*i / (N - 1)))."""
    i = np.arange(length, dtype=np.float64)
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * i / (length - 1)))


class Windower:
    """Produces the fixed-length Hann window shared by every frame.

    The window is computed once at construction and exposed read-only.

    Attributes:
        window_length: Number of coefficients (the FFT size)
        window: Read-only float64 array of window coefficients
    """

    def __init__(self, window_length: int = 400):
        """Initialize windower.

        Args:
            window_length: Window length in samples (default: 400)

        Raises:
            TypeError: If window_length is not an integer
            ValueError: If window_length is less than 2
        """
        if not isinstance(window_length, int) or isinstance(window_length, bool):
            raise TypeError(
                f"window_length must be int, got {type(window_length).__name__}"
            )
        if window_length < 2:
            raise ValueError(
                f"window_length must be >= 2, got {window_length}"
            )

        self.window_length = window_length
        window = hann_window(window_length)
        window.setflags(write=False)
        self.window = window

    def __len__(self) -> int:
        return self.window_length

    def apply(self, frames: np.ndarray) -> np.ndarray:
        """Multiply frames (..., window_length) by the window."""
        return frames * self.window
