"""Audio chunking for long audio support.

A single spectrogram covers at most max_frames hops (30 seconds with the
default configuration). This module splits longer signals into
consecutive chunks so that each can be analysed on its own.
"""

from typing import List

import numpy as np

from .data_models import AudioChunk


class AudioChunker:
    """Splits long audio into chunks of at most chunk_length seconds.

    Every chunk except the last also carries `lookahead` samples past its
    end, zero-filled beyond the end of the audio. With a lookahead of one
    analysis window, the last frame of a full chunk reaches the first frame
    of the next one and no samples fall between chunks.

    Attributes:
        chunk_length: Duration of each chunk in seconds
        overlap: Overlap duration between consecutive chunks in seconds
        sample_rate: Audio sample rate in Hz
        lookahead: Extra samples appended to every chunk but the last
    """

    def __init__(
        self,
        chunk_length: float = 30.0,
        overlap: float = 0.0,
        sample_rate: int = 16000,
        lookahead: int = 0,
    ):
        """Initialize audio chunker.

        Args:
            chunk_length: Chunk duration in seconds (default: 30.0)
            overlap: Overlap duration in seconds (default: 0.0)
            sample_rate: Audio sample rate in Hz (default: 16000)
            lookahead: Extra samples per non-final chunk (default: 0)

        Raises:
            ValueError: If chunk_length <= overlap or if values are out of range
        """
        if chunk_length <= 0:
            raise ValueError(
                f"chunk_length must be positive, got {chunk_length}"
            )
        if overlap < 0:
            raise ValueError(
                f"overlap must be non-negative, got {overlap}"
            )
        if overlap >= chunk_length:
            raise ValueError(
                f"overlap ({overlap}s) must be less than chunk_length ({chunk_length}s)"
            )
        if sample_rate <= 0:
            raise ValueError(
                f"sample_rate must be positive, got {sample_rate}"
            )
        if lookahead < 0:
            raise ValueError(
                f"lookahead must be non-negative, got {lookahead}"
            )

        self.chunk_length = chunk_length
        self.overlap = overlap
        self.sample_rate = sample_rate
        self.lookahead = lookahead

    def chunk_audio(
        self,
        audio: np.ndarray,
    ) -> List[AudioChunk]:
        """Split audio into consecutive, optionally overlapping chunks.

        Audio no longer than chunk_length comes back as a single chunk.

        Args:
            audio: Audio samples as numpy array (1D)

        Returns:
            List of AudioChunk objects in time order. start_time and
            end_time describe the chunk without its lookahead.

        Raises:
            ValueError: If audio is empty or has invalid shape
        """
        if audio.ndim != 1:
            raise ValueError(
                f"audio must be 1-dimensional, got shape {audio.shape}"
            )
        if len(audio) == 0:
            raise ValueError("audio cannot be empty")

        audio_duration = len(audio) / self.sample_rate

        if audio_duration <= self.chunk_length:
            return [
                AudioChunk(
                    audio=audio,
                    start_time=0.0,
                    end_time=audio_duration,
                    chunk_index=0,
                )
            ]

        chunk_samples = int(self.chunk_length * self.sample_rate)
        stride_samples = chunk_samples - int(self.overlap * self.sample_rate)

        chunks = []
        start_sample = 0

        while start_sample < len(audio):
            end_sample = min(start_sample + chunk_samples, len(audio))
            last = end_sample >= len(audio)

            if last or self.lookahead == 0:
                chunk_audio = audio[start_sample:end_sample]
            else:
                chunk_audio = audio[start_sample:end_sample + self.lookahead]
                missing = chunk_samples + self.lookahead - len(chunk_audio)
                if missing > 0:
                    chunk_audio = np.pad(chunk_audio, (0, missing))

            chunks.append(
                AudioChunk(
                    audio=chunk_audio,
                    start_time=start_sample / self.sample_rate,
                    end_time=end_sample / self.sample_rate,
                    chunk_index=len(chunks),
                )
            )
            if last:
                break
            start_sample += stride_samples

        return chunks
