"""Tests for AudioChunker functionality."""

import numpy as np
import pytest

from faster_logmel import AudioChunker


class TestAudioChunkerInitialization:
    """Test AudioChunker initialization and parameter validation."""

    def test_init_defaults(self):
        """Test initialization with default parameters."""
        chunker = AudioChunker()

        assert chunker.chunk_length == 30.0
        assert chunker.overlap == 0.0
        assert chunker.sample_rate == 16000
        assert chunker.lookahead == 0

    def test_init_invalid_chunk_length(self):
        """Test that non-positive chunk length raises ValueError."""
        with pytest.raises(ValueError, match="chunk_length must be positive"):
            AudioChunker(chunk_length=0)

    def test_init_invalid_overlap(self):
        """Test overlap validation."""
        with pytest.raises(ValueError, match="overlap must be non-negative"):
            AudioChunker(overlap=-1.0)

        with pytest.raises(ValueError, match="overlap.*must be less than chunk_length"):
            AudioChunker(chunk_length=10, overlap=10)

    def test_init_invalid_sample_rate(self):
        """Test that non-positive sample rate raises ValueError."""
        with pytest.raises(ValueError, match="sample_rate must be positive"):
            AudioChunker(sample_rate=0)


class TestAudioChunkerChunkAudio:
    """Test chunk_audio behaviour."""

    def test_short_audio_single_chunk(self):
        """Test that audio within chunk_length is returned whole."""
        chunker = AudioChunker()
        audio = np.zeros(16000 * 10, dtype=np.float32)

        chunks = chunker.chunk_audio(audio)

        assert len(chunks) == 1
        assert chunks[0].audio is audio
        assert chunks[0].start_time == 0.0
        assert chunks[0].end_time == pytest.approx(10.0)

    def test_long_audio_consecutive_chunks(self):
        """Test that long audio is split into consecutive chunks."""
        chunker = AudioChunker(chunk_length=30.0)
        audio = np.arange(16000 * 70, dtype=np.float32)

        chunks = chunker.chunk_audio(audio)

        assert [c.chunk_index for c in chunks] == [0, 1, 2]
        assert [c.start_time for c in chunks] == [0.0, 30.0, 60.0]
        assert [c.end_time for c in chunks] == [30.0, 60.0, 70.0]
        np.testing.assert_array_equal(np.concatenate([c.audio for c in chunks]), audio)

    def test_overlapping_chunks(self):
        """Test chunk boundaries with overlap."""
        chunker = AudioChunker(chunk_length=10.0, overlap=2.0)
        audio = np.zeros(16000 * 20, dtype=np.float32)

        chunks = chunker.chunk_audio(audio)

        assert [c.start_time for c in chunks] == [0.0, 8.0, 16.0]
        assert chunks[0].end_time == 10.0
        assert chunks[-1].end_time == 20.0

    def test_lookahead_extends_non_final_chunks(self):
        """Test that every chunk but the last carries the lookahead samples."""
        chunker = AudioChunker(chunk_length=1.0, sample_rate=1000, lookahead=100)
        audio = np.arange(2500, dtype=np.float32)

        chunks = chunker.chunk_audio(audio)

        assert [len(c.audio) for c in chunks] == [1100, 1100, 500]
        np.testing.assert_array_equal(chunks[0].audio, audio[:1100])
        np.testing.assert_array_equal(chunks[1].audio, audio[1000:2100])
        assert [c.end_time for c in chunks] == [1.0, 2.0, 2.5]

    def test_lookahead_zero_filled_past_end(self):
        """Test that lookahead beyond the end of the audio reads zeros."""
        chunker = AudioChunker(chunk_length=1.0, sample_rate=1000, lookahead=100)
        audio = np.ones(2050, dtype=np.float32)

        chunks = chunker.chunk_audio(audio)

        assert len(chunks[1].audio) == 1100
        assert np.all(chunks[1].audio[:1050] == 1.0)
        assert np.all(chunks[1].audio[1050:] == 0.0)
        assert len(chunks[2].audio) == 50

    def test_invalid_lookahead(self):
        """Test that negative lookahead raises ValueError."""
        with pytest.raises(ValueError, match="lookahead must be non-negative"):
            AudioChunker(lookahead=-1)

    def test_empty_audio(self):
        """Test that empty audio raises ValueError."""
        with pytest.raises(ValueError, match="audio cannot be empty"):
            AudioChunker().chunk_audio(np.zeros(0, dtype=np.float32))

    def test_invalid_shape(self):
        """Test that 2D audio raises ValueError."""
        with pytest.raises(ValueError, match="audio must be 1-dimensional"):
            AudioChunker().chunk_audio(np.zeros((2, 100), dtype=np.float32))
