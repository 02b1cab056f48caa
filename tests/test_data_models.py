"""Tests for data models and feature configuration."""

import numpy as np
import pytest
import torch

from faster_logmel import FeatureConfig, MelSpectrogram, Signal


class TestSignal:
    """Test Signal validation and helpers."""

    def test_init(self):
        """Test that samples are stored as float32."""
        signal = Signal(samples=np.zeros(16000, dtype=np.float64), sample_rate=16000)

        assert signal.samples.dtype == np.float32
        assert len(signal) == 16000
        assert signal.duration == pytest.approx(1.0)

    def test_empty_signal(self):
        """Test that an empty signal is allowed."""
        signal = Signal(samples=np.zeros(0), sample_rate=8000)

        assert len(signal) == 0
        assert signal.duration == 0.0

    def test_invalid_sample_rate(self):
        """Test sample rate validation."""
        with pytest.raises(TypeError, match="sample_rate must be int"):
            Signal(samples=np.zeros(10), sample_rate=16000.0)

        with pytest.raises(ValueError, match="sample_rate must be positive"):
            Signal(samples=np.zeros(10), sample_rate=0)

    def test_invalid_shape(self):
        """Test that 2D samples raise ValueError."""
        with pytest.raises(ValueError, match="samples must be 1-dimensional"):
            Signal(samples=np.zeros((2, 10)), sample_rate=16000)

    def test_from_pcm_16bit(self):
        """Test 16-bit PCM normalization."""
        pcm = np.array([0, 32767, -32767, 16384], dtype=np.int16)

        signal = Signal.from_pcm(pcm, bit_depth=16, sample_rate=44100)

        np.testing.assert_allclose(signal.samples, [0.0, 1.0, -1.0, 16384 / 32767])
        assert signal.sample_rate == 44100
        assert signal.samples.dtype == np.float32

    def test_from_pcm_24bit(self):
        """Test 24-bit PCM normalization."""
        pcm = np.array([8388607, -8388607], dtype=np.int32)

        signal = Signal.from_pcm(pcm, bit_depth=24, sample_rate=48000)

        np.testing.assert_allclose(signal.samples, [1.0, -1.0])

    def test_from_pcm_invalid_bit_depth(self):
        """Test that unsupported bit depths raise ValueError."""
        with pytest.raises(ValueError, match="bit_depth must be one of"):
            Signal.from_pcm(np.zeros(4, dtype=np.int16), bit_depth=12, sample_rate=16000)


class TestMelSpectrogram:
    """Test the feature tensor hand-off."""

    @pytest.fixture
    def spectrogram(self):
        features = -np.arange(6, dtype=np.float32).reshape(2, 3) / 10
        return MelSpectrogram(features=features, sample_rate=16000, hop_length=160)

    def test_shape(self, spectrogram):
        """Test shape properties."""
        assert spectrogram.n_mels == 2
        assert spectrogram.n_frames == 3
        assert spectrogram.shape == (1, 2, 3)

    def test_to_model_input(self, spectrogram):
        """Test the contiguous [1, n_mels, n_frames] float32 array."""
        model_input = spectrogram.to_model_input()

        assert model_input.shape == (1, 2, 3)
        assert model_input.dtype == np.float32
        assert model_input.flags["C_CONTIGUOUS"]

    def test_flatten_is_row_major(self, spectrogram):
        """Test that flatten walks frames within each band."""
        flat = spectrogram.flatten()

        np.testing.assert_array_equal(flat, spectrogram.features.ravel(order="C"))
        assert flat[1] == spectrogram.features[0, 1]
        assert flat[3] == spectrogram.features[1, 0]

    def test_to_tensor(self, spectrogram):
        """Test conversion to a torch tensor."""
        tensor = spectrogram.to_tensor()

        assert isinstance(tensor, torch.Tensor)
        assert tuple(tensor.shape) == (1, 2, 3)
        assert tensor.dtype == torch.float32
        np.testing.assert_array_equal(tensor.numpy()[0], spectrogram.features)


class TestFeatureConfig:
    """Test FeatureConfig defaults and validation."""

    def test_defaults(self):
        """Test the model-contracted defaults."""
        config = FeatureConfig()

        assert config.sample_rate == 16000
        assert config.n_mels == 80
        assert config.n_fft == 400
        assert config.hop_length == 160
        assert config.max_frames == 3000
        assert config.n_freqs == 201
        assert config.chunk_length == 30.0
        assert config.n_samples == 480000

    def test_frozen(self):
        """Test that configuration cannot be mutated."""
        config = FeatureConfig()

        with pytest.raises(Exception):
            config.n_mels = 128

    def test_for_n_mels(self):
        """Test switching the band count."""
        config = FeatureConfig().for_n_mels(128)

        assert config.n_mels == 128
        assert config.n_fft == 400

    @pytest.mark.parametrize(
        "kwargs, error, message",
        [
            ({"n_fft": 1}, ValueError, "n_fft must be >= 2"),
            ({"sample_rate": 0}, ValueError, "sample_rate must be positive"),
            ({"n_mels": 0}, ValueError, "n_mels must be positive"),
            ({"hop_length": -160}, ValueError, "hop_length must be positive"),
            ({"max_frames": 0}, ValueError, "max_frames must be positive"),
            ({"n_mels": 80.0}, TypeError, "n_mels must be int"),
            ({"sample_rate": "16000"}, TypeError, "sample_rate must be int"),
        ],
    )
    def test_invalid(self, kwargs, error, message):
        """Test that invalid configuration is rejected before any computation."""
        with pytest.raises(error, match=message):
            FeatureConfig(**kwargs)
