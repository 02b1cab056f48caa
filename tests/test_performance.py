"""Tests for profiling utilities."""

import pytest
import torch

from faster_logmel.profiler import PerformanceProfiler, cuda_memory_manager


class TestPerformanceProfiler:
    """Tests for PerformanceProfiler."""

    def test_calculate_stats(self):
        """Test performance stats calculation."""
        stats = PerformanceProfiler.calculate_stats(
            audio_duration=30.0,
            processing_time=0.5,
            num_frames=3000,
            batch_size=500,
            device="cpu",
        )

        assert stats.audio_duration == 30.0
        assert stats.processing_time == 0.5
        assert stats.rtf == pytest.approx(0.5 / 30.0)
        assert stats.throughput == pytest.approx(30.0 / 0.5)
        assert stats.num_frames == 3000
        assert stats.batch_size == 500
        assert stats.device == "cpu"

    def test_calculate_stats_zero_duration(self):
        """Test stats calculation with zero duration."""
        stats = PerformanceProfiler.calculate_stats(
            audio_duration=0.0,
            processing_time=1.0,
            num_frames=1,
            batch_size=1,
            device="cpu",
        )

        assert stats.rtf == 0.0

    def test_calculate_stats_zero_time(self):
        """Test stats calculation with zero processing time."""
        stats = PerformanceProfiler.calculate_stats(
            audio_duration=60.0,
            processing_time=0.0,
            num_frames=3000,
            batch_size=1,
            device="cpu",
        )

        assert stats.throughput == 0.0

    def test_str(self):
        """Test the human-readable summary."""
        stats = PerformanceProfiler.calculate_stats(
            audio_duration=10.0,
            processing_time=1.0,
            num_frames=997,
            batch_size=500,
            device="cpu",
        )

        text = str(stats)

        assert "RTF: 0.1000" in text
        assert "frames: 997" in text
        assert "device: cpu" in text


class TestCudaMemoryManager:
    """Tests for cuda_memory_manager context manager."""

    @pytest.mark.skipif(not torch.cuda.is_available(), reason="CUDA not available")
    def test_cuda_memory_manager(self):
        """Test CUDA memory manager clears cache."""
        with cuda_memory_manager():
            tensor = torch.randn(1000, 1000, device="cuda")
            assert torch.cuda.memory_allocated() > 0

        del tensor
        torch.cuda.empty_cache()

    def test_cuda_memory_manager_cpu(self):
        """Test CUDA memory manager on CPU (should not error)."""
        with cuda_memory_manager():
            tensor = torch.randn(100, 100)
            assert tensor is not None
