"""Benchmark the reference DFT path against the FFT path.

This script times log-mel extraction with both spectral methods for
various audio durations and reports the largest difference between
their outputs.
"""

import argparse
import time

import numpy as np
import torch

from faster_logmel import LogMelExtractor


def generate_test_audio(duration: float, sample_rate: int = 16000) -> np.ndarray:
    """Generate synthetic audio for testing.

    Args:
        duration: Audio duration in seconds
        sample_rate: Sample rate in Hz

    Returns:
        Audio samples as numpy array
    """
    num_samples = int(duration * sample_rate)
    return (0.1 * np.random.randn(num_samples)).astype(np.float32)


def benchmark_method(
    method: str,
    device: str,
    audio_durations: list,
    batch_size: int = 500,
    num_runs: int = 3,
):
    """Benchmark extraction with one spectral method.

    Args:
        method: Spectral method ("fft" or "dft")
        device: Device to use ("cpu" or "cuda")
        audio_durations: List of audio durations to test
        batch_size: Frames per spectral batch
        num_runs: Number of runs per duration for averaging

    Returns:
        List of result dictionaries
    """
    print(f"\n{'='*60}")
    print(f"Benchmarking {method.upper()} on {device.upper()} (batch_size={batch_size})")
    print(f"{'='*60}\n")

    extractor = LogMelExtractor(device=device, batch_size=batch_size, method=method)

    results = []

    for duration in audio_durations:
        print(f"Testing {duration}s audio...")

        audio = generate_test_audio(duration)

        # Warm-up run
        extractor.extract(audio, sample_rate=16000)

        run_times = []
        for _ in range(num_runs):
            start_time = time.perf_counter()
            spectrogram, info = extractor.extract(audio, sample_rate=16000)
            run_times.append(time.perf_counter() - start_time)

        avg_time = np.mean(run_times)
        std_time = np.std(run_times)

        results.append({
            "duration": duration,
            "avg_time": avg_time,
            "std_time": std_time,
            "rtf": avg_time / duration,
            "num_frames": info.num_frames,
            "features": spectrogram.features,
        })

        print(f"  Frames: {info.num_frames}")
        print(f"  Avg time: {avg_time:.3f}s ± {std_time:.3f}s")
        print(f"  RTF: {avg_time / duration:.4f}")
        print()

    return results


def compare_results(dft_results, fft_results):
    """Compare DFT and FFT results.

    Args:
        dft_results: Results from DFT benchmark
        fft_results: Results from FFT benchmark
    """
    print(f"\n{'='*60}")
    print("DFT vs FFT Comparison")
    print(f"{'='*60}\n")

    print(f"{'Duration':<12} {'DFT Time':<12} {'FFT Time':<12} {'Speedup':<12} {'Max Diff':<12}")
    print("-" * 60)

    for dft_res, fft_res in zip(dft_results, fft_results):
        speedup = dft_res["avg_time"] / fft_res["avg_time"]
        max_diff = float(np.max(np.abs(dft_res["features"] - fft_res["features"])))

        print(
            f"{dft_res['duration']:<12.1f} "
            f"{dft_res['avg_time']:<12.3f} "
            f"{fft_res['avg_time']:<12.3f} "
            f"{speedup:<12.1f}x "
            f"{max_diff:<12.2e}"
        )

    print()


def main():
    parser = argparse.ArgumentParser(description="Benchmark DFT vs FFT spectral analysis")
    parser.add_argument(
        "--durations",
        type=float,
        nargs="+",
        default=[1.0, 5.0, 10.0, 30.0],
        help="Audio durations to test in seconds (default: 1 5 10 30)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=500,
        help="Frames per spectral batch (default: 500)",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=3,
        help="Number of runs per duration (default: 3)",
    )
    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        choices=["cpu", "cuda"],
        help="Device for the FFT path (default: cpu)",
    )

    args = parser.parse_args()

    if args.device == "cuda" and not torch.cuda.is_available():
        print("GPU not available, falling back to CPU")
        args.device = "cpu"

    print("faster-logmel DFT vs FFT Benchmark")
    print(f"Device: {args.device}")
    print(f"Batch size: {args.batch_size}")
    print(f"Runs per duration: {args.runs}")
    print(f"Durations: {args.durations}")

    dft_results = benchmark_method(
        method="dft",
        device="cpu",
        audio_durations=args.durations,
        batch_size=args.batch_size,
        num_runs=args.runs,
    )
    fft_results = benchmark_method(
        method="fft",
        device=args.device,
        audio_durations=args.durations,
        batch_size=args.batch_size,
        num_runs=args.runs,
    )

    compare_results(dft_results, fft_results)


if __name__ == "__main__":
    main()
