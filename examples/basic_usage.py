"""Basic usage example for faster-logmel.

This example demonstrates:
1. Extracting features from a decoded signal
2. Converting integer PCM and resampling to 16 kHz
3. Handling audio longer than 30 seconds
4. Batch extraction and GPU usage
"""

import numpy as np
import torch

from faster_logmel import FeatureConfig, LogMelExtractor, Signal

# =============================================================================
# Example 1: Basic Extraction
# =============================================================================
print("=" * 70)
print("Example 1: Basic Extraction")
print("=" * 70)

# Initialize the extractor
# - device: "cuda" for GPU FFT, "cpu" for CPU-only
# - batch_size: Number of frames transformed at once
# - method: "fft" (fast) or "dft" (direct summation reference)
extractor = LogMelExtractor(
    device="cuda" if torch.cuda.is_available() else "cpu",
    batch_size=500,
)

# One second of a 440 Hz tone at 16 kHz
sample_rate = 16000
t = np.arange(sample_rate) / sample_rate
signal = Signal(samples=0.5 * np.sin(2 * np.pi * 440 * t), sample_rate=sample_rate)

spectrogram, info = extractor.extract(signal)

print(f"\nAudio duration: {info.duration:.2f}s")
print(f"Processing time: {info.processing_time * 1000:.1f}ms")
print(f"Frames: {info.num_frames}")
print(f"Device: {info.device}")
print(f"Feature shape: {spectrogram.shape}")
print(f"Value range: [{spectrogram.features.min():.3f}, {spectrogram.features.max():.3f}]")

# =============================================================================
# Example 2: Integer PCM and Resampling
# =============================================================================
print("\n" + "=" * 70)
print("Example 2: Integer PCM and Resampling")
print("=" * 70)

# A WAV decoder typically hands over 16-bit integers at the file's rate
pcm = (np.random.randn(44100 * 2) * 3000).astype(np.int16)
signal = Signal.from_pcm(pcm, bit_depth=16, sample_rate=44100)

spectrogram, info = extractor.extract(signal)

print(f"\nSource sample rate: {info.source_sample_rate}Hz")
print(f"Resampled duration: {info.duration:.2f}s")
print(f"Feature shape: {spectrogram.shape}")

# =============================================================================
# Example 3: Long Audio
# =============================================================================
print("\n" + "=" * 70)
print("Example 3: Long Audio")
print("=" * 70)

long_audio = np.random.randn(sample_rate * 75).astype(np.float32) * 0.1

# extract() keeps only the first 3000 frames (30 seconds)
spectrogram, info = extractor.extract(long_audio, sample_rate=sample_rate)
print(f"\nextract():      {spectrogram.n_frames} frames from {info.duration:.1f}s")

# extract_long() returns one spectrogram per 30-second chunk
spectrograms, info = extractor.extract_long(long_audio, sample_rate=sample_rate)
print(f"extract_long(): {info.num_chunks} chunks, {info.num_frames} frames total")
for s in spectrograms:
    print(f"  [{s.start_time:6.2f}s] {s.n_frames} frames")

# =============================================================================
# Example 4: Batch Extraction and Model Hand-off
# =============================================================================
print("\n" + "=" * 70)
print("Example 4: Batch Extraction and Model Hand-off")
print("=" * 70)

# large-v3 style models use 128 mel bands
batch_extractor = LogMelExtractor(
    config=FeatureConfig().for_n_mels(128),
    max_workers=4,
)

signals = [
    Signal(samples=np.random.randn(sample_rate * d).astype(np.float32) * 0.1, sample_rate=sample_rate)
    for d in (1, 3, 5, 10)
]

results = batch_extractor.extract_batch(signals, timeout=10.0)

for spectrogram, info in results:
    tensor = spectrogram.to_tensor()
    print(f"  {info.duration:5.1f}s -> tensor {tuple(tensor.shape)} {tensor.dtype}")

# =============================================================================
# Summary
# =============================================================================
print("\n" + "=" * 70)
print("Summary")
print("=" * 70)
print("""
faster-logmel turns decoded audio into Whisper-style log-mel features:

1. Initialize extractor:
   extractor = LogMelExtractor(config, device, batch_size, method)

2. Extract features:
   spectrogram, info = extractor.extract(signal)

3. Hand off to the model:
   spectrogram.to_model_input()   # float32 [1, n_mels, n_frames]
   spectrogram.to_tensor("cuda")  # torch tensor on the model's device
""")
