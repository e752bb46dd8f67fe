"""Synthetic test signals for exercising the denoiser.

Every generator takes an explicit :class:`numpy.random.Generator` so that
results are reproducible; pass ``np.random.default_rng(seed)``.  All
generators return a mono :class:`~interpkit.types.AudioBuffer`.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .types import AudioBuffer

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_AMPLITUDE = 0.7


def _time_axis(duration: float, sample_rate: int) -> np.ndarray:
    if duration <= 0:
        raise ValueError("duration must be positive")
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive")
    return np.arange(int(duration * sample_rate)) / float(sample_rate)


def _sine(frequency: float, duration: float, sample_rate: int, amplitude: float) -> np.ndarray:
    t = _time_axis(duration, sample_rate)
    return amplitude * np.sin(2.0 * np.pi * frequency * t)


def sine_with_noise(
    rng: np.random.Generator,
    frequency: float = 440.0,
    duration: float = 3.0,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    amplitude: float = DEFAULT_AMPLITUDE,
    noise_level: float = 0.0,
) -> AudioBuffer:
    """Sine wave plus uniform noise in ``[-noise_level, noise_level]``."""

    samples = _sine(frequency, duration, sample_rate, amplitude)
    if noise_level:
        samples = samples + noise_level * rng.uniform(-1.0, 1.0, samples.size)
    return AudioBuffer(samples, sample_rate)


def sine_with_clicks(
    rng: np.random.Generator,
    frequency: float = 440.0,
    duration: float = 3.0,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    clicks: int = 20,
    min_width: int = 5,
    max_width: int = 20,
) -> AudioBuffer:
    """Clean sine overwritten by ``clicks`` bursts of random values in ``[-1, 1]``.

    Each burst starts at a random sample and is ``min_width`` to
    ``max_width - 1`` samples long, truncated at the end of the buffer.
    """

    samples = _sine(frequency, duration, sample_rate, DEFAULT_AMPLITUDE)
    n = samples.size
    for _ in range(clicks):
        start = int(rng.integers(0, n))
        width = int(rng.integers(min_width, max_width))
        stop = min(n, start + width)
        samples[start:stop] = rng.uniform(-1.0, 1.0, stop - start)
    return AudioBuffer(samples, sample_rate)


def sine_with_gaps(
    rng: np.random.Generator,
    frequency: float = 440.0,
    duration: float = 3.0,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    gaps: int = 10,
    min_length: int = 10,
    max_length: int = 100,
) -> AudioBuffer:
    """Clean sine with ``gaps`` runs of zeros, simulating dropped packets."""

    samples = _sine(frequency, duration, sample_rate, DEFAULT_AMPLITUDE)
    n = samples.size
    for _ in range(gaps):
        start = int(rng.integers(0, max(1, n - max_length)))
        length = int(rng.integers(min_length, max_length))
        samples[start : start + length] = 0.0
    return AudioBuffer(samples, sample_rate)


def multi_frequency(
    rng: np.random.Generator,
    frequencies: Sequence[float] = (220.0, 440.0, 880.0),
    duration: float = 3.0,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    noise_level: float = 0.05,
) -> AudioBuffer:
    """Average of unit sines at ``frequencies`` plus noise, scaled by 0.7."""

    if not len(frequencies):
        raise ValueError("at least one frequency is required")
    t = _time_axis(duration, sample_rate)
    value = np.zeros_like(t)
    for freq in frequencies:
        value += np.sin(2.0 * np.pi * freq * t)
    value /= len(frequencies)
    if noise_level:
        value += noise_level * rng.uniform(-1.0, 1.0, t.size)
    return AudioBuffer(DEFAULT_AMPLITUDE * value, sample_rate)


def inject_spikes(
    rng: np.random.Generator,
    samples: Sequence[float],
    count: int,
    magnitude: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Return a copy of ``samples`` with ``count`` spikes and their sorted indices.

    Each spike adds ``+/-magnitude`` (random sign) at a distinct position.
    """

    data = np.array(samples, dtype=float)
    if count > data.size:
        raise ValueError("count exceeds the number of samples")
    idx = np.sort(rng.choice(data.size, size=count, replace=False))
    signs = rng.choice([-1.0, 1.0], size=count)
    data[idx] += signs * magnitude
    return data, idx
