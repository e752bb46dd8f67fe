"""Common type helpers for interpkit.

This module defines lightweight containers exchanged between the core
components and their callers.  They carry plain numpy arrays and a few
scalars so that nothing mutable is shared across the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


@dataclass(frozen=True)
class Window:
    """Index based window used for segmenting sequences."""

    start: int
    end: int

    def expand(self, margin: int, limit: int) -> "Window":
        """Return the window grown by ``margin`` on both sides, clipped to ``[0, limit)``."""

        return Window(max(0, self.start - margin), min(limit, self.end + margin))


@dataclass
class SampleSet:
    """Container for paired x and y arrays."""

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self) -> None:
        self.x = np.asarray(self.x, dtype=float)
        self.y = np.asarray(self.y, dtype=float)
        if self.x.shape != self.y.shape:
            raise ValueError("x and y must have the same length")

    def __len__(self) -> int:
        return int(self.x.size)

    def __iter__(self):
        # allows ``x, y = samples``
        yield self.x
        yield self.y


@dataclass
class AudioBuffer:
    """Sample buffer plus the metadata needed to write it back out.

    ``samples`` is either one-dimensional (mono or interleaved) or shaped
    ``(frames, channels)``.
    """

    samples: np.ndarray
    sample_rate: int
    channels: int = 1

    def __post_init__(self) -> None:
        self.samples = np.asarray(self.samples, dtype=float)
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        if self.channels < 1:
            raise ValueError("channels must be at least 1")

    @property
    def duration(self) -> float:
        """Return the buffer length in seconds."""

        return self.frames / self.sample_rate

    @property
    def frames(self) -> int:
        if self.samples.ndim == 2:
            return int(self.samples.shape[0])
        return int(self.samples.size // self.channels)

    def to_mono(self) -> np.ndarray:
        """Average all channels into a single-channel array."""

        if self.channels == 1 and self.samples.ndim == 1:
            return self.samples.copy()
        data = self.samples
        if data.ndim == 1:
            data = data[: self.frames * self.channels].reshape(-1, self.channels)
        return data.mean(axis=1)


@dataclass
class DegreeSearchResult:
    """Outcome of a minimum sample-count search.

    Attributes
    ----------
    n:
        Sample count that met the target, or the largest count tried.
    error:
        Maximum absolute error achieved with ``n`` samples.
    history:
        Every ``(n, error)`` pair examined, in search order.
    converged:
        ``True`` when ``error`` is within the requested target.
    """

    n: int
    error: float
    history: List[Tuple[int, float]] = field(default_factory=list)
    converged: bool = False

    def __iter__(self):
        # ``n, error, history = optimizer.find_minimum_degree(...)``
        yield self.n
        yield self.error
        yield self.history


@dataclass
class DenoiseReport:
    """Statistics gathered during one :meth:`Denoiser.repair` call."""

    length: int
    filter_size: int
    passes: int
    mean: float = 0.0
    stddev: float = 0.0
    threshold: float = 0.0
    outliers: int = 0
    interpolated: int = 0
    fallback_windows: int = 0

    @property
    def outlier_ratio(self) -> float:
        return self.outliers / self.length if self.length else 0.0


@dataclass
class InterpolationResult:
    """Result of fitting one interpolation method to a dataset."""

    method: str
    name: str
    x: np.ndarray
    y: np.ndarray
    rms_error: float
    max_error: float
    elapsed: float
    equation: str = ""

    def __str__(self) -> str:
        return (
            f"{self.name}: RMSE={self.rms_error:.6f}, MaxErr={self.max_error:.6f}, "
            f"Time={self.elapsed * 1000:.2f}ms"
        )
