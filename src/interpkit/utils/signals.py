"""Signal processing helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def rms(data: Sequence[float]) -> float:
    """Return the root-mean-square of *data*.

    ``ValueError`` is raised for empty sequences.
    """

    arr = np.asarray(data, dtype=float)
    if arr.size == 0:
        raise ValueError("data must not be empty")
    return float(np.sqrt(np.mean(arr * arr)))


def centered_moving_average(data: Sequence[float], window: int) -> np.ndarray:
    """Compute a centered moving average of odd width *window*.

    The result has the same length as *data*.  Near the ends the window
    shrinks to the samples that exist, so every output is the mean of
    ``data[max(0, i - half) : min(n, i + half + 1)]``.  ``ValueError`` is
    raised if ``window`` is not a positive odd integer.
    """

    if window <= 0 or window % 2 == 0:
        raise ValueError("window must be a positive odd integer")
    arr = np.asarray(data, dtype=float)
    n = arr.size
    if n == 0:
        return arr.copy()
    half = window // 2
    csum = np.concatenate(([0.0], np.cumsum(arr)))
    idx = np.arange(n)
    lo = np.maximum(0, idx - half)
    hi = np.minimum(n, idx + half + 1)
    return (csum[hi] - csum[lo]) / (hi - lo)


def median_of(values: Sequence[float]) -> float:
    """Return the upper median of *values* (element ``len // 2`` once sorted)."""

    if len(values) == 0:
        raise ValueError("values must not be empty")
    ordered = np.sort(np.asarray(values, dtype=float))
    return float(ordered[ordered.size // 2])
