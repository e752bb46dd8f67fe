"""Sample generation over an interval.

Samples are produced from any callable ``f(x) -> float``; in practice this
is an :class:`~interpkit.expression.ExpressionEvaluator`.  Two spacings are
offered: uniform, and Chebyshev nodes, which cluster towards the interval
ends and keep high-degree polynomial fits from oscillating (the Runge
phenomenon).
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..errors import InvalidInputError
from ..types import SampleSet
from .base import Interpolator, evenly_spaced

Function = Callable[[float], float]


def _validate_interval(x_min: float, x_max: float, n: int) -> None:
    if n < 2:
        raise InvalidInputError("Number of samples must be at least 2")
    if not (np.isfinite(x_min) and np.isfinite(x_max)):
        raise InvalidInputError("Interval bounds must be finite")
    if x_min >= x_max:
        raise InvalidInputError(f"x_min must be less than x_max, got [{x_min}, {x_max}]")


def chebyshev_nodes(x_min: float, x_max: float, n: int) -> np.ndarray:
    """Return ``n`` Chebyshev nodes on ``[x_min, x_max]`` in ascending order.

    ``x_i = mid + half * cos((2i + 1) * pi / (2n))`` for ``i = 0 .. n-1``.
    The cosine is decreasing in ``i``, so reversing the array sorts it.
    """

    mid = (x_min + x_max) / 2.0
    half = (x_max - x_min) / 2.0
    i = np.arange(n)
    nodes = mid + half * np.cos((2.0 * i + 1.0) * np.pi / (2.0 * n))
    return nodes[::-1].copy()


class SampleGenerator:
    """Evaluate ``function`` on uniform or Chebyshev grids."""

    def __init__(self, function: Function):
        if not callable(function):
            raise InvalidInputError("function must be callable")
        self.function = function

    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        return np.array([self.function(float(x)) for x in xs], dtype=float)

    def generate_uniform_samples(self, x_min: float, x_max: float, n: int) -> SampleSet:
        """Return ``n`` evenly spaced samples on ``[x_min, x_max]``."""

        _validate_interval(x_min, x_max, n)
        xs = evenly_spaced(x_min, x_max, n)
        return SampleSet(xs, self._evaluate(xs))

    def generate_chebyshev_samples(self, x_min: float, x_max: float, n: int) -> SampleSet:
        """Return ``n`` samples at Chebyshev nodes, sorted by ``x``."""

        _validate_interval(x_min, x_max, n)
        xs = chebyshev_nodes(x_min, x_max, n)
        return SampleSet(xs, self._evaluate(xs))

    def generate_samples(self, x_min: float, x_max: float, n: int, *, chebyshev: bool = True) -> SampleSet:
        if chebyshev:
            return self.generate_chebyshev_samples(x_min, x_max, n)
        return self.generate_uniform_samples(x_min, x_max, n)

    def error_profile(
        self,
        interpolator: Interpolator,
        x_min: float,
        x_max: float,
        test_points: int = 1000,
    ) -> np.ndarray:
        """Absolute deviation of ``interpolator`` from the function on a dense grid."""

        xs = evenly_spaced(x_min, x_max, test_points)
        actual = self._evaluate(xs)
        return np.abs(actual - interpolator.interpolate(xs))

    def calculate_max_error(
        self,
        interpolator: Interpolator,
        x_min: float,
        x_max: float,
        test_points: int = 1000,
    ) -> float:
        """Maximum absolute error of ``interpolator`` over ``test_points`` samples."""

        return float(np.max(self.error_profile(interpolator, x_min, x_max, test_points)))
