"""Piecewise linear interpolation."""

from __future__ import annotations

import numpy as np

from .base import Interpolator, locate_interval, register_interpolator


class LinearInterpolator(Interpolator):
    """Connect consecutive points with straight segments.

    Outside the data range the first or last segment is extended, so
    extrapolation follows the boundary slope.
    """

    key = "linear"
    name = "Linear Interpolation"
    description = (
        "Simplest method - connects points with straight lines. "
        "Very fast, numerically stable, but not smooth (C0 continuous)."
    )

    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        i = locate_interval(self._x, xs)
        x0 = self._x[i]
        y0 = self._y[i]
        slope = (self._y[i + 1] - y0) / (self._x[i + 1] - x0)
        return y0 + slope * (xs - x0)

    def _equation(self) -> str:
        return f"Piecewise linear with {self._x.size - 1} segments"


register_interpolator(LinearInterpolator.key, LinearInterpolator)
