"""Piecewise cubic Hermite interpolation."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..errors import InvalidInputError
from .base import Interpolator, locate_interval, prepare_points, register_interpolator


def estimate_slopes(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Finite-difference slope estimates at every knot.

    Interior knots use the central difference over their two neighbours; the
    first and last knots use forward and backward differences.
    """

    m = np.empty_like(y)
    m[1:-1] = (y[2:] - y[:-2]) / (x[2:] - x[:-2])
    m[0] = (y[1] - y[0]) / (x[1] - x[0])
    m[-1] = (y[-1] - y[-2]) / (x[-1] - x[-2])
    return m


class HermiteInterpolator(Interpolator):
    """Cubic Hermite segments built from values and slopes.

    Slopes are estimated by :func:`estimate_slopes` unless supplied through
    :meth:`set_data_with_derivatives`.  Each segment is evaluated with the
    four Hermite basis polynomials on the local parameter ``t`` in ``[0, 1]``.
    """

    key = "hermite"
    name = "Hermite Interpolation"
    description = (
        "Piecewise cubic interpolation using function values AND derivatives. "
        "Produces C1 continuous curves. Derivatives estimated using finite differences."
    )

    def __init__(self) -> None:
        super().__init__()
        self._m = np.empty(0, dtype=float)

    def _fit(self) -> None:
        self._m = estimate_slopes(self._x, self._y)

    def set_data_with_derivatives(
        self,
        x: Sequence[float],
        y: Sequence[float],
        derivatives: Sequence[float],
    ) -> None:
        """Fit using caller-supplied slopes ``derivatives`` at each ``x``."""

        if derivatives is None:
            raise InvalidInputError("Input arrays cannot be None")
        m = np.asarray(derivatives, dtype=float).reshape(-1)
        xs = np.asarray(x, dtype=float).reshape(-1) if x is not None else None
        if xs is not None and m.size != xs.size:
            raise InvalidInputError("All arrays must have the same length")
        if not np.all(np.isfinite(m)):
            raise InvalidInputError("derivatives must contain only finite values")
        sorted_x, sorted_y = prepare_points(x, y, self.min_points)
        order = np.argsort(xs, kind="mergesort")
        self._x, self._y, self._m = sorted_x, sorted_y, m[order]

    @property
    def derivatives(self) -> np.ndarray:
        return self._m.copy()

    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        i = locate_interval(self._x, xs)
        x0 = self._x[i]
        h = self._x[i + 1] - x0
        t = (xs - x0) / h

        h00 = (1 + 2 * t) * (1 - t) ** 2
        h10 = t * (1 - t) ** 2
        h01 = t * t * (3 - 2 * t)
        h11 = t * t * (t - 1)

        return (
            self._y[i] * h00
            + h * self._m[i] * h10
            + self._y[i + 1] * h01
            + h * self._m[i + 1] * h11
        )

    def _equation(self) -> str:
        return f"Piecewise cubic Hermite with {self._x.size - 1} segments (C1 continuous)"


register_interpolator(HermiteInterpolator.key, HermiteInterpolator)
