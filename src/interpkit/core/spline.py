"""Natural cubic spline interpolation.

On each interval ``[x_i, x_{i+1}]`` the spline is

.. math::

   S_i(x) = a_i + b_i (x - x_i) + c_i (x - x_i)^2 + d_i (x - x_i)^3

The ``c`` coefficients (half the second derivative at each knot) solve a
tridiagonal system with natural boundary conditions ``c_0 = c_n = 0``.  The
system is solved with the Thomas algorithm in ``O(n)``.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..errors import InvalidInputError
from .base import Interpolator, locate_interval, register_interpolator


def natural_spline_coefficients(
    x: np.ndarray, y: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Return ``(a, b, c, d)`` for the natural cubic spline through ``(x, y)``.

    ``a``, ``b`` and ``d`` have one entry per interval; ``c`` has one entry
    per knot so that ``c[n]`` (always zero) closes the last interval.
    """

    n = x.size - 1
    h = np.diff(x)
    if np.any(h <= 0):
        raise InvalidInputError("x values must be strictly increasing")

    alpha = np.zeros(n + 1, dtype=float)
    alpha[1:n] = 3.0 / h[1:] * (y[2:] - y[1:-1]) - 3.0 / h[:-1] * (y[1:-1] - y[:-2])

    # forward elimination
    l = np.ones(n + 1, dtype=float)
    mu = np.zeros(n + 1, dtype=float)
    z = np.zeros(n + 1, dtype=float)
    for i in range(1, n):
        l[i] = 2.0 * (x[i + 1] - x[i - 1]) - h[i - 1] * mu[i - 1]
        mu[i] = h[i] / l[i]
        z[i] = (alpha[i] - h[i - 1] * z[i - 1]) / l[i]

    # back substitution
    c = np.zeros(n + 1, dtype=float)
    for j in range(n - 1, -1, -1):
        c[j] = z[j] - mu[j] * c[j + 1]

    a = y[:-1].copy()
    b = (y[1:] - y[:-1]) / h - h * (c[1:] + 2.0 * c[:-1]) / 3.0
    d = (c[1:] - c[:-1]) / (3.0 * h)
    return a, b, c, d


class CubicSplineInterpolator(Interpolator):
    """Piecewise cubic with C2 continuity and zero end curvature."""

    key = "cubic_spline"
    name = "Cubic Spline (Natural)"
    description = (
        "Piecewise cubic polynomial with C2 continuity. "
        "Natural boundary conditions (zero second derivative at endpoints). "
        "Produces very smooth curves, excellent for visualization."
    )
    min_points = 3

    def __init__(self) -> None:
        super().__init__()
        self._a = np.empty(0, dtype=float)
        self._b = np.empty(0, dtype=float)
        self._c = np.empty(0, dtype=float)
        self._d = np.empty(0, dtype=float)

    def _fit(self) -> None:
        self._a, self._b, self._c, self._d = natural_spline_coefficients(self._x, self._y)

    @property
    def coefficients(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Copies of ``(a, b, c, d)``; ``c`` is per knot, the rest per interval."""

        return self._a.copy(), self._b.copy(), self._c.copy(), self._d.copy()

    def _locate(self, xs: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        i = locate_interval(self._x, xs)
        return i, xs - self._x[i]

    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        i, dx = self._locate(xs)
        return self._a[i] + dx * (self._b[i] + dx * (self._c[i] + dx * self._d[i]))

    def interpolate_derivative(self, x: float | np.ndarray) -> float | np.ndarray:
        """Return ``S'(x) = b_i + 2 c_i dx + 3 d_i dx^2``."""

        self._require_data()
        arr = np.asarray(x, dtype=float)
        i, dx = self._locate(arr.reshape(-1))
        out = (self._b[i] + dx * (2.0 * self._c[i] + 3.0 * self._d[i] * dx)).reshape(arr.shape)
        return float(out) if arr.ndim == 0 else out

    def interpolate_second_derivative(self, x: float | np.ndarray) -> float | np.ndarray:
        """Return ``S''(x) = 2 c_i + 6 d_i dx``."""

        self._require_data()
        arr = np.asarray(x, dtype=float)
        i, dx = self._locate(arr.reshape(-1))
        out = (2.0 * self._c[i] + 6.0 * self._d[i] * dx).reshape(arr.shape)
        return float(out) if arr.ndim == 0 else out

    def _equation(self) -> str:
        return (
            f"Piecewise cubic spline with {self._x.size - 1} segments "
            "(C2 continuous, natural boundaries)"
        )


register_interpolator(CubicSplineInterpolator.key, CubicSplineInterpolator)
