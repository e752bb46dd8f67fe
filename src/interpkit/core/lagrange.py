"""Lagrange polynomial interpolation."""

from __future__ import annotations

import numpy as np

from .base import Interpolator, register_interpolator
from .polynomial import format_polynomial, lagrange_coefficients

MAX_DISPLAY_POINTS = 8


class LagrangeInterpolator(Interpolator):
    """Evaluate ``P(x) = sum_i y_i * L_i(x)`` directly from the basis products.

    Nothing is precomputed; each evaluation costs ``O(n^2)`` per point.  The
    displayed equation is obtained by expanding every basis polynomial and
    degrades to a summary above eight points.
    """

    key = "lagrange"
    name = "Lagrange Interpolation"
    description = (
        "Classical polynomial interpolation using Lagrange basis polynomials. "
        "Exact fit through all data points. Best for small datasets (n < 20)."
    )

    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        n = self._x.size
        result = np.zeros_like(xs)
        for i in range(n):
            term = np.full_like(xs, self._y[i])
            for j in range(n):
                if j != i:
                    term *= (xs - self._x[j]) / (self._x[i] - self._x[j])
            result += term
        return result

    def _equation(self) -> str:
        n = self._x.size
        if n > MAX_DISPLAY_POINTS:
            return f"Polynomial of degree {n - 1} (too complex to display)"
        return format_polynomial(lagrange_coefficients(self._x, self._y))


register_interpolator(LagrangeInterpolator.key, LagrangeInterpolator)
