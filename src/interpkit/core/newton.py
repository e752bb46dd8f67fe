"""Newton divided-difference interpolation."""

from __future__ import annotations

import numpy as np

from .base import Interpolator, register_interpolator

MAX_DISPLAY_TERMS = 8


def divided_differences(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Return the top diagonal ``f[x0], f[x0,x1], ..., f[x0..x_{n-1}]``.

    The table is built column by column:
    ``f[x_i..x_{i+k}] = (f[x_{i+1}..x_{i+k}] - f[x_i..x_{i+k-1}]) / (x_{i+k} - x_i)``.
    """

    n = x.size
    table = np.zeros((n, n), dtype=float)
    table[:, 0] = y
    for j in range(1, n):
        table[: n - j, j] = (table[1 : n - j + 1, j - 1] - table[: n - j, j - 1]) / (
            x[j:] - x[: n - j]
        )
    return table[0].copy()


class NewtonInterpolator(Interpolator):
    """Newton form of the interpolating polynomial.

    Fitting builds the divided-difference table in ``O(n^2)``; evaluation
    uses nested multiplication in ``O(n)`` per point.
    """

    key = "newton"
    name = "Newton Divided Differences"
    description = (
        "Polynomial interpolation using Newton's divided difference formula. "
        "More efficient than Lagrange for multiple evaluations. Good numerical stability."
    )

    def __init__(self) -> None:
        super().__init__()
        self._coeffs = np.empty(0, dtype=float)

    def _fit(self) -> None:
        self._coeffs = divided_differences(self._x, self._y)

    @property
    def divided_differences(self) -> np.ndarray:
        return self._coeffs.copy()

    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        n = self._coeffs.size
        result = np.full_like(xs, self._coeffs[n - 1])
        for k in range(n - 2, -1, -1):
            result = result * (xs - self._x[k]) + self._coeffs[k]
        return result

    def _equation(self) -> str:
        n = self._coeffs.size
        shown = min(n, MAX_DISPLAY_TERMS)
        terms = [f"{self._coeffs[0]:.4f}"]
        for i in range(1, shown):
            factors = "".join(f"(x-{self._x[j]:.2f})" for j in range(i))
            terms.append(f"{self._coeffs[i]:.4f}{factors}")
        equation = "P(x) = " + " + ".join(terms)
        if shown < n:
            equation += f" + ... [deg {n - 1}]"
        return equation


register_interpolator(NewtonInterpolator.key, NewtonInterpolator)
