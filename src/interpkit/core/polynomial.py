"""Monomial coefficient extraction and formatting for equation strings.

These helpers back :meth:`Interpolator.get_polynomial_equation`.  The
coefficients they produce come from a different (and less stable) route
than the evaluation paths of the interpolators, so the strings are meant for
display only.  High-degree fits are ill-conditioned and the printed
coefficients may drift from what :meth:`interpolate` returns.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from ..errors import InvalidInputError

ZERO_TOL = 1e-10


def multiply_linear(coeffs: np.ndarray, root: float) -> np.ndarray:
    """Multiply the ascending-order polynomial ``coeffs`` by ``(x - root)``."""

    out = np.zeros(coeffs.size + 1, dtype=float)
    out[1:] += coeffs
    out[:-1] -= root * coeffs
    return out


def lagrange_coefficients(x: Sequence[float], y: Sequence[float]) -> np.ndarray:
    """Expand the Lagrange form into ascending monomial coefficients.

    Each basis polynomial ``L_i(x) = prod_{j != i} (x - x_j) / (x_i - x_j)``
    is multiplied out term by term and accumulated with weight ``y_i``.
    """

    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = xs.size
    total = np.zeros(n, dtype=float)
    for i in range(n):
        basis = np.ones(1, dtype=float)
        denominator = 1.0
        for j in range(n):
            if j == i:
                continue
            basis = multiply_linear(basis, xs[j])
            denominator *= xs[i] - xs[j]
        total += ys[i] * basis / denominator
    return total


def solve_linear_system(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Solve ``A @ x = b`` by Gaussian elimination with partial pivoting.

    ``InvalidInputError`` is raised when a pivot vanishes (singular system).
    """

    A = np.array(A, dtype=float)
    b = np.array(b, dtype=float).reshape(-1)
    n = b.size
    if A.shape != (n, n):
        raise InvalidInputError(f"Matrix shape {A.shape} does not match right-hand side of length {n}")
    aug = np.hstack([A, b[:, None]])

    for i in range(n):
        pivot = i + int(np.argmax(np.abs(aug[i:, i])))
        if aug[pivot, i] == 0.0:
            raise InvalidInputError("Singular matrix in linear solve")
        if pivot != i:
            aug[[i, pivot]] = aug[[pivot, i]]
        factors = aug[i + 1 :, i] / aug[i, i]
        aug[i + 1 :, i:] -= factors[:, None] * aug[i, i:]

    solution = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        solution[i] = (aug[i, n] - aug[i, i + 1 : n] @ solution[i + 1 :]) / aug[i, i]
    return solution


def vandermonde_coefficients(x: Sequence[float], y: Sequence[float]) -> np.ndarray:
    """Return ascending monomial coefficients by solving the Vandermonde system."""

    xs = np.asarray(x, dtype=float)
    matrix = np.vander(xs, N=xs.size, increasing=True)
    return solve_linear_system(matrix, np.asarray(y, dtype=float))


def format_polynomial(coeffs: Sequence[float], precision: int = 4) -> str:
    """Format ascending coefficients as ``P(x) = ...`` (highest power first)."""

    terms: List[str] = []
    for power in range(len(coeffs) - 1, -1, -1):
        coef = float(coeffs[power])
        if abs(coef) < ZERO_TOL:
            continue
        magnitude = abs(coef)
        unit = abs(magnitude - 1.0) < ZERO_TOL
        if terms:
            term = " + " if coef > 0 else " - "
        else:
            term = "-" if coef < 0 else ""
        if power == 0 or not unit:
            term += f"{magnitude:.{precision}f}"
        if power > 0:
            if not unit:
                term += "·"
            term += "x"
            if power > 1:
                term += f"^{power}"
        terms.append(term)
    if not terms:
        return "P(x) = 0"
    return "P(x) = " + "".join(terms)


def format_polynomial_summary(
    coeffs: Sequence[float],
    *,
    max_terms: int = 4,
    partial_above: int = 6,
    precision: int = 3,
) -> str:
    """Format coefficients, truncating long polynomials to their leading terms.

    Polynomials with more than ``partial_above`` coefficients show only the
    first ``max_terms`` non-zero terms followed by ``+ ...`` and a degree
    note.
    """

    n = len(coeffs)
    partial = n > partial_above
    terms: List[str] = []
    shown = 0
    for power in range(n - 1, -1, -1):
        coef = float(coeffs[power])
        if abs(coef) < ZERO_TOL:
            continue
        if partial and shown >= max_terms:
            terms.append("+ ...")
            break
        sign = "+" if coef >= 0 else "-"
        magnitude = abs(coef)
        unit = abs(magnitude - 1.0) < ZERO_TOL
        if power == 0:
            body = f"{magnitude:.{precision}f}"
        else:
            body = "" if unit else f"{magnitude:.{precision}f}"
            body += "x" if power == 1 else f"x^{power}"
        terms.append(f"{sign} {body}")
        shown += 1

    if not terms:
        return "P(x) = 0"
    first = terms[0]
    if first.startswith("+ "):
        terms[0] = first[2:]
    elif first.startswith("- "):
        terms[0] = "-" + first[2:]
    equation = "P(x) = " + " ".join(terms)
    if partial:
        equation += f" [deg {n - 1}]"
    return equation


def polynomial_equation(x: Sequence[float], y: Sequence[float]) -> str:
    """Return the interpolating polynomial through ``(x, y)`` as a summary string.

    Coefficients come from a Vandermonde solve.  Failures yield a placeholder
    instead of an exception.
    """

    try:
        return format_polynomial_summary(vandermonde_coefficients(x, y))
    except (ValueError, FloatingPointError):
        return "P(x) = [Unable to generate equation]"
