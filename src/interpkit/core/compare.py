"""Fit several interpolation methods to one dataset and compare them."""

from __future__ import annotations

from time import perf_counter
from typing import Dict, Iterable, List, Sequence, Tuple
import logging

import numpy as np

from ..errors import InterpolationError
from ..types import InterpolationResult
from .base import available_interpolators, create_interpolator
from .polynomial import polynomial_equation

logger = logging.getLogger(__name__)

# methods whose equation is rebuilt from the data as a monomial summary
POLYNOMIAL_METHODS = ("lagrange", "newton")


def fit_interpolator(
    method: str,
    x: Sequence[float],
    y: Sequence[float],
    points: int = 200,
) -> InterpolationResult:
    """Fit ``method`` to ``(x, y)`` and evaluate it on ``points`` samples of the data range.

    The RMS and maximum errors are measured at the input points.
    """

    start = perf_counter()
    interpolator = create_interpolator(method)
    interpolator.set_data(x, y)
    xs = interpolator.x_points
    ys = interpolator.y_points
    grid = np.linspace(xs[0], xs[-1], points)
    curve = interpolator.interpolate_range(xs[0], xs[-1], points)
    elapsed = perf_counter() - start

    residual = np.abs(interpolator.interpolate(xs) - ys)
    if interpolator.key in POLYNOMIAL_METHODS:
        equation = polynomial_equation(xs, ys)
    else:
        equation = interpolator.get_polynomial_equation()

    return InterpolationResult(
        method=interpolator.key,
        name=interpolator.name,
        x=grid,
        y=curve,
        rms_error=interpolator.calculate_error(xs, ys),
        max_error=float(residual.max()),
        elapsed=elapsed,
        equation=equation,
    )


def compare_interpolators(
    x: Sequence[float],
    y: Sequence[float],
    methods: Iterable[str] | None = None,
    points: int = 200,
) -> Tuple[List[InterpolationResult], Dict[str, str]]:
    """Fit every method in ``methods`` (default: all registered ones).

    Returns the successful results and a ``{method: message}`` mapping of the
    methods that could not be fitted.  One failing method does not stop the
    others.
    """

    if methods is None:
        methods = available_interpolators()
    results: List[InterpolationResult] = []
    failures: Dict[str, str] = {}
    for method in methods:
        try:
            results.append(fit_interpolator(method, x, y, points))
        except InterpolationError as exc:
            logger.warning("%s: %s", method, exc)
            failures[method] = str(exc)
    return results, failures
