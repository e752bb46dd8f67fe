"""Search for the smallest sample count that meets an error target."""

from __future__ import annotations

from typing import List, Tuple
import logging

import numpy as np

from ..config import Settings
from ..errors import InterpolationError, InvalidInputError
from ..types import DegreeSearchResult
from .base import create_interpolator
from .sampling import Function, SampleGenerator

logger = logging.getLogger(__name__)


class DegreeOptimizer:
    """Drive :class:`SampleGenerator` and an interpolator over increasing ``n``.

    Parameters
    ----------
    function:
        Callable evaluated on the interval, typically an
        :class:`~interpkit.expression.ExpressionEvaluator`.
    x_min, x_max:
        Interval on which samples are taken and the error is measured.
    method:
        Registered interpolation method name.  Defaults to
        ``settings.interpolation.method``.
    test_points:
        Size of the dense grid used to measure the maximum error.  Defaults
        to ``settings.optimizer.test_points``.
    """

    def __init__(
        self,
        function: Function,
        x_min: float,
        x_max: float,
        method: str | None = None,
        test_points: int | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        if settings is None:
            settings = Settings()
        if x_min >= x_max:
            raise InvalidInputError(f"x_min must be less than x_max, got [{x_min}, {x_max}]")

        self.settings = settings
        self.generator = SampleGenerator(function)
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        self.method = method or settings.interpolation.method
        self.test_points = test_points if test_points is not None else settings.optimizer.test_points
        # fail fast on unknown method names
        create_interpolator(self.method)

    def _fit_and_measure(self, n: int) -> Tuple[float, np.ndarray]:
        samples = self.generator.generate_chebyshev_samples(self.x_min, self.x_max, n)
        interpolator = create_interpolator(self.method)
        interpolator.set_data(samples.x, samples.y)
        profile = self.generator.error_profile(
            interpolator, self.x_min, self.x_max, self.test_points
        )
        return float(np.max(profile)), profile

    def _range(self, min_n: int | None, max_n: int | None) -> Tuple[int, int]:
        if min_n is None:
            min_n = self.settings.optimizer.min_n
        if max_n is None:
            max_n = self.settings.optimizer.max_n
        if min_n < 2:
            raise InvalidInputError("min_n must be at least 2")
        if min_n > max_n:
            raise InvalidInputError(f"min_n ({min_n}) must not exceed max_n ({max_n})")
        return min_n, max_n

    def find_minimum_degree(
        self,
        target_error: float | None = None,
        min_n: int | None = None,
        max_n: int | None = None,
    ) -> DegreeSearchResult:
        """Return the first ``n`` in ``[min_n, max_n]`` whose max error meets ``target_error``.

        If no ``n`` reaches the target, the result holds the largest ``n``
        tried and its error with ``converged=False``.  A sample count whose
        fit fails is logged and skipped.  Every examined ``(n, error)`` pair
        is kept in ``history``.
        """

        if target_error is None:
            target_error = self.settings.optimizer.target_error
        if not target_error > 0:
            raise InvalidInputError("target_error must be positive")
        min_n, max_n = self._range(min_n, max_n)

        history: List[Tuple[int, float]] = []
        for n in range(min_n, max_n + 1):
            try:
                error, _ = self._fit_and_measure(n)
            except InterpolationError as exc:
                logger.warning("n=%d failed: %s", n, exc)
                continue
            history.append((n, error))
            logger.debug("n=%d max error=%.3e", n, error)
            if error <= target_error:
                return DegreeSearchResult(n, error, history, converged=True)

        if not history:
            raise InvalidInputError(
                f"No sample count in [{min_n}, {max_n}] could be fitted with {self.method!r}"
            )
        n, error = history[-1]
        logger.info("target %.3e not reached up to n=%d (error %.3e)", target_error, n, error)
        return DegreeSearchResult(n, error, history, converged=False)

    def analyze_degree_range(
        self,
        min_n: int | None = None,
        max_n: int | None = None,
    ) -> List[Tuple[int, float, float]]:
        """Return ``(n, max_error, mean_error)`` for every ``n`` that fits."""

        min_n, max_n = self._range(min_n, max_n)
        results: List[Tuple[int, float, float]] = []
        for n in range(min_n, max_n + 1):
            try:
                error, profile = self._fit_and_measure(n)
            except InterpolationError as exc:
                logger.warning("n=%d failed: %s", n, exc)
                continue
            results.append((n, error, float(np.mean(profile))))
        return results
