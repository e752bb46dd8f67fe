from __future__ import annotations

"""Interpolator contract, shared validation and the method registry.

Every interpolation strategy derives from :class:`Interpolator`.  The base
class owns input validation, sorting, range evaluation and error metrics so
that the concrete classes only implement fitting (:meth:`Interpolator._fit`)
and point evaluation (:meth:`Interpolator._evaluate`).
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Sequence, Tuple, Union
import logging

import numpy as np

from ..errors import InvalidInputError, StateError
from ..utils.signals import rms

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[float], np.ndarray]

EQUATION_PLACEHOLDER = "Unable to generate equation"
NO_DATA_MESSAGE = "No data points set"


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def prepare_points(
    x: ArrayLike | None,
    y: ArrayLike | None,
    min_points: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Validate ``x``/``y`` and return copies sorted ascending by ``x``.

    ``InvalidInputError`` is raised for absent or mismatched arrays, fewer
    than ``min_points`` samples, non-finite values or duplicate x-values.
    """

    if x is None or y is None:
        raise InvalidInputError("Input arrays cannot be None")
    xs = np.asarray(x, dtype=float).reshape(-1)
    ys = np.asarray(y, dtype=float).reshape(-1)
    if xs.size != ys.size:
        raise InvalidInputError(
            f"x and y must have the same length, got {xs.size} and {ys.size}"
        )
    if xs.size < min_points:
        raise InvalidInputError(
            f"At least {min_points} data points are required, got {xs.size}"
        )
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        raise InvalidInputError("x and y must contain only finite values")
    order = np.argsort(xs, kind="mergesort")
    xs = xs[order]
    ys = ys[order]
    if np.any(np.diff(xs) == 0):
        raise InvalidInputError("x values must be unique")
    return xs, ys


def locate_interval(breakpoints: np.ndarray, x: ArrayLike) -> np.ndarray:
    """Return the index of the interval ``[b[i], b[i+1]]`` used for each ``x``.

    A value on an interior breakpoint ``b[k]`` selects interval ``k - 1`` (the
    interval that ends there); the first breakpoint selects interval ``0``
    and the final breakpoint the last interval.  Values left of the range map
    to interval ``0`` and values right of it to the last interval, which is how
    the variants extrapolate.
    """

    xs = np.asarray(x, dtype=float)
    idx = np.searchsorted(breakpoints, xs, side="left") - 1
    return np.clip(idx, 0, breakpoints.size - 2)


def evenly_spaced(x_min: float, x_max: float, n: int) -> np.ndarray:
    """Return ``n`` evenly spaced values on ``[x_min, x_max]``."""

    if n < 2:
        raise InvalidInputError("Number of points must be at least 2")
    return np.linspace(float(x_min), float(x_max), int(n))


# ---------------------------------------------------------------------------
# Interpolator contract
# ---------------------------------------------------------------------------


class Interpolator(ABC):
    """Common behaviour of all interpolation strategies.

    Instances are reusable: each :meth:`set_data` call replaces the fitted
    state entirely.  An instance must not be shared between concurrent
    callers.
    """

    key: str = ""
    name: str = ""
    description: str = ""
    min_points: int = 2

    def __init__(self) -> None:
        self._x = np.empty(0, dtype=float)
        self._y = np.empty(0, dtype=float)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(points={self._x.size})"

    # -- data ---------------------------------------------------------------

    def set_data(self, x: ArrayLike, y: ArrayLike) -> None:
        """Fit the interpolator to the points ``(x, y)``."""

        self._x, self._y = prepare_points(x, y, self.min_points)
        self._fit()

    def _fit(self) -> None:
        """Derive coefficients from ``self._x``/``self._y``."""

    @property
    def is_fitted(self) -> bool:
        return self._x.size > 0

    @property
    def x_points(self) -> np.ndarray:
        return self._x.copy()

    @property
    def y_points(self) -> np.ndarray:
        return self._y.copy()

    def _require_data(self) -> None:
        if not self.is_fitted:
            raise StateError("No data points set. Call set_data first.")

    # -- evaluation ---------------------------------------------------------

    @abstractmethod
    def _evaluate(self, xs: np.ndarray) -> np.ndarray:
        """Evaluate the fitted curve at the 1-D array ``xs``."""

    def interpolate(self, x: float | ArrayLike) -> float | np.ndarray:
        """Return the interpolated value at ``x``.

        Scalars return a ``float``; arrays return an array of the same shape.
        Values outside the fitted range are extrapolated.
        """

        self._require_data()
        arr = np.asarray(x, dtype=float)
        out = self._evaluate(arr.reshape(-1)).reshape(arr.shape)
        if arr.ndim == 0:
            return float(out)
        return out

    def interpolate_range(self, x_min: float, x_max: float, n: int) -> np.ndarray:
        """Interpolate at ``n`` evenly spaced points on ``[x_min, x_max]``."""

        xs = evenly_spaced(x_min, x_max, n)
        self._require_data()
        return self._evaluate(xs)

    def calculate_error(self, test_x: ArrayLike, test_y: ArrayLike) -> float:
        """Return the root-mean-square error against ``(test_x, test_y)``."""

        tx = np.asarray(test_x, dtype=float).reshape(-1)
        ty = np.asarray(test_y, dtype=float).reshape(-1)
        if tx.size != ty.size:
            raise InvalidInputError("Test arrays must have the same length")
        if tx.size == 0:
            raise InvalidInputError("Test arrays must not be empty")
        self._require_data()
        residual = self._evaluate(tx) - ty
        return rms(residual)

    # -- display ------------------------------------------------------------

    def get_polynomial_equation(self) -> str:
        """Return a human readable description of the fitted curve.

        The string is advisory only.  Failures while building it are logged
        and replaced by a placeholder; this method never raises.
        """

        if not self.is_fitted:
            return NO_DATA_MESSAGE
        try:
            return self._equation()
        except Exception as exc:  # display only, see docstring
            logger.debug("equation generation failed for %s: %s", self.key, exc)
            return EQUATION_PLACEHOLDER

    @abstractmethod
    def _equation(self) -> str:
        """Build the display string for :meth:`get_polynomial_equation`."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

InterpolatorFactory = Callable[[], Interpolator]

_registry: Dict[str, InterpolatorFactory] = {}


def normalise_method(name: str) -> str:
    """Map ``"Cubic Spline"``/``"cubic-spline"`` style names to registry keys."""

    return name.strip().lower().replace(" ", "_").replace("-", "_")


_ALIASES = {"spline": "cubic_spline", "cubic": "cubic_spline", "natural_cubic_spline": "cubic_spline"}


def register_interpolator(name: str, factory: InterpolatorFactory) -> None:
    """Register ``factory`` under ``name`` in the global registry."""

    if not callable(factory):
        raise TypeError("Interpolator factory must be callable")
    _registry[normalise_method(name)] = factory


def create_interpolator(name: str) -> Interpolator:
    """Return a fresh interpolator instance registered under ``name``."""

    key = normalise_method(name)
    key = _ALIASES.get(key, key)
    try:
        factory = _registry[key]
    except KeyError:
        raise InvalidInputError(
            f"Unknown interpolation method {name!r}; available: {', '.join(available_interpolators())}"
        ) from None
    return factory()


def available_interpolators() -> List[str]:
    """Return the list of registered method names."""

    return list(_registry)
