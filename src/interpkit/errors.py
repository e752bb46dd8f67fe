"""Exception hierarchy shared by the interpolation core."""

from __future__ import annotations

from typing import Optional


class InterpolationError(Exception):
    """Base class for all errors raised by :mod:`interpkit`."""


class InvalidInputError(InterpolationError, ValueError):
    """Raised when data or arguments handed to the core are unusable.

    Covers absent or mismatched arrays, too few points for a variant,
    duplicate x-values and out-of-range parameters.
    """


class StateError(InterpolationError, RuntimeError):
    """Raised when an interpolator is evaluated before data was set."""


class EvaluationError(InterpolationError, ValueError):
    """Raised when an expression cannot be parsed or evaluated."""

    def __init__(self, message: str, *, expression: str = "", position: Optional[int] = None):
        self.cause = message
        self.expression = expression
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in {expression!r}"
        elif expression:
            message = f"{message} in {expression!r}"
        super().__init__(message)


__all__ = [
    "InterpolationError",
    "InvalidInputError",
    "StateError",
    "EvaluationError",
]
