"""Evaluate a parsed single-variable expression."""

from __future__ import annotations

from typing import Iterable, List
import math

import numpy as np

from ..errors import EvaluationError
from .parser import DEFAULT_VARIABLE, Node, parse


class ExpressionEvaluator:
    """Compile ``expression`` once and evaluate it for any ``x``.

    The expression is tokenized and parsed when the evaluator is created, so
    syntax problems (unmatched brackets, unknown names, malformed numbers)
    raise :class:`~interpkit.errors.EvaluationError` immediately.  Numeric
    failures such as ``log(0)`` or division by zero surface from
    :meth:`evaluate` with the offending ``x`` in the message.

    Examples
    --------
    >>> ExpressionEvaluator("2^3").evaluate(0.0)
    8.0
    >>> ExpressionEvaluator("sin(x) + 1")(0.0)
    1.0
    """

    def __init__(self, expression: str, variable: str = DEFAULT_VARIABLE):
        if expression is None:
            raise EvaluationError("Expression cannot be None")
        if not isinstance(expression, str):
            raise EvaluationError(
                f"Expression must be a string, got {type(expression).__name__}"
            )
        self.expression = expression.strip()
        self.variable = variable.lower()
        self.tree: Node = parse(self.expression, self.variable)

    def __repr__(self) -> str:
        return f"ExpressionEvaluator({self.expression!r})"

    def __call__(self, x: float) -> float:
        return self.evaluate(x)

    @property
    def variables(self) -> List[str]:
        """Names of the variables referenced by the expression."""

        return sorted(self.tree.variables())

    def evaluate(self, x: float) -> float:
        """Return the value of the expression at ``x``."""

        try:
            value = self.tree.evaluate(float(x))
        except ZeroDivisionError:
            raise EvaluationError(
                f"Division by zero at {self.variable}={x}", expression=self.expression
            ) from None
        except OverflowError:
            raise EvaluationError(
                f"Numeric overflow at {self.variable}={x}", expression=self.expression
            ) from None
        except RecursionError:
            raise EvaluationError(
                "Expression is nested too deeply", expression=self.expression
            ) from None
        except ValueError as exc:
            raise EvaluationError(
                f"Math domain error at {self.variable}={x}: {exc}", expression=self.expression
            ) from exc
        if math.isnan(value):
            raise EvaluationError(
                f"Result is not a number at {self.variable}={x}", expression=self.expression
            )
        return value

    def evaluate_many(self, xs: Iterable[float]) -> np.ndarray:
        """Evaluate at every value of ``xs`` and return a float array."""

        return np.array([self.evaluate(x) for x in xs], dtype=float)
