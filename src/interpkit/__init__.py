"""Numerical interpolation toolkit.

Five interpolation methods behind one interface, a safe single-variable
expression evaluator, uniform and Chebyshev sampling, a minimum sample-count
search and an outlier-repair pipeline for sampled signals.
"""

from .core import (
    CubicSplineInterpolator,
    DegreeOptimizer,
    Denoiser,
    HermiteInterpolator,
    Interpolator,
    LagrangeInterpolator,
    LinearInterpolator,
    NewtonInterpolator,
    SampleGenerator,
    available_interpolators,
    chebyshev_nodes,
    compare_interpolators,
    create_interpolator,
)
from .errors import EvaluationError, InterpolationError, InvalidInputError, StateError
from .expression import ExpressionEvaluator
from .types import AudioBuffer, DegreeSearchResult, DenoiseReport, InterpolationResult, SampleSet

__version__ = "0.1.0"

__all__ = [
    "CubicSplineInterpolator",
    "DegreeOptimizer",
    "Denoiser",
    "HermiteInterpolator",
    "Interpolator",
    "LagrangeInterpolator",
    "LinearInterpolator",
    "NewtonInterpolator",
    "SampleGenerator",
    "available_interpolators",
    "chebyshev_nodes",
    "compare_interpolators",
    "create_interpolator",
    "EvaluationError",
    "InterpolationError",
    "InvalidInputError",
    "StateError",
    "ExpressionEvaluator",
    "AudioBuffer",
    "DegreeSearchResult",
    "DenoiseReport",
    "InterpolationResult",
    "SampleSet",
]
