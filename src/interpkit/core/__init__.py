"""Core algorithms and data structures for interpkit."""

from .base import (
    Interpolator,
    available_interpolators,
    create_interpolator,
    locate_interval,
    register_interpolator,
)
from .linear import LinearInterpolator
from .lagrange import LagrangeInterpolator
from .newton import NewtonInterpolator
from .spline import CubicSplineInterpolator
from .hermite import HermiteInterpolator
from .sampling import SampleGenerator, chebyshev_nodes
from .optimizer import DegreeOptimizer
from .denoise import Denoiser
from .compare import compare_interpolators, fit_interpolator

__all__ = [
    "Interpolator",
    "available_interpolators",
    "create_interpolator",
    "locate_interval",
    "register_interpolator",
    "LinearInterpolator",
    "LagrangeInterpolator",
    "NewtonInterpolator",
    "CubicSplineInterpolator",
    "HermiteInterpolator",
    "SampleGenerator",
    "chebyshev_nodes",
    "DegreeOptimizer",
    "Denoiser",
    "compare_interpolators",
    "fit_interpolator",
]
