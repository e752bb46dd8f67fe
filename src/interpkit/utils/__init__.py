"""Small numeric and logging helpers used across interpkit."""

from .logging import get_logger
from .signals import centered_moving_average, median_of, rms
from .windows import iter_blocks

__all__ = [
    "get_logger",
    "centered_moving_average",
    "median_of",
    "rms",
    "iter_blocks",
]
