"""Helpers for working with windows over sequences."""

from __future__ import annotations

from typing import Iterator

from ..types import Window


def iter_blocks(length: int, size: int) -> Iterator[Window]:
    """Yield consecutive non-overlapping windows covering ``length`` elements.

    The final block is shorter when ``length`` is not a multiple of ``size``.
    """

    if size <= 0:
        raise ValueError("size must be positive")
    for start in range(0, length, size):
        yield Window(start, min(start + size, length))
