"""Outlier repair for single-channel sample buffers.

The pipeline runs three stages, always in this order:

1. Smoothing - a centered moving average of width
   ``max(min_filter_size, window_size // 2)`` (forced odd) applied ``passes``
   times.
2. Outlier detection - samples whose magnitude exceeds
   ``|mean| + k * stddev`` of the smoothed signal are flagged.
3. Repair - the buffer is processed in blocks of ``window_size``.  For each
   block the clean samples in a neighbourhood around it are fitted with an
   interpolator and the flagged samples in the block are replaced by the
   fitted curve.  When too few clean samples exist, or the fit fails, a small
   median of the clean neighbours is used instead.

A failing block never aborts the whole buffer; the degradation is local.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union
import logging

import numpy as np

from ..config import Settings
from ..errors import InterpolationError, InvalidInputError
from ..types import AudioBuffer, DenoiseReport, Window
from ..utils.signals import centered_moving_average, median_of
from ..utils.windows import iter_blocks
from .base import Interpolator, create_interpolator

logger = logging.getLogger(__name__)

InterpolatorLike = Union[Interpolator, str, None]
Samples = Union[AudioBuffer, Sequence[float]]


class Denoiser:
    """Smooth a buffer and repair its outliers by local interpolation.

    Parameters default to ``settings.denoise``; explicit keyword arguments
    take precedence.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        passes: int | None = None,
        min_filter_size: int | None = None,
        neighborhood: int | None = None,
        min_clean_points: int | None = None,
        median_width: int | None = None,
    ) -> None:
        if settings is None:
            settings = Settings()
        cfg = settings.denoise
        self.settings = settings
        self.passes = passes if passes is not None else cfg.passes
        self.min_filter_size = min_filter_size if min_filter_size is not None else cfg.min_filter_size
        self.neighborhood = neighborhood if neighborhood is not None else cfg.neighborhood
        self.min_clean_points = min_clean_points if min_clean_points is not None else cfg.min_clean_points
        self.median_width = median_width if median_width is not None else cfg.median_width

    # -- stages -------------------------------------------------------------

    def filter_size(self, window_size: int) -> int:
        """Width of the smoothing filter for a given repair ``window_size``."""

        size = max(self.min_filter_size, window_size // 2)
        if size % 2 == 0:
            size += 1
        return size

    def smooth(self, samples: Sequence[float], window_size: int) -> np.ndarray:
        """Apply the moving-average filter ``self.passes`` times."""

        size = self.filter_size(window_size)
        smoothed = np.asarray(samples, dtype=float)
        for n in range(1, self.passes + 1):
            smoothed = centered_moving_average(smoothed, size)
            logger.debug("pass %d/%d: moving average (size %d)", n, self.passes, size)
        return smoothed

    @staticmethod
    def detect_outliers(
        smoothed: np.ndarray, threshold_multiplier: float
    ) -> Tuple[np.ndarray, float, float, float]:
        """Return ``(mask, mean, stddev, threshold)`` for ``smoothed``.

        ``mask[i]`` is ``True`` when ``|smoothed[i]| > |mean| + k * stddev``.
        The standard deviation is the population one.
        """

        mean = float(np.mean(smoothed))
        stddev = float(np.std(smoothed))
        threshold = abs(mean) + threshold_multiplier * stddev
        return np.abs(smoothed) > threshold, mean, stddev, threshold

    def _median_fallback(self, result: np.ndarray, mask: np.ndarray, window: Window) -> int:
        half = self.median_width // 2
        n = result.size
        repaired = 0
        for i in range(window.start, window.end):
            if not mask[i]:
                continue
            lo = max(0, i - half)
            hi = min(n, i + half + 1)
            neighbours = [result[j] for j in range(lo, hi) if j != i and not mask[j]]
            if neighbours:
                result[i] = median_of(neighbours)
                repaired += 1
        return repaired

    def _repair_window(
        self,
        result: np.ndarray,
        mask: np.ndarray,
        window: Window,
        interpolator: Interpolator,
    ) -> Tuple[int, bool]:
        """Repair the flagged samples of ``window``; return ``(count, used_fallback)``."""

        flagged = np.flatnonzero(mask[window.start : window.end]) + window.start
        if flagged.size == 0:
            return 0, False

        region = window.expand(self.neighborhood, result.size)
        idx = np.arange(region.start, region.end)
        clean = idx[~mask[region.start : region.end]]

        if clean.size < self.min_clean_points:
            return self._median_fallback(result, mask, window), True

        try:
            interpolator.set_data(clean.astype(float), result[clean])
            values = np.asarray(interpolator.interpolate(flagged.astype(float)), dtype=float)
            if not np.all(np.isfinite(values)):
                raise InvalidInputError("interpolation produced non-finite values")
        except InterpolationError as exc:
            logger.warning(
                "window [%d, %d] interpolation failed: %s", window.start, window.end, exc
            )
            return self._median_fallback(result, mask, window), True

        result[flagged] = values
        return int(flagged.size), False

    # -- public API ---------------------------------------------------------

    def repair_with_report(
        self,
        samples: Samples,
        interpolator: InterpolatorLike = None,
        threshold_multiplier: float | None = None,
        window_size: int | None = None,
    ) -> Tuple[np.ndarray, DenoiseReport]:
        """Run the full pipeline and return the repaired buffer with statistics.

        An :class:`AudioBuffer` is mixed down to mono first.
        """

        if threshold_multiplier is None:
            threshold_multiplier = self.settings.denoise.threshold
        if window_size is None:
            window_size = self.settings.denoise.window_size
        if interpolator is None:
            interpolator = self.settings.interpolation.method
        if isinstance(interpolator, str):
            interpolator = create_interpolator(interpolator)

        if isinstance(samples, AudioBuffer):
            samples = samples.to_mono()
        data = np.asarray(samples, dtype=float).reshape(-1) if samples is not None else np.empty(0)
        if data.size == 0:
            raise InvalidInputError("Samples array is empty")
        if window_size < 1:
            raise InvalidInputError("window_size must be at least 1")
        if threshold_multiplier < 0:
            raise InvalidInputError("threshold_multiplier must not be negative")

        logger.info(
            "denoising %d samples (threshold %.2f, window %d, method %s)",
            data.size,
            threshold_multiplier,
            window_size,
            interpolator.key,
        )

        result = self.smooth(data, window_size)
        report = DenoiseReport(
            length=int(data.size),
            filter_size=self.filter_size(window_size),
            passes=self.passes,
        )

        mask, report.mean, report.stddev, report.threshold = self.detect_outliers(
            result, threshold_multiplier
        )
        report.outliers = int(mask.sum())
        logger.info(
            "mean %.6f, stddev %.6f, threshold %.6f: %d outliers (%.2f%%)",
            report.mean,
            report.stddev,
            report.threshold,
            report.outliers,
            100.0 * report.outlier_ratio,
        )
        if report.outliers == 0:
            logger.info("no outliers detected, returning smoothed signal")
            return result, report

        for window in iter_blocks(result.size, window_size):
            count, fell_back = self._repair_window(result, mask, window, interpolator)
            report.interpolated += count
            report.fallback_windows += int(fell_back)

        logger.info(
            "repaired %d outlier samples (%d windows used the median fallback)",
            report.interpolated,
            report.fallback_windows,
        )
        return result, report

    def repair(
        self,
        samples: Samples,
        interpolator: InterpolatorLike = None,
        threshold_multiplier: float | None = None,
        window_size: int | None = None,
    ) -> np.ndarray:
        """Return a repaired copy of ``samples`` with identical length and indexing."""

        result, _ = self.repair_with_report(samples, interpolator, threshold_multiplier, window_size)
        return result
