import logging
import math

import numpy as np
import pytest

from interpkit.types import AudioBuffer, DenoiseReport, SampleSet, Window
from interpkit.utils import centered_moving_average, get_logger, iter_blocks, median_of, rms


def test_types():
    w = Window(2, 5)
    assert w.expand(1, 10) == Window(1, 6)
    assert w.expand(3, 7) == Window(0, 7)
    with pytest.raises(ValueError):
        SampleSet([0, 1], [1])
    assert DenoiseReport(length=0, filter_size=15, passes=3).outlier_ratio == 0.0


def test_audio_buffer():
    stereo = AudioBuffer(np.array([[1.0, 3.0], [2.0, 4.0]]), 8000, channels=2)
    assert stereo.frames == 2
    np.testing.assert_allclose(stereo.to_mono(), [2.0, 3.0])
    interleaved = AudioBuffer([1.0, 3.0, 2.0, 4.0], 2, channels=2)
    assert interleaved.duration == pytest.approx(1.0)
    np.testing.assert_allclose(interleaved.to_mono(), [2.0, 3.0])
    with pytest.raises(ValueError):
        AudioBuffer([0.0], 0)


def test_signals():
    data = [1.0, 2.0, 3.0, 4.0]
    expected = math.sqrt((1 ** 2 + 2 ** 2 + 3 ** 2 + 4 ** 2) / 4)
    assert rms(data) == pytest.approx(expected)
    with pytest.raises(ValueError):
        rms([])


def test_centered_moving_average():
    out = centered_moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 3)
    # the window shrinks at the ends
    np.testing.assert_allclose(out, [1.5, 2.0, 3.0, 4.0, 4.5])
    np.testing.assert_allclose(centered_moving_average([5.0], 5), [5.0])
    assert centered_moving_average([], 3).size == 0
    for bad in (0, 2, -3):
        with pytest.raises(ValueError):
            centered_moving_average([1.0, 2.0], bad)


def test_median_of():
    assert median_of([3.0, 1.0, 2.0]) == 2.0
    # upper median for even counts
    assert median_of([4.0, 1.0, 3.0, 2.0]) == 3.0
    with pytest.raises(ValueError):
        median_of([])


def test_windows():
    blocks = list(iter_blocks(7, 3))
    assert [(w.start, w.end) for w in blocks] == [(0, 3), (3, 6), (6, 7)]
    with pytest.raises(ValueError):
        list(iter_blocks(3, 0))


def test_get_logger_idempotent():
    logger = get_logger("interpkit.test", logging.DEBUG)
    again = get_logger("interpkit.test", "WARNING")
    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
