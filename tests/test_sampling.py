import numpy as np
import pytest

from interpkit.core import SampleGenerator, chebyshev_nodes, create_interpolator
from interpkit.errors import InvalidInputError
from interpkit.expression import ExpressionEvaluator


@pytest.mark.parametrize("n", [2, 5, 10, 33])
def test_chebyshev_nodes_closed_form(n):
    nodes = chebyshev_nodes(-1.0, 1.0, n)
    i = np.arange(n)
    expected = np.sort(np.cos((2 * i + 1) * np.pi / (2 * n)))
    assert nodes.size == n
    assert np.all(np.diff(nodes) > 0)
    assert np.all((nodes >= -1.0) & (nodes <= 1.0))
    np.testing.assert_allclose(nodes, expected, rtol=0, atol=1e-15)


def test_chebyshev_nodes_scaled_interval():
    nodes = chebyshev_nodes(2.0, 6.0, 7)
    assert nodes.min() > 2.0 and nodes.max() < 6.0
    # symmetric about the midpoint
    np.testing.assert_allclose(nodes + nodes[::-1], 8.0)


def test_uniform_samples():
    gen = SampleGenerator(ExpressionEvaluator("x^2"))
    samples = gen.generate_uniform_samples(0.0, 2.0, 5)
    np.testing.assert_allclose(samples.x, [0.0, 0.5, 1.0, 1.5, 2.0])
    np.testing.assert_allclose(samples.y, samples.x**2)
    x, y = samples
    assert len(samples) == 5


def test_generate_samples_switch():
    gen = SampleGenerator(np.sin)
    cheb = gen.generate_samples(-1.0, 1.0, 6)
    uniform = gen.generate_samples(-1.0, 1.0, 6, chebyshev=False)
    np.testing.assert_allclose(cheb.x, chebyshev_nodes(-1.0, 1.0, 6))
    assert uniform.x[0] == -1.0 and uniform.x[-1] == 1.0


@pytest.mark.parametrize("args", [(0.0, 1.0, 1), (1.0, 1.0, 5), (2.0, 1.0, 5), (0.0, np.inf, 5)])
def test_invalid_intervals(args):
    gen = SampleGenerator(np.sin)
    with pytest.raises(InvalidInputError):
        gen.generate_uniform_samples(*args)
    with pytest.raises(InvalidInputError):
        gen.generate_chebyshev_samples(*args)


def test_requires_callable():
    with pytest.raises(InvalidInputError):
        SampleGenerator("sin(x)")


def test_error_profile_and_max_error():
    gen = SampleGenerator(ExpressionEvaluator("x^2"))
    samples = gen.generate_uniform_samples(0.0, 1.0, 3)
    interp = create_interpolator("linear")
    interp.set_data(samples.x, samples.y)
    profile = gen.error_profile(interp, 0.0, 1.0, 101)
    assert profile.shape == (101,)
    # chord of x^2 over a segment of width 0.5 deviates by at most h^2 / 4
    assert gen.calculate_max_error(interp, 0.0, 1.0, 101) == pytest.approx(0.0625)


def test_chebyshev_beats_uniform_on_runge():
    gen = SampleGenerator(ExpressionEvaluator("1 / (1 + 25 * x^2)"))
    errors = {}
    for chebyshev in (True, False):
        samples = gen.generate_samples(-1.0, 1.0, 15, chebyshev=chebyshev)
        interp = create_interpolator("newton")
        interp.set_data(samples.x, samples.y)
        errors[chebyshev] = gen.calculate_max_error(interp, -1.0, 1.0)
    assert errors[True] < errors[False]
