import numpy as np
import pytest
from scipy.interpolate import BarycentricInterpolator, CubicSpline

from interpkit.core import (
    CubicSplineInterpolator,
    HermiteInterpolator,
    LagrangeInterpolator,
    LinearInterpolator,
    NewtonInterpolator,
    available_interpolators,
    create_interpolator,
    locate_interval,
    register_interpolator,
)
from interpkit.errors import InvalidInputError, StateError


METHODS = ["linear", "lagrange", "newton", "cubic_spline", "hermite"]


def sample_points():
    x = np.array([0.0, 0.7, 1.5, 2.2, 3.1, 4.0])
    return x, np.sin(x) + 0.1 * x**2


@pytest.mark.parametrize("method", METHODS)
def test_exact_at_data_points(method):
    x, y = sample_points()
    interp = create_interpolator(method)
    interp.set_data(x, y)
    np.testing.assert_allclose(interp.interpolate(x), y, atol=1e-9)
    for xi, yi in zip(x, y):
        assert interp.interpolate(xi) == pytest.approx(yi, abs=1e-9)


@pytest.mark.parametrize("method", METHODS)
def test_unsorted_input_is_sorted(method):
    x, y = sample_points()
    order = np.array([3, 0, 5, 1, 4, 2])
    interp = create_interpolator(method)
    interp.set_data(x[order], y[order])
    np.testing.assert_array_equal(interp.x_points, x)
    np.testing.assert_array_equal(interp.y_points, y)


@pytest.mark.parametrize("method", METHODS)
def test_scalar_and_array_results(method):
    x, y = sample_points()
    interp = create_interpolator(method)
    interp.set_data(x, y)
    assert isinstance(interp.interpolate(1.0), float)
    out = interp.interpolate(np.array([[0.5, 1.0], [2.0, 3.0]]))
    assert out.shape == (2, 2)


@pytest.mark.parametrize("method", METHODS)
def test_unfitted_raises_state_error(method):
    interp = create_interpolator(method)
    with pytest.raises(StateError):
        interp.interpolate(0.5)
    with pytest.raises(StateError):
        interp.interpolate_range(0.0, 1.0, 5)
    assert interp.get_polynomial_equation() == "No data points set"


@pytest.mark.parametrize("method", METHODS)
def test_invalid_inputs(method):
    interp = create_interpolator(method)
    with pytest.raises(InvalidInputError):
        interp.set_data(None, [1.0, 2.0])
    with pytest.raises(InvalidInputError):
        interp.set_data([0.0, 1.0, 2.0], [1.0, 2.0])
    with pytest.raises(InvalidInputError):
        interp.set_data([0.0], [1.0])
    with pytest.raises(InvalidInputError):
        interp.set_data([0.0, 1.0, 1.0], [1.0, 2.0, 3.0])
    with pytest.raises(InvalidInputError):
        interp.set_data([0.0, np.nan, 2.0], [1.0, 2.0, 3.0])


def test_errors_are_value_errors():
    interp = LinearInterpolator()
    with pytest.raises(ValueError):
        interp.set_data([0.0, 0.0], [1.0, 2.0])


def test_linear_example():
    interp = LinearInterpolator()
    interp.set_data([0.0, 1.0], [0.0, 1.0])
    assert interp.interpolate(0.5) == pytest.approx(0.5)
    # extrapolation follows the boundary segment
    assert interp.interpolate(2.0) == pytest.approx(2.0)
    assert interp.interpolate(-1.0) == pytest.approx(-1.0)


def test_linear_matches_numpy_interp():
    x, y = sample_points()
    interp = LinearInterpolator()
    interp.set_data(x, y)
    xs = np.linspace(x[0], x[-1], 57)
    np.testing.assert_allclose(interp.interpolate(xs), np.interp(xs, x, y), atol=1e-12)


def test_newton_and_lagrange_agree():
    x, y = sample_points()
    newton = NewtonInterpolator()
    lagrange = LagrangeInterpolator()
    newton.set_data(x, y)
    lagrange.set_data(x, y)
    xs = np.linspace(x[0], x[-1], 101)
    np.testing.assert_allclose(newton.interpolate(xs), lagrange.interpolate(xs), atol=1e-6)


def test_polynomials_match_barycentric_reference():
    x, y = sample_points()
    reference = BarycentricInterpolator(x, y)
    xs = np.linspace(x[0], x[-1], 41)
    for cls in (LagrangeInterpolator, NewtonInterpolator):
        interp = cls()
        interp.set_data(x, y)
        np.testing.assert_allclose(interp.interpolate(xs), reference(xs), atol=1e-8)


def test_newton_divided_differences_of_quadratic():
    interp = NewtonInterpolator()
    interp.set_data([0.0, 1.0, 2.0], [1.0, 2.0, 5.0])
    # x^2 + 1: f[x0]=1, f[x0,x1]=1, f[x0,x1,x2]=1
    np.testing.assert_allclose(interp.divided_differences, [1.0, 1.0, 1.0])
    assert interp.interpolate(3.0) == pytest.approx(10.0)


def test_spline_matches_scipy_natural():
    x, y = sample_points()
    interp = CubicSplineInterpolator()
    interp.set_data(x, y)
    reference = CubicSpline(x, y, bc_type="natural")
    xs = np.linspace(x[0], x[-1], 200)
    np.testing.assert_allclose(interp.interpolate(xs), reference(xs), atol=1e-10)
    np.testing.assert_allclose(interp.interpolate_derivative(xs), reference(xs, 1), atol=1e-9)


def test_spline_natural_boundaries_and_continuity():
    x, y = sample_points()
    interp = CubicSplineInterpolator()
    interp.set_data(x, y)
    assert interp.interpolate_second_derivative(x[0]) == pytest.approx(0.0, abs=1e-10)
    assert interp.interpolate_second_derivative(x[-1]) == pytest.approx(0.0, abs=1e-10)

    eps = 1e-7
    for knot in x[1:-1]:
        left = interp.interpolate(knot - eps)
        right = interp.interpolate(knot + eps)
        assert left == pytest.approx(right, abs=1e-5)
        d_left = interp.interpolate_derivative(knot - eps)
        d_right = interp.interpolate_derivative(knot + eps)
        assert d_left == pytest.approx(d_right, abs=1e-5)


def test_spline_needs_three_points():
    interp = CubicSplineInterpolator()
    with pytest.raises(InvalidInputError):
        interp.set_data([0.0, 1.0], [0.0, 1.0])


def test_spline_coefficient_shapes():
    x, y = sample_points()
    interp = CubicSplineInterpolator()
    interp.set_data(x, y)
    a, b, c, d = interp.coefficients
    assert a.size == b.size == d.size == x.size - 1
    assert c.size == x.size
    assert c[0] == 0.0 and c[-1] == 0.0


def test_hermite_reproduces_cubic_with_exact_slopes():
    x = np.array([-1.0, 0.0, 0.5, 2.0])
    y = x**3 - x
    slopes = 3 * x**2 - 1
    interp = HermiteInterpolator()
    interp.set_data_with_derivatives(x[::-1], y[::-1], slopes[::-1])
    np.testing.assert_allclose(interp.derivatives, slopes)
    xs = np.linspace(-1.0, 2.0, 31)
    np.testing.assert_allclose(interp.interpolate(xs), xs**3 - xs, atol=1e-12)


def test_hermite_estimated_slopes():
    interp = HermiteInterpolator()
    interp.set_data([0.0, 1.0, 2.0, 4.0], [0.0, 1.0, 4.0, 16.0])
    np.testing.assert_allclose(interp.derivatives, [1.0, 2.0, 5.0, 6.0])


def test_hermite_derivative_length_mismatch():
    interp = HermiteInterpolator()
    with pytest.raises(InvalidInputError):
        interp.set_data_with_derivatives([0.0, 1.0, 2.0], [0.0, 1.0, 2.0], [1.0, 1.0])


def test_breakpoint_uses_interval_ending_there():
    b = np.array([0.0, 1.0, 2.0, 3.0])
    np.testing.assert_array_equal(
        locate_interval(b, [-1.0, 0.0, 0.5, 1.0, 2.0, 3.0, 4.0]), [0, 0, 0, 0, 1, 2, 2]
    )
    np.testing.assert_array_equal(locate_interval(b, [1.0, 2.0, 3.0]), [0, 1, 2])


@pytest.mark.parametrize("method", ["linear", "cubic_spline", "hermite"])
def test_piecewise_exact_on_knots_from_lower_interval(method):
    x = np.array([0.0, 1.0, 2.5, 3.0])
    y = np.array([1.0, -2.0, 4.0, 0.5])
    interp = create_interpolator(method)
    interp.set_data(x, y)
    np.testing.assert_allclose(interp.interpolate(x), y, atol=1e-10)


def test_interpolate_range_and_error():
    interp = LinearInterpolator()
    interp.set_data([0.0, 2.0], [0.0, 4.0])
    np.testing.assert_allclose(interp.interpolate_range(0.0, 2.0, 5), [0, 1, 2, 3, 4])
    assert interp.calculate_error([0.0, 1.0], [0.0, 3.0]) == pytest.approx(np.sqrt(0.5))
    with pytest.raises(InvalidInputError):
        interp.calculate_error([0.0], [0.0, 1.0])
    with pytest.raises(InvalidInputError):
        interp.calculate_error([], [])
    with pytest.raises(InvalidInputError):
        interp.interpolate_range(0.0, 1.0, 1)


def test_set_data_replaces_state():
    interp = CubicSplineInterpolator()
    interp.set_data([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    interp.set_data([0.0, 1.0, 2.0, 3.0], [1.0, 1.0, 1.0, 1.0])
    np.testing.assert_allclose(interp.interpolate([0.5, 2.5]), [1.0, 1.0])


def test_equations():
    lin = LinearInterpolator()
    lin.set_data([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    assert lin.get_polynomial_equation() == "Piecewise linear with 2 segments"

    lag = LagrangeInterpolator()
    lag.set_data([0.0, 1.0, 2.0], [1.0, 2.0, 5.0])
    assert lag.get_polynomial_equation() == "P(x) = x^2 + 1.0000"

    lag.set_data(np.arange(10.0), np.arange(10.0) ** 2)
    assert "degree 9" in lag.get_polynomial_equation()

    newton = NewtonInterpolator()
    newton.set_data(np.arange(12.0), np.arange(12.0))
    assert newton.get_polynomial_equation().endswith("[deg 11]")

    spline = CubicSplineInterpolator()
    spline.set_data([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    assert "2 segments" in spline.get_polynomial_equation()


def test_registry():
    assert set(METHODS) <= set(available_interpolators())
    assert isinstance(create_interpolator("Cubic Spline"), CubicSplineInterpolator)
    assert isinstance(create_interpolator("spline"), CubicSplineInterpolator)
    assert isinstance(create_interpolator("NEWTON"), NewtonInterpolator)
    with pytest.raises(InvalidInputError):
        create_interpolator("akima")
    with pytest.raises(TypeError):
        register_interpolator("broken", None)


def test_instances_are_independent():
    a = create_interpolator("linear")
    b = create_interpolator("linear")
    a.set_data([0.0, 1.0], [0.0, 1.0])
    assert a is not b
    assert not b.is_fitted
