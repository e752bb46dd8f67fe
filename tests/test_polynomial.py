import numpy as np
import pytest

from interpkit.core.polynomial import (
    format_polynomial,
    format_polynomial_summary,
    lagrange_coefficients,
    polynomial_equation,
    solve_linear_system,
    vandermonde_coefficients,
)
from interpkit.errors import InvalidInputError


def test_solve_linear_system_matches_numpy():
    rng = np.random.default_rng(3)
    A = rng.normal(size=(6, 6))
    b = rng.normal(size=6)
    np.testing.assert_allclose(solve_linear_system(A, b), np.linalg.solve(A, b), atol=1e-10)


def test_solve_needs_pivoting():
    A = np.array([[0.0, 1.0], [1.0, 0.0]])
    np.testing.assert_allclose(solve_linear_system(A, [2.0, 3.0]), [3.0, 2.0])


def test_solve_singular():
    with pytest.raises(InvalidInputError):
        solve_linear_system(np.array([[1.0, 2.0], [2.0, 4.0]]), [1.0, 2.0])
    with pytest.raises(InvalidInputError):
        solve_linear_system(np.eye(2), [1.0, 2.0, 3.0])


def test_coefficient_routes_agree():
    x = np.array([-1.0, 0.0, 1.0, 2.0])
    y = 2 * x**3 - x + 3
    expected = [3.0, -1.0, 0.0, 2.0]
    np.testing.assert_allclose(lagrange_coefficients(x, y), expected, atol=1e-12)
    np.testing.assert_allclose(vandermonde_coefficients(x, y), expected, atol=1e-12)


def test_format_polynomial():
    assert format_polynomial([1.0, 0.0, 2.0]) == "P(x) = 2.0000·x^2 + 1.0000"
    assert format_polynomial([0.0, -1.0]) == "P(x) = -x"
    assert format_polynomial([-0.5, 1.0, -3.0]) == "P(x) = -3.0000·x^2 + x - 0.5000"
    assert format_polynomial([0.0, 0.0]) == "P(x) = 0"


def test_format_polynomial_summary():
    assert format_polynomial_summary([1.0, -2.0, 1.0]) == "P(x) = x^2 - 2.000x + 1.000"
    long = format_polynomial_summary(np.ones(9))
    assert long == "P(x) = x^8 + x^7 + x^6 + x^5 + ... [deg 8]"


def test_polynomial_equation():
    assert polynomial_equation([0.0, 1.0, 2.0], [1.0, 2.0, 5.0]) == "P(x) = x^2 + 1.000"
    assert polynomial_equation([1.0, 1.0], [0.0, 1.0]) == "P(x) = [Unable to generate equation]"
