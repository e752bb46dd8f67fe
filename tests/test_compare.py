import numpy as np

from interpkit.core import compare_interpolators, fit_interpolator


def test_fit_interpolator():
    x = np.linspace(0.0, 3.0, 6)
    result = fit_interpolator("newton", x, x**2, points=50)
    assert result.method == "newton"
    assert result.name == "Newton Divided Differences"
    assert result.x.shape == result.y.shape == (50,)
    np.testing.assert_allclose(result.y, result.x**2, atol=1e-9)
    assert result.rms_error < 1e-9
    assert result.max_error < 1e-9
    assert result.elapsed >= 0.0
    assert "x^2" in result.equation
    assert str(result).startswith("Newton Divided Differences: RMSE=")


def test_compare_all_methods():
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
    y = np.sin(x)
    results, failures = compare_interpolators(x, y)
    assert failures == {}
    assert {r.method for r in results} == {"linear", "lagrange", "newton", "cubic_spline", "hermite"}
    for result in results:
        assert result.max_error < 1e-9
        assert result.equation


def test_failures_do_not_stop_others():
    results, failures = compare_interpolators([0.0, 1.0], [0.0, 1.0], ["linear", "cubic_spline", "bogus"])
    assert [r.method for r in results] == ["linear"]
    assert set(failures) == {"cubic_spline", "bogus"}
