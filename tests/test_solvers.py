import numpy as np
import pytest
from scipy.stats import f as f_dist

from granger_indicator.errors import ShapeMismatch, SingularDesign
from granger_indicator.solvers import OLSSolver, ScipyFDistribution


def test_ols_exact_linear_relation(rng):
    X = rng.standard_normal((30, 2))
    y = 2.0 + 3.0 * X[:, 0] - 1.5 * X[:, 1]
    residuals = OLSSolver().fit(y, X)
    assert residuals.shape == (30,)
    np.testing.assert_allclose(residuals, 0.0, atol=1e-10)


def test_ols_residuals_orthogonal_to_design(rng):
    X = rng.standard_normal((40, 3))
    y = rng.standard_normal(40)
    residuals = OLSSolver().fit(y, X)
    np.testing.assert_allclose(X.T @ residuals, 0.0, atol=1e-10)
    assert residuals.sum() == pytest.approx(0.0, abs=1e-10)


def test_ols_without_intercept(rng):
    X = rng.standard_normal((20, 1))
    residuals = OLSSolver(fit_intercept=False).fit(4.0 * X[:, 0], X)
    np.testing.assert_allclose(residuals, 0.0, atol=1e-10)


def test_ols_collinear_design_is_singular(rng):
    col = rng.standard_normal(25)
    X = np.column_stack([col, 2.0 * col])
    with pytest.raises(SingularDesign) as excinfo:
        OLSSolver().fit(rng.standard_normal(25), X)
    assert excinfo.value.rank == 2
    assert excinfo.value.columns == 3


def test_ols_constant_column_is_singular_with_intercept(rng):
    X = np.column_stack([np.full(10, 7.0), rng.standard_normal(10)])
    with pytest.raises(SingularDesign):
        OLSSolver().fit(rng.standard_normal(10), X)


def test_ols_length_mismatch():
    with pytest.raises(ShapeMismatch):
        OLSSolver().fit([1.0, 2.0, 3.0], np.ones((4, 1)))


def test_f_distribution_cdf():
    dist = ScipyFDistribution()
    assert dist.cdf(0.0, 2, 10) == 0.0
    assert dist.cdf(np.inf, 2, 10) == 1.0
    assert dist.cdf(1.5, 2, 10) == pytest.approx(f_dist.cdf(1.5, 2, 10))
