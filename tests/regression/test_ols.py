"""
Tests for multiple_regression() and ols().

Coefficients are validated against numpy.linalg.lstsq and standard errors
against the textbook formula sqrt(MSE * diag((X'X)^-1)).
"""

import numpy as np
import pytest

from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import InsufficientDataError, InvalidColumnReference, SingularMatrixError
from pyanalytics.regression import RegressionDesign, fit, multiple_regression, ols


@pytest.fixture
def noisy_data(rng):
    n = 60
    X = rng.normal(0.0, 1.0, size=(n, 2))
    y = 1.5 + 2.0 * X[:, 0] - 0.5 * X[:, 1] + rng.normal(0.0, 0.3, n)
    return X, y


class TestExactFit:

    def test_simple_linear(self, linear_dataset):
        result = multiple_regression(linear_dataset, "y", ["x"])
        assert result.model_type == "linear"
        assert result.intercept == pytest.approx(3.0)
        assert result.coefficients == {"x": pytest.approx(2.0)}
        assert result.r_squared == pytest.approx(1.0)
        assert result.n == 10
        assert result.equation == "y = 3.0000 + 2.0000 × x"
        assert result.significant_predictors == ("x",)
        assert result.interpretation.startswith("Model explains 100.0% of variance in y.")
        assert "Strong predictive model." in result.interpretation
        np.testing.assert_allclose(result.residuals, 0.0, atol=1e-8)

    def test_negative_slope_in_equation(self):
        x = np.arange(1.0, 9.0)
        result = ols(x, 10.0 - 0.5 * x, names=["price"], target="demand")
        assert result.equation == "demand = 10.0000 - 0.5000 × price"


class TestNoisyFit:

    def test_matches_lstsq(self, noisy_data):
        X, y = noisy_data
        result = ols(X, y)
        A = np.column_stack([np.ones(len(y)), X])
        expected, *_ = np.linalg.lstsq(A, y, rcond=None)
        np.testing.assert_allclose(result.beta, expected, rtol=1e-8)
        assert result.model_type == "multiple"
        assert set(result.coefficients) == {"x1", "x2"}

    def test_standard_errors(self, noisy_data):
        X, y = noisy_data
        result = ols(X, y)
        A = np.column_stack([np.ones(len(y)), X])
        resid = y - A @ result.beta
        mse = resid @ resid / (len(y) - 3)
        expected = np.sqrt(mse * np.diag(np.linalg.inv(A.T @ A)))
        np.testing.assert_allclose(list(result.standard_errors.values()), expected, rtol=1e-8)
        assert list(result.standard_errors) == ["(Intercept)", "x1", "x2"]

    def test_r_squared(self, noisy_data):
        X, y = noisy_data
        result = ols(X, y)
        ss_res = np.sum(result.residuals ** 2)
        ss_tot = np.sum((y - y.mean()) ** 2)
        assert result.r_squared == pytest.approx(1 - ss_res / ss_tot, abs=1e-4)
        n, p = len(y), 2
        adjusted = 1 - (1 - result.r_squared) * (n - 1) / (n - p - 1)
        assert result.adjusted_r_squared == pytest.approx(adjusted, abs=1e-3)
        assert result.adjusted_r_squared <= result.r_squared

    def test_residuals_sum_to_zero(self, noisy_data):
        X, y = noisy_data
        assert abs(ols(X, y).residuals.sum()) < 1e-8

    def test_significance(self, rng):
        n = 50
        signal = rng.normal(0.0, 1.0, n)
        noise = rng.normal(0.0, 1.0, n)
        y = 4.0 * signal + rng.normal(0.0, 0.5, n)
        result = ols(np.column_stack([signal, noise]), y, names=["signal", "noise"])
        assert "signal" in result.significant_predictors
        t = result.t_statistics
        assert abs(t["signal"]) > 2.0
        assert set(result.significant_predictors) == {k for k in ("signal", "noise") if abs(t[k]) > 2.0}

    def test_weak_model(self, rng):
        x = rng.normal(0.0, 1.0, 40)
        y = rng.normal(0.0, 1.0, 40)
        result = ols(x, y)
        assert result.r_squared < 0.4
        assert "Weak predictive model" in result.interpretation


class TestFromDataset:

    def test_skips_incomplete_rows(self):
        records = [{"y": 2.0 * i + 1.0, "x": float(i)} for i in range(8)]
        records[3]["x"] = "n/a"
        records[5]["y"] = None
        result = multiple_regression(Dataset.from_records(records), "y", ["x"])
        assert result.n == 6
        np.testing.assert_array_equal(result.row_indices, [0, 1, 2, 4, 6, 7])
        assert result.coefficients["x"] == pytest.approx(2.0)

    def test_unknown_column(self, linear_dataset):
        with pytest.raises(InvalidColumnReference):
            multiple_regression(linear_dataset, "y", ["missing"])

    def test_design_roundtrip(self, linear_dataset):
        design = RegressionDesign.from_dataset(linear_dataset, "y", ["x"])
        assert design.term_names == ("(Intercept)", "x")
        assert design.X.shape == (10, 2)
        assert fit(design).intercept == pytest.approx(3.0)


class TestDegenerate:

    def test_collinear_predictors(self):
        x = np.arange(1.0, 11.0)
        result = ols(np.column_stack([x, 2 * x]), 3 * x + 1)
        assert result.reason == "singular_matrix"
        assert result.equation == "Matrix is singular"
        assert result.coefficients == {}
        assert result.standard_errors == {}
        with pytest.raises(SingularMatrixError):
            result.raise_for_status()

    def test_too_few_rows(self):
        result = ols([[1.0, 2.0], [2.0, 1.0], [3.0, 5.0]], [1.0, 2.0, 3.0])
        assert result.reason == "insufficient_data"
        assert result.equation == "Insufficient data"
        assert result.r_squared == 0.0
        with pytest.raises(InsufficientDataError):
            result.raise_for_status()

    def test_no_predictors(self, linear_dataset):
        result = multiple_regression(linear_dataset, "y", [])
        assert result.reason == "insufficient_data"


class TestSummary:

    def test_summary_table(self, linear_dataset):
        s = multiple_regression(linear_dataset, "y", ["x"]).summary()
        assert "OLS regression of y (linear, n = 10)" in s
        assert "(Intercept)" in s
        assert "R-squared" in s

    def test_repr(self, linear_dataset):
        assert "RegressionSolution(target='y'" in repr(multiple_regression(linear_dataset, "y", ["x"]))
