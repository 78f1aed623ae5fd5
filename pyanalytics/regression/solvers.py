"""
Solver dispatch for regression.

Provides multiple_regression() for Dataset columns and ols() for arrays.
"""

from __future__ import annotations

from typing import Sequence
from numpy.typing import ArrayLike

from pyanalytics.core.dataset import Dataset
from pyanalytics.regression.design import RegressionDesign
from pyanalytics.regression.solution import RegressionSolution
from pyanalytics.regression.backends.cpu import CPUNormalEquationsBackend


def fit(design: RegressionDesign) -> RegressionSolution:
    """Fit a prepared design."""
    result = CPUNormalEquationsBackend().solve(design)
    return RegressionSolution(_result=result, _design=design)


def multiple_regression(
    dataset: Dataset,
    target: str,
    predictors: Sequence[str],
) -> RegressionSolution:
    """
    Ordinary least squares of one column on others.

    Parameters
    ----------
    dataset : Dataset
    target : str
        Response column.
    predictors : sequence of str
        Predictor columns. An intercept is always included.

    Returns
    -------
    RegressionSolution
        No predictors, fewer than ``len(predictors) + 2`` complete rows,
        or collinear predictors give a degenerate result; see
        ``reason`` and ``raise_for_status()``.

    Raises
    ------
    InvalidColumnReference
        If a column does not exist.
    """
    design = RegressionDesign.from_dataset(dataset, target, predictors)
    return fit(design)


def ols(
    X: ArrayLike,
    y: ArrayLike,
    names: Sequence[str] | None = None,
    *,
    target: str = 'y',
) -> RegressionSolution:
    """
    Ordinary least squares on arrays.

    Parameters
    ----------
    X : array-like, shape (n, p) or (n,)
        Predictors, without an intercept column.
    y : array-like, shape (n,)
    names : sequence of str, optional
        Predictor names, default x1..xp.
    target : str
        Name used for the response in the equation.
    """
    design = RegressionDesign.from_arrays(X, y, names=names, target=target)
    return fit(design)
