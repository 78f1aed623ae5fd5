"""
Regression module.

Public API:
    multiple_regression(dataset, target, predictors) - OLS on Dataset columns
    ols(X, y)                                        - OLS on arrays
"""

from pyanalytics.regression.design import RegressionDesign
from pyanalytics.regression.solution import RegressionParams, RegressionSolution
from pyanalytics.regression.solvers import fit, multiple_regression, ols

__all__ = [
    "multiple_regression",
    "ols",
    "fit",
    "RegressionDesign",
    "RegressionParams",
    "RegressionSolution",
]
