"""
Pearson and Spearman correlation coefficients for paired samples.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.stats import rankdata

from pyanalytics.core.validation import check_array, check_1d, check_consistent_length

MIN_SPEARMAN_PAIRS = 3


def _paired(x: ArrayLike, y: ArrayLike) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    x_arr = check_array(x, 'x').ravel()
    y_arr = check_array(y, 'y').ravel()
    check_1d(x_arr, 'x')
    check_1d(y_arr, 'y')
    check_consistent_length(x_arr, y_arr, names=('x', 'y'))
    return x_arr, y_arr


def _pearson(x: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]]) -> float:
    if len(x) == 0:
        return 0.0
    dx = x - x.mean()
    dy = y - y.mean()
    den = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if den == 0:
        return 0.0
    return float(np.sum(dx * dy) / den)


def pearson(x: ArrayLike, y: ArrayLike) -> float:
    """
    Pearson product-moment correlation.

    Returns 0 when either sample has zero variance.

    Raises:
        DimensionError: If x and y differ in length
    """
    x_arr, y_arr = _paired(x, y)
    return _pearson(x_arr, y_arr)


def rank_average(values: ArrayLike) -> NDArray[np.floating[Any]]:
    """1-based ranks, ties sharing the average of their positions."""
    arr = check_array(values, 'values').ravel()
    return rankdata(arr, method='average').astype(np.float64)


def spearman(x: ArrayLike, y: ArrayLike) -> float:
    """
    Spearman rank correlation: Pearson correlation of average ranks.

    Returns 0 for fewer than 3 pairs or when either ranking is constant.

    Raises:
        DimensionError: If x and y differ in length
    """
    x_arr, y_arr = _paired(x, y)
    if len(x_arr) < MIN_SPEARMAN_PAIRS:
        return 0.0
    return _pearson(rank_average(x_arr), rank_average(y_arr))
