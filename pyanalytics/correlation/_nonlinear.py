"""
Pairwise screen of numeric columns for monotonic but non-linear relationships.

A rank correlation clearly stronger than the linear one means the two
columns move together along a curve rather than a line.
"""

from __future__ import annotations

from dataclasses import dataclass

from pyanalytics.core.config import DEFAULT_NONLINEARITY, NonLinearityThresholds
from pyanalytics.core.dataset import Dataset
from pyanalytics.correlation._coefficients import _pearson, rank_average

STRONG = 0.7


@dataclass(frozen=True)
class CorrelationPair:
    """
    Correlation of two numeric columns.

    Coefficients are rounded to 3 decimals; ``is_nonlinear`` is decided on
    the unrounded values.
    """
    column1: str
    column2: str
    pearson: float
    spearman: float
    is_nonlinear: bool
    interpretation: str
    n_pairs: int = 0


def _interpret(col1: str, col2: str, p: float, s: float, is_nonlinear: bool) -> str:
    if is_nonlinear:
        return (
            f"Non-linear monotonic relationship detected between {col1} and {col2}. "
            f"Spearman ({s:.3f}) >> Pearson ({p:.3f}), suggesting a curved but "
            f"consistent relationship."
        )
    direction = "positive" if s > 0 else "negative"
    strength = "Strong" if abs(s) >= STRONG else "Moderate"
    return f"{strength} {direction} relationship between {col1} and {col2}."


def detect_nonlinear_correlations(
    dataset: Dataset,
    *,
    thresholds: NonLinearityThresholds = DEFAULT_NONLINEARITY,
) -> list[CorrelationPair]:
    """
    Compare Pearson and Spearman correlations over every pair of numeric columns.

    Parameters
    ----------
    dataset : Dataset
    thresholds : NonLinearityThresholds
        ``min_pairs`` complete rows are required per pair; a pair is
        reported when either |coefficient| reaches ``report``, and flagged
        non-linear when ``|s| - |p| > gap`` and ``|s| > min_spearman``.

    Returns
    -------
    list of CorrelationPair
        Sorted by descending |spearman|.
    """
    numeric_columns = dataset.columns_of_type('number')
    pairs: list[CorrelationPair] = []

    for i, col1 in enumerate(numeric_columns):
        for col2 in numeric_columns[i + 1:]:
            matrix, _ = dataset.numeric_matrix((col1, col2))
            n = matrix.shape[0]
            if n < thresholds.min_pairs:
                continue

            x, y = matrix[:, 0], matrix[:, 1]
            p = _pearson(x, y)
            s = _pearson(rank_average(x), rank_average(y))
            abs_p, abs_s = abs(p), abs(s)

            if abs_s < thresholds.report and abs_p < thresholds.report:
                continue

            is_nonlinear = (abs_s - abs_p > thresholds.gap) and abs_s > thresholds.min_spearman
            pairs.append(CorrelationPair(
                column1=col1,
                column2=col2,
                pearson=round(p, 3),
                spearman=round(s, 3),
                is_nonlinear=is_nonlinear,
                interpretation=_interpret(col1, col2, p, s, is_nonlinear),
                n_pairs=n,
            ))

    pairs.sort(key=lambda pair: abs(pair.spearman), reverse=True)
    return pairs
