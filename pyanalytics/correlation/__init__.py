"""
Correlation analysis.

Public API:
    pearson(x, y)                          - Linear correlation
    spearman(x, y)                         - Rank correlation (average ties)
    rank_average(x)                        - 1-based average ranks
    detect_nonlinear_correlations(dataset) - Pearson vs Spearman screen
"""

from pyanalytics.correlation._coefficients import pearson, rank_average, spearman
from pyanalytics.correlation._nonlinear import CorrelationPair, detect_nonlinear_correlations

__all__ = [
    "pearson",
    "spearman",
    "rank_average",
    "detect_nonlinear_correlations",
    "CorrelationPair",
]
