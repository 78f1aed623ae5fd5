"""
Descriptive statistics module.

Public API:
    confidence_interval(x)   - Normal-approximation interval for the mean
    percentile_analysis(x)   - Percentiles, IQR and Tukey-fence outliers
    describe(dataset)        - Per-column summary table
"""

from pyanalytics.descriptive._interval import ConfidenceInterval, confidence_interval
from pyanalytics.descriptive._percentiles import (
    PercentileSummary,
    interpolated_percentile,
    percentile_analysis,
)
from pyanalytics.descriptive._describe import ColumnSummary, describe

__all__ = [
    "confidence_interval",
    "percentile_analysis",
    "interpolated_percentile",
    "describe",
    "ConfidenceInterval",
    "PercentileSummary",
    "ColumnSummary",
]
