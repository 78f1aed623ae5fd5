"""
Percentiles and Tukey-fence outlier detection.

Percentiles interpolate linearly between order statistics at fractional
rank ``(p/100)(n-1)``, the same definition as R's default quantile type 7
and numpy's ``method='linear'``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyanalytics.core.validation import check_array, drop_non_finite

PERCENTILES = (10, 25, 50, 75, 90, 95, 99)
TUKEY_K = 1.5


@dataclass(frozen=True)
class PercentileSummary:
    """
    Percentile profile of one numeric sample.

    Percentiles, IQR and fences are rounded to 3 decimals; the outlier
    test uses the unrounded fences. An empty sample gives all zeros.

    Attributes
    ----------
    outlier_values : tuple of float
        Values outside the fences, in ascending order.
    """
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p95: float
    p99: float
    iqr: float
    lower_fence: float
    upper_fence: float
    outlier_count: int
    outlier_values: tuple[float, ...] = ()
    column: str = ''

    def as_dict(self) -> dict[int, float]:
        """Percentile rank -> value."""
        return {p: getattr(self, f"p{p}") for p in PERCENTILES}


def interpolated_percentile(sorted_x: NDArray[np.floating[Any]], p: float) -> float:
    """
    Percentile ``p`` (0-100) of an ascending, non-empty sample.

    Interpolates between the order statistics around rank (p/100)(n-1).
    """
    idx = (p / 100.0) * (len(sorted_x) - 1)
    lower = int(np.floor(idx))
    upper = int(np.ceil(idx))
    frac = idx - lower
    return float(sorted_x[lower] + frac * (sorted_x[upper] - sorted_x[lower]))


def percentile_analysis(values: ArrayLike, *, column: str = '') -> PercentileSummary:
    """
    Percentiles, interquartile range and outliers of a numeric sample.

    Parameters
    ----------
    values : array-like
        Numeric sample. NaN/Inf entries are discarded.
    column : str
        Name of the source column, carried through for reporting.

    Returns
    -------
    PercentileSummary
        Never raises on an empty sample.
    """
    x = np.sort(drop_non_finite(check_array(values, 'values').ravel()))

    if len(x) == 0:
        return PercentileSummary(
            p10=0.0, p25=0.0, p50=0.0, p75=0.0, p90=0.0, p95=0.0, p99=0.0,
            iqr=0.0, lower_fence=0.0, upper_fence=0.0, outlier_count=0,
            column=column,
        )

    pct = {p: interpolated_percentile(x, p) for p in PERCENTILES}
    iqr = pct[75] - pct[25]
    lower_fence = pct[25] - TUKEY_K * iqr
    upper_fence = pct[75] + TUKEY_K * iqr
    outliers = x[(x < lower_fence) | (x > upper_fence)]

    return PercentileSummary(
        p10=round(pct[10], 3),
        p25=round(pct[25], 3),
        p50=round(pct[50], 3),
        p75=round(pct[75], 3),
        p90=round(pct[90], 3),
        p95=round(pct[95], 3),
        p99=round(pct[99], 3),
        iqr=round(iqr, 3),
        lower_fence=round(lower_fence, 3),
        upper_fence=round(upper_fence, 3),
        outlier_count=int(len(outliers)),
        outlier_values=tuple(float(v) for v in outliers),
        column=column,
    )
