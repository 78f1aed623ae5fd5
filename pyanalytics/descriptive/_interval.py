"""
Normal-approximation confidence interval for a mean.

The critical value is a z quantile picked from the confidence level and
widened by ``1 + 2/n`` for samples under 30, which stands in for the
heavier tails of the t distribution.
"""

from __future__ import annotations

from dataclasses import dataclass
import numpy as np
from numpy.typing import ArrayLike

from pyanalytics.core.validation import check_array, check_conf_level, drop_non_finite

SMALL_SAMPLE = 30


@dataclass(frozen=True)
class ConfidenceInterval:
    """
    Interval estimate for the mean of one sample.

    All values except ``conf_level`` and ``sample_size`` are rounded to
    3 decimals. An empty sample gives all zeros.
    """
    mean: float
    lower: float
    upper: float
    margin: float
    conf_level: float
    sample_size: int
    standard_error: float
    column: str = ''


def z_critical(conf_level: float, n: int) -> float:
    """Critical value for ``conf_level``, widened for small samples."""
    if conf_level >= 0.99:
        z = 2.576
    elif conf_level >= 0.95:
        z = 1.96
    elif conf_level >= 0.90:
        z = 1.645
    else:
        z = 1.96
    if 0 < n < SMALL_SAMPLE:
        z *= 1.0 + 2.0 / n
    return z


def confidence_interval(
    values: ArrayLike,
    conf_level: float = 0.95,
    *,
    column: str = '',
) -> ConfidenceInterval:
    """
    Confidence interval for the sample mean.

    Parameters
    ----------
    values : array-like
        Numeric sample. NaN/Inf entries are dropped.
    conf_level : float
        0.99, 0.95 and 0.90 map to z = 2.576, 1.96 and 1.645; any other
        level falls back to 1.96. Default 0.95.
    column : str
        Name of the source column, carried through for reporting.

    Returns
    -------
    ConfidenceInterval
    """
    conf_level = check_conf_level(conf_level)
    x = drop_non_finite(check_array(values, 'values').ravel())
    n = len(x)

    if n == 0:
        return ConfidenceInterval(
            mean=0.0, lower=0.0, upper=0.0, margin=0.0,
            conf_level=conf_level, sample_size=0, standard_error=0.0,
            column=column,
        )

    mean = float(np.mean(x))
    # n - 1 divisor, 1 for a single value
    variance = float(np.sum((x - mean) ** 2)) / (n - 1 or 1)
    se = np.sqrt(variance) / np.sqrt(n)
    margin = z_critical(conf_level, n) * se

    return ConfidenceInterval(
        mean=round(mean, 3),
        lower=round(mean - margin, 3),
        upper=round(mean + margin, 3),
        margin=round(float(margin), 3),
        conf_level=conf_level,
        sample_size=n,
        standard_error=round(float(se), 3),
        column=column,
    )
