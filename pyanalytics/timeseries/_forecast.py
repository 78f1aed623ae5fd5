"""
Point forecasts with widening 95% bands.

Holt's linear (double exponential) smoothing is the default; a straight
line fitted by least squares is the alternative.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import Any, Literal, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyanalytics.core.validation import check_array, check_choice

ForecastMethod = Literal['exponential', 'linear']
FORECAST_METHODS = ('exponential', 'linear')

Z_95 = 1.96
MIN_HISTORY = 3


@dataclass(frozen=True)
class ForecastPoint:
    """
    One forecast step.

    ``value``, ``lower`` and ``upper`` are rounded to 2 decimals. ``date``
    is filled in when the forecast is anchored to a dated series.
    """
    step: int
    value: float
    lower: float
    upper: float
    date: dt.date | None = None

    @property
    def label(self) -> str:
        return self.date.isoformat() if self.date is not None else f"+{self.step}"

    @property
    def width(self) -> float:
        return self.upper - self.lower


def _point(step: int, value: float, half_width: float) -> ForecastPoint:
    return ForecastPoint(
        step=step,
        value=round(value, 2),
        lower=round(value - half_width, 2),
        upper=round(value + half_width, 2),
    )


def holt_forecast(
    x: NDArray[np.floating[Any]],
    periods: int,
    alpha: float = 0.3,
    beta: float = 0.1,
) -> list[ForecastPoint]:
    """
    Holt's double exponential smoothing.

    Level starts at x[0] and trend at x[1] - x[0]. The band half-width at
    step h is 1.96 · RMSE · sqrt(h), with the RMSE taken over the
    one-step fitted values level + trend.
    """
    level = x[0]
    trend = x[1] - x[0] if len(x) > 1 else 0.0

    errors = np.empty(len(x) - 1)
    for i in range(1, len(x)):
        prev_level = level
        level = alpha * x[i] + (1.0 - alpha) * (prev_level + trend)
        trend = beta * (level - prev_level) + (1.0 - beta) * trend
        errors[i - 1] = x[i] - (level + trend)

    stderr = float(np.sqrt(np.mean(errors ** 2))) if len(errors) else 0.0

    return [
        _point(h, float(level + trend * h), Z_95 * stderr * np.sqrt(h))
        for h in range(1, periods + 1)
    ]


def linear_forecast(x: NDArray[np.floating[Any]], periods: int) -> list[ForecastPoint]:
    """
    Least-squares line through (i, x[i]), extrapolated.

    The band half-width is the usual prediction interval
    1.96 · s · sqrt(1 + 1/n + (t - mean(t))² / Sxx).
    """
    n = len(x)
    t = np.arange(n, dtype=np.float64)
    t_mean = t.mean()
    sxx = float(np.sum((t - t_mean) ** 2))
    slope = float(np.sum((t - t_mean) * (x - x.mean()))) / sxx
    intercept = float(x.mean() - slope * t_mean)

    residuals = x - (slope * t + intercept)
    stderr = float(np.sqrt(np.sum(residuals ** 2) / max(1, n - 2)))

    points = []
    for h in range(1, periods + 1):
        ti = n - 1 + h
        half = Z_95 * stderr * np.sqrt(1.0 + 1.0 / n + (ti - t_mean) ** 2 / sxx)
        points.append(_point(h, slope * ti + intercept, float(half)))
    return points


def forecast(
    values: ArrayLike,
    periods: int = 6,
    method: ForecastMethod = 'exponential',
    *,
    alpha: float = 0.3,
    beta: float = 0.1,
    dates: Sequence[dt.date] | None = None,
) -> list[ForecastPoint]:
    """
    Forecast the next ``periods`` values of a series.

    Parameters
    ----------
    values : array-like
        History, oldest first. NaN entries are not allowed.
    periods : int
        Horizon. Default 6.
    method : {'exponential', 'linear'}
        Holt smoothing (default) or linear trend.
    alpha, beta : float
        Holt level and trend smoothing constants.
    dates : sequence of date, optional
        One date per step to label the forecast with.

    Returns
    -------
    list of ForecastPoint
        Empty for fewer than 3 values.
    """
    method = check_choice(method, FORECAST_METHODS, 'method')
    x = check_array(values, 'values').ravel()
    if len(x) < MIN_HISTORY or periods < 1:
        return []

    if method == 'linear':
        points = linear_forecast(x, periods)
    else:
        points = holt_forecast(x, periods, alpha=alpha, beta=beta)

    if dates is not None:
        points = [replace(p, date=d) for p, d in zip(points, dates)]
    return points
