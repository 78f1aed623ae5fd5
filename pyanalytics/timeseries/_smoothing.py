"""
Moving averages, classical additive decomposition and seasonality strength.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyanalytics.core.validation import check_array, check_choice, check_positive_int

MovingAverageKind = Literal['SMA', 'EMA', 'WMA']
MA_KINDS = ('SMA', 'EMA', 'WMA')


def _series(values: ArrayLike) -> NDArray[np.floating[Any]]:
    return check_array(values, 'values').ravel()


def _sma(x: NDArray, window: int) -> NDArray:
    csum = np.cumsum(x)
    out = np.empty_like(x)
    # Partial windows at the start average what is available
    head = min(window, len(x))
    out[:head] = csum[:head] / np.arange(1, head + 1)
    if len(x) > window:
        out[window:] = (csum[window:] - csum[:-window]) / window
    return out


def _ema(x: NDArray, window: int) -> NDArray:
    alpha = 2.0 / (window + 1)
    out = np.empty_like(x)
    out[0] = x[0]
    for i in range(1, len(x)):
        out[i] = alpha * x[i] + (1.0 - alpha) * out[i - 1]
    return out


def _wma(x: NDArray, window: int) -> NDArray:
    out = np.empty_like(x)
    for i in range(len(x)):
        span = x[max(0, i - window + 1): i + 1]
        weights = np.arange(1, len(span) + 1, dtype=np.float64)
        out[i] = span @ weights / weights.sum()
    return out


def moving_average(
    values: ArrayLike,
    window: int,
    kind: MovingAverageKind = 'SMA',
) -> NDArray[np.floating[Any]]:
    """
    Trailing moving average, same length as the input.

    Parameters
    ----------
    values : array-like
    window : int
        Window length, capped at the series length.
    kind : {'SMA', 'EMA', 'WMA'}
        Simple, exponential (alpha = 2 / (window + 1)) or linearly
        weighted. SMA and WMA average the available points while the
        window is still filling.

    Returns
    -------
    ndarray
        Empty for an empty series or ``window < 1``.
    """
    kind = check_choice(kind, MA_KINDS, 'kind')
    x = _series(values)
    if len(x) == 0 or window < 1:
        return np.zeros(0, dtype=np.float64)
    window = min(int(window), len(x))

    if kind == 'EMA':
        return _ema(x, window)
    if kind == 'WMA':
        return _wma(x, window)
    return _sma(x, window)


@dataclass(frozen=True)
class Decomposition:
    """
    Additive decomposition value = trend + seasonal + residual.

    ``is_fallback`` marks series too short for a seasonal split, where the
    trend is a simple moving average and seasonal/residual are zero.
    """
    trend: NDArray[np.floating[Any]]
    seasonal: NDArray[np.floating[Any]]
    residual: NDArray[np.floating[Any]]
    period: int
    is_fallback: bool = False


def centered_moving_average(x: NDArray, period: int) -> NDArray:
    """
    Mean over the window i - period//2 .. i + period//2.

    Positions without a full window are NaN.
    """
    n = len(x)
    half = period // 2
    out = np.full(n, np.nan)
    width = 2 * half + 1
    if n >= width:
        csum = np.concatenate(([0.0], np.cumsum(x)))
        out[half:n - half] = (csum[width:] - csum[:-width]) / width
    return out


def decompose(values: ArrayLike, period: int) -> Decomposition:
    """
    Classical additive decomposition.

    The trend is a centered moving average over ``period``; the seasonal
    component is the mean detrended value per position in the cycle,
    centered to sum to zero; the residual is what is left. Where the
    centered average is undefined the trend is filled with value -
    seasonal and the residual taken against the raw value.

    Series shorter than 2 * period fall back to an SMA trend with window
    max(3, n // 3) and zero seasonal and residual components.
    """
    period = check_positive_int(period, 'period')
    x = _series(values)
    n = len(x)

    if n < 2 * period:
        trend = moving_average(x, max(3, n // 3))
        return Decomposition(
            trend=trend,
            seasonal=np.zeros(n),
            residual=np.zeros(n),
            period=period,
            is_fallback=True,
        )

    cma = centered_moving_average(x, period)
    defined = ~np.isnan(cma)
    positions = np.arange(n) % period

    pattern = np.zeros(period)
    for pos in range(period):
        mask = defined & (positions == pos)
        if mask.any():
            pattern[pos] = np.mean(x[mask] - cma[mask])
    pattern -= pattern.mean()

    seasonal = pattern[positions]
    base = np.where(defined, cma, x)
    residual = x - base - seasonal
    trend = np.where(defined, cma, x - seasonal)

    return Decomposition(trend=trend, seasonal=seasonal, residual=residual, period=period)


def detect_seasonality(values: ArrayLike, max_period: int = 52) -> tuple[int, float]:
    """
    Strongest positive autocorrelation over lags 2..max_period.

    ``max_period`` is reduced to n // 2 for series shorter than
    2 * max_period. Autocorrelation at lag k is
    sum((x_i - mean)(x_{i+k} - mean)) / ((n - k) * variance).

    Returns:
        (period, strength): the best lag (0 if none is positive) and its
        autocorrelation clamped to [0, 1]
    """
    x = _series(values)
    n = len(x)
    if n < 2 * max_period:
        max_period = n // 2
    if max_period < 2:
        return 0, 0.0

    dev = x - x.mean()
    variance = float(np.mean(dev ** 2))
    if variance == 0:
        return 0, 0.0

    best_period = 0
    best_corr = 0.0
    for lag in range(2, max_period + 1):
        count = n - lag
        autocorr = float(dev[:count] @ dev[lag:]) / (count * variance)
        if autocorr > best_corr:
            best_corr = autocorr
            best_period = lag

    return best_period, max(0.0, min(1.0, best_corr))
