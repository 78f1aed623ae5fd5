"""
Time-series analysis solution types.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any
import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyanalytics.core.result import Result
from pyanalytics.timeseries._aggregate import GrowthRate
from pyanalytics.timeseries._forecast import ForecastPoint


@dataclass(frozen=True)
class TimeSeriesParams:
    """
    Parameter payload for a single date × value series.

    Attributes
    ----------
    dates : tuple of date
        Unique dates, ascending; values on the same date are summed.
    values : ndarray
        Series aligned with ``dates``.
    trend, seasonal, residual : ndarray
        Additive decomposition of ``values``.
    moving_average : ndarray
        Trailing SMA of ``values``.
    forecast : tuple of ForecastPoint
        Future points labelled with dates.
    growth_rates : tuple of GrowthRate
        Period-over-period change of the per-period totals.
    seasonality_strength : float
        Best autocorrelation, in [0, 1].
    seasonal_period : int
        Lag achieving ``seasonality_strength`` (0 when none).
    """
    column: str
    date_column: str
    frequency: str
    dates: tuple[dt.date, ...]
    values: NDArray[np.floating[Any]]
    trend: NDArray[np.floating[Any]]
    seasonal: NDArray[np.floating[Any]]
    residual: NDArray[np.floating[Any]]
    moving_average: NDArray[np.floating[Any]]
    forecast: tuple[ForecastPoint, ...]
    growth_rates: tuple[GrowthRate, ...]
    seasonality_strength: float
    seasonal_period: int
    decomposition_period: int


@dataclass
class TimeSeriesSolution:
    """
    User-facing time-series results.

    Wraps Result[TimeSeriesParams] and provides convenient accessors.
    """
    _result: Result[TimeSeriesParams]

    @property
    def column(self) -> str:
        """Value column."""
        return self._result.params.column

    @property
    def date_column(self) -> str:
        return self._result.params.date_column

    @property
    def frequency(self) -> str:
        return self._result.params.frequency

    @property
    def dates(self) -> tuple[dt.date, ...]:
        return self._result.params.dates

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.values

    @property
    def trend(self) -> NDArray[np.floating[Any]]:
        return self._result.params.trend

    @property
    def seasonal(self) -> NDArray[np.floating[Any]]:
        return self._result.params.seasonal

    @property
    def residual(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residual

    @property
    def moving_average(self) -> NDArray[np.floating[Any]]:
        return self._result.params.moving_average

    @property
    def forecast(self) -> tuple[ForecastPoint, ...]:
        return self._result.params.forecast

    @property
    def growth_rates(self) -> tuple[GrowthRate, ...]:
        return self._result.params.growth_rates

    @property
    def seasonality_strength(self) -> float:
        return self._result.params.seasonality_strength

    @property
    def seasonal_period(self) -> int:
        return self._result.params.seasonal_period

    @property
    def decomposition_period(self) -> int:
        """Cycle length used for the additive decomposition."""
        return self._result.params.decomposition_period

    @property
    def n(self) -> int:
        return len(self._result.params.dates)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def to_frame(self) -> pd.DataFrame:
        """
        History as a pandas DataFrame indexed by date, with the
        decomposition and moving average alongside the values.
        """
        p = self._result.params
        return pd.DataFrame(
            {
                p.column: p.values,
                'trend': p.trend,
                'seasonal': p.seasonal,
                'residual': p.residual,
                'moving_average': p.moving_average,
            },
            index=pd.DatetimeIndex(pd.to_datetime(list(p.dates)), name=p.date_column),
        )

    def summary(self) -> str:
        p = self._result.params
        lines = [
            f"Time series: {p.column} by {p.date_column}",
            "",
            f"Frequency:            {p.frequency}",
            f"Observations:         {len(p.dates)}",
            f"Span:                 {p.dates[0].isoformat()} .. {p.dates[-1].isoformat()}",
            f"Seasonality strength: {p.seasonality_strength:.3f}"
            + (f" (lag {p.seasonal_period})" if p.seasonal_period else ""),
        ]
        if p.growth_rates:
            last = p.growth_rates[-1]
            lines.append(
                f"Last growth:          {last.absolute_change:+.2f} "
                f"({last.percentage_change:+.2f}%) in {last.period}"
            )
        if p.forecast:
            lines.append("")
            lines.append(f"{'forecast':<12s} {'value':>12s} {'lower':>12s} {'upper':>12s}")
            for point in p.forecast:
                lines.append(
                    f"{point.label:<12s} {point.value:>12.2f} "
                    f"{point.lower:>12.2f} {point.upper:>12.2f}"
                )
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"TimeSeriesSolution(column={p.column!r}, date_column={p.date_column!r}, "
            f"frequency={p.frequency!r}, n={len(p.dates)})"
        )
