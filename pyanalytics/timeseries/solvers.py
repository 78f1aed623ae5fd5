"""
Time-series analysis of one value column over one date column.
"""

from __future__ import annotations

import datetime as dt
import logging

import numpy as np

from pyanalytics.core.compute.timing import Timer
from pyanalytics.core.dataset import Dataset
from pyanalytics.core.result import Result
from pyanalytics.core.validation import check_choice
from pyanalytics.core.values import to_date, to_number
from pyanalytics.timeseries._aggregate import growth_rates
from pyanalytics.timeseries._dates import (
    FREQUENCIES,
    advance,
    detect_date_columns,
    detect_frequency,
    median_delta,
)
from pyanalytics.timeseries._forecast import forecast
from pyanalytics.timeseries._smoothing import decompose, detect_seasonality, moving_average
from pyanalytics.timeseries.solution import TimeSeriesParams, TimeSeriesSolution

logger = logging.getLogger(__name__)

MIN_POINTS = 5
MAX_HORIZON = 6

# Seasonal cycle length implied by each sampling frequency
SEASONAL_PERIODS = {
    'daily': 7,
    'weekly': 52,
    'monthly': 12,
    'quarterly': 4,
    'yearly': 1,
}


def seasonal_period_for(frequency: str, n: int) -> int:
    """Cycle length used for decomposition; irregular series use min(12, n // 3)."""
    return SEASONAL_PERIODS.get(frequency, min(12, n // 3))


def _collect(
    dataset: Dataset,
    date_column: str,
    value_column: str,
) -> tuple[list[dt.date], list[float]]:
    dates, values = [], []
    for row in dataset.rows:
        d = to_date(row[date_column])
        v = to_number(row[value_column])
        if d is not None and v is not None:
            dates.append(d)
            values.append(v)
    return dates, values


def run_time_series_analysis(
    dataset: Dataset,
    date_column: str,
    value_column: str,
    frequency: str | None = None,
) -> TimeSeriesSolution | None:
    """
    Decompose, smooth and forecast a value column over a date column.

    Parameters
    ----------
    dataset : Dataset
    date_column : str
        Column whose cells parse as dates.
    value_column : str
        Numeric column. Values sharing a date are summed.
    frequency : str, optional
        One of 'daily', 'weekly', 'monthly', 'quarterly', 'yearly',
        'irregular'. Detected from the unique dates when omitted.

    Returns
    -------
    TimeSeriesSolution or None
        None when fewer than 5 rows have both a date and a number, or
        fewer than 5 distinct dates remain after summing.

    Raises
    ------
    InvalidColumnReference
        If either column does not exist.
    """
    dataset.require_columns(date_column, value_column)
    if frequency is not None:
        frequency = check_choice(frequency, FREQUENCIES, 'frequency')

    raw_dates, raw_values = _collect(dataset, date_column, value_column)
    if len(raw_dates) < MIN_POINTS:
        logger.debug(
            "Skipping %s over %s: %d dated values", value_column, date_column, len(raw_dates)
        )
        return None

    timer = Timer()
    timer.start()

    with timer.section('aggregate'):
        totals: dict[dt.date, float] = {}
        for d, v in zip(raw_dates, raw_values):
            totals[d] = totals.get(d, 0.0) + v
        dates = sorted(totals)
        values = np.array([totals[d] for d in dates], dtype=np.float64)

    n = len(values)
    if n < MIN_POINTS:
        logger.debug("Skipping %s over %s: %d distinct dates", value_column, date_column, n)
        return None

    if frequency is None:
        frequency = detect_frequency(dates)

    period = seasonal_period_for(frequency, n)

    with timer.section('decompose'):
        parts = decompose(values, max(2, period))
        ma = moving_average(values, min(max(3, period), n // 2))
        seasonal_period, strength = detect_seasonality(values, min(period * 2, n // 2))

    with timer.section('growth'):
        rates = growth_rates(raw_dates, raw_values, frequency)

    with timer.section('forecast'):
        horizon = min(MAX_HORIZON, n // 3)
        step_days = median_delta(dates) or 1
        future = [
            advance(dates[-1], frequency, h, irregular_days=step_days)
            for h in range(1, horizon + 1)
        ]
        points = forecast(values, horizon, 'exponential', dates=future)

    timer.stop()

    warnings: list[str] = []
    if parts.is_fallback:
        warnings.append(
            f"Series of {n} points is shorter than two seasonal cycles "
            f"({2 * max(2, period)}); trend is a simple moving average"
        )

    params = TimeSeriesParams(
        column=value_column,
        date_column=date_column,
        frequency=frequency,
        dates=tuple(dates),
        values=values,
        trend=parts.trend,
        seasonal=parts.seasonal,
        residual=parts.residual,
        moving_average=ma,
        forecast=tuple(points),
        growth_rates=tuple(rates),
        seasonality_strength=strength,
        seasonal_period=seasonal_period,
        decomposition_period=parts.period,
    )
    result = Result(
        params=params,
        info={'method': 'holt', 'n': n, 'horizon': horizon},
        timing=timer.result(),
        backend_name='cpu_timeseries',
        warnings=tuple(warnings),
    )
    return TimeSeriesSolution(_result=result)


def auto_detect_time_series(
    dataset: Dataset,
    *,
    max_columns: int = 5,
) -> list[TimeSeriesSolution]:
    """
    Run time-series analysis for the first numeric columns over the best
    date column.

    The date column is the first detected one that is a date table or has
    coverage above 0.5; its detected frequency is reused for every series.
    Columns with too few dated values are skipped.
    """
    candidates = [
        info for info in detect_date_columns(dataset)
        if info.is_date_table or info.coverage > 0.5
    ]
    if not candidates:
        logger.debug("No date column found in dataset %r", dataset.name)
        return []

    date_info = candidates[0]
    solutions = []
    for name in dataset.columns_of_type('number')[:max_columns]:
        solution = run_time_series_analysis(
            dataset, date_info.column_name, name, date_info.frequency
        )
        if solution is not None:
            solutions.append(solution)
    return solutions
