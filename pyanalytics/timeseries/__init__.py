"""
Time-series module.

Public API:
    run_time_series_analysis(dataset, date_column, value_column) - one series
    auto_detect_time_series(dataset)                           - best date column x numeric columns
    detect_date_columns(dataset)                               - date column profiling
    decompose, moving_average, detect_seasonality, forecast    - array-level building blocks
"""

from pyanalytics.timeseries._aggregate import (
    GrowthRate,
    PeriodAggregate,
    aggregate_by_period,
    growth_rates,
)
from pyanalytics.timeseries._dates import (
    DateColumnInfo,
    DateParts,
    advance,
    build_date_hierarchy,
    calculate_coverage,
    detect_date_columns,
    detect_frequency,
    parse_date,
    period_key,
)
from pyanalytics.timeseries._forecast import ForecastPoint, forecast
from pyanalytics.timeseries._smoothing import (
    Decomposition,
    decompose,
    detect_seasonality,
    moving_average,
)
from pyanalytics.timeseries.solution import TimeSeriesParams, TimeSeriesSolution
from pyanalytics.timeseries.solvers import auto_detect_time_series, run_time_series_analysis

__all__ = [
    "run_time_series_analysis",
    "auto_detect_time_series",
    "detect_date_columns",
    "detect_frequency",
    "calculate_coverage",
    "build_date_hierarchy",
    "parse_date",
    "period_key",
    "advance",
    "moving_average",
    "decompose",
    "detect_seasonality",
    "aggregate_by_period",
    "growth_rates",
    "forecast",
    "DateColumnInfo",
    "DateParts",
    "Decomposition",
    "ForecastPoint",
    "PeriodAggregate",
    "GrowthRate",
    "TimeSeriesParams",
    "TimeSeriesSolution",
]
