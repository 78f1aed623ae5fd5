"""
Period bucketing and period-over-period growth.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Sequence

from pyanalytics.core.exceptions import DimensionError
from pyanalytics.timeseries._dates import period_key


@dataclass(frozen=True)
class PeriodAggregate:
    """Summary of the values falling in one period bucket."""
    period: str
    sum: float
    avg: float
    count: int
    min: float
    max: float


@dataclass(frozen=True)
class GrowthRate:
    """
    Change of a period's total against the previous period.

    ``percentage_change`` is relative to |previous| and 0 when the
    previous total is 0. Changes are rounded to 2 decimals.
    """
    period: str
    current_value: float
    previous_value: float
    absolute_change: float
    percentage_change: float


def aggregate_by_period(
    dates: Sequence[dt.date],
    values: Sequence[float],
    frequency: str,
) -> list[PeriodAggregate]:
    """
    Bucket dated values by period.

    Parameters
    ----------
    dates, values : sequences of equal length
    frequency : str
        'yearly', 'quarterly', 'monthly', 'weekly'; anything else buckets
        by calendar day.

    Returns
    -------
    list of PeriodAggregate
        Sorted by period label.
    """
    if len(dates) != len(values):
        raise DimensionError(f"dates has {len(dates)} entries, values has {len(values)}")

    buckets: dict[str, list[float]] = {}
    for d, v in zip(dates, values):
        buckets.setdefault(period_key(d, frequency), []).append(float(v))

    return [
        PeriodAggregate(
            period=key,
            sum=sum(vals),
            avg=sum(vals) / len(vals),
            count=len(vals),
            min=min(vals),
            max=max(vals),
        )
        for key, vals in sorted(buckets.items())
    ]


def growth_rates(
    dates: Sequence[dt.date],
    values: Sequence[float],
    frequency: str,
) -> list[GrowthRate]:
    """
    Period-over-period change of the per-period totals.

    Returns one entry per period after the first; empty for fewer than
    2 observations.
    """
    if len(values) < 2:
        return []
    aggregates = aggregate_by_period(dates, values, frequency)
    return growth_from_aggregates(aggregates)


def growth_from_aggregates(aggregates: Sequence[PeriodAggregate]) -> list[GrowthRate]:
    rates = []
    for prev, cur in zip(aggregates, aggregates[1:]):
        change = cur.sum - prev.sum
        pct = change / abs(prev.sum) * 100.0 if prev.sum != 0 else 0.0
        rates.append(GrowthRate(
            period=cur.period,
            current_value=cur.sum,
            previous_value=prev.sum,
            absolute_change=round(change, 2),
            percentage_change=round(pct, 2),
        ))
    return rates
