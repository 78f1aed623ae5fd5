"""
Date-column detection, frequency classification and calendar helpers.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Literal, Sequence
import pandas as pd

from pyanalytics.core.dataset import Dataset
from pyanalytics.core.values import CellValue, to_date

Frequency = Literal['daily', 'weekly', 'monthly', 'quarterly', 'yearly', 'irregular']

FREQUENCIES: tuple[str, ...] = ('daily', 'weekly', 'monthly', 'quarterly', 'yearly', 'irregular')

# Average days per period, for expected bucket counts
_PERIOD_DAYS = {
    'daily': 1.0,
    'weekly': 7.0,
    'monthly': 30.44,
    'quarterly': 91.31,
    'yearly': 365.25,
}

# Deltas inspected when classifying frequency
_FREQUENCY_WINDOW = 200

MIN_DATES = 3


def parse_date(value: CellValue) -> dt.date | None:
    """Parse a cell as a date; see ``pyanalytics.core.values.to_date``."""
    return to_date(value)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class DateColumnInfo:
    """
    Profile of a column whose values parse as dates.

    Attributes
    ----------
    is_date_table : bool
        True when coverage > 0.6 and the frequency is regular, i.e. the
        column behaves like a calendar dimension.
    gaps : int
        Expected periods between the first and last date with no entry.
    coverage : float
        Unique dates / expected periods, capped at 1 (0.5 if irregular).
    """
    column_name: str
    is_date_table: bool
    frequency: Frequency
    date_min: dt.date
    date_max: dt.date
    gaps: int
    coverage: float
    total_dates: int
    unique_dates: int
    dataset_id: str = ''
    dataset_name: str = ''


@dataclass(frozen=True)
class DateParts:
    """
    Calendar breakdown of one date.

    ``week`` is ceil(day_of_year / 7) (weeks counted from January 1st, not
    ISO weeks); ``day_of_week`` is 0 for Sunday through 6 for Saturday.
    """
    year: int
    quarter: int
    month: int
    week: int
    day_of_week: int
    day_of_month: int
    date: dt.date


def median_delta(dates: Sequence[dt.date]) -> int | None:
    """
    Typical spacing in days among the first 200 sorted dates.

    Zero deltas (repeated dates) are ignored; the upper median is used.
    Returns None when no positive delta exists.
    """
    ordered = sorted(dates)[:_FREQUENCY_WINDOW]
    deltas = sorted(
        (b - a).days for a, b in zip(ordered, ordered[1:]) if (b - a).days > 0
    )
    if not deltas:
        return None
    return deltas[len(deltas) // 2]


def detect_frequency(dates: Sequence[dt.date]) -> Frequency:
    """
    Classify the spacing of a set of dates.

    Median delta <= 1 day is daily, 5-9 weekly, 27-33 monthly, 85-100
    quarterly, 350-380 yearly; anything else is irregular.
    """
    if len(dates) < 2:
        return 'irregular'
    delta = median_delta(dates)
    if delta is None:
        return 'irregular'
    if delta <= 1:
        return 'daily'
    if 5 <= delta <= 9:
        return 'weekly'
    if 27 <= delta <= 33:
        return 'monthly'
    if 85 <= delta <= 100:
        return 'quarterly'
    if 350 <= delta <= 380:
        return 'yearly'
    return 'irregular'


def calculate_coverage(dates: Sequence[dt.date], frequency: Frequency) -> tuple[int, float]:
    """
    Compare the number of distinct dates with the number the span implies.

    Returns:
        (gaps, coverage); irregular series or fewer than 2 dates give (0, 0.5)
    """
    if len(dates) < 2 or frequency == 'irregular':
        return 0, 0.5

    unique = set(dates)
    span_days = (max(unique) - min(unique)).days
    expected = max(1, _round_half_up(span_days / _PERIOD_DAYS[frequency]))
    coverage = min(1.0, len(unique) / expected)
    gaps = max(0, expected - len(unique))
    return gaps, coverage


def detect_date_columns(dataset: Dataset, *, min_parse_rate: float = 0.7) -> list[DateColumnInfo]:
    """
    Find date-like columns among the dataset's date and string columns.

    A column qualifies when at least ``min_parse_rate`` of all rows parse
    as a date and at least 3 dates were found.
    """
    found = []
    denominator = max(dataset.row_count, 1)

    for col in dataset.columns:
        if col.type not in ('date', 'string'):
            continue

        dates = [d for d in (to_date(v) for v in dataset.column(col.name)) if d is not None]
        if len(dates) / denominator < min_parse_rate or len(dates) < MIN_DATES:
            continue

        dates.sort()
        frequency = detect_frequency(dates)
        gaps, coverage = calculate_coverage(dates, frequency)
        found.append(DateColumnInfo(
            column_name=col.name,
            is_date_table=coverage > 0.6 and frequency != 'irregular',
            frequency=frequency,
            date_min=dates[0],
            date_max=dates[-1],
            gaps=gaps,
            coverage=coverage,
            total_dates=len(dates),
            unique_dates=len(set(dates)),
            dataset_id=dataset.id,
            dataset_name=dataset.name,
        ))

    return found


def _day_of_year(d: dt.date) -> int:
    return d.timetuple().tm_yday


def date_parts(d: dt.date) -> DateParts:
    return DateParts(
        year=d.year,
        quarter=(d.month - 1) // 3 + 1,
        month=d.month,
        week=math.ceil(_day_of_year(d) / 7),
        day_of_week=d.isoweekday() % 7,
        day_of_month=d.day,
        date=d,
    )


def build_date_hierarchy(dates: Sequence[dt.date]) -> list[DateParts]:
    """Year/quarter/month/week/day breakdown of each date, in input order."""
    return [date_parts(d) for d in dates]


def period_key(d: dt.date, frequency: str) -> str:
    """
    Bucket label of a date: "2024", "2024-Q1", "2024-03", "2024-W09"
    or "2024-03-01" (daily and irregular).
    """
    if frequency == 'yearly':
        return f"{d.year}"
    if frequency == 'quarterly':
        return f"{d.year}-Q{(d.month - 1) // 3 + 1}"
    if frequency == 'monthly':
        return f"{d.year}-{d.month:02d}"
    if frequency == 'weekly':
        return f"{d.year}-W{math.ceil(_day_of_year(d) / 7):02d}"
    return d.isoformat()


def advance(d: dt.date, frequency: str, steps: int, *, irregular_days: int = 1) -> dt.date:
    """
    Date ``steps`` periods after ``d``.

    Month arithmetic clips to the end of shorter months (Jan 31 + 1 month
    is Feb 28/29). Irregular series step by ``irregular_days``.
    """
    stamp = pd.Timestamp(d)
    if frequency == 'daily':
        offset = pd.DateOffset(days=steps)
    elif frequency == 'weekly':
        offset = pd.DateOffset(weeks=steps)
    elif frequency == 'monthly':
        offset = pd.DateOffset(months=steps)
    elif frequency == 'quarterly':
        offset = pd.DateOffset(months=3 * steps)
    elif frequency == 'yearly':
        offset = pd.DateOffset(years=steps)
    else:
        offset = pd.DateOffset(days=steps * irregular_days)
    return (stamp + offset).date()
