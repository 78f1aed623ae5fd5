"""
Time-series test fixtures.
"""

import datetime as dt

import pytest

from pyanalytics.core.dataset import Dataset


def month_starts(year, month, n):
    out = []
    for i in range(n):
        m = month - 1 + i
        out.append(dt.date(year + m // 12, m % 12 + 1, 1))
    return out


@pytest.fixture
def monthly_dataset(rng):
    """24 monthly points rising by 5 per month with unit noise."""
    dates = month_starts(2022, 1, 24)
    records = [
        {"month": d.isoformat(), "revenue": float(100 + 5 * i + rng.normal(0, 1))}
        for i, d in enumerate(dates)
    ]
    return Dataset.from_records(records, name="monthly")
