"""
pytest configuration and shared fixtures.
"""

import datetime as dt

import numpy as np
import pytest

from pyanalytics.core.dataset import Dataset


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sales_dataset(rng):
    """Mixed-type dataset: region (string), two numeric columns, monthly dates."""
    n = 40
    regions = ["North", "South", "East", "West"]
    start = dt.date(2022, 1, 1)
    records = []
    for i in range(n):
        month = start.month - 1 + i
        records.append({
            "region": regions[i % 4],
            "sales": float(100 + 5 * i + rng.normal(0, 3)),
            "units": float(10 + i + rng.normal(0, 1)),
            "date": dt.date(start.year + month // 12, month % 12 + 1, 1).isoformat(),
        })
    return Dataset.from_records(records, name="sales")


@pytest.fixture
def blobs_dataset(rng):
    """Two well-separated 2-D blobs, 50 points each."""
    a = rng.normal(loc=(0.0, 0.0), scale=0.5, size=(50, 2))
    b = rng.normal(loc=(10.0, 10.0), scale=0.5, size=(50, 2))
    points = np.vstack([a, b])
    records = [{"x": float(x), "y": float(y)} for x, y in points]
    return Dataset.from_records(records, name="blobs")


@pytest.fixture
def linear_dataset():
    """y = 2x + 3 exactly, x = 1..10."""
    records = [{"x": float(x), "y": 2.0 * x + 3.0} for x in range(1, 11)]
    return Dataset.from_records(records, name="linear")
