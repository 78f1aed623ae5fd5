"""
Tests for detect_nonlinear_correlations().
"""

import numpy as np
import pytest

from pyanalytics.core.config import NonLinearityThresholds
from pyanalytics.core.dataset import Dataset
from pyanalytics.correlation import detect_nonlinear_correlations


@pytest.fixture
def curved_dataset():
    x = np.arange(1.0, 21.0)
    records = [
        {"x": float(v), "growth": float(np.exp(v)), "linear": float(2 * v + 1),
         "noise": float((-1) ** i)}
        for i, v in enumerate(x)
    ]
    return Dataset.from_records(records)


def _pair(pairs, a, b):
    for pair in pairs:
        if {pair.column1, pair.column2} == {a, b}:
            return pair
    return None


class TestDetectNonlinear:

    def test_exponential_flagged(self, curved_dataset):
        pair = _pair(detect_nonlinear_correlations(curved_dataset), "x", "growth")
        assert pair is not None
        assert pair.is_nonlinear
        assert pair.spearman == 1.0
        assert pair.pearson < 0.7
        assert pair.n_pairs == 20
        assert "Non-linear monotonic relationship" in pair.interpretation

    def test_linear_not_flagged(self, curved_dataset):
        pair = _pair(detect_nonlinear_correlations(curved_dataset), "x", "linear")
        assert not pair.is_nonlinear
        assert pair.pearson == 1.0
        assert pair.interpretation == "Strong positive relationship between x and linear."

    def test_weak_pairs_not_reported(self, curved_dataset):
        pairs = detect_nonlinear_correlations(curved_dataset)
        assert all("noise" not in (p.column1, p.column2) for p in pairs)

    def test_sorted_by_abs_spearman(self, rng):
        x = rng.normal(0.0, 1.0, 50)
        records = [
            {"a": float(v), "b": float(v + e), "c": float(-v + 3 * e)}
            for v, e in zip(x, rng.normal(0.0, 1.0, 50))
        ]
        pairs = detect_nonlinear_correlations(Dataset.from_records(records))
        spearmans = [abs(p.spearman) for p in pairs]
        assert spearmans == sorted(spearmans, reverse=True)

    def test_too_few_rows(self):
        records = [{"x": float(v), "y": float(v * v)} for v in range(5)]
        assert detect_nonlinear_correlations(Dataset.from_records(records)) == []

    def test_custom_thresholds(self, curved_dataset):
        strict = NonLinearityThresholds(gap=0.9)
        pair = _pair(detect_nonlinear_correlations(curved_dataset, thresholds=strict), "x", "growth")
        assert not pair.is_nonlinear
