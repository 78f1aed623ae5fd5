"""
Tests for forecast() with Holt smoothing and linear trend.
"""

import datetime as dt

import numpy as np
import pytest

from pyanalytics.core.exceptions import ValidationError
from pyanalytics.timeseries import forecast


@pytest.fixture
def line():
    """10, 15, ..., 65."""
    return 10.0 + 5.0 * np.arange(12)


class TestHolt:

    def test_linear_series(self, line):
        points = forecast(line, 4)
        assert [p.step for p in points] == [1, 2, 3, 4]
        assert [p.value for p in points] == [70.0, 75.0, 80.0, 85.0]

    def test_band(self, line):
        # One-step errors are all -5 on a perfect line, so RMSE = 5
        first = forecast(line, 1)[0]
        assert first.lower == pytest.approx(70.0 - 9.8)
        assert first.upper == pytest.approx(70.0 + 9.8)

    def test_band_widens(self, rng):
        x = 50 + 2 * np.arange(30) + rng.normal(0, 3, 30)
        widths = [p.width for p in forecast(x, 6)]
        assert all(b > a for a, b in zip(widths, widths[1:]))

    def test_smoothing_constants(self, rng):
        x = 50 + rng.normal(0, 5, 20)
        assert forecast(x, 3, alpha=0.9)[0].value != forecast(x, 3, alpha=0.1)[0].value

    def test_constant_series(self):
        points = forecast([4.0] * 6, 2)
        assert [p.value for p in points] == [4.0, 4.0]
        assert all(p.width == 0 for p in points)


class TestLinear:

    def test_exact_line(self, line):
        points = forecast(line, 3, method="linear")
        assert [p.value for p in points] == [70.0, 75.0, 80.0]
        assert all(p.lower == p.upper == p.value for p in points)

    def test_prediction_interval(self, rng):
        x = 3 + 0.5 * np.arange(20) + rng.normal(0, 1, 20)
        t = np.arange(20)
        slope, intercept = np.polyfit(t, x, 1)
        s = np.sqrt(np.sum((x - (slope * t + intercept)) ** 2) / 18)
        sxx = np.sum((t - t.mean()) ** 2)
        half = 1.96 * s * np.sqrt(1 + 1 / 20 + (20 - t.mean()) ** 2 / sxx)
        first = forecast(x, 1, method="linear")[0]
        assert first.value == pytest.approx(slope * 20 + intercept, abs=0.01)
        assert first.width == pytest.approx(2 * half, abs=0.02)


class TestEdgeCases:

    def test_too_short(self):
        assert forecast([1.0, 2.0], 3) == []

    def test_no_periods(self, line):
        assert forecast(line, 0) == []

    def test_dates_attached(self, line):
        dates = [dt.date(2025, 1, 1), dt.date(2025, 2, 1)]
        points = forecast(line, 2, dates=dates)
        assert [p.date for p in points] == dates
        assert points[0].label == "2025-01-01"

    def test_undated_label(self, line):
        assert forecast(line, 1)[0].label == "+1"

    def test_unknown_method(self, line):
        with pytest.raises(ValidationError):
            forecast(line, 2, method="arima")
