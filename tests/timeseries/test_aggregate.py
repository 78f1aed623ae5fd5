"""
Tests for aggregate_by_period() and growth_rates().
"""

import datetime as dt

import pytest

from pyanalytics.core.exceptions import DimensionError
from pyanalytics.timeseries import aggregate_by_period, growth_rates


DATES = [dt.date(2024, 1, 5), dt.date(2024, 2, 10), dt.date(2024, 1, 20)]
VALUES = [10.0, 5.0, 20.0]


class TestAggregateByPeriod:

    def test_monthly_buckets(self):
        jan, feb = aggregate_by_period(DATES, VALUES, "monthly")
        assert jan.period == "2024-01"
        assert (jan.sum, jan.avg, jan.count, jan.min, jan.max) == (30.0, 15.0, 2, 10.0, 20.0)
        assert feb.period == "2024-02"
        assert feb.count == 1

    def test_yearly(self):
        (year,) = aggregate_by_period(DATES, VALUES, "yearly")
        assert year.period == "2024"
        assert year.sum == 35.0

    def test_daily_fallback(self):
        buckets = aggregate_by_period(DATES, VALUES, "irregular")
        assert [b.period for b in buckets] == ["2024-01-05", "2024-01-20", "2024-02-10"]

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            aggregate_by_period(DATES, VALUES[:2], "monthly")


class TestGrowthRates:

    def test_month_over_month(self):
        (rate,) = growth_rates(DATES, VALUES, "monthly")
        assert rate.period == "2024-02"
        assert rate.previous_value == 30.0
        assert rate.current_value == 5.0
        assert rate.absolute_change == -25.0
        assert rate.percentage_change == pytest.approx(-83.33)

    def test_negative_previous(self):
        dates = [dt.date(2024, 1, 1), dt.date(2024, 2, 1)]
        (rate,) = growth_rates(dates, [-10.0, 10.0], "monthly")
        assert rate.percentage_change == 200.0

    def test_zero_previous(self):
        dates = [dt.date(2024, 1, 1), dt.date(2024, 2, 1)]
        (rate,) = growth_rates(dates, [0.0, 10.0], "monthly")
        assert rate.absolute_change == 10.0
        assert rate.percentage_change == 0.0

    def test_too_few_values(self):
        assert growth_rates([dt.date(2024, 1, 1)], [1.0], "monthly") == []
