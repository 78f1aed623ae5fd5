"""
Tests for pareto_analysis() and pareto_from_values().
"""

import pytest

from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import DegenerateInputError, InvalidColumnReference, ValidationError
from pyanalytics.pareto import pareto_analysis, pareto_from_values


class TestRanking:

    def test_classic_split(self):
        result = pareto_from_values({"C": 15, "A": 50, "D": 5, "B": 30})
        assert [item.category for item in result.items] == ["A", "B", "C", "D"]
        assert [item.cumulative_percent for item in result.items] == [50.0, 80.0, 95.0, 100.0]
        assert result.vital_few_count == 2
        assert [item.category for item in result.vital_few] == ["A", "B"]
        assert result.vital_few_percent == 80.0
        assert result.total == 100.0
        assert result.interpretation.startswith(
            "Top 2 of 4 categories (50%) account for 80.0% of total value."
        )
        assert "Classic Pareto distribution" in result.interpretation

    def test_even_distribution(self):
        result = pareto_from_values({"A": 40, "B": 35, "C": 25})
        assert result.vital_few_count == 2
        assert result.vital_few_percent == 75.0
        assert "more even than typical" in result.interpretation

    def test_largest_always_vital(self):
        result = pareto_from_values({"A": 90, "B": 10}, vital_threshold=50)
        assert result.vital_few_count == 1
        assert result.items[0].is_vital
        assert not result.items[1].is_vital

    def test_boundary_tolerance(self):
        """Running shares that sum to the threshold in floating point stay vital."""
        result = pareto_from_values({"a": 0.1, "b": 0.2, "c": 0.5, "d": 0.2}, vital_threshold=70)
        assert result.vital_few_count == 2

    def test_negative_values_use_magnitude(self):
        result = pareto_from_values({"refunds": -60, "sales": 40})
        assert result.items[0].category == "refunds"
        assert result.items[0].value == 60.0

    def test_invalid_threshold(self):
        with pytest.raises(ValidationError):
            pareto_from_values({"a": 1}, vital_threshold=0)
        with pytest.raises(ValidationError):
            pareto_from_values({"a": 1}, vital_threshold=120)


class TestFromDataset:

    def test_aggregates_by_category(self):
        ds = Dataset.from_records([
            {"product": "widget", "revenue": 100},
            {"product": "gadget", "revenue": 40},
            {"product": "widget", "revenue": 60},
            {"product": None, "revenue": 10},
            {"product": "gadget", "revenue": "n/a"},
        ])
        result = pareto_analysis(ds, "product", "revenue")
        values = {item.category: item.value for item in result.items}
        assert values == {"widget": 160.0, "gadget": 40.0, "Unknown": 10.0}
        assert result.column == "product"
        assert result.value_column == "revenue"
        assert result.backend_name == "cpu_pareto"

    def test_zero_total(self):
        ds = Dataset.from_records([{"c": "a", "v": 0}, {"c": "b", "v": 0}])
        result = pareto_analysis(ds, "c", "v")
        assert result.items == ()
        assert result.interpretation == "No data to analyze."
        assert result.reason == "degenerate_input"
        with pytest.raises(DegenerateInputError):
            result.raise_for_status()

    def test_unknown_column(self):
        ds = Dataset.from_records([{"c": "a", "v": 1}])
        with pytest.raises(InvalidColumnReference):
            pareto_analysis(ds, "c", "missing")


class TestSummary:

    def test_summary_marks_vital(self):
        s = pareto_from_values({"A": 50, "B": 30, "C": 20}).summary()
        assert "Pareto analysis of value by category" in s
        assert "*" in s

    def test_repr(self):
        assert "vital_few_count=2" in repr(pareto_from_values({"A": 50, "B": 30, "C": 20}))
