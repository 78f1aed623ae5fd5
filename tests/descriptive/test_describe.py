"""
Tests for describe().
"""

import numpy as np
import pytest

from pyanalytics.core.dataset import ColumnInfo, Dataset
from pyanalytics.core.exceptions import InvalidColumnReference
from pyanalytics.descriptive import describe


@pytest.fixture
def dataset():
    columns = [ColumnInfo("amount", "number"), ColumnInfo("segment", "string")]
    return Dataset.from_records(
        [
            {"amount": 1, "segment": "a"},
            {"amount": 2, "segment": "b"},
            {"amount": 3, "segment": "a"},
            {"amount": 4, "segment": None},
            {"amount": None, "segment": "a"},
        ],
        columns,
    )


class TestDescribe:

    def test_numeric_column(self, dataset):
        s = describe(dataset)["amount"]
        assert s.count == 5
        assert s.non_null_count == 4
        assert s.null_count == 1
        assert s.mean == pytest.approx(2.5)
        assert s.std == pytest.approx(np.std([1, 2, 3, 4]))
        assert s.min == 1.0
        assert s.q1 == pytest.approx(1.75)
        assert s.median == pytest.approx(2.5)
        assert s.q3 == pytest.approx(3.25)
        assert s.max == 4.0
        assert s.unique is None

    def test_categorical_column(self, dataset):
        s = describe(dataset)["segment"]
        assert s.non_null_count == 4
        assert s.unique == 2
        assert s.top == "a"
        assert s.freq == 3
        assert s.mean is None

    def test_column_selection_order(self, dataset):
        assert list(describe(dataset, ["segment", "amount"])) == ["segment", "amount"]

    def test_numeric_without_values(self):
        ds = Dataset.from_records([{"x": "n/a"}], [ColumnInfo("x", "number")])
        s = describe(ds)["x"]
        assert s.non_null_count == 1
        assert s.mean is None

    def test_unknown_column(self, dataset):
        with pytest.raises(InvalidColumnReference):
            describe(dataset, ["missing"])
