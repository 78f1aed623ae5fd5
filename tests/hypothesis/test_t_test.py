"""
Tests for t_test() (Welch's two-sample t-test).

Statistic and degrees of freedom are validated against scipy.stats.ttest_ind
with equal_var=False.
"""

import numpy as np
import pytest
from scipy import stats

from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import DegenerateInputError, InsufficientDataError, ValidationError
from pyanalytics.hypothesis import HypothesisDesign, t_test, t_test_from_dataset


class TestWelchTTest:

    def test_clearly_different_groups(self):
        """Two groups ten units apart: significant with a large effect."""
        result = t_test([10, 12, 9, 11], [20, 22, 19, 21])
        assert result.statistic == pytest.approx(-10.954, abs=1e-3)
        assert result.df == pytest.approx(6.0)
        assert result.p_value < 0.01
        assert result.significant
        assert result.effect_size == pytest.approx(7.746, abs=1e-3)
        assert result.effect_size >= 2
        assert result.effect_label == "large"
        assert result.estimate == {"mean of x": 10.5, "mean of y": 20.5}
        assert "Statistically significant" in result.interpretation

    def test_matches_scipy(self, rng):
        x = rng.normal(0.0, 1.0, 30)
        y = rng.normal(0.4, 2.0, 25)
        result = t_test(x, y)
        ref = stats.ttest_ind(x, y, equal_var=False)
        assert result.statistic == pytest.approx(ref.statistic, abs=1e-3)
        assert result.p_value == pytest.approx(ref.pvalue, abs=1e-4)

    def test_not_significant(self):
        result = t_test([1, 2, 3, 4, 5], [2, 3, 1, 5, 4])
        assert not result.significant
        assert result.effect_label == "small"
        assert "No statistically significant" in result.interpretation

    def test_conf_level_changes_threshold(self):
        """p = 0.0171 is significant at 95% but not at 99%."""
        x, y = [1, 2, 3, 4, 5], [4, 5, 6, 7, 8]
        loose = t_test(x, y, conf_level=0.95)
        strict = t_test(x, y, conf_level=0.99)
        assert loose.p_value == strict.p_value
        assert loose.significant
        assert not strict.significant
        assert strict.conf_level == 0.99

    def test_nan_removed(self):
        with_nan = t_test([10, 12, np.nan, 9, 11], [20, 22, 19, 21])
        clean = t_test([10, 12, 9, 11], [20, 22, 19, 21])
        assert with_nan.statistic == clean.statistic

    def test_design_input(self):
        design = HypothesisDesign.for_t_test([1, 2, 3], [4, 5, 6])
        result = t_test(design)
        assert result.test_name == "Welch's t-test"

    def test_requires_second_sample(self):
        with pytest.raises(TypeError):
            t_test([1, 2, 3])

    def test_invalid_conf_level(self):
        with pytest.raises(ValidationError):
            t_test([1, 2, 3], [4, 5, 6], conf_level=1.5)


class TestDegenerate:

    def test_too_few_values(self):
        result = t_test([1.0], [2.0, 3.0])
        assert result.reason == "insufficient_data"
        assert result.p_value == 1.0
        assert result.statistic == 0.0
        assert not result.significant
        assert result.effect_size is None
        with pytest.raises(InsufficientDataError):
            result.raise_for_status()

    def test_constant_groups(self):
        result = t_test([5, 5, 5], [5, 5, 5])
        assert result.reason == "degenerate_input"
        assert not result.significant
        assert "data are essentially constant" in result.warnings
        with pytest.raises(DegenerateInputError):
            result.raise_for_status()

    def test_raise_for_status_returns_self(self):
        result = t_test([10, 12, 9, 11], [20, 22, 19, 21])
        assert result.raise_for_status() is result


class TestFromDataset:

    def test_two_groups(self):
        records = (
            [{"group": "a", "value": v} for v in (10, 12, 9, 11)]
            + [{"group": "b", "value": v} for v in (20, 22, 19, 21)]
        )
        result = t_test_from_dataset(Dataset.from_records(records), "value", "group")
        assert result.statistic == pytest.approx(-10.954, abs=1e-3)

    def test_wrong_number_of_groups(self):
        records = [{"group": g, "value": 1.0} for g in ("a", "b", "c")]
        with pytest.raises(ValidationError, match="exactly 2"):
            t_test_from_dataset(Dataset.from_records(records), "value", "group")


class TestSummary:

    def test_summary_format(self):
        s = t_test([10, 12, 9, 11], [20, 22, 19, 21]).summary()
        assert "Welch's t-test" in s
        assert "data:  x and y" in s
        assert "p-value" in s
        assert "(large)" in s

    def test_repr(self):
        assert "HTestSolution" in repr(t_test([1, 2, 3], [4, 5, 7]))
