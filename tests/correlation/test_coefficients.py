"""
Tests for pearson(), spearman() and rank_average().

Validated against scipy.stats.pearsonr / spearmanr.
"""

import numpy as np
import pytest
from scipy import stats

from pyanalytics.core.exceptions import DimensionError
from pyanalytics.correlation import pearson, rank_average, spearman


class TestPearson:

    def test_matches_scipy(self, rng):
        x = rng.normal(0.0, 1.0, 40)
        y = 0.6 * x + rng.normal(0.0, 1.0, 40)
        assert pearson(x, y) == pytest.approx(stats.pearsonr(x, y)[0])

    def test_perfect(self):
        x = np.arange(10.0)
        assert pearson(x, 3 * x - 2) == pytest.approx(1.0)
        assert pearson(x, -x) == pytest.approx(-1.0)

    def test_zero_variance(self):
        assert pearson([1, 2, 3], [5, 5, 5]) == 0.0

    def test_empty(self):
        assert pearson([], []) == 0.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            pearson([1, 2, 3], [1, 2])


class TestRankAverage:

    def test_ties_share_average(self):
        np.testing.assert_array_equal(rank_average([10, 20, 20, 30]), [1.0, 2.5, 2.5, 4.0])

    def test_unsorted(self):
        np.testing.assert_array_equal(rank_average([3.0, 1.0, 2.0]), [3.0, 1.0, 2.0])


class TestSpearman:

    def test_self_and_negation(self, rng):
        x = rng.normal(0.0, 1.0, 25)
        assert spearman(x, x) == pytest.approx(1.0)
        assert spearman(x, -x) == pytest.approx(-1.0)

    def test_monotonic_curve(self):
        x = np.arange(1.0, 21.0)
        assert spearman(x, np.exp(x)) == pytest.approx(1.0)
        assert pearson(x, np.exp(x)) < 0.7

    def test_matches_scipy_with_ties(self):
        x = [1, 2, 2, 3, 4, 4, 4, 5]
        y = [2, 1, 3, 3, 5, 4, 6, 6]
        assert spearman(x, y) == pytest.approx(stats.spearmanr(x, y)[0])

    def test_too_few_pairs(self):
        assert spearman([1, 2], [2, 1]) == 0.0
