"""
Hypothesis testing module.

Public API:
    t_test(x, y)                    - Welch's two-sample t-test
    t_test_from_dataset(ds, ..)     - t-test of a column split by a 2-level category
    chisq_test(table)               - Pearson's chi-squared test of independence
    chisq_test_from_dataset(ds, ..) - chi-squared test on two categorical columns
    anova_oneway(groups)            - One-way ANOVA
    anova_from_dataset(ds, ..)      - One-way ANOVA of a column split by category
"""

from pyanalytics.hypothesis.solvers import (
    t_test, t_test_from_dataset, chisq_test, chisq_test_from_dataset,
    anova_oneway, anova_from_dataset,
)
from pyanalytics.hypothesis.design import HypothesisDesign
from pyanalytics.hypothesis._common import HTestParams
from pyanalytics.hypothesis.solution import HTestSolution

__all__ = [
    "t_test",
    "t_test_from_dataset",
    "chisq_test",
    "chisq_test_from_dataset",
    "anova_oneway",
    "anova_from_dataset",
    "HypothesisDesign",
    "HTestParams",
    "HTestSolution",
]
