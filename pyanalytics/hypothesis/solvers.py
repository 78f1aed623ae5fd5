"""
Solver dispatch for hypothesis tests.

Provides t_test(), chisq_test(), anova_oneway() and their Dataset-based
variants t_test_from_dataset(), chisq_test_from_dataset() and
anova_from_dataset().
"""

from __future__ import annotations

from typing import Sequence
from numpy.typing import ArrayLike

from pyanalytics.core.dataset import Dataset
from pyanalytics.hypothesis.design import HypothesisDesign
from pyanalytics.hypothesis.solution import HTestSolution
from pyanalytics.hypothesis.backends.cpu import CPUHypothesisBackend


def _solve(design: HypothesisDesign) -> HTestSolution:
    result = CPUHypothesisBackend().solve(design)
    return HTestSolution(_result=result, _design=design)


def t_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    conf_level: float = 0.95,
) -> HTestSolution:
    """
    Welch's two-sample t-test (unequal variances).

    Parameters
    ----------
    x : array-like or HypothesisDesign
        First sample. NaN/Inf values are dropped.
    y : array-like
        Second sample.
    conf_level : float
        Confidence level; the test is significant when
        ``p < 1 - conf_level``. Default 0.95.

    Returns
    -------
    HTestSolution
        Statistic, Welch df, p-value, Cohen's d and its label.
        Fewer than 2 values in a group, or zero variance in both,
        give a degenerate result (p = 1, not significant).
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        if y is None:
            raise TypeError("t_test() requires two samples")
        design = HypothesisDesign.for_t_test(x, y, conf_level=conf_level)
    return _solve(design)


def chisq_test(
    table: ArrayLike | HypothesisDesign,
    *,
    conf_level: float = 0.95,
    row_labels: Sequence[str] | None = None,
    col_labels: Sequence[str] | None = None,
) -> HTestSolution:
    """
    Pearson's chi-squared test of independence.

    Parameters
    ----------
    table : array-like or HypothesisDesign
        r x c contingency table of non-negative counts.
    conf_level : float
        Confidence level. Default 0.95.
    row_labels, col_labels : sequence of str, optional
        Category names, carried into ``extras``.

    Returns
    -------
    HTestSolution
        Chi-squared statistic, df = (r-1)(c-1), p-value and Cramer's V.
        Tables with fewer than 2 rows or columns, or all-zero tables,
        give a degenerate result.
    """
    if isinstance(table, HypothesisDesign):
        design = table
    else:
        design = HypothesisDesign.for_chisq_test(
            table,
            conf_level=conf_level,
            row_labels=row_labels,
            col_labels=col_labels,
        )
    return _solve(design)


def chisq_test_from_dataset(
    dataset: Dataset,
    row_column: str,
    col_column: str,
    *,
    conf_level: float = 0.95,
) -> HTestSolution:
    """Chi-squared test on the cross-tabulation of two categorical columns."""
    design = HypothesisDesign.for_chisq_from_dataset(
        dataset, row_column, col_column, conf_level=conf_level,
    )
    return _solve(design)


def anova_oneway(
    groups: Sequence[ArrayLike] | HypothesisDesign,
    *,
    conf_level: float = 0.95,
    labels: Sequence[str] | None = None,
) -> HTestSolution:
    """
    One-way ANOVA across k groups.

    Parameters
    ----------
    groups : sequence of array-like or HypothesisDesign
        One numeric sample per group. Empty groups are ignored.
    conf_level : float
        Confidence level. Default 0.95.
    labels : sequence of str, optional
        Group names, used as keys of ``estimate``.

    Returns
    -------
    HTestSolution
        F statistic, between-groups df, p-value and eta-squared.
        Fewer than 2 non-empty groups gives a degenerate result.
    """
    if isinstance(groups, HypothesisDesign):
        design = groups
    else:
        design = HypothesisDesign.for_anova(groups, conf_level=conf_level, labels=labels)
    return _solve(design)


def anova_from_dataset(
    dataset: Dataset,
    value_column: str,
    group_column: str,
    *,
    conf_level: float = 0.95,
) -> HTestSolution:
    """One-way ANOVA of a numeric column split by a categorical column."""
    design = HypothesisDesign.for_anova_from_dataset(
        dataset, value_column, group_column, conf_level=conf_level,
    )
    return _solve(design)


def t_test_from_dataset(
    dataset: Dataset,
    value_column: str,
    group_column: str,
    *,
    conf_level: float = 0.95,
) -> HTestSolution:
    """Welch t-test of a numeric column between the two categories of another column."""
    design = HypothesisDesign.for_t_test_from_dataset(
        dataset, value_column, group_column, conf_level=conf_level,
    )
    return _solve(design)
