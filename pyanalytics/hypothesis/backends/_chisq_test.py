"""
Pearson's chi-squared test of independence for r x c contingency tables.

Expected counts come from the row and column marginals; cells with zero
expected count are skipped. The p-value uses the Wilson-Hilferty
approximation and the effect size is Cramer's V.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np

from pyanalytics.core.compute.distributions import chisq_pvalue
from pyanalytics.core.exceptions import REASON_DEGENERATE_INPUT, REASON_INSUFFICIENT_DATA
from pyanalytics.hypothesis._common import (
    HTestParams, degenerate_params, is_significant, rounded,
)

if TYPE_CHECKING:
    from pyanalytics.hypothesis.design import HypothesisDesign

TEST_NAME = "Chi-Square Test of Independence"


def cramers_v_label(v: float) -> str:
    if v >= 0.5:
        return "strong"
    if v >= 0.3:
        return "moderate"
    return "weak"


def chisq_independence(design: HypothesisDesign) -> tuple[HTestParams, list[str], str | None]:
    """Chi-squared test of independence: H0: rows and columns are independent."""
    observed = design.table
    conf_level = design.conf_level
    warnings_list: list[str] = []

    n_rows, n_cols = observed.shape
    if n_rows < 2 or n_cols < 2:
        params = degenerate_params(
            "Chi-Square Test",
            "Insufficient categories for chi-square test.",
            conf_level,
        )
        return params, warnings_list, REASON_INSUFFICIENT_DATA

    row_totals = observed.sum(axis=1)
    col_totals = observed.sum(axis=0)
    grand_total = float(observed.sum())

    if grand_total == 0:
        params = degenerate_params("Chi-Square Test", "No data to analyze.", conf_level)
        return params, warnings_list, REASON_DEGENERATE_INPUT

    expected = np.outer(row_totals, col_totals) / grand_total
    nonzero = expected > 0
    chi2 = float(np.sum((observed[nonzero] - expected[nonzero]) ** 2 / expected[nonzero]))

    if np.any(expected[nonzero] < 5):
        warnings_list.append("Chi-squared approximation may be incorrect")

    df = (n_rows - 1) * (n_cols - 1)
    p_value = chisq_pvalue(chi2, df)
    significant = is_significant(p_value, conf_level)

    min_dim = min(n_rows, n_cols) - 1
    cramers_v = float(np.sqrt(chi2 / (grand_total * min_dim))) if min_dim > 0 else 0.0
    label = cramers_v_label(cramers_v)

    if significant:
        interpretation = (
            f"Significant association found between the variables "
            f"(χ²={chi2:.2f}, p={p_value:.4f}). Cramér's V={cramers_v:.3f} "
            f"indicates a {label} association."
        )
    else:
        interpretation = (
            f"No significant association found (χ²={chi2:.2f}, p={p_value:.4f}). "
            f"The variables appear to be independent."
        )

    params = HTestParams(
        test_name=TEST_NAME,
        statistic=rounded(chi2, 3),
        p_value=rounded(p_value, 4),
        df=float(df),
        significant=significant,
        conf_level=conf_level,
        effect_size=rounded(cramers_v, 3),
        effect_label=label,
        interpretation=interpretation,
        extras={
            "observed": observed.copy(),
            "expected": expected,
            "n": grand_total,
            "row_labels": design.row_labels,
            "col_labels": design.col_labels,
        },
    )
    return params, warnings_list, None
