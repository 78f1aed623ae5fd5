"""
Welch's two-sample t-test (unequal variances).

Degrees of freedom by Welch-Satterthwaite, p-value from the t
approximation in core.compute.distributions, effect size as Cohen's d
with the pooled standard deviation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np

from pyanalytics.core.compute.distributions import t_pvalue
from pyanalytics.core.exceptions import REASON_DEGENERATE_INPUT, REASON_INSUFFICIENT_DATA
from pyanalytics.hypothesis._common import (
    HTestParams, degenerate_params, is_significant, rounded,
)

if TYPE_CHECKING:
    from pyanalytics.hypothesis.design import HypothesisDesign

TEST_NAME = "Welch's t-test"


def cohens_d_label(d: float) -> str:
    if d >= 0.8:
        return "large"
    if d >= 0.5:
        return "medium"
    return "small"


def welch_t_test(design: HypothesisDesign) -> tuple[HTestParams, list[str], str | None]:
    """Welch t-test: H0: mean(x) = mean(y)."""
    x = design.x
    y = design.y
    conf_level = design.conf_level
    warnings_list: list[str] = []

    n1, n2 = len(x), len(y)
    if n1 < 2 or n2 < 2:
        params = degenerate_params(
            TEST_NAME,
            "Insufficient data for t-test (need at least 2 samples per group).",
            conf_level,
        )
        return params, warnings_list, REASON_INSUFFICIENT_DATA

    mean1, mean2 = float(np.mean(x)), float(np.mean(y))
    var1, var2 = float(np.var(x, ddof=1)), float(np.var(y, ddof=1))
    estimate = {"mean of x": mean1, "mean of y": mean2}

    v1 = var1 / n1
    v2 = var2 / n2
    se = np.sqrt(v1 + v2)

    if se == 0.0:
        warnings_list.append("data are essentially constant")
        params = degenerate_params(
            TEST_NAME,
            "Both groups have identical values; no difference detected.",
            conf_level,
            df=float(n1 + n2 - 2),
            estimate=estimate,
        )
        return params, warnings_list, REASON_DEGENERATE_INPUT

    t_stat = (mean1 - mean2) / se
    # Welch-Satterthwaite degrees of freedom (fractional)
    df = (v1 + v2) ** 2 / (v1 ** 2 / (n1 - 1) + v2 ** 2 / (n2 - 1))

    p_value = t_pvalue(t_stat, df)
    significant = is_significant(p_value, conf_level)

    pooled_sd = np.sqrt(((n1 - 1) * var1 + (n2 - 1) * var2) / (n1 + n2 - 2))
    effect = abs(mean1 - mean2) / pooled_sd if pooled_sd > 0 else 0.0
    label = cohens_d_label(effect)

    if significant:
        interpretation = (
            f"Statistically significant difference detected (p={p_value:.4f}). "
            f"Group 1 mean ({mean1:.2f}) differs from Group 2 mean ({mean2:.2f}) "
            f"with a {label} effect size (d={effect:.2f})."
        )
    else:
        interpretation = (
            f"No statistically significant difference found (p={p_value:.4f}). "
            f"The means ({mean1:.2f} vs {mean2:.2f}) are not significantly different "
            f"at the {conf_level * 100:.0f}% confidence level."
        )

    params = HTestParams(
        test_name=TEST_NAME,
        statistic=rounded(t_stat, 3),
        p_value=rounded(p_value, 4),
        df=rounded(df, 1),
        significant=significant,
        conf_level=conf_level,
        effect_size=rounded(effect, 3),
        effect_label=label,
        interpretation=interpretation,
        estimate=estimate,
        extras={"standard_error": float(se), "n": (n1, n2)},
    )
    return params, warnings_list, None
