"""
One-way analysis of variance.

Between- and within-group sums of squares from the group means and the
grand mean; F = MSB / MSW with an F-distribution p-value; effect size
eta-squared = SSB / (SSB + SSW).
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np

from pyanalytics.core.compute.distributions import f_pvalue
from pyanalytics.core.exceptions import REASON_INSUFFICIENT_DATA
from pyanalytics.hypothesis._common import (
    HTestParams, degenerate_params, is_significant, rounded,
)

if TYPE_CHECKING:
    from pyanalytics.hypothesis.design import HypothesisDesign

TEST_NAME = "One-Way ANOVA"


def anova_oneway(design: HypothesisDesign) -> tuple[HTestParams, list[str], str | None]:
    """One-way ANOVA: H0: all group means are equal."""
    conf_level = design.conf_level
    warnings_list: list[str] = []

    pairs = [(label, g) for label, g in zip(design.group_labels, design.groups) if len(g) > 0]
    dropped = len(design.groups) - len(pairs)
    if dropped:
        warnings_list.append(f"{dropped} empty group(s) ignored")

    k = len(pairs)
    if k < 2:
        params = degenerate_params(TEST_NAME, "Need at least 2 groups for ANOVA.", conf_level)
        return params, warnings_list, REASON_INSUFFICIENT_DATA

    groups = [g for _, g in pairs]
    n_total = sum(len(g) for g in groups)
    grand_mean = float(np.sum([g.sum() for g in groups]) / n_total)
    group_means = [float(g.mean()) for g in groups]

    ssb = float(sum(len(g) * (m - grand_mean) ** 2 for g, m in zip(groups, group_means)))
    ssw = float(sum(np.sum((g - m) ** 2) for g, m in zip(groups, group_means)))

    df_between = k - 1
    df_within = n_total - k
    estimate = {label: m for (label, _), m in zip(pairs, group_means)}

    if df_within <= 0:
        params = degenerate_params(
            TEST_NAME, "Insufficient data for ANOVA.", conf_level, estimate=estimate,
        )
        return params, warnings_list, REASON_INSUFFICIENT_DATA

    msb = ssb / df_between
    msw = ssw / df_within
    if msw > 0:
        f_stat = msb / msw
    else:
        warnings_list.append("no within-group variation")
        f_stat = 0.0

    p_value = f_pvalue(f_stat, df_between, df_within)
    significant = is_significant(p_value, conf_level)
    eta_squared = ssb / (ssb + ssw) if (ssb + ssw) > 0 else 0.0

    if significant:
        interpretation = (
            f"Significant difference found among {k} groups "
            f"(F={f_stat:.2f}, p={p_value:.4f}). η²={eta_squared:.3f} means the "
            f"grouping explains {eta_squared * 100:.1f}% of variance."
        )
    else:
        interpretation = (
            f"No significant difference found among {k} groups "
            f"(F={f_stat:.2f}, p={p_value:.4f})."
        )

    params = HTestParams(
        test_name=TEST_NAME,
        statistic=rounded(f_stat, 3),
        p_value=rounded(p_value, 4),
        df=float(df_between),
        significant=significant,
        conf_level=conf_level,
        effect_size=rounded(eta_squared, 3),
        effect_label=None,
        interpretation=interpretation,
        estimate=estimate,
        extras={
            "df_within": df_within,
            "ss_between": ssb,
            "ss_within": ssw,
            "grand_mean": grand_mean,
        },
    )
    return params, warnings_list, None
