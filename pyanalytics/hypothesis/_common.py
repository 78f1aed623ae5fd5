"""
Common types for hypothesis testing.

Defines HTestParams, the single payload returned by every test, and the
helpers the test implementations share (significance rule, rounding,
degenerate results).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HTestParams:
    """
    Parameter payload for hypothesis tests.

    Attributes
    ----------
    test_name : str
        Human-readable test name, e.g. "Welch's t-test".
    statistic : float
        Test statistic (t, chi-squared or F), rounded to 3 decimals.
        0 for degenerate results.
    p_value : float
        p-value rounded to 4 decimals. 1 for degenerate results.
    df : float
        Degrees of freedom (Welch df rounded to 1 decimal; between-groups
        df for ANOVA).
    significant : bool
        ``p_value < 1 - conf_level`` (computed on the unrounded p-value).
    conf_level : float
        Confidence level the test was run at.
    effect_size : float or None
        Cohen's d, Cramer's V or eta-squared, rounded to 3 decimals.
        None for degenerate results.
    effect_label : str or None
        Qualitative size: "small"/"medium"/"large" (Cohen's d),
        "weak"/"moderate"/"strong" (Cramer's V). None otherwise.
    interpretation : str
        Plain-language summary of the outcome.
    estimate : dict or None
        Point estimates, e.g. {"mean of x": 10.5, "mean of y": 20.5}.
    extras : dict or None
        Test-specific outputs (expected counts, df within, ...).
    """
    test_name: str
    statistic: float
    p_value: float
    df: float
    significant: bool
    conf_level: float
    effect_size: float | None
    effect_label: str | None
    interpretation: str
    estimate: dict[str, float] | None = None
    extras: dict[str, Any] | None = None


def is_significant(p_value: float, conf_level: float) -> bool:
    """The significance rule shared by every test."""
    return p_value < (1.0 - conf_level)


def rounded(value: float, digits: int) -> float:
    """Round for presentation; statistics are always computed unrounded."""
    return float(round(float(value), digits))


def degenerate_params(
    test_name: str,
    interpretation: str,
    conf_level: float,
    *,
    df: float = 0.0,
    estimate: dict[str, float] | None = None,
) -> HTestParams:
    """Conservative result for inputs a test cannot be run on."""
    return HTestParams(
        test_name=test_name,
        statistic=0.0,
        p_value=1.0,
        df=df,
        significant=False,
        conf_level=conf_level,
        effect_size=None,
        effect_label=None,
        interpretation=interpretation,
        estimate=estimate,
    )
