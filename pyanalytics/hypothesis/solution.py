"""
Hypothesis test solution types.

HTestSolution wraps Result[HTestParams] and provides a plain-text report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyanalytics.core.exceptions import raise_for_reason
from pyanalytics.core.result import Result
from pyanalytics.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from pyanalytics.hypothesis.design import HypothesisDesign


@dataclass
class HTestSolution:
    """
    User-facing hypothesis test results.

    Wraps Result[HTestParams]. All fields of the payload are available as
    properties; summary() renders a short report.
    """
    _result: Result[HTestParams]
    _design: 'HypothesisDesign | None'

    # --- Test outcome ---

    @property
    def test_name(self) -> str:
        return self._result.params.test_name

    @property
    def statistic(self) -> float:
        """Test statistic (t, chi-squared or F)."""
        return self._result.params.statistic

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def df(self) -> float:
        """Degrees of freedom."""
        return self._result.params.df

    @property
    def significant(self) -> bool:
        return self._result.params.significant

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def effect_size(self) -> float | None:
        """Cohen's d, Cramer's V or eta-squared. None when degenerate."""
        return self._result.params.effect_size

    @property
    def effect_label(self) -> str | None:
        return self._result.params.effect_label

    @property
    def interpretation(self) -> str:
        return self._result.params.interpretation

    @property
    def estimate(self) -> dict[str, float] | None:
        """Point estimate(s), e.g. group means."""
        return self._result.params.estimate

    # --- Test-specific extras ---

    @property
    def extras(self) -> dict[str, Any] | None:
        return self._result.params.extras

    @property
    def observed(self) -> NDArray | None:
        """For chisq_test: observed counts."""
        e = self._result.params.extras
        return e.get('observed') if e else None

    @property
    def expected(self) -> NDArray | None:
        """For chisq_test: expected counts under independence."""
        e = self._result.params.extras
        return e.get('expected') if e else None

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def reason(self) -> str | None:
        """Degenerate-result reason code, or None."""
        return self._result.reason

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def raise_for_status(self) -> HTestSolution:
        """
        Raise if the test could not be run on the given data.

        Returns self so calls can be chained.

        Raises
        ------
        InsufficientDataError
            Too few observations or groups.
        DegenerateInputError
            No variation to test (identical values, empty table).
        """
        raise_for_reason(self.reason, self.interpretation)
        return self

    # --- Formatting ---

    def summary(self) -> str:
        """
        Format a short report.

        Produces output like:
            Welch's t-test

        data:  x and y
        statistic = -10.95, df = 6, p-value = 0.0001
        effect size = 7.746 (large)
        Statistically significant difference detected ...
        """
        p = self._result.params
        lines = [f"\t{p.test_name}", ""]

        if self._design is not None and self._design.data_name:
            lines.append(f"data:  {self._design.data_name}")

        lines.append(
            f"statistic = {p.statistic:.5g}, df = {p.df:.5g}, "
            f"p-value = {_format_pvalue(p.p_value)}"
        )

        if p.effect_size is not None:
            label = f" ({p.effect_label})" if p.effect_label else ""
            lines.append(f"effect size = {p.effect_size:.4g}{label}")

        if p.estimate:
            lines.append("estimates:")
            names = list(p.estimate.keys())
            vals = list(p.estimate.values())
            lines.append(" ".join(f"{n:>14s}" for n in names))
            lines.append(" ".join(f"{v:14.7g}" for v in vals))

        lines.append(p.interpretation)
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"HTestSolution(test_name={p.test_name!r}, "
            f"statistic={p.statistic:.4g}, p_value={p.p_value:.4g})"
        )


def _format_pvalue(p: float) -> str:
    # p-values are already rounded to 4 decimals
    if p < 1e-4:
        return "< 1e-04"
    if np.isclose(p, 1.0):
        return "1"
    return f"{p:.4g}"
