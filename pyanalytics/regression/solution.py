"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyanalytics.core.exceptions import raise_for_reason
from pyanalytics.core.result import Result

if TYPE_CHECKING:
    from pyanalytics.regression.design import RegressionDesign


@dataclass(frozen=True)
class RegressionParams:
    """
    Parameter payload for OLS regression.

    ``beta`` and ``standard_errors`` are full precision with the intercept
    first; they are empty for degenerate fits. R² values are rounded to
    4 decimals.
    """
    model_type: str
    beta: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    predictions: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    r_squared: float
    adjusted_r_squared: float
    significant_predictors: tuple[str, ...]
    equation: str
    interpretation: str
    target_column: str
    predictor_columns: tuple[str, ...]
    n: int


@dataclass
class RegressionSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides convenient accessors.

    Note:
        ``adjusted_r_squared`` is ``1 - (1 - R²)(n - 1)/(n - p - 1)`` and
        is not clamped: for small n relative to p it can fall below 0.
    """
    _result: Result[RegressionParams]
    _design: 'RegressionDesign'

    @property
    def model_type(self) -> str:
        """'linear' for one predictor, 'multiple' otherwise."""
        return self._result.params.model_type

    @property
    def coefficients(self) -> dict[str, float]:
        """Predictor -> slope, rounded to 4 decimals (intercept excluded)."""
        p = self._result.params
        if len(p.beta) == 0:
            return {}
        return {
            name: round(float(b), 4)
            for name, b in zip(p.predictor_columns, p.beta[1:])
        }

    @property
    def intercept(self) -> float:
        beta = self._result.params.beta
        return round(float(beta[0]), 4) if len(beta) else 0.0

    @property
    def beta(self) -> NDArray[np.floating[Any]]:
        """Unrounded coefficient vector, intercept first."""
        return self._result.params.beta

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    @property
    def standard_errors(self) -> dict[str, float]:
        """
        Term -> standard error, sqrt(MSE · diag((X'X)⁻¹)).

        Keys are "(Intercept)" followed by the predictor names.
        """
        se = self._result.params.standard_errors
        if len(se) == 0:
            return {}
        return dict(zip(self._design.term_names, (float(s) for s in se)))

    @property
    def t_statistics(self) -> dict[str, float]:
        """Term -> coefficient / standard error (inf for a zero error)."""
        p = self._result.params
        out = {}
        for name, b, s in zip(self._design.term_names, p.beta, p.standard_errors):
            if s > 0:
                out[name] = float(b / s)
            else:
                out[name] = float(np.copysign(np.inf, b)) if b != 0 else 0.0
        return out

    @property
    def predictions(self) -> NDArray[np.floating[Any]]:
        return self._result.params.predictions

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def significant_predictors(self) -> tuple[str, ...]:
        return self._result.params.significant_predictors

    @property
    def equation(self) -> str:
        return self._result.params.equation

    @property
    def interpretation(self) -> str:
        return self._result.params.interpretation

    @property
    def target_column(self) -> str:
        return self._result.params.target_column

    @property
    def predictor_columns(self) -> tuple[str, ...]:
        return self._result.params.predictor_columns

    @property
    def n(self) -> int:
        """Number of complete observations used."""
        return self._result.params.n

    @property
    def row_indices(self) -> NDArray[np.intp]:
        return self._design.row_indices

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def reason(self) -> str | None:
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

    def raise_for_status(self) -> RegressionSolution:
        """
        Raise if the model could not be fitted.

        Raises
        ------
        InsufficientDataError
            No predictors, or fewer than p + 2 complete rows.
        SingularMatrixError
            Collinear predictors.
        """
        raise_for_reason(self.reason, self.interpretation)
        return self

    def summary(self) -> str:
        p = self._result.params
        lines = [
            f"OLS regression of {p.target_column} ({p.model_type}, n = {p.n})",
            "",
            p.equation,
        ]
        if len(p.beta):
            lines.append("")
            lines.append(f"{'':<16s} {'Estimate':>12s} {'Std. Error':>12s} {'t value':>10s}")
            t_stats = self.t_statistics
            for name, b, s in zip(self._design.term_names, p.beta, p.standard_errors):
                lines.append(
                    f"{name[:16]:<16s} {b:>12.4f} {s:>12.4f} {t_stats[name]:>10.3f}"
                )
            lines.append("")
            lines.append(
                f"R-squared: {p.r_squared:.4f}, "
                f"Adjusted R-squared: {p.adjusted_r_squared:.4f}"
            )
        lines.append(p.interpretation)
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"RegressionSolution(target={p.target_column!r}, "
            f"r_squared={p.r_squared:.4f}, n={p.n})"
        )
