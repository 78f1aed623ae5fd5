"""
CPU backend for linear regression.

Solves the normal equations β = (X'X)⁻¹ X'y with Gauss-Jordan inversion.
The inverse is reused for the coefficient standard errors, so it is
computed explicitly rather than via a solve.
"""

from __future__ import annotations

from typing import Any
import numpy as np

from pyanalytics.core.compute.linalg import gauss_jordan_inverse, matmul, matvec, transpose
from pyanalytics.core.compute.timing import Timer
from pyanalytics.core.exceptions import (
    REASON_INSUFFICIENT_DATA, REASON_SINGULAR_MATRIX, SingularMatrixError,
)
from pyanalytics.core.result import Result
from pyanalytics.regression.design import RegressionDesign
from pyanalytics.regression.solution import RegressionParams

# |coefficient / standard error| above this counts as significant
T_THRESHOLD = 2.0


def _model_type(p: int) -> str:
    return 'linear' if p <= 1 else 'multiple'


def _degenerate(
    design: RegressionDesign,
    equation: str,
    interpretation: str,
) -> RegressionParams:
    return RegressionParams(
        model_type=_model_type(design.p),
        beta=np.zeros(0, dtype=np.float64),
        standard_errors=np.zeros(0, dtype=np.float64),
        predictions=np.zeros(0, dtype=np.float64),
        residuals=np.zeros(0, dtype=np.float64),
        r_squared=0.0,
        adjusted_r_squared=0.0,
        significant_predictors=(),
        equation=equation,
        interpretation=interpretation,
        target_column=design.target,
        predictor_columns=design.predictors,
        n=design.n,
    )


def _strength(r_squared: float) -> str:
    if r_squared > 0.7:
        return "Strong predictive model."
    if r_squared > 0.4:
        return "Moderate predictive model."
    return "Weak predictive model: consider additional variables."


class CPUNormalEquationsBackend:
    """
    CPU backend solving the normal equations.

    Degenerate inputs (p = 0, n < p + 2, collinear predictors) produce a
    Result whose ``info['reason']`` names the condition.
    """

    @property
    def name(self) -> str:
        return 'cpu_normal_equations'

    def solve(self, design: RegressionDesign) -> Result[RegressionParams]:
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = design.n, design.p
        info: dict[str, Any] = {'method': 'normal_equations', 'n': n, 'p': p}

        if p == 0 or n < p + 2:
            timer.stop()
            info['reason'] = REASON_INSUFFICIENT_DATA
            params = _degenerate(
                design,
                "Insufficient data",
                "Not enough data points or predictors for regression.",
            )
            return Result(params=params, info=info, timing=timer.result(), backend_name=self.name)

        with timer.section('normal_equations'):
            Xt = transpose(X)
            XtX = matmul(Xt, X)
            Xty = matvec(Xt, y)

        try:
            with timer.section('inverse'):
                XtX_inv = gauss_jordan_inverse(XtX, name="X'X")
        except SingularMatrixError as e:
            timer.stop()
            info['reason'] = REASON_SINGULAR_MATRIX
            info['pivot_index'] = e.pivot_index
            params = _degenerate(
                design,
                "Matrix is singular",
                "Predictors are perfectly collinear; regression cannot be computed.",
            )
            return Result(params=params, info=info, timing=timer.result(), backend_name=self.name)

        with timer.section('solve'):
            beta = matvec(XtX_inv, Xty)
            predictions = matvec(X, beta)
            residuals = y - predictions

        with timer.section('statistics'):
            ss_total = float(np.sum((y - y.mean()) ** 2))
            ss_residual = float(residuals @ residuals)
            r_squared = 1.0 - ss_residual / ss_total if ss_total > 0 else 0.0
            adjusted = 1.0 - (1.0 - r_squared) * (n - 1) / (n - p - 1)

            mse = ss_residual / max(1, n - p - 1)
            se = np.sqrt(np.abs(mse * np.diag(XtX_inv)))

        timer.stop()

        significant = []
        for j, col in enumerate(design.predictors, start=1):
            if se[j] > 0:
                t = abs(beta[j] / se[j])
            else:
                t = np.inf if beta[j] != 0 else 0.0
            if t > T_THRESHOLD:
                significant.append(col)

        terms = " ".join(
            f"{'+' if b >= 0 else '-'} {abs(b):.4f} × {col}"
            for col, b in zip(design.predictors, beta[1:])
        )
        equation = f"{design.target} = {beta[0]:.4f} {terms}"

        if significant:
            key = f"Key predictors: {', '.join(significant)}."
        else:
            key = "No individually significant predictors found."
        interpretation = (
            f"Model explains {r_squared * 100:.1f}% of variance in {design.target}. "
            f"{key} {_strength(r_squared)}"
        )

        params = RegressionParams(
            model_type=_model_type(p),
            beta=beta,
            standard_errors=se,
            predictions=predictions,
            residuals=residuals,
            r_squared=round(r_squared, 4),
            adjusted_r_squared=round(adjusted, 4),
            significant_predictors=tuple(significant),
            equation=equation,
            interpretation=interpretation,
            target_column=design.target,
            predictor_columns=design.predictors,
            n=n,
        )
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
        )
