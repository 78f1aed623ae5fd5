"""
Shared numeric infrastructure for PyAnalytics.

Numeric building blocks shared by the analysis subpackages. Nothing here
knows about Datasets or columns.

Submodules:
    distributions: Normal, t, chi-squared and F tail approximations
    linalg: Transpose, multiply, Gauss-Jordan inversion
    timing: Execution timing utilities
"""

from pyanalytics.core.compute.distributions import (
    normal_cdf,
    log_gamma,
    incomplete_beta,
    t_pvalue,
    chisq_pvalue,
    f_pvalue,
)
from pyanalytics.core.compute.linalg import (
    transpose,
    matmul,
    matvec,
    gauss_jordan_inverse,
)
from pyanalytics.core.compute.timing import Timer

__all__ = [
    # Distributions
    "normal_cdf",
    "log_gamma",
    "incomplete_beta",
    "t_pvalue",
    "chisq_pvalue",
    "f_pvalue",
    # Linear algebra
    "transpose",
    "matmul",
    "matvec",
    "gauss_jordan_inverse",
    # Timing
    "Timer",
]
