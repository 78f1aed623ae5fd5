"""
Exception hierarchy for PyAnalytics.

All exceptions inherit from PyAnalyticsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Structurally invalid calls raise; messy data degrades to a result

Statistical edge cases (too few rows, zero variance, collinear predictors)
are NOT raised by the solvers. They come back as well-formed results whose
``info['reason']`` names one of the reason codes below. Callers who prefer
exceptions call ``solution.raise_for_status()``.
"""

REASON_INSUFFICIENT_DATA = 'insufficient_data'
REASON_DEGENERATE_INPUT = 'degenerate_input'
REASON_SINGULAR_MATRIX = 'singular_matrix'


class PyAnalyticsError(Exception):
    """Base exception for all PyAnalytics errors."""
    pass


class ValidationError(PyAnalyticsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class InvalidColumnReference(ValidationError, KeyError):
    """
    A named column does not exist in the Dataset.

    This is a programming or configuration error upstream, so it always
    propagates to the caller.

    Attributes:
        column: The column name that was requested
        available: Column names the Dataset actually declares
    """

    def __init__(self, column: str, available: tuple[str, ...] = ()):
        message = f"Dataset has no column {column!r}. Available: {list(available)}"
        super().__init__(message)
        self.column = column
        self.available = tuple(available)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class NumericalError(PyAnalyticsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Column at which elimination failed
        pivot_value: Magnitude of the best available pivot
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value


class InsufficientDataError(PyAnalyticsError):
    """
    Too few samples, rows or groups for the requested analysis.

    Only raised by ``raise_for_status()``; solvers report this condition
    through ``info['reason'] == 'insufficient_data'``.
    """
    pass


class DegenerateInputError(PyAnalyticsError):
    """
    Input has no usable variation (zero variance, zero total, all-null column).

    Only raised by ``raise_for_status()``; solvers report this condition
    through ``info['reason'] == 'degenerate_input'``.
    """
    pass


_REASON_EXCEPTIONS: dict[str, type[PyAnalyticsError]] = {
    REASON_INSUFFICIENT_DATA: InsufficientDataError,
    REASON_DEGENERATE_INPUT: DegenerateInputError,
    REASON_SINGULAR_MATRIX: SingularMatrixError,
}


def raise_for_reason(reason: str | None, message: str) -> None:
    """Raise the exception matching a degenerate-result reason code, if any."""
    if reason is None:
        return
    exc_type = _REASON_EXCEPTIONS.get(reason)
    if exc_type is None:
        raise ValueError(f"Unknown reason code: {reason!r}")
    raise exc_type(message)
