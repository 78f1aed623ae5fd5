"""
Core infrastructure for PyAnalytics.

This module provides the shared abstractions used by every analysis
subpackage (hypothesis, clustering, regression, timeseries, ...).

Key components:
    dataset: Dataset and ColumnInfo (the tabular input)
    values: Cell coercion (to_number, to_date)
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy and degenerate-result reason codes
    validation: Input validators
    config: Tunable empirical thresholds
    compute: Distribution approximations, dense matrix utilities, timing
"""

from pyanalytics.core.dataset import Dataset, ColumnInfo, ColumnType
from pyanalytics.core.result import Result
from pyanalytics.core.values import CellValue, to_number, to_date, is_missing
from pyanalytics.core.exceptions import (
    PyAnalyticsError,
    ValidationError,
    DimensionError,
    InvalidColumnReference,
    NumericalError,
    SingularMatrixError,
    InsufficientDataError,
    DegenerateInputError,
)

__all__ = [
    # Data model
    "Dataset",
    "ColumnInfo",
    "ColumnType",
    "CellValue",
    "to_number",
    "to_date",
    "is_missing",
    # Result
    "Result",
    # Exceptions
    "PyAnalyticsError",
    "ValidationError",
    "DimensionError",
    "InvalidColumnReference",
    "NumericalError",
    "SingularMatrixError",
    "InsufficientDataError",
    "DegenerateInputError",
]
