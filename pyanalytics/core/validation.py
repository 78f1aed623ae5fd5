"""
Input validation utilities for PyAnalytics.

These validators follow the "fail fast, fail loud" principle for
structurally invalid calls: wrong shapes, mismatched lengths, option
strings that don't exist. They never judge the *data* (too few rows, zero
variance); those cases degrade to well-formed results in the solvers.

Design principles:
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any, Sequence

from pyanalytics.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types, "
            f"ragged rows or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64, copy=False)


def drop_non_finite(array: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Return the finite entries of a 1-D array (NaN and Inf removed)."""
    return array[np.isfinite(array)]


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: Sequence[Any],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_conf_level(conf_level: float, name: str = 'conf_level') -> float:
    """Verify a confidence level lies strictly between 0 and 1."""
    if not (0.0 < conf_level < 1.0):
        raise ValidationError(f"{name} must be in (0, 1), got {conf_level}")
    return float(conf_level)


def check_non_negative(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every entry is >= 0 (e.g. a table of counts).

    Raises:
        ValidationError: If any entry is negative
    """
    if np.any(array < 0):
        raise ValidationError(f"{name}: all entries must be non-negative")


def check_positive_int(value: int, name: str) -> int:
    """Verify value is an integer >= 1."""
    if isinstance(value, bool) or int(value) != value or value < 1:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def check_choice(value: str, choices: tuple[str, ...], name: str) -> str:
    """Verify value is one of the allowed option strings."""
    if value not in choices:
        raise ValidationError(f"{name} must be one of {choices}, got {value!r}")
    return value
