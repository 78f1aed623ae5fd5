"""
Dense matrix utilities for the normal-equations regression solver.

Matrices are fixed-shape 2-D float64 ndarrays; vectors are 1-D float64
ndarrays. Shapes are checked up front so elimination never runs on a ragged
or mis-shaped operand. Inputs are never modified in place.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyanalytics.core.exceptions import DimensionError, SingularMatrixError

# Pivots smaller than this are treated as zero
PIVOT_TOL = 1e-10


def as_matrix(a: ArrayLike, name: str = 'matrix') -> NDArray[np.floating[Any]]:
    """Convert to a 2-D float64 array, rejecting ragged or non-2-D input."""
    try:
        arr = np.array(a, dtype=np.float64)
    except (ValueError, TypeError) as e:
        raise DimensionError(f"{name}: cannot build a rectangular matrix: {e}") from e
    if arr.ndim != 2:
        raise DimensionError(f"{name}: expected 2D matrix, got {arr.ndim}D with shape {arr.shape}")
    return arr


def transpose(a: ArrayLike) -> NDArray[np.floating[Any]]:
    """Return a new (cols x rows) matrix."""
    return np.ascontiguousarray(as_matrix(a, 'a').T)


def matmul(a: ArrayLike, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Matrix product A B.

    Raises:
        DimensionError: If the inner dimensions disagree
    """
    a = as_matrix(a, 'a')
    b = as_matrix(b, 'b')
    if a.shape[1] != b.shape[0]:
        raise DimensionError(
            f"Cannot multiply {a.shape[0]}x{a.shape[1]} by {b.shape[0]}x{b.shape[1]}: "
            f"inner dimensions {a.shape[1]} != {b.shape[0]}"
        )
    return a @ b


def matvec(a: ArrayLike, v: ArrayLike) -> NDArray[np.floating[Any]]:
    """Matrix-vector product A v."""
    a = as_matrix(a, 'a')
    v = np.asarray(v, dtype=np.float64)
    if v.ndim != 1 or v.shape[0] != a.shape[1]:
        raise DimensionError(
            f"Cannot multiply {a.shape[0]}x{a.shape[1]} matrix by vector of shape {v.shape}"
        )
    return a @ v


def gauss_jordan_inverse(
    a: ArrayLike,
    *,
    pivot_tol: float = PIVOT_TOL,
    name: str = 'matrix',
) -> NDArray[np.floating[Any]]:
    """
    Invert a square matrix by Gauss-Jordan elimination with partial pivoting.

    The augmented matrix [A | I] is reduced column by column. At each column
    the row with the largest remaining pivot magnitude is swapped into place.

    Args:
        a: Square matrix
        pivot_tol: Smallest acceptable pivot magnitude
        name: Matrix description for error messages

    Returns:
        A^-1 as a new array

    Raises:
        DimensionError: If the matrix is not square
        SingularMatrixError: If a pivot falls below ``pivot_tol``
    """
    m = as_matrix(a, name)
    n, p = m.shape
    if n != p:
        raise DimensionError(f"{name}: cannot invert non-square {n}x{p} matrix")

    aug = np.hstack([m, np.eye(n)])

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(aug[col:, col])))
        pivot = aug[pivot_row, col]
        if abs(pivot) < pivot_tol:
            raise SingularMatrixError(
                f"{name} is singular: pivot {abs(pivot):.3g} at column {col} "
                f"is below tolerance {pivot_tol:g}",
                matrix_name=name,
                pivot_index=col,
                pivot_value=float(abs(pivot)),
            )
        if pivot_row != col:
            aug[[col, pivot_row]] = aug[[pivot_row, col]]

        aug[col] /= aug[col, col]

        factors = aug[:, col].copy()
        factors[col] = 0.0
        aug -= np.outer(factors, aug[col])

    return aug[:, n:].copy()
