"""
Regression Design.

Design extracts X (design matrix with a leading intercept column) and y
(response) from a Dataset or from arrays. Rows with a missing or
non-numeric value in the target or any predictor are dropped; the
surviving rows' original positions are kept in ``row_indices``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import ValidationError
from pyanalytics.core.validation import check_array, check_1d, check_consistent_length

INTERCEPT = "(Intercept)"


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.

    Immutable after construction.

    Construction:
        RegressionDesign.from_dataset(ds, 'sales', ['price', 'ads'])
        RegressionDesign.from_arrays(X, y, names=['price', 'ads'])
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _target: str
    _predictors: tuple[str, ...]
    _row_indices: NDArray[np.intp]

    @classmethod
    def from_dataset(
        cls,
        dataset: Dataset,
        target: str,
        predictors: Sequence[str],
    ) -> RegressionDesign:
        """
        Build design from Dataset columns.

        Raises:
            InvalidColumnReference: If target or a predictor does not exist
        """
        predictors = tuple(predictors)
        matrix, row_indices = dataset.numeric_matrix((target,) + predictors)
        y = matrix[:, 0]
        X = np.column_stack([np.ones(matrix.shape[0]), matrix[:, 1:]])
        return cls(
            _X=X,
            _y=y,
            _target=target,
            _predictors=predictors,
            _row_indices=row_indices,
        )

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        names: Sequence[str] | None = None,
        target: str = 'y',
    ) -> RegressionDesign:
        """
        Build design directly from arrays.

        Args:
            X: (n x p) predictor matrix without intercept column; 1-D input
               is treated as a single predictor
            y: (n,) response
            names: Predictor names, default x1..xp
        """
        X_arr = check_array(X, 'X')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if X_arr.ndim != 2:
            raise ValidationError(f"X: expected 1D or 2D array, got {X_arr.ndim}D")
        y_arr = check_array(y, 'y').ravel()
        check_1d(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))

        p = X_arr.shape[1]
        if names is None:
            names = [f"x{j + 1}" for j in range(p)]
        elif len(names) != p:
            raise ValidationError(f"names has {len(names)} entries for {p} predictors")

        keep = np.isfinite(y_arr) & np.all(np.isfinite(X_arr), axis=1)
        X_kept = X_arr[keep]
        return cls(
            _X=np.column_stack([np.ones(X_kept.shape[0]), X_kept]),
            _y=y_arr[keep],
            _target=target,
            _predictors=tuple(str(n) for n in names),
            _row_indices=np.flatnonzero(keep).astype(np.intp),
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x (p+1)), first column all ones."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of complete observations."""
        return self._X.shape[0]

    @property
    def p(self) -> int:
        """Number of predictors (excluding the intercept)."""
        return len(self._predictors)

    @property
    def target(self) -> str:
        return self._target

    @property
    def predictors(self) -> tuple[str, ...]:
        return self._predictors

    @property
    def term_names(self) -> tuple[str, ...]:
        """Names of the columns of X."""
        return (INTERCEPT,) + self._predictors

    @property
    def row_indices(self) -> NDArray[np.intp]:
        """Source row of each observation."""
        return self._row_indices
