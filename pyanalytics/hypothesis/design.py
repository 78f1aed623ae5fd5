"""
HypothesisDesign: tagged union for hypothesis test inputs.

Uses factory classmethods per test type. The `test_type` field identifies
which fields are populated. Immutable after construction.

Designs validate structure only (shapes, lengths, confidence level,
non-negative counts). Too-small samples are *not* rejected here: the test
implementations turn them into degenerate results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import ValidationError
from pyanalytics.core.validation import (
    check_array, check_1d, check_2d, check_conf_level, check_non_negative,
    drop_non_finite,
)
from pyanalytics.core.values import is_missing, to_number

TEST_TYPES = ("welch_t", "chisq_independence", "anova_oneway")

MISSING_CATEGORY = "Unknown"


def _to_sample(x: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Convert to a 1-D float64 sample with NaN/Inf removed."""
    arr = check_array(x, name).ravel()
    return drop_non_finite(arr)


def _category_label(value: Any) -> str:
    return MISSING_CATEGORY if is_missing(value) else str(value)


def _split_by_group(
    dataset: Dataset,
    value_column: str,
    group_column: str,
) -> dict[str, list[float]]:
    dataset.require_columns(value_column, group_column)
    buckets: dict[str, list[float]] = {}
    for row in dataset.rows:
        value = to_number(row[value_column])
        if value is None:
            continue
        buckets.setdefault(_category_label(row[group_column]), []).append(value)
    return buckets


@dataclass(frozen=True)
class HypothesisDesign:
    """
    Design for hypothesis tests.

    Uses a tagged-union approach: the `test_type` field identifies which
    fields are populated. Factory classmethods validate inputs.

    Do not construct directly; use factory classmethods.
    """
    test_type: str

    # Two-sample
    _x: NDArray[np.floating[Any]] | None = None
    _y: NDArray[np.floating[Any]] | None = None

    # Contingency table
    _table: NDArray[np.floating[Any]] | None = None
    _row_labels: tuple[str, ...] | None = None
    _col_labels: tuple[str, ...] | None = None

    # One-way ANOVA
    _groups: tuple[NDArray[np.floating[Any]], ...] | None = None
    _group_labels: tuple[str, ...] | None = None

    _conf_level: float = 0.95
    _data_name: str = ""

    # --- Properties ---

    @property
    def x(self) -> NDArray[np.floating[Any]] | None:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        return self._y

    @property
    def table(self) -> NDArray[np.floating[Any]] | None:
        return self._table

    @property
    def row_labels(self) -> tuple[str, ...] | None:
        return self._row_labels

    @property
    def col_labels(self) -> tuple[str, ...] | None:
        return self._col_labels

    @property
    def groups(self) -> tuple[NDArray[np.floating[Any]], ...] | None:
        return self._groups

    @property
    def group_labels(self) -> tuple[str, ...] | None:
        return self._group_labels

    @property
    def conf_level(self) -> float:
        return self._conf_level

    @property
    def data_name(self) -> str:
        return self._data_name

    # --- Factory classmethods ---

    @classmethod
    def for_t_test(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        conf_level: float = 0.95,
        data_name: str = "x and y",
    ) -> HypothesisDesign:
        """Build design for the Welch two-sample t-test."""
        conf_level = check_conf_level(conf_level)
        x_arr = _to_sample(x, "x")
        y_arr = _to_sample(y, "y")
        return cls(
            test_type="welch_t",
            _x=x_arr,
            _y=y_arr,
            _conf_level=conf_level,
            _data_name=data_name,
        )

    @classmethod
    def for_t_test_from_dataset(
        cls,
        dataset: Dataset,
        value_column: str,
        group_column: str,
        *,
        conf_level: float = 0.95,
    ) -> HypothesisDesign:
        """
        Compare a numeric column between the two categories of another column.

        Raises:
            ValidationError: If the group column does not have exactly two
                categories among rows with a numeric value
        """
        buckets = _split_by_group(dataset, value_column, group_column)
        if len(buckets) != 2:
            raise ValidationError(
                f"{group_column!r} must have exactly 2 categories for a t-test, "
                f"got {len(buckets)}"
            )
        (label_x, x), (label_y, y) = buckets.items()
        return cls.for_t_test(
            np.array(x, dtype=np.float64),
            np.array(y, dtype=np.float64),
            conf_level=conf_level,
            data_name=f"{value_column} by {group_column} ({label_x} vs {label_y})",
        )

    @classmethod
    def for_chisq_test(
        cls,
        table: ArrayLike,
        *,
        conf_level: float = 0.95,
        row_labels: Sequence[str] | None = None,
        col_labels: Sequence[str] | None = None,
        data_name: str = "table",
    ) -> HypothesisDesign:
        """
        Build design for the chi-squared test of independence.

        Args:
            table: 2D contingency table of observed counts
        """
        conf_level = check_conf_level(conf_level)
        arr = check_array(table, "table")
        check_2d(arr, "table")
        check_non_negative(arr, "table")
        if not np.all(np.isfinite(arr)):
            raise ValidationError("table: contains non-finite counts")

        n_rows, n_cols = arr.shape
        if row_labels is not None and len(row_labels) != n_rows:
            raise ValidationError(
                f"row_labels has {len(row_labels)} entries for {n_rows} rows"
            )
        if col_labels is not None and len(col_labels) != n_cols:
            raise ValidationError(
                f"col_labels has {len(col_labels)} entries for {n_cols} columns"
            )

        return cls(
            test_type="chisq_independence",
            _table=arr.copy(),
            _row_labels=tuple(row_labels) if row_labels is not None else None,
            _col_labels=tuple(col_labels) if col_labels is not None else None,
            _conf_level=conf_level,
            _data_name=data_name,
        )

    @classmethod
    def for_chisq_from_dataset(
        cls,
        dataset: Dataset,
        row_column: str,
        col_column: str,
        *,
        conf_level: float = 0.95,
    ) -> HypothesisDesign:
        """
        Cross-tabulate two categorical columns into a contingency table.

        Missing cells are counted under the category "Unknown".
        Categories are ordered by first appearance.
        """
        dataset.require_columns(row_column, col_column)
        row_values = [_category_label(v) for v in dataset.column(row_column)]
        col_values = [_category_label(v) for v in dataset.column(col_column)]

        row_cats = list(dict.fromkeys(row_values))
        col_cats = list(dict.fromkeys(col_values))
        row_pos = {c: i for i, c in enumerate(row_cats)}
        col_pos = {c: j for j, c in enumerate(col_cats)}

        table = np.zeros((len(row_cats), len(col_cats)), dtype=np.float64)
        for r, c in zip(row_values, col_values):
            table[row_pos[r], col_pos[c]] += 1.0

        return cls.for_chisq_test(
            table,
            conf_level=conf_level,
            row_labels=row_cats,
            col_labels=col_cats,
            data_name=f"{row_column} and {col_column}",
        )

    @classmethod
    def for_anova(
        cls,
        groups: Sequence[ArrayLike],
        *,
        conf_level: float = 0.95,
        labels: Sequence[str] | None = None,
        data_name: str = "groups",
    ) -> HypothesisDesign:
        """
        Build design for one-way ANOVA.

        Args:
            groups: One numeric sample per group. NaN/Inf entries are dropped.
            labels: Optional group names, one per group
        """
        conf_level = check_conf_level(conf_level)
        samples = []
        for i, g in enumerate(groups):
            arr = check_array(g, f"groups[{i}]").ravel()
            check_1d(arr, f"groups[{i}]")
            samples.append(drop_non_finite(arr))

        if labels is None:
            labels = [f"group {i + 1}" for i in range(len(samples))]
        elif len(labels) != len(samples):
            raise ValidationError(
                f"labels has {len(labels)} entries for {len(samples)} groups"
            )

        return cls(
            test_type="anova_oneway",
            _groups=tuple(samples),
            _group_labels=tuple(str(l) for l in labels),
            _conf_level=conf_level,
            _data_name=data_name,
        )

    @classmethod
    def for_anova_from_dataset(
        cls,
        dataset: Dataset,
        value_column: str,
        group_column: str,
        *,
        conf_level: float = 0.95,
    ) -> HypothesisDesign:
        """
        Split a numeric column by the categories of another column.

        Rows whose value is non-numeric are skipped; missing group cells
        form the "Unknown" group. Groups are ordered by first appearance.
        """
        buckets = _split_by_group(dataset, value_column, group_column)
        return cls.for_anova(
            [np.array(v, dtype=np.float64) for v in buckets.values()],
            conf_level=conf_level,
            labels=list(buckets.keys()),
            data_name=f"{value_column} by {group_column}",
        )
