"""
Per-column summary of a Dataset, in the spirit of ``DataFrame.describe()``.

Numeric columns get moments and quartiles; every other column gets the
number of distinct values and the most frequent one.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence
import numpy as np

from pyanalytics.core.dataset import ColumnType, Dataset
from pyanalytics.core.values import CellValue, is_missing, to_number
from pyanalytics.descriptive._percentiles import interpolated_percentile


@dataclass(frozen=True)
class ColumnSummary:
    """
    Summary statistics of one column.

    Numeric fields are None for non-numeric columns (and for numeric
    columns with no usable values); categorical fields are None for
    numeric columns. ``std`` is the population standard deviation.
    """
    column: str
    type: ColumnType
    count: int
    non_null_count: int
    null_count: int
    mean: float | None = None
    std: float | None = None
    min: float | None = None
    q1: float | None = None
    median: float | None = None
    q3: float | None = None
    max: float | None = None
    unique: int | None = None
    top: str | None = None
    freq: int | None = None


def _numeric_summary(name: str, ctype: ColumnType, values: Sequence[CellValue]) -> ColumnSummary:
    present = [v for v in values if not is_missing(v)]
    numbers = [n for n in (to_number(v) for v in present) if n is not None]
    base = dict(
        column=name, type=ctype, count=len(values),
        non_null_count=len(present), null_count=len(values) - len(present),
    )
    if not numbers:
        return ColumnSummary(**base)

    x = np.sort(np.array(numbers, dtype=np.float64))
    return ColumnSummary(
        **base,
        mean=float(x.mean()),
        std=float(x.std()),
        min=float(x[0]),
        q1=interpolated_percentile(x, 25),
        median=interpolated_percentile(x, 50),
        q3=interpolated_percentile(x, 75),
        max=float(x[-1]),
    )


def _categorical_summary(name: str, ctype: ColumnType, values: Sequence[CellValue]) -> ColumnSummary:
    present = [str(v) for v in values if not is_missing(v)]
    counts = Counter(present)
    top, freq = counts.most_common(1)[0] if counts else (None, 0)
    return ColumnSummary(
        column=name,
        type=ctype,
        count=len(values),
        non_null_count=len(present),
        null_count=len(values) - len(present),
        unique=len(counts),
        top=top,
        freq=freq,
    )


def describe(dataset: Dataset, columns: Sequence[str] | None = None) -> dict[str, ColumnSummary]:
    """
    Summarize each column of a dataset.

    Parameters
    ----------
    dataset : Dataset
    columns : sequence of str, optional
        Columns to summarize, default all in declaration order.

    Returns
    -------
    dict
        Column name -> ColumnSummary, in the requested order.

    Raises
    ------
    InvalidColumnReference
        If a requested column does not exist.
    """
    names = tuple(columns) if columns is not None else dataset.column_names
    dataset.require_columns(*names)

    summaries = {}
    for name in names:
        ctype = dataset.column_info(name).type
        values = dataset.column(name)
        if ctype == 'number':
            summaries[name] = _numeric_summary(name, ctype, values)
        else:
            summaries[name] = _categorical_summary(name, ctype, values)
    return summaries
