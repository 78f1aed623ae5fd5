"""
Dataset: the tabular input every analysis reads from.

A Dataset is an ordered sequence of rows (mappings from column name to cell
value) plus column descriptors. It doesn't know or care which analysis
consumes it; analyses pull numeric samples and date columns out of it
through the accessors below.

Usage:
    from pyanalytics import Dataset

    ds = Dataset.from_records([
        {'region': 'North', 'sales': 120.0, 'date': '2024-01-31'},
        {'region': 'South', 'sales': 95.5, 'date': '2024-02-29'},
    ])
    ds = Dataset.from_dataframe(df)

    ds.column_names            # ('region', 'sales', 'date')
    ds.numeric('sales')        # array([120. ,  95.5])
    ds.numeric('revenue')      # InvalidColumnReference

Rows are stored as read-only mappings and the Dataset itself is frozen:
no analysis can mutate caller data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Literal, Mapping, Sequence
import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pyanalytics.core.exceptions import InvalidColumnReference, ValidationError
from pyanalytics.core.values import CellValue, is_missing, to_date, to_number

ColumnType = Literal['number', 'string', 'date', 'boolean']
VALID_COLUMN_TYPES = ('number', 'string', 'date', 'boolean')

# Share of non-missing values that must parse as dates for a string column
# to be inferred as a date column
DATE_INFERENCE_RATE = 0.7


@dataclass(frozen=True)
class ColumnInfo:
    """Column descriptor: name and declared type."""
    name: str
    type: ColumnType

    def __post_init__(self) -> None:
        if self.type not in VALID_COLUMN_TYPES:
            raise ValidationError(
                f"Column {self.name!r}: type must be one of {VALID_COLUMN_TYPES}, "
                f"got {self.type!r}"
            )


def infer_column_type(values: Sequence[CellValue]) -> ColumnType:
    """
    Infer a column type from its values.

    boolean if every non-missing value is a bool, number if every one
    coerces to a number, date if at least 70% parse as dates, else string.
    An all-missing column is a string column.
    """
    present = [v for v in values if not is_missing(v)]
    if not present:
        return 'string'
    if all(isinstance(v, (bool, np.bool_)) for v in present):
        return 'boolean'
    if all(to_number(v) is not None for v in present):
        return 'number'
    parsed = sum(1 for v in present if to_date(v) is not None)
    if parsed / len(present) >= DATE_INFERENCE_RATE:
        return 'date'
    return 'string'


@dataclass(frozen=True)
class Dataset:
    """
    Immutable tabular dataset.

    Construct via factory classmethods, not directly.

    Invariants:
        - ``row_count == len(rows)``
        - every row has a value (possibly None) for every declared column
    """
    _rows: tuple[Mapping[str, CellValue], ...]
    _columns: tuple[ColumnInfo, ...]
    _name: str = ''
    _id: str = ''
    _index: Mapping[str, ColumnInfo] = field(default_factory=dict, repr=False)

    # === Factory Methods ===

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        columns: Sequence[ColumnInfo] | Mapping[str, ColumnType] | None = None,
        *,
        name: str = '',
        id: str = '',
    ) -> Dataset:
        """
        Build a Dataset from row mappings.

        Args:
            records: Rows as mappings from column name to value
            columns: Column descriptors, or a {name: type} mapping.
                If None, columns are taken from the union of row keys in
                first-seen order and their types inferred.
            name: Dataset display name
            id: Dataset identifier

        Returns:
            Dataset whose rows carry every declared column
        """
        raw_rows = [dict(r) for r in records]

        if columns is None:
            names: list[str] = []
            seen: set[str] = set()
            for row in raw_rows:
                for key in row:
                    if key not in seen:
                        seen.add(key)
                        names.append(key)
            column_infos = tuple(
                ColumnInfo(n, infer_column_type([row.get(n) for row in raw_rows]))
                for n in names
            )
        elif isinstance(columns, Mapping):
            column_infos = tuple(ColumnInfo(n, t) for n, t in columns.items())
        else:
            column_infos = tuple(columns)

        return cls._build(raw_rows, column_infos, name=name, id=id)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, *, name: str = '', id: str = '') -> Dataset:
        """
        Build a Dataset from a pandas DataFrame.

        Column types come from the dtypes: numeric -> number, bool -> boolean,
        datetime -> date, anything else is inferred from the values.
        """
        column_infos = []
        for col in df.columns:
            series = df[col]
            if pd.api.types.is_bool_dtype(series):
                ctype: ColumnType = 'boolean'
            elif pd.api.types.is_numeric_dtype(series):
                ctype = 'number'
            elif pd.api.types.is_datetime64_any_dtype(series):
                ctype = 'date'
            else:
                ctype = infer_column_type(series.tolist())
            column_infos.append(ColumnInfo(str(col), ctype))

        records = []
        for values in df.itertuples(index=False, name=None):
            row = {}
            for info, value in zip(column_infos, values):
                row[info.name] = None if _is_na_scalar(value) else value
            records.append(row)

        return cls._build(records, tuple(column_infos), name=name, id=id)

    @classmethod
    def _build(
        cls,
        rows: list[dict[str, Any]],
        columns: tuple[ColumnInfo, ...],
        *,
        name: str,
        id: str,
    ) -> Dataset:
        """Internal builder: fills missing cells and freezes rows."""
        names = [c.name for c in columns]
        if len(set(names)) != len(names):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValidationError(f"Duplicate column names: {duplicates}")

        frozen_rows = tuple(
            MappingProxyType({n: row.get(n) for n in names})
            for row in rows
        )
        index = MappingProxyType({c.name: c for c in columns})
        return cls(_rows=frozen_rows, _columns=columns, _name=name, _id=id, _index=index)

    # === Properties ===

    @property
    def rows(self) -> tuple[Mapping[str, CellValue], ...]:
        return self._rows

    @property
    def columns(self) -> tuple[ColumnInfo, ...]:
        return self._columns

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> str:
        return self._id

    def __len__(self) -> int:
        return len(self._rows)

    # === Column Access ===

    def __contains__(self, column: str) -> bool:
        return column in self._index

    def require_columns(self, *names: str) -> None:
        """
        Verify every named column is declared.

        Raises:
            InvalidColumnReference: For the first unknown column
        """
        for n in names:
            if n not in self._index:
                raise InvalidColumnReference(n, self.column_names)

    def column_info(self, name: str) -> ColumnInfo:
        self.require_columns(name)
        return self._index[name]

    def columns_of_type(self, ctype: ColumnType) -> tuple[str, ...]:
        """Names of the columns declared with the given type, in order."""
        return tuple(c.name for c in self._columns if c.type == ctype)

    def column(self, name: str) -> tuple[CellValue, ...]:
        """Raw cell values of one column, one per row."""
        self.require_columns(name)
        return tuple(row[name] for row in self._rows)

    def numeric(self, name: str) -> NDArray[np.floating[Any]]:
        """
        The numeric sample of one column.

        Non-numeric and missing cells are discarded, so the result can be
        shorter than ``row_count``.
        """
        values = [to_number(v) for v in self.column(name)]
        return np.array([v for v in values if v is not None], dtype=np.float64)

    def numeric_matrix(
        self,
        names: Sequence[str],
    ) -> tuple[NDArray[np.floating[Any]], NDArray[np.intp]]:
        """
        Rows where every named column is numeric.

        Returns:
            (matrix, row_indices): an (m x len(names)) float64 matrix and
            the dataset row index of each matrix row
        """
        self.require_columns(*names)
        data: list[list[float]] = []
        indices: list[int] = []
        for i, row in enumerate(self._rows):
            point = [to_number(row[n]) for n in names]
            if any(v is None for v in point):
                continue
            data.append(point)
            indices.append(i)
        matrix = np.array(data, dtype=np.float64).reshape(len(data), len(names))
        return matrix, np.array(indices, dtype=np.intp)


def _is_na_scalar(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
