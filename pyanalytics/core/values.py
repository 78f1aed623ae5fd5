"""
Cell value coercion.

Dataset rows hold loosely-typed cells: numbers, strings, booleans, dates or
None. Every analysis reads cells through the two functions in this module,
so "what counts as a number" and "what counts as a date" are decided in
exactly one place.

    to_number(value) -> float | None
    to_date(value)   -> datetime.date | None
"""

from __future__ import annotations

import datetime as dt
import math
import re
import warnings
from typing import Union

import numpy as np
import pandas as pd

CellValue = Union[float, int, str, bool, dt.date, dt.datetime, None]

# Excel serial day 0 (accounts for the 1900 leap-year bug)
EXCEL_EPOCH = pd.Timestamp('1899-12-30')
EXCEL_MAX_SERIAL = 2958465  # 9999-12-31

MIN_YEAR = 1900
MAX_YEAR = 2100

_DMY_PATTERN = re.compile(r'^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})$')
_DIGITS_PATTERN = re.compile(r'^\d+$')


def is_missing(value: CellValue) -> bool:
    """True for None, empty/whitespace strings and float NaN."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, float):
        return math.isnan(value)
    return False


def to_number(value: CellValue) -> float | None:
    """
    Coerce a cell to a finite float.

    Returns:
        The numeric value, or None if the cell is missing, non-numeric,
        or not finite. Booleans map to 1.0 / 0.0. Dates are not numbers.

    Examples:
        >>> to_number(" 12.5 ")
        12.5
        >>> to_number(True)
        1.0
        >>> to_number("n/a") is None
        True
    """
    if value is None or isinstance(value, (dt.date, dt.datetime)):
        return None
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, np.integer, np.floating)):
        result = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(result):
        return None
    return result


def _in_range(d: dt.date) -> bool:
    return MIN_YEAR <= d.year <= MAX_YEAR


def _from_excel_serial(serial: float) -> dt.date | None:
    if not (1 <= serial <= EXCEL_MAX_SERIAL):
        return None
    stamp = EXCEL_EPOCH + pd.Timedelta(days=float(serial))
    d = stamp.date()
    return d if _in_range(d) else None


def _from_digits(text: str) -> dt.date | None:
    if len(text) == 4:
        year = int(text)
        return dt.date(year, 1, 1) if MIN_YEAR <= year <= MAX_YEAR else None
    if len(text) == 5:
        return _from_excel_serial(int(text))
    if len(text) == 8:
        try:
            d = dt.date(int(text[:4]), int(text[4:6]), int(text[6:]))
        except ValueError:
            return None
        return d if _in_range(d) else None
    return None


def _from_day_month_year(match: re.Match) -> dt.date | None:
    first, second, year_text = match.groups()
    year = int(year_text) + (2000 if len(year_text) == 2 else 0)
    day, month = int(first), int(second)
    # Day-first; fall back to month-first when day-first is impossible
    for d_, m_ in ((day, month), (month, day)):
        try:
            d = dt.date(year, m_, d_)
        except ValueError:
            continue
        return d if _in_range(d) else None
    return None


def _from_text(text: str) -> dt.date | None:
    with warnings.catch_warnings():
        # Format inference on free text warns once per call
        warnings.simplefilter('ignore', UserWarning)
        stamp = pd.to_datetime(text, errors='coerce')
    if stamp is None or pd.isna(stamp):
        return None
    d = stamp.date()
    return d if _in_range(d) else None


def to_date(value: CellValue) -> dt.date | None:
    """
    Coerce a cell to a calendar date.

    Accepted forms:
        - date / datetime / pandas Timestamp objects
        - ISO 8601 and other unambiguous date strings
        - D/M/Y with '/', '-' or '.' separators (2-digit years are 20xx);
          M/D/Y is tried when the day-first reading is impossible
        - 4-digit strings (a year), 8-digit strings (YYYYMMDD)
        - Excel serial day numbers, as numbers or 5-digit strings

    Only years 1900-2100 are accepted. Anything else returns None.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            return None
        d = value.date()
        return d if _in_range(d) else None
    if isinstance(value, dt.datetime):
        d = value.date()
        return d if _in_range(d) else None
    if isinstance(value, dt.date):
        return value if _in_range(value) else None
    if isinstance(value, (int, float, np.integer, np.floating)):
        if not math.isfinite(float(value)):
            return None
        return _from_excel_serial(float(value))
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if _DIGITS_PATTERN.match(text):
        return _from_digits(text)

    match = _DMY_PATTERN.match(text)
    if match:
        return _from_day_month_year(match)

    return _from_text(text)
