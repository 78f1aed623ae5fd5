"""
Pareto (80/20) analysis.

Categories are ranked by aggregated absolute value; a category is vital
while the running share of the total stays within the threshold. The
largest category is always vital, so the vital few are never empty.
"""

from __future__ import annotations

from typing import Mapping

from pyanalytics.core.compute.timing import Timer
from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import REASON_DEGENERATE_INPUT, ValidationError
from pyanalytics.core.result import Result
from pyanalytics.core.values import is_missing, to_number
from pyanalytics.pareto.solution import ParetoItem, ParetoParams, ParetoSolution

MISSING_CATEGORY = "Unknown"

# Float slack on the running percentage
_PERCENT_TOL = 1e-9


def _rank(
    aggregated: Mapping[str, float],
    column: str,
    value_column: str,
    vital_threshold: float,
) -> Result[ParetoParams]:
    timer = Timer()
    timer.start()

    if not 0.0 < vital_threshold <= 100.0:
        raise ValidationError(f"vital_threshold must be in (0, 100], got {vital_threshold}")

    ranked = sorted(aggregated.items(), key=lambda kv: kv[1], reverse=True)
    total = float(sum(v for _, v in ranked))

    if total == 0.0:
        timer.stop()
        params = ParetoParams(
            column=column,
            value_column=value_column,
            items=(),
            vital_few_count=0,
            vital_few_percent=0.0,
            total=0.0,
            interpretation="No data to analyze.",
        )
        return Result(
            params=params,
            info={'method': 'pareto', 'reason': REASON_DEGENERATE_INPUT},
            timing=timer.result(),
            backend_name='cpu_pareto',
        )

    with timer.section('rank'):
        items = []
        cumulative = 0.0
        vital_count = 0
        vital_value = 0.0
        for category, value in ranked:
            cumulative += value
            cumulative_percent = cumulative / total * 100.0
            is_vital = cumulative_percent <= vital_threshold + _PERCENT_TOL or vital_count == 0
            if is_vital:
                vital_count += 1
                vital_value += value
            items.append(ParetoItem(
                category=category,
                value=round(value, 2),
                cumulative_percent=round(cumulative_percent, 1),
                is_vital=is_vital,
            ))

    timer.stop()

    vital_percent = vital_value / total * 100.0
    category_share = vital_count / len(items) * 100.0
    if vital_percent > 75.0:
        shape = "Classic Pareto distribution: focus on the vital few for maximum impact."
    else:
        shape = "Distribution is more even than typical 80/20."
    interpretation = (
        f"Top {vital_count} of {len(items)} categories ({category_share:.0f}%) "
        f"account for {vital_percent:.1f}% of total {value_column}. {shape}"
    )

    params = ParetoParams(
        column=column,
        value_column=value_column,
        items=tuple(items),
        vital_few_count=vital_count,
        vital_few_percent=round(vital_percent, 1),
        total=total,
        interpretation=interpretation,
    )
    return Result(
        params=params,
        info={'method': 'pareto', 'n_categories': len(items)},
        timing=timer.result(),
        backend_name='cpu_pareto',
    )


def pareto_analysis(
    dataset: Dataset,
    category_column: str,
    value_column: str,
    *,
    vital_threshold: float = 80.0,
) -> ParetoSolution:
    """
    Pareto analysis of a value column grouped by a category column.

    Parameters
    ----------
    dataset : Dataset
    category_column : str
        Grouping column. Missing cells are grouped under "Unknown".
    value_column : str
        Values to aggregate. Non-numeric cells count as 0; negative
        values contribute their magnitude.
    vital_threshold : float
        Cumulative percentage up to which categories are vital. Default 80.

    Returns
    -------
    ParetoSolution
        A zero total gives an empty item list with interpretation
        "No data to analyze." and ``reason == 'degenerate_input'``.

    Raises
    ------
    InvalidColumnReference
        If either column does not exist.
    """
    dataset.require_columns(category_column, value_column)

    aggregated: dict[str, float] = {}
    for row in dataset.rows:
        raw = row[category_column]
        category = MISSING_CATEGORY if is_missing(raw) else str(raw)
        value = abs(to_number(row[value_column]) or 0.0)
        aggregated[category] = aggregated.get(category, 0.0) + value

    result = _rank(aggregated, category_column, value_column, vital_threshold)
    return ParetoSolution(_result=result)


def pareto_from_values(
    values: Mapping[str, float],
    *,
    column: str = 'category',
    value_column: str = 'value',
    vital_threshold: float = 80.0,
) -> ParetoSolution:
    """
    Pareto analysis of pre-aggregated category totals.

    Parameters
    ----------
    values : mapping of str to float
        Category -> value. Absolute values are used.
    """
    aggregated = {str(k): abs(float(v)) for k, v in values.items()}
    result = _rank(aggregated, column, value_column, vital_threshold)
    return ParetoSolution(_result=result)
