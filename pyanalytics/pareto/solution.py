"""
Pareto analysis solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyanalytics.core.exceptions import raise_for_reason
from pyanalytics.core.result import Result


@dataclass(frozen=True)
class ParetoItem:
    """
    One category of a Pareto chart.

    ``value`` is rounded to 2 decimals and ``cumulative_percent`` to 1.
    """
    category: str
    value: float
    cumulative_percent: float
    is_vital: bool


@dataclass(frozen=True)
class ParetoParams:
    """
    Parameter payload for Pareto analysis.

    Attributes
    ----------
    items : tuple of ParetoItem
        Categories by descending value.
    vital_few_count : int
        Number of vital categories; at least 1 whenever total > 0.
    vital_few_percent : float
        Share of the total held by the vital categories (1 decimal).
    total : float
        Sum of absolute values over all categories.
    """
    column: str
    value_column: str
    items: tuple[ParetoItem, ...]
    vital_few_count: int
    vital_few_percent: float
    total: float
    interpretation: str


@dataclass
class ParetoSolution:
    """
    User-facing Pareto analysis results.

    Wraps Result[ParetoParams] and provides convenient accessors.
    """
    _result: Result[ParetoParams]

    @property
    def column(self) -> str:
        """Category column."""
        return self._result.params.column

    @property
    def value_column(self) -> str:
        return self._result.params.value_column

    @property
    def items(self) -> tuple[ParetoItem, ...]:
        return self._result.params.items

    @property
    def vital_few(self) -> tuple[ParetoItem, ...]:
        return tuple(item for item in self._result.params.items if item.is_vital)

    @property
    def vital_few_count(self) -> int:
        return self._result.params.vital_few_count

    @property
    def vital_few_percent(self) -> float:
        return self._result.params.vital_few_percent

    @property
    def total(self) -> float:
        return self._result.params.total

    @property
    def interpretation(self) -> str:
        return self._result.params.interpretation

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def reason(self) -> str | None:
        return self._result.reason

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def raise_for_status(self) -> ParetoSolution:
        """Raise DegenerateInputError when there was nothing to rank."""
        raise_for_reason(self.reason, self.interpretation)
        return self

    def summary(self) -> str:
        p = self._result.params
        lines = [
            f"Pareto analysis of {p.value_column} by {p.column}",
            "",
            f"{'category':<24s} {'value':>14s} {'cum %':>7s}  vital",
        ]
        for item in p.items:
            mark = "*" if item.is_vital else ""
            lines.append(
                f"{item.category[:24]:<24s} {item.value:>14.2f} "
                f"{item.cumulative_percent:>7.1f}  {mark}"
            )
        lines.append("")
        lines.append(p.interpretation)
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"ParetoSolution(column={p.column!r}, n_items={len(p.items)}, "
            f"vital_few_count={p.vital_few_count})"
        )
