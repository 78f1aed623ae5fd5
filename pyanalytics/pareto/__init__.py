"""
Pareto (80/20) analysis.

Public API:
    pareto_analysis(dataset, category_column, value_column)
    pareto_from_values(mapping)
"""

from pyanalytics.pareto.solvers import pareto_analysis, pareto_from_values
from pyanalytics.pareto.solution import ParetoItem, ParetoParams, ParetoSolution

__all__ = [
    "pareto_analysis",
    "pareto_from_values",
    "ParetoItem",
    "ParetoParams",
    "ParetoSolution",
]
