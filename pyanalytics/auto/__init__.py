"""
Automatic analysis module.

Public API:
    auto_analysis(dataset)      - run every applicable analysis
    iter_auto_analysis(dataset) - the same, one analysis per iteration
"""

from pyanalytics.auto.solution import ANALYSES, AnalysisStep, AutoAnalysisSolution
from pyanalytics.auto.solvers import auto_analysis, iter_auto_analysis

__all__ = [
    "auto_analysis",
    "iter_auto_analysis",
    "AnalysisStep",
    "AutoAnalysisSolution",
    "ANALYSES",
]
