"""
Automatic analysis solution types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pyanalytics.clustering.solution import SegmentationSolution
from pyanalytics.correlation._nonlinear import CorrelationPair
from pyanalytics.descriptive._interval import ConfidenceInterval
from pyanalytics.descriptive._percentiles import PercentileSummary
from pyanalytics.hypothesis.solution import HTestSolution
from pyanalytics.pareto.solution import ParetoSolution
from pyanalytics.regression.solution import RegressionSolution
from pyanalytics.timeseries.solution import TimeSeriesSolution

ANALYSES = (
    'segmentation',
    'pareto',
    'regression',
    'percentiles',
    'confidence_intervals',
    'nonlinear_correlations',
    'time_series',
    'hypothesis_tests',
)


@dataclass(frozen=True)
class AnalysisStep:
    """
    One slice of an automatic analysis run.

    Attributes
    ----------
    name : str
        Analysis name, e.g. 'segmentation' or 'pareto'.
    result : Any
        The analysis output: a solution, a tuple of solutions or
        summaries, or None when the analysis did not apply or failed.
    failures : dict
        Failure messages keyed by analysis (and column where the analysis
        runs per column).
    """
    name: str
    result: Any
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return bool(self.failures)


@dataclass(frozen=True)
class AutoAnalysisSolution:
    """
    Everything an automatic run produced for one dataset.

    Analyses that did not apply are None (single results) or empty tuples.
    ``failures`` maps the name of every analysis that raised to its error
    message; the other analyses are unaffected.
    """
    dataset_name: str
    segmentation: SegmentationSolution | None = None
    pareto: tuple[ParetoSolution, ...] = ()
    regression: RegressionSolution | None = None
    percentiles: tuple[PercentileSummary, ...] = ()
    confidence_intervals: tuple[ConfidenceInterval, ...] = ()
    nonlinear_correlations: tuple[CorrelationPair, ...] = ()
    time_series: tuple[TimeSeriesSolution, ...] = ()
    hypothesis_tests: tuple[HTestSolution, ...] = ()
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def completed(self) -> tuple[str, ...]:
        """Names of the analyses that produced a result."""
        names = []
        for name in ANALYSES:
            value = getattr(self, name)
            if value is not None and value != ():
                names.append(name)
        return tuple(names)

    def summary(self) -> str:
        lines = [f"Automatic analysis of {self.dataset_name or 'dataset'}", ""]
        if self.segmentation is not None:
            lines.append(
                f"Segmentation:           {self.segmentation.optimal_k} clusters "
                f"(silhouette {self.segmentation.silhouette_score:.3f})"
            )
        for pareto in self.pareto:
            lines.append(
                f"Pareto:                 {pareto.value_column} by {pareto.column}: "
                f"{pareto.vital_few_count} vital of {len(pareto.items)}"
            )
        if self.regression is not None:
            lines.append(f"Regression:             {self.regression.equation}")
            lines.append(f"                        R² = {self.regression.r_squared:.4f}")
        for p in self.percentiles:
            lines.append(
                f"Percentiles:            {p.column}: median {p.p50:.4g}, "
                f"{p.outlier_count} outliers"
            )
        for ci in self.confidence_intervals:
            lines.append(
                f"Confidence interval:    {ci.column}: {ci.mean:.4g} "
                f"[{ci.lower:.4g}, {ci.upper:.4g}]"
            )
        for pair in self.nonlinear_correlations:
            lines.append(f"Correlation:            {pair.interpretation}")
        for ts in self.time_series:
            lines.append(
                f"Time series:            {ts.column} by {ts.date_column} "
                f"({ts.frequency}, {ts.n} points)"
            )
        for test in self.hypothesis_tests:
            lines.append(f"Hypothesis test:        {test.interpretation}")
        if self.failures:
            lines.append("")
            for name, message in self.failures.items():
                lines.append(f"FAILED {name}: {message}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"AutoAnalysisSolution(dataset={self.dataset_name!r}, "
            f"completed={list(self.completed)}, failures={len(self.failures)})"
        )
