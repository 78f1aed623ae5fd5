"""
Tunable constants for the analytics core.

Several thresholds in the core are empirical: they have worked well on
real business datasets but carry no statistical derivation. They live
here as frozen dataclasses so callers can override them per call instead
of patching literals.

Usage:
    from pyanalytics.core.config import NonLinearityThresholds

    strict = NonLinearityThresholds(gap=0.25)
    detect_nonlinear_correlations(ds, thresholds=strict)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NonLinearityThresholds:
    """
    Pearson-vs-Spearman non-linearity heuristic.

    A column pair is flagged non-linear when
    ``|spearman| - |pearson| > gap`` and ``|spearman| > min_spearman``.
    Pairs are reported only if either |coefficient| >= ``report`` and
    at least ``min_pairs`` complete observations exist.
    """
    gap: float = 0.15
    min_spearman: float = 0.4
    report: float = 0.3
    min_pairs: int = 10


@dataclass(frozen=True)
class ClusteringConfig:
    """
    K-means with automatic K selection.

    K ranges over 2..min(max_k, n // 2, hard_max_k). Silhouette scores are
    computed on an evenly strided sample of at most ``silhouette_sample``
    points. A centroid coordinate more than ``label_threshold`` standard
    deviations above (below) the mean is labelled "high" ("low").
    """
    max_k: int = 6
    hard_max_k: int = 8
    max_iterations: int = 50
    silhouette_sample: int = 500
    label_threshold: float = 0.5
    max_members: int = 1000


@dataclass(frozen=True)
class AutoAnalysisConfig:
    """Column and row limits that keep the automatic batch cost predictable."""
    min_rows: int = 10
    max_columns: int = 5
    max_pareto_columns: int = 2
    max_predictors: int = 5
    percentile_min_values: int = 5
    ci_min_values: int = 3
    max_timeseries_columns: int = 5
    max_group_levels: int = 10


DEFAULT_NONLINEARITY = NonLinearityThresholds()
DEFAULT_CLUSTERING = ClusteringConfig()
DEFAULT_AUTO = AutoAnalysisConfig()
