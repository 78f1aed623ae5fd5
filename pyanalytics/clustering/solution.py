"""
Segmentation (auto-K clustering) solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyanalytics.core.exceptions import raise_for_reason
from pyanalytics.core.result import Result


@dataclass(frozen=True)
class ClusterSummary:
    """
    One segment of the chosen clustering.

    Attributes
    ----------
    cluster_id : int
        0-based cluster index.
    centroid : dict
        Column -> centroid coordinate in original units (2 decimals).
    size : int
        Number of member rows.
    members : tuple of int
        Dataset row indices of the members, truncated to the first 1000.
    characteristics : str
        e.g. "Segment 1: high revenue, low cost (48 records)".
    """
    cluster_id: int
    centroid: dict[str, float]
    size: int
    members: tuple[int, ...]
    characteristics: str


@dataclass(frozen=True)
class SegmentationParams:
    """
    Parameter payload for auto-K clustering.

    ``inertia_values`` and ``silhouette_scores`` hold one entry per
    candidate K, starting at K = 2.
    """
    clusters: tuple[ClusterSummary, ...]
    optimal_k: int
    silhouette_score: float
    inertia_values: tuple[float, ...]
    silhouette_scores: tuple[float, ...]
    columns: tuple[str, ...]
    interpretation: str
    n_points: int = 0


@dataclass
class SegmentationSolution:
    """
    User-facing clustering results.

    Wraps Result[SegmentationParams] and provides convenient accessors.
    """
    _result: Result[SegmentationParams]

    @property
    def clusters(self) -> tuple[ClusterSummary, ...]:
        return self._result.params.clusters

    @property
    def optimal_k(self) -> int:
        """Chosen number of clusters; 0 when clustering was not possible."""
        return self._result.params.optimal_k

    @property
    def silhouette_score(self) -> float:
        """Silhouette score of the chosen K (3 decimals)."""
        return self._result.params.silhouette_score

    @property
    def inertia_values(self) -> tuple[float, ...]:
        return self._result.params.inertia_values

    @property
    def silhouette_scores(self) -> tuple[float, ...]:
        return self._result.params.silhouette_scores

    @property
    def columns(self) -> tuple[str, ...]:
        return self._result.params.columns

    @property
    def n_points(self) -> int:
        """Rows with a numeric value in every clustering column."""
        return self._result.params.n_points

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

    def raise_for_status(self) -> SegmentationSolution:
        """Raise InsufficientDataError when too few rows could be clustered."""
        raise_for_reason(self.reason, self.interpretation)
        return self

    def summary(self) -> str:
        p = self._result.params
        lines = [
            f"K-means segmentation on {', '.join(p.columns)}",
            f"optimal K = {p.optimal_k}, silhouette = {p.silhouette_score:.3f}, "
            f"n = {p.n_points}",
            "",
        ]
        for cluster in p.clusters:
            lines.append(cluster.characteristics)
        if p.clusters:
            lines.append("")
        lines.append(p.interpretation)
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"SegmentationSolution(optimal_k={p.optimal_k}, "
            f"silhouette_score={p.silhouette_score:.3f}, n_points={p.n_points})"
        )
