"""
Auto-K segmentation of dataset rows.

Rows are z-scored per column, clustered for each candidate K, and the K
with the best silhouette score wins. Centroids are reported back in the
original units together with a high/low/average profile per column.
"""

from __future__ import annotations

from typing import Sequence
import numpy as np

from pyanalytics.core.compute.timing import Timer
from pyanalytics.core.config import DEFAULT_CLUSTERING, ClusteringConfig
from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import REASON_INSUFFICIENT_DATA, ValidationError
from pyanalytics.core.result import Result
from pyanalytics.clustering._kmeans import Seed, kmeans, silhouette_score
from pyanalytics.clustering.solution import (
    ClusterSummary, SegmentationParams, SegmentationSolution,
)

MIN_POINTS = 3


def _insufficient(columns: tuple[str, ...], n_points: int, timer: Timer) -> Result[SegmentationParams]:
    timer.stop()
    params = SegmentationParams(
        clusters=(),
        optimal_k=0,
        silhouette_score=0.0,
        inertia_values=(),
        silhouette_scores=(),
        columns=columns,
        interpretation="Insufficient data for clustering.",
        n_points=n_points,
    )
    return Result(
        params=params,
        info={'method': 'kmeans++', 'reason': REASON_INSUFFICIENT_DATA},
        timing=timer.result(),
        backend_name='cpu_kmeans',
    )


def _profile(z_centroid: np.ndarray, columns: tuple[str, ...], threshold: float) -> str:
    parts = []
    for col, z in zip(columns, z_centroid):
        if z > threshold:
            parts.append(f"high {col}")
        elif z < -threshold:
            parts.append(f"low {col}")
        else:
            parts.append(f"average {col}")
    return ", ".join(parts)


def kmeans_clustering(
    dataset: Dataset,
    columns: Sequence[str],
    *,
    max_k: int | None = None,
    max_iterations: int | None = None,
    seed: Seed = None,
    config: ClusteringConfig = DEFAULT_CLUSTERING,
) -> SegmentationSolution:
    """
    Segment rows with K-means++, choosing K by silhouette score.

    Parameters
    ----------
    dataset : Dataset
    columns : sequence of str
        Numeric columns to cluster on. Rows with a non-numeric value in
        any of them are skipped.
    max_k : int, optional
        Largest K to try (default ``config.max_k``, 6). The range is
        further capped at n // 2 and ``config.hard_max_k``.
    max_iterations : int, optional
        Per-run iteration bound (default ``config.max_iterations``, 50).
    seed : int, numpy.random.Generator or None
        Makes the run reproducible. With None every call may choose
        different centroids, and occasionally a different K.
    config : ClusteringConfig
        Silhouette sample cap, labelling threshold, member cap.

    Returns
    -------
    SegmentationSolution
        Fewer than 3 usable rows (or no K >= 2 to try) gives an empty
        result with ``reason == 'insufficient_data'``.

    Raises
    ------
    InvalidColumnReference
        If a column does not exist.
    """
    max_k = config.max_k if max_k is None else max_k
    max_iterations = config.max_iterations if max_iterations is None else max_iterations
    columns = tuple(columns)
    if not columns:
        raise ValidationError("columns: at least one column is required")

    timer = Timer()
    timer.start()

    raw, row_indices = dataset.numeric_matrix(columns)
    n = raw.shape[0]
    k_max = min(max_k, n // 2, config.hard_max_k)
    if n < MIN_POINTS or k_max < 2:
        return _insufficient(columns, n, timer)

    with timer.section('standardize'):
        means = raw.mean(axis=0)
        stds = raw.std(axis=0)
        stds[stds == 0] = 1.0
        Z = (raw - means) / stds

    rng = np.random.default_rng(seed)
    fits = []
    inertia_values = []
    scores = []
    for k in range(2, k_max + 1):
        with timer.section('kmeans'):
            fit = kmeans(Z, k, max_iterations=max_iterations, seed=rng)
        with timer.section('silhouette'):
            score = silhouette_score(Z, fit.assignments, k, sample_cap=config.silhouette_sample)
        fits.append(fit)
        inertia_values.append(fit.inertia)
        scores.append(score)

    best = int(np.argmax(scores))
    best_fit = fits[best]
    best_score = scores[best]
    optimal_k = best + 2

    clusters = []
    for c in range(optimal_k):
        member_rows = row_indices[best_fit.assignments == c]
        centroid_z = best_fit.centroids[c]
        centroid = {
            col: round(float(centroid_z[d] * stds[d] + means[d]), 2)
            for d, col in enumerate(columns)
        }
        profile = _profile(centroid_z, columns, config.label_threshold)
        clusters.append(ClusterSummary(
            cluster_id=c,
            centroid=centroid,
            size=int(len(member_rows)),
            members=tuple(int(i) for i in member_rows[:config.max_members]),
            characteristics=f"Segment {c + 1}: {profile} ({len(member_rows)} records)",
        ))

    timer.stop()

    warnings_list = []
    if not best_fit.converged:
        warnings_list.append(
            f"K-means did not converge in {max_iterations} iterations for K={optimal_k}"
        )

    interpretation = (
        f"Data naturally segments into {optimal_k} distinct groups "
        f"(silhouette score: {best_score:.3f}). "
        + ". ".join(c.characteristics for c in clusters) + "."
    )

    params = SegmentationParams(
        clusters=tuple(clusters),
        optimal_k=optimal_k,
        silhouette_score=round(best_score, 3),
        inertia_values=tuple(inertia_values),
        silhouette_scores=tuple(scores),
        columns=columns,
        interpretation=interpretation,
        n_points=n,
    )
    result = Result(
        params=params,
        info={
            'method': 'kmeans++',
            'k_range': (2, k_max),
            'iterations': best_fit.iterations,
        },
        timing=timer.result(),
        backend_name='cpu_kmeans',
        warnings=tuple(warnings_list),
    )
    return SegmentationSolution(_result=result)
