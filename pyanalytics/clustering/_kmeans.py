"""
Lloyd's K-means with K-means++ seeding, and the silhouette score.

Operates on a plain (n x d) float64 matrix; standardization and labelling
happen in the solver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyanalytics.core.exceptions import ValidationError
from pyanalytics.core.validation import check_array, check_2d, check_positive_int

Seed = int | np.random.Generator | None


@dataclass(frozen=True)
class KMeansFit:
    """
    One K-means run.

    Attributes
    ----------
    centroids : ndarray, shape (k, d)
    assignments : ndarray of int, shape (n,)
        Cluster index of each point.
    inertia : float
        Within-cluster sum of squared distances.
    iterations : int
        Assignment passes performed.
    converged : bool
        True if a pass left every assignment unchanged before
        ``max_iterations`` was reached.
    """
    centroids: NDArray[np.floating[Any]]
    assignments: NDArray[np.intp]
    inertia: float
    iterations: int
    converged: bool

    @property
    def k(self) -> int:
        return self.centroids.shape[0]

    def cluster_sizes(self) -> NDArray[np.intp]:
        return np.bincount(self.assignments, minlength=self.k)


def _squared_distances(data: NDArray, centroids: NDArray) -> NDArray:
    """(n x k) squared Euclidean distances."""
    diff = data[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.einsum('nkd,nkd->nk', diff, diff)


def kmeans_plus_plus_init(
    data: NDArray[np.floating[Any]],
    k: int,
    rng: np.random.Generator,
) -> NDArray[np.floating[Any]]:
    """
    K-means++ seeding.

    The first centroid is a uniformly random point; each further centroid
    is drawn with probability proportional to the squared distance to the
    nearest centroid chosen so far. When every point coincides with a
    centroid the draw falls back to uniform.
    """
    n, d = data.shape
    centroids = np.empty((k, d), dtype=np.float64)
    centroids[0] = data[rng.integers(n)]
    closest = np.sum((data - centroids[0]) ** 2, axis=1)

    for c in range(1, k):
        total = closest.sum()
        if total > 0:
            idx = rng.choice(n, p=closest / total)
        else:
            idx = rng.integers(n)
        centroids[c] = data[idx]
        closest = np.minimum(closest, np.sum((data - centroids[c]) ** 2, axis=1))

    return centroids


def kmeans(
    data: ArrayLike,
    k: int,
    *,
    max_iterations: int = 50,
    seed: Seed = None,
) -> KMeansFit:
    """
    Partition points into k clusters.

    Parameters
    ----------
    data : array-like, shape (n, d)
    k : int
        Number of clusters, 1 <= k <= n.
    max_iterations : int
        Upper bound on assign/update passes. Default 50.
    seed : int, numpy.random.Generator or None
        Source of randomness for the seeding. Runs are reproducible only
        when a seed or generator is given; None draws fresh OS entropy.

    Returns
    -------
    KMeansFit
        A cluster that loses all its points keeps its previous centroid.
    """
    X = check_array(data, 'data')
    check_2d(X, 'data')
    k = check_positive_int(k, 'k')
    max_iterations = check_positive_int(max_iterations, 'max_iterations')
    n = X.shape[0]
    if k > n:
        raise ValidationError(f"k={k} exceeds the number of points ({n})")

    rng = np.random.default_rng(seed)
    centroids = kmeans_plus_plus_init(X, k, rng)
    assignments = np.full(n, -1, dtype=np.intp)

    converged = False
    iterations = 0
    for iteration in range(1, max_iterations + 1):
        iterations = iteration
        new_assignments = np.argmin(_squared_distances(X, centroids), axis=1)
        if np.array_equal(new_assignments, assignments):
            converged = True
            break
        assignments = new_assignments

        for c in range(k):
            members = assignments == c
            if members.any():
                centroids[c] = X[members].mean(axis=0)

    inertia = float(np.sum((X - centroids[assignments]) ** 2))
    return KMeansFit(
        centroids=centroids,
        assignments=assignments,
        inertia=inertia,
        iterations=iterations,
        converged=converged,
    )


def silhouette_score(
    data: ArrayLike,
    assignments: ArrayLike,
    k: int,
    *,
    sample_cap: int = 500,
) -> float:
    """
    Mean silhouette coefficient over an evenly strided sample.

    At most ``sample_cap`` points are scored, and distances are measured
    only against the other sampled points. Returns 0 for fewer than 2
    points or clusters.
    """
    X = check_array(data, 'data')
    check_2d(X, 'data')
    labels = np.asarray(assignments, dtype=np.intp)
    n = X.shape[0]
    if n < 2 or k < 2:
        return 0.0

    step = max(1, math.ceil(n / sample_cap))
    sample = np.arange(0, n, step)
    pts = X[sample]
    lab = labels[sample]
    dist = np.sqrt(_squared_distances(pts, pts))

    total = 0.0
    for i in range(len(sample)):
        same = lab == lab[i]
        same[i] = False
        a = dist[i, same].mean() if same.any() else 0.0

        b = np.inf
        for c in range(k):
            if c == lab[i]:
                continue
            other = lab == c
            if other.any():
                b = min(b, dist[i, other].mean())
        if np.isinf(b):
            b = 0.0

        denom = max(a, b)
        total += (b - a) / denom if denom > 0 else 0.0

    return float(total / len(sample))
