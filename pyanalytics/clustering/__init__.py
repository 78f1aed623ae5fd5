"""
Clustering module.

Public API:
    kmeans(data, k)                       - K-means with K-means++ seeding
    kmeans_plus_plus_init(data, k, rng)   - Seeding step on its own
    silhouette_score(data, labels, k)     - Sampled silhouette coefficient
    kmeans_clustering(dataset, columns)   - Auto-K segmentation of rows
"""

from pyanalytics.clustering._kmeans import (
    KMeansFit,
    kmeans,
    kmeans_plus_plus_init,
    silhouette_score,
)
from pyanalytics.clustering.solvers import kmeans_clustering
from pyanalytics.clustering.solution import (
    ClusterSummary,
    SegmentationParams,
    SegmentationSolution,
)

__all__ = [
    "kmeans",
    "kmeans_plus_plus_init",
    "silhouette_score",
    "kmeans_clustering",
    "KMeansFit",
    "ClusterSummary",
    "SegmentationParams",
    "SegmentationSolution",
]
