"""
Tests for kmeans_clustering() (auto-K segmentation of dataset rows).
"""

import pytest

from pyanalytics.clustering import kmeans_clustering
from pyanalytics.core.config import ClusteringConfig
from pyanalytics.core.dataset import Dataset
from pyanalytics.core.exceptions import InsufficientDataError, InvalidColumnReference, ValidationError


class TestKMeansClustering:

    def test_finds_two_segments(self, blobs_dataset):
        result = kmeans_clustering(blobs_dataset, ["x", "y"], seed=0)
        assert result.optimal_k == 2
        assert result.silhouette_score > 0.5
        assert result.n_points == 100
        assert sorted(c.size for c in result.clusters) == [50, 50]
        assert len(result.inertia_values) == 5
        assert len(result.silhouette_scores) == 5
        assert result.silhouette_score == pytest.approx(max(result.silhouette_scores), abs=1e-3)
        assert result.interpretation.startswith("Data naturally segments into 2 distinct groups")

    def test_centroids_in_original_units(self, blobs_dataset):
        result = kmeans_clustering(blobs_dataset, ["x", "y"], seed=0)
        centres = sorted(c.centroid["x"] for c in result.clusters)
        assert centres[0] == pytest.approx(0.0, abs=0.5)
        assert centres[1] == pytest.approx(10.0, abs=0.5)

    def test_profiles(self, blobs_dataset):
        result = kmeans_clustering(blobs_dataset, ["x", "y"], seed=0)
        labels = sorted(c.characteristics for c in result.clusters)
        assert any("high x, high y (50 records)" in s for s in labels)
        assert any("low x, low y (50 records)" in s for s in labels)

    def test_members_are_row_indices(self):
        records = [{"a": "n/a", "b": 0.0}] + [
            {"a": float(v), "b": float(v)} for v in [0, 0.1, 0.2, 9, 9.1, 9.2]
        ]
        result = kmeans_clustering(Dataset.from_records(records), ["a", "b"], seed=0)
        members = sorted(m for c in result.clusters for m in c.members)
        assert members == [1, 2, 3, 4, 5, 6]

    def test_member_cap(self, blobs_dataset):
        config = ClusteringConfig(max_members=10)
        result = kmeans_clustering(blobs_dataset, ["x", "y"], seed=0, config=config)
        for cluster in result.clusters:
            assert len(cluster.members) == 10
            assert cluster.size == 50

    def test_max_k(self, blobs_dataset):
        result = kmeans_clustering(blobs_dataset, ["x", "y"], max_k=3, seed=0)
        assert len(result.silhouette_scores) == 2
        assert result.info["k_range"] == (2, 3)

    def test_reproducible(self, blobs_dataset):
        a = kmeans_clustering(blobs_dataset, ["x", "y"], seed=11)
        b = kmeans_clustering(blobs_dataset, ["x", "y"], seed=11)
        assert a.silhouette_scores == b.silhouette_scores


class TestInsufficientData:

    def test_too_few_rows(self):
        ds = Dataset.from_records([{"x": 1.0}, {"x": 2.0}])
        result = kmeans_clustering(ds, ["x"])
        assert result.optimal_k == 0
        assert result.clusters == ()
        assert result.reason == "insufficient_data"
        assert result.interpretation == "Insufficient data for clustering."
        with pytest.raises(InsufficientDataError):
            result.raise_for_status()

    def test_no_candidate_k(self):
        ds = Dataset.from_records([{"x": 1.0}, {"x": 2.0}, {"x": 3.0}])
        assert kmeans_clustering(ds, ["x"]).reason == "insufficient_data"

    def test_no_columns(self, blobs_dataset):
        with pytest.raises(ValidationError):
            kmeans_clustering(blobs_dataset, [])

    def test_unknown_column(self, blobs_dataset):
        with pytest.raises(InvalidColumnReference):
            kmeans_clustering(blobs_dataset, ["x", "z"])


class TestSummary:

    def test_repr_and_summary(self, blobs_dataset):
        result = kmeans_clustering(blobs_dataset, ["x", "y"], seed=0)
        assert "optimal_k=2" in repr(result)
        assert "Segment" in result.summary()
