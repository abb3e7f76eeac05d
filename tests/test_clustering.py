"""Tests for k-means cluster assignment."""

import numpy as np
import pandas as pd
import pytest

from olympic_archetypes.clustering import assign_to_nearest, fit_kmeans, scan_k
from olympic_archetypes.errors import DegenerateInputError, EmptyClusterError
from olympic_archetypes.feature_engineering import standardize_features
from olympic_archetypes.reduction import project_features


@pytest.fixture
def ten_points(ten_records) -> pd.DataFrame:
    return project_features(standardize_features(ten_records)).scores


def test_tie_goes_to_lower_index():
    points = np.array([[0.0, 0.0]])
    assert assign_to_nearest(points, np.array([[1.0, 0.0], [-1.0, 0.0]])).tolist() == [0]
    assert assign_to_nearest(points, np.array([[5.0, 5.0], [0.0, 1.0], [0.0, -1.0]])).tolist() == [1]


def test_assign_to_nearest_uses_squared_distance():
    points = np.array([[0.0, 0.0], [4.0, 4.0], [2.9, 0.0]])
    centroids = np.array([[0.0, 0.0], [4.0, 4.0], [3.0, 0.0]])
    assert assign_to_nearest(points, centroids).tolist() == [0, 1, 2]


def test_two_weight_groups_separate(ten_points, light_ids, heavy_ids):
    result = fit_kmeans(ten_points, n_clusters=2, random_state=7)
    labels = result.labels

    assert labels.loc[light_ids].nunique() == 1
    assert labels.loc[heavy_ids].nunique() == 1
    assert labels.loc[light_ids].iloc[0] != labels.loc[heavy_ids].iloc[0]


def test_cluster_ids_are_one_based(ten_points):
    result = fit_kmeans(ten_points, n_clusters=3, random_state=0)
    assert set(result.labels.unique()) <= {1, 2, 3}
    assert result.centroids.index.tolist() == [1, 2, 3]
    assert result.n_clusters == 3
    assert result.labels.index.equals(ten_points.index)


def test_same_seed_same_labels(ten_points):
    first = fit_kmeans(ten_points, n_clusters=3, random_state=42)
    second = fit_kmeans(ten_points, n_clusters=3, random_state=42)
    pd.testing.assert_series_equal(first.labels, second.labels)
    pd.testing.assert_frame_equal(first.centroids, second.centroids)


def test_labels_match_nearest_centroid(ten_points):
    result = fit_kmeans(ten_points, n_clusters=3, random_state=1)
    nearest = assign_to_nearest(ten_points.values, result.centroids.values) + 1
    assert result.labels.tolist() == nearest.tolist()


def test_more_clusters_than_distinct_points():
    points = pd.DataFrame({"PC1": [0.0, 0.0, 1.0, 1.0, 2.0], "PC2": [0.0, 0.0, 1.0, 1.0, 2.0]})
    with pytest.raises(EmptyClusterError) as exc:
        fit_kmeans(points, n_clusters=4)
    assert exc.value.n_distinct == 3
    assert exc.value.n_clusters == 4


def test_k_equal_to_distinct_points_fills_every_cluster():
    points = pd.DataFrame({"PC1": [0.0, 0.0, 5.0, 5.0, 10.0], "PC2": [0.0, 0.0, 5.0, 5.0, 10.0]})
    result = fit_kmeans(points, n_clusters=3, random_state=3)
    assert sorted(result.labels.value_counts().tolist()) == [1, 2, 2]


def test_empty_batch():
    with pytest.raises(DegenerateInputError):
        fit_kmeans(pd.DataFrame(columns=["PC1", "PC2"], dtype=float), n_clusters=2)


def test_non_positive_k(ten_points):
    with pytest.raises(ValueError):
        fit_kmeans(ten_points, n_clusters=0)


def test_scan_k_skips_infeasible(ten_points):
    scan = scan_k(ten_points, range(1, 12), random_state=0)
    assert scan.index.min() == 2
    assert scan.index.max() == 9
    assert (scan["silhouette"] <= 1.0).all()
    # Inertia never increases with more clusters on this data
    assert scan["inertia"].iloc[-1] <= scan["inertia"].iloc[0]


def test_centroids_are_member_means(ten_points):
    result = fit_kmeans(ten_points, n_clusters=3, random_state=5)
    means = ten_points.groupby(result.labels).mean()

    np.testing.assert_allclose(result.centroids.loc[means.index].values, means.values)
    centers = result.centroids.loc[result.labels].values
    assert result.inertia == pytest.approx(((ten_points.values - centers) ** 2).sum())


def test_tied_point_keeps_centroids_consistent():
    # Point (0, 0) sits exactly between the two groups
    points = pd.DataFrame({"PC1": [-2.0, -2.0, 0.0, 2.0, 2.0],
                           "PC2": [0.5, -0.5, 0.0, 0.5, -0.5]})
    result = fit_kmeans(points, n_clusters=2, random_state=0)
    means = points.groupby(result.labels).mean()
    np.testing.assert_allclose(result.centroids.loc[means.index].values, means.values)
