"""
Clustering module for grouping athletes into body-profile clusters.

Implements seeded k-means over the projected points, a nearest-centroid
assignment with a fixed tie-break, and a scan over k for model selection.
"""

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.metrics import silhouette_score

from .config import K_MEANS_RANGE, MAX_ITER, N_CLUSTERS, N_INIT, RANDOM_STATE
from .errors import DegenerateInputError, EmptyClusterError


@dataclass(frozen=True)
class ClusterResult:
    """Cluster ids (1..k) per entry plus the fitted centroids."""

    labels: pd.Series
    centroids: pd.DataFrame
    inertia: float
    n_iter: int

    @property
    def n_clusters(self) -> int:
        return len(self.centroids)


def assign_to_nearest(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Index of the nearest centroid for each point.

    Distance is squared Euclidean. A point equidistant from several centroids
    goes to the lowest-indexed one.
    """
    points = np.asarray(points, dtype=float)
    centroids = np.asarray(centroids, dtype=float)
    diff = points[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    sq_dist = (diff ** 2).sum(axis=2)
    # argmin returns the first occurrence of the minimum
    return sq_dist.argmin(axis=1)


def count_distinct(points: np.ndarray) -> int:
    return len(np.unique(np.asarray(points, dtype=float), axis=0))


def fit_kmeans(points: pd.DataFrame,
               n_clusters: int = N_CLUSTERS,
               random_state: int = RANDOM_STATE,
               n_init: int = N_INIT,
               max_iter: int = MAX_ITER) -> ClusterResult:
    """
    Fit k-means and assign a cluster id to every point.

    Iteration stops once no point changes cluster (tol=0) or max_iter is
    reached. A cluster emptied mid-run is re-seeded from the point farthest
    from its centroid. After fitting, labels are reassigned with the
    lowest-index tie-break and centroids and inertia are recomputed from
    those labels, so each centroid is the mean of its members.

    Args:
        points: Projected points indexed by entry_id
        n_clusters: Number of clusters
        random_state: Seed for centroid initialisation
        n_init: Number of seeded restarts; the lowest inertia run wins
        max_iter: Iteration bound per restart

    Returns:
        ClusterResult with ids 1..n_clusters

    Raises:
        DegenerateInputError: If there are no points
        EmptyClusterError: If n_clusters exceeds the number of distinct points
    """
    if n_clusters < 1:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")
    if len(points) == 0:
        raise DegenerateInputError("Cannot cluster an empty batch")

    X = points.values.astype(float)
    n_distinct = count_distinct(X)
    if n_clusters > n_distinct:
        raise EmptyClusterError(n_clusters, n_distinct)

    km = KMeans(
        n_clusters=n_clusters,
        init="k-means++",
        n_init=n_init,
        max_iter=max_iter,
        tol=0.0,
        algorithm="lloyd",
        random_state=random_state,
    )
    km.fit(X)

    idx = assign_to_nearest(X, km.cluster_centers_)
    centers = km.cluster_centers_.copy()
    for j in range(n_clusters):
        members = idx == j
        if members.any():
            centers[j] = X[members].mean(axis=0)
    inertia = float(((X - centers[idx]) ** 2).sum())
    ids = idx + 1
    cluster_index = pd.RangeIndex(1, n_clusters + 1, name="cluster")
    return ClusterResult(
        labels=pd.Series(ids, index=points.index, name="cluster"),
        centroids=pd.DataFrame(centers, index=cluster_index,
                               columns=points.columns),
        inertia=inertia,
        n_iter=int(km.n_iter_),
    )


def scan_k(points: pd.DataFrame,
           k_range: Iterable[int] = K_MEANS_RANGE,
           random_state: int = RANDOM_STATE) -> pd.DataFrame:
    """
    Test different k values and return inertia and silhouette scores.

    k values that cannot be fitted (more clusters than distinct points, or
    fewer than two clusters for the silhouette) are skipped.

    Returns:
        DataFrame indexed by k with columns inertia and silhouette
    """
    X = points.values.astype(float)
    n_distinct = count_distinct(X)
    rows = []
    for k in k_range:
        if k < 2 or k > n_distinct or k >= len(X):
            continue
        result = fit_kmeans(points, n_clusters=k, random_state=random_state)
        sil = silhouette_score(X, result.labels.values)
        rows.append({"k": k, "inertia": result.inertia, "silhouette": sil})
    return pd.DataFrame(rows, columns=["k", "inertia", "silhouette"]).set_index("k")
