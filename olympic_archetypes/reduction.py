"""
Dimensionality reduction module.

Projects standardized athlete features onto their leading principal
components for clustering and plotting.
"""

from dataclasses import dataclass

import pandas as pd
from sklearn.decomposition import PCA

from .config import N_COMPONENTS_PCA
from .errors import DegenerateInputError, NumericInstabilityError


@dataclass(frozen=True)
class Projection:
    """PCA scores plus the retained directions."""

    scores: pd.DataFrame
    components: pd.DataFrame
    explained_variance_ratio: pd.Series


def component_names(n_components: int) -> list:
    return [f"PC{i + 1}" for i in range(n_components)]


def project_features(standardized: pd.DataFrame,
                     n_components: int = N_COMPONENTS_PCA,
                     tol: float = 1e-10) -> Projection:
    """
    Project standardized features onto the top principal components.

    Uses a full SVD, so the result depends only on the input values and
    their order.

    Args:
        standardized: DataFrame of z-scores indexed by entry_id
        n_components: Number of components to keep
        tol: Relative variance below which a retained component counts as empty

    Returns:
        Projection with scores indexed like the input

    Raises:
        DegenerateInputError: If there are too few rows or features
        NumericInstabilityError: If a retained component has no variance
    """
    n_rows, n_features = standardized.shape
    if n_features < n_components:
        raise DegenerateInputError(
            f"Need at least {n_components} features, got {n_features}"
        )
    if n_rows <= n_components:
        raise DegenerateInputError(
            f"Need more than {n_components} rows for the projection, got {n_rows}"
        )

    pca = PCA(n_components=n_components, svd_solver="full")
    scores = pca.fit_transform(standardized.values)

    variances = pca.explained_variance_
    if variances[0] <= 0 or (variances <= tol * variances[0]).any():
        raise NumericInstabilityError(
            f"Covariance is singular in the retained subspace "
            f"(component variances: {variances.round(12).tolist()})"
        )

    names = component_names(n_components)
    return Projection(
        scores=pd.DataFrame(scores, columns=names, index=standardized.index),
        components=pd.DataFrame(pca.components_, index=names,
                                columns=standardized.columns),
        explained_variance_ratio=pd.Series(pca.explained_variance_ratio_,
                                           index=names, name="explained_variance_ratio"),
    )
