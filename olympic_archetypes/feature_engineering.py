"""
Feature engineering module for athlete body-profile features.

Standardizes age, height and weight over the whole batch so that each
dimension contributes equally to the projection and the clustering.
"""

from typing import List, Optional

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler

from .config import FEATURE_COLUMNS
from .errors import DegenerateInputError

ZERO_VARIANCE_POLICIES = ("raise", "drop", "zero")


def get_feature_matrix(records: pd.DataFrame,
                       features: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Extract the numeric feature columns used for clustering.

    Args:
        records: DataFrame with athlete records
        features: Specific columns to include. If None, uses FEATURE_COLUMNS.

    Returns:
        DataFrame with only the feature columns, as floats
    """
    if features is None:
        features = FEATURE_COLUMNS
    return records[features].astype(float).copy()


def standardize_features(records: pd.DataFrame,
                         features: Optional[List[str]] = None,
                         zero_variance: str = "raise") -> pd.DataFrame:
    """
    Z-score each feature column over the full batch.

    Every column uses the same divisor (n, as StandardScaler does), so after
    the transform each column has mean 0 and variance 1.

    Args:
        records: DataFrame with athlete records, indexed by entry_id
        features: Feature columns to standardize
        zero_variance: What to do with a constant column: 'raise' (default),
                       'drop' the column, or set all its z-scores to 'zero'

    Returns:
        DataFrame of z-scores with the same index and column names

    Raises:
        DegenerateInputError: If the batch is empty, or a column is constant
                              and zero_variance is 'raise'
    """
    if zero_variance not in ZERO_VARIANCE_POLICIES:
        raise ValueError(f"Unknown zero-variance policy: {zero_variance}")

    X = get_feature_matrix(records, features)
    if len(X) == 0:
        raise DegenerateInputError("Cannot standardize an empty batch")
    if X.isna().any().any():
        bad = X.columns[X.isna().any()].tolist()
        raise DegenerateInputError(f"Missing values in features: {bad}", columns=bad)

    constant = X.columns[np.isclose(X.var(ddof=0).values, 0.0)].tolist()
    if constant:
        if zero_variance == "raise":
            raise DegenerateInputError(
                f"Zero variance in features: {constant}", columns=constant
            )
        if zero_variance == "drop":
            X = X.drop(columns=constant)
            if X.shape[1] == 0:
                raise DegenerateInputError("Every feature has zero variance", columns=constant)

    scaler = StandardScaler()
    result = pd.DataFrame(
        scaler.fit_transform(X.values),
        columns=X.columns,
        index=X.index,
    )

    # StandardScaler leaves constant columns centred at 0 already
    if constant and zero_variance == "zero":
        result[constant] = 0.0

    return result
