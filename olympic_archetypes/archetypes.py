"""
Archetype labelling module.

Turns arbitrary k-means cluster ids into named archetypes. Names are chosen
from cluster statistics, never from the raw id, because ids change between
seeds while the body profile of a group does not.
"""

from typing import Dict, List, Optional

import pandas as pd

from .config import ARCHETYPE_NAMES, FEATURE_COLUMNS, LIGHTWEIGHT_SLOTS
from .utils import join_on_entry_id


def summarize_clusters(records: pd.DataFrame,
                       labels: pd.Series,
                       features: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Compute count and mean/std of each feature per cluster.

    Args:
        records: Athlete records indexed by entry_id
        labels: Cluster id per entry_id
        features: Feature columns to summarise

    Returns:
        DataFrame indexed by cluster with `count` and `<feature>_mean`,
        `<feature>_std` columns
    """
    if features is None:
        features = FEATURE_COLUMNS
    joined = join_on_entry_id(records[features], labels.rename("cluster"))

    grouped = joined.groupby("cluster")[features]
    stats = grouped.agg(["mean", "std"])
    stats.columns = [f"{col}_{stat}" for col, stat in stats.columns]
    stats.insert(0, "count", grouped.size())
    return stats.sort_index()


def rank_clusters(summary: pd.DataFrame, age_ordered: int = 0) -> List[int]:
    """
    Order cluster ids from lightest to heaviest by mean weight.

    The `age_ordered` lightest clusters are then reordered youngest first.
    Remaining ties fall back to mean age, then cluster id.
    """
    def by_weight(cluster):
        row = summary.loc[cluster]
        return (row["weight_mean"], row["age_mean"], cluster)

    def by_age(cluster):
        row = summary.loc[cluster]
        return (row["age_mean"], row["weight_mean"], cluster)

    ranking = sorted(summary.index.tolist(), key=by_weight)
    head = sorted(ranking[:age_ordered], key=by_age)
    return head + ranking[age_ordered:]


def default_names(summary: pd.DataFrame, ranking: List[int]) -> List[str]:
    if len(ranking) == len(ARCHETYPE_NAMES):
        return list(ARCHETYPE_NAMES)
    return [
        f"Tier {i} ({summary.loc[cluster, 'weight_mean']:.0f} kg)"
        for i, cluster in enumerate(ranking, 1)
    ]


def label_archetypes(summary: pd.DataFrame,
                     names: Optional[List[str]] = None) -> Dict[int, str]:
    """
    Map each cluster id to an archetype name.

    Clusters are ranked by mean weight, so the heaviest cluster always gets
    the last name. With the default five names the two lightest clusters are
    split by age into rookies and veterans.

    Args:
        summary: Output of summarize_clusters
        names: One name per cluster, lightest first. Defaults to
               ARCHETYPE_NAMES when the cluster count matches, otherwise
               generated tier names.

    Returns:
        Dict of cluster id -> archetype name, in rank order
    """
    use_defaults = names is None and len(summary) == len(ARCHETYPE_NAMES)
    ranking = rank_clusters(summary, LIGHTWEIGHT_SLOTS if use_defaults else 0)
    if names is None:
        names = default_names(summary, ranking)
    if len(names) != len(ranking):
        raise ValueError(f"Expected {len(ranking)} archetype names, got {len(names)}")
    return {cluster: name for cluster, name in zip(ranking, names)}


def assign_archetypes(labels: pd.Series, mapping: Dict[int, str]) -> pd.Series:
    """
    Attach archetype names to entries.

    Returns:
        Ordered categorical Series named `archetype`, categories in rank order
    """
    unknown = set(labels.unique()) - set(mapping)
    if unknown:
        raise KeyError(f"No archetype for clusters: {sorted(unknown)}")
    dtype = pd.CategoricalDtype(list(mapping.values()), ordered=True)
    return labels.map(mapping).astype(dtype).rename("archetype")
