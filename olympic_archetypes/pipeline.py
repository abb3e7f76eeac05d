"""
End-to-end archetype analysis.

Chains record preparation, standardization, PCA, k-means, labelling and
aggregation. Every stage output is keyed by entry_id.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from .aggregation import ArchetypeSummary, summarize_archetypes
from .archetypes import assign_archetypes, label_archetypes, summarize_clusters
from .clustering import ClusterResult, fit_kmeans
from .config import AnalysisConfig
from .data_loader import DropReport, prepare_athletes
from .feature_engineering import standardize_features
from .reduction import Projection, project_features
from .utils import join_on_entry_id


@dataclass(frozen=True)
class AnalysisResult:
    config: AnalysisConfig
    records: pd.DataFrame
    drop_report: DropReport
    standardized: pd.DataFrame
    projection: Projection
    clusters: ClusterResult
    cluster_summary: pd.DataFrame
    archetype_map: Dict[int, str]
    archetypes: pd.Series
    summary: ArchetypeSummary

    def output_table(self) -> pd.DataFrame:
        """Athlete records with PC scores, cluster id and archetype attached."""
        table = join_on_entry_id(self.records, self.projection.scores)
        table = join_on_entry_id(table, self.clusters.labels)
        return join_on_entry_id(table, self.archetypes)


def run_analysis(raw: pd.DataFrame,
                 config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """
    Run the archetype analysis on a raw results table.

    Args:
        raw: Results table as returned by load_athletes
        config: Run parameters; defaults to AnalysisConfig()

    Returns:
        AnalysisResult holding every stage output
    """
    if config is None:
        config = AnalysisConfig()
    for required in ("age", "weight"):
        if required not in config.features:
            raise ValueError(f"Archetype ranking needs the '{required}' feature")

    records, drop_report = prepare_athletes(raw, sport=config.sport, features=config.features)
    standardized = standardize_features(records, config.features,
                                        zero_variance=config.zero_variance)
    projection = project_features(standardized, n_components=config.n_components)
    clusters = fit_kmeans(
        projection.scores,
        n_clusters=config.n_clusters,
        random_state=config.random_state,
        n_init=config.n_init,
        max_iter=config.max_iter,
    )

    cluster_summary = summarize_clusters(records, clusters.labels, config.features)
    archetype_map = label_archetypes(cluster_summary)
    archetypes = assign_archetypes(clusters.labels, archetype_map)
    summary = summarize_archetypes(records, archetypes)

    return AnalysisResult(
        config=config,
        records=records,
        drop_report=drop_report,
        standardized=standardized,
        projection=projection,
        clusters=clusters,
        cluster_summary=cluster_summary,
        archetype_map=archetype_map,
        archetypes=archetypes,
        summary=summary,
    )
