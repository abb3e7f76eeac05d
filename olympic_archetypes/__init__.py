"""
Olympic Athlete Archetypes Package

A package for clustering Olympic athletes of one sport into body-profile
archetypes and relating them to medal success and sex composition, using
the TidyTuesday "120 years of Olympic history" results table.
"""

__version__ = "0.1.0"

from .config import AnalysisConfig

from .errors import (
    AnalysisError,
    DataRetrievalError,
    MissingFieldError,
    DegenerateInputError,
    EmptyClusterError,
    NumericInstabilityError,
)

from .data_loader import (
    DropReport,
    download_dataset,
    load_athletes,
    prepare_athletes,
    list_sports,
)

from .feature_engineering import (
    get_feature_matrix,
    standardize_features,
)

from .reduction import Projection, project_features

from .clustering import (
    ClusterResult,
    assign_to_nearest,
    fit_kmeans,
    scan_k,
)

from .archetypes import (
    summarize_clusters,
    rank_clusters,
    label_archetypes,
    assign_archetypes,
)

from .aggregation import (
    ArchetypeSummary,
    medal_rates,
    sex_composition,
    summarize_archetypes,
)

from .pipeline import AnalysisResult, run_analysis
