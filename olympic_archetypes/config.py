"""
Configuration file for the Olympic athlete archetypes project.

Contains constants, file paths, and configuration parameters used throughout
the pipeline.
"""

from dataclasses import dataclass, field
from typing import List

# Dataset (TidyTuesday 2024-08-06, "120 years of Olympic history")
DATA_URL = (
    "https://raw.githubusercontent.com/rfordatascience/tidytuesday/"
    "master/data/2024/2024-08-06/olympics.csv"
)
DATA_PATH = "data/olympics.csv"

# Columns the analysis relies on
REQUIRED_COLUMNS = ["sport", "age", "height", "weight", "sex", "year", "medal"]

# Analysis scope
TARGET_SPORT = "Weightlifting"
FEATURE_COLUMNS = ["age", "height", "weight"]

# Clustering parameters
N_CLUSTERS = 5
K_MEANS_RANGE = range(2, 9)  # Range of k values to scan
RANDOM_STATE = 42
N_INIT = 10
MAX_ITER = 300
N_COMPONENTS_PCA = 2

# Archetype naming, lightest to heaviest.
# The first LIGHTWEIGHT_SLOTS names go to the lightest clusters, youngest first.
LIGHTWEIGHT_SLOTS = 2
ARCHETYPE_NAMES = [
    "Rookie lightweights",
    "Veteran lightweights",
    "Middleweights",
    "Heavyweights",
    "Super heavy elites",
]

# Output paths
REPORTS_DIR = "reports"
FIGURES_DIR = "reports/figures"


@dataclass(frozen=True)
class AnalysisConfig:
    """Explicit parameters for one analysis run."""

    sport: str = TARGET_SPORT
    n_clusters: int = N_CLUSTERS
    random_state: int = RANDOM_STATE
    features: List[str] = field(default_factory=lambda: list(FEATURE_COLUMNS))
    n_components: int = N_COMPONENTS_PCA
    n_init: int = N_INIT
    max_iter: int = MAX_ITER
    zero_variance: str = "raise"
