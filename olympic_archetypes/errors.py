"""
Exceptions raised by the archetype analysis pipeline.
"""

from typing import Iterable, Optional


class AnalysisError(Exception):
    """Base class for all pipeline errors."""


class DataRetrievalError(AnalysisError):
    """The dataset could not be downloaded or read from disk."""


class MissingFieldError(AnalysisError):
    """A required column is absent from the input table."""

    def __init__(self, columns: Iterable[str]):
        self.columns = list(columns)
        super().__init__(f"Missing required columns: {', '.join(self.columns)}")


class DegenerateInputError(AnalysisError):
    """The batch is empty, too small, or has a zero-variance feature."""

    def __init__(self, message: str, columns: Optional[Iterable[str]] = None):
        self.columns = list(columns) if columns is not None else []
        super().__init__(message)


class EmptyClusterError(AnalysisError):
    """More clusters were requested than there are distinct points to fill them."""

    def __init__(self, n_clusters: int, n_distinct: int):
        self.n_clusters = n_clusters
        self.n_distinct = n_distinct
        super().__init__(
            f"Cannot form {n_clusters} non-empty clusters from "
            f"{n_distinct} distinct points"
        )


class NumericInstabilityError(AnalysisError):
    """A retained principal component carries no variance."""
