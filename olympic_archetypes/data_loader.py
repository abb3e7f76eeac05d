"""
Data loading module for the Olympic results dataset.

Functions to download and cache the results table, validate its columns,
and reduce it to clean athlete records for one sport.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import requests

from .config import DATA_PATH, DATA_URL, FEATURE_COLUMNS, REQUIRED_COLUMNS, TARGET_SPORT
from .errors import DataRetrievalError, MissingFieldError

ENTRY_ID = "entry_id"


@dataclass(frozen=True)
class DropReport:
    """Row accounting for one call to prepare_athletes."""

    n_input: int
    n_other_sport: int
    missing_by_column: Dict[str, int] = field(default_factory=dict)
    n_dropped_missing: int = 0
    n_kept: int = 0

    def as_frame(self) -> pd.DataFrame:
        rows = [
            ("input_rows", self.n_input),
            ("other_sport", self.n_other_sport),
        ]
        rows += [(f"missing_{col}", n) for col, n in self.missing_by_column.items()]
        rows += [
            ("dropped_missing", self.n_dropped_missing),
            ("kept", self.n_kept),
        ]
        return pd.DataFrame(rows, columns=["item", "rows"])


def download_dataset(url: str = DATA_URL,
                     path: str = DATA_PATH,
                     force: bool = False,
                     timeout: int = 60) -> Path:
    """
    Download the results CSV once and cache it locally.

    Args:
        url: Remote location of the CSV file
        path: Local cache file
        force: If True, re-download even if cached
        timeout: Request timeout in seconds

    Returns:
        Path to the cached file

    Raises:
        DataRetrievalError: If the download fails
    """
    cache_file = Path(path)
    if cache_file.exists() and not force:
        return cache_file

    cache_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise DataRetrievalError(f"Failed to download {url}: {e}") from e

    cache_file.write_bytes(response.content)
    return cache_file


def load_athletes(path: str = DATA_PATH) -> pd.DataFrame:
    """
    Load the results table and index it by entry.

    Args:
        path: Path to the cached CSV file

    Returns:
        DataFrame with one row per athlete-event entry, indexed by entry_id
        (the row position in the file)

    Raises:
        DataRetrievalError: If the file doesn't exist
        MissingFieldError: If a required column is absent
    """
    if not Path(path).exists():
        raise DataRetrievalError(f"Dataset file not found: {path}")

    df = pd.read_csv(path)
    validate_columns(df)
    df.index = pd.RangeIndex(len(df), name=ENTRY_ID)
    return df


def validate_columns(df: pd.DataFrame,
                     required: Optional[List[str]] = None) -> None:
    """Raise MissingFieldError if any required column is absent."""
    if required is None:
        required = REQUIRED_COLUMNS
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise MissingFieldError(missing)


def prepare_athletes(df: pd.DataFrame,
                     sport: str = TARGET_SPORT,
                     features: Optional[List[str]] = None) -> Tuple[pd.DataFrame, DropReport]:
    """
    Filter the results table to clean athlete records for one sport.

    Rows with a missing value in any feature column, or a missing sex, are
    dropped, so the standardizer and the aggregator never see a gap.

    Args:
        df: Raw results table (see load_athletes)
        sport: Sport to keep
        features: Numeric feature columns that must be present

    Returns:
        Tuple of (records, drop_report). Records keep the input index and
        gain a boolean `medalist` column.
    """
    if features is None:
        features = FEATURE_COLUMNS
    validate_columns(df, REQUIRED_COLUMNS + [c for c in features if c not in REQUIRED_COLUMNS])

    records = df[df["sport"] == sport].copy()
    n_other_sport = len(df) - len(records)

    for col in features:
        records[col] = pd.to_numeric(records[col], errors="coerce")
    sex = records["sex"].where(records["sex"].notna(), "")
    records["sex"] = sex.astype(str).str.strip().str.upper().replace("", np.nan)

    checked = list(features) + ["sex"]
    missing_mask = records[checked].isna()
    missing_by_column = {col: int(missing_mask[col].sum()) for col in checked}
    incomplete = missing_mask.any(axis=1)
    records = records[~incomplete].copy()

    records["medalist"] = records["medal"].notna()

    report = DropReport(
        n_input=len(df),
        n_other_sport=n_other_sport,
        missing_by_column=missing_by_column,
        n_dropped_missing=int(incomplete.sum()),
        n_kept=len(records),
    )
    return records, report


def list_sports(df: pd.DataFrame) -> List[str]:
    """Sorted list of sports present in the results table."""
    return sorted(df["sport"].dropna().unique().tolist())
