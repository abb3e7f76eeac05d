"""
Utility functions for the Olympic athlete archetypes project.

Helper functions for keyed joins and file I/O.
"""

from pathlib import Path
from typing import Union

import pandas as pd


def ensure_dir_exists(dir_path: Union[str, Path]) -> Path:
    """
    Create directory if it doesn't exist.

    Args:
        dir_path: Path to directory

    Returns:
        The directory as a Path
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def join_on_entry_id(left: pd.DataFrame,
                     right: Union[pd.Series, pd.DataFrame]) -> pd.DataFrame:
    """
    Join two per-entry tables on their entry_id index.

    Both sides must cover exactly the same entries; a silent partial join
    would misalign stages that filtered rows differently.

    Raises:
        ValueError: If the index sets differ or contain duplicates
    """
    if not left.index.is_unique or not right.index.is_unique:
        raise ValueError("entry_id index must be unique on both sides of a join")
    if not left.index.sort_values().equals(right.index.sort_values()):
        missing = left.index.difference(right.index)
        extra = right.index.difference(left.index)
        raise ValueError(
            f"entry_id mismatch: {len(missing)} missing, {len(extra)} unexpected"
        )
    if isinstance(right, pd.Series):
        right = right.to_frame()
    return left.join(right, how="left")
