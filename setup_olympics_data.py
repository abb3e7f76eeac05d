#!/usr/bin/env python3
"""
Setup script to download the Olympic results table (TidyTuesday 2024-08-06).

Usage:
    python setup_olympics_data.py
"""

import sys
from pathlib import Path

from olympic_archetypes.config import DATA_PATH, DATA_URL, TARGET_SPORT
from olympic_archetypes.data_loader import (
    download_dataset,
    list_sports,
    load_athletes,
    prepare_athletes,
)
from olympic_archetypes.errors import DataRetrievalError


def main():
    print("=" * 60)
    print("Olympic Results Data Setup")
    print("=" * 60)
    print()
    print(f"Source: {DATA_URL}")
    print(f"Data will be saved to: {Path(DATA_PATH).absolute()}")
    print()
    print("-" * 60)

    try:
        path = download_dataset(force=True)
    except DataRetrievalError as e:
        print(f"Download failed: {e}")
        sys.exit(1)

    # Test loading
    print()
    print("Testing data loading...")
    df = load_athletes(path)
    print(f"Successfully loaded {len(df):,} athlete-event entries")
    print(f"{len(list_sports(df))} sports available")

    records, report = prepare_athletes(df, sport=TARGET_SPORT)
    print()
    print(f"{TARGET_SPORT}: {report.n_kept:,} complete entries "
          f"({report.n_dropped_missing:,} dropped for missing values)")
    print()
    print("Sample data:")
    print(records[["name", "sex", "age", "height", "weight", "year", "medal"]].head(10))
    print()
    print("Data setup complete!")


if __name__ == "__main__":
    main()
