"""Shared fixtures for the archetype analysis tests.

Fixtures build small synthetic results tables shaped like the Olympic
dataset, so no test touches the network.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from olympic_archetypes.data_loader import ENTRY_ID, prepare_athletes

# (weight, height, age) centres, lightest first
GROUP_CENTRES = [
    (55.0, 155.0, 20.0),
    (66.0, 165.0, 30.0),
    (80.0, 172.0, 24.0),
    (94.0, 180.0, 29.0),
    (125.0, 188.0, 27.0),
]
GROUP_SIZE = 12


def _frame(rows) -> pd.DataFrame:
    df = pd.DataFrame(rows)
    df.index = pd.RangeIndex(len(df), name=ENTRY_ID)
    return df


@pytest.fixture
def raw_results() -> pd.DataFrame:
    """Weightlifting entries in five well separated body profiles.

    Also contains entries from another sport and entries with missing
    age/height that the loader must drop.
    """
    rng = np.random.default_rng(0)
    rows = []
    for group, (weight, height, age) in enumerate(GROUP_CENTRES):
        for i in range(GROUP_SIZE):
            rows.append({
                "id": len(rows),
                "name": f"Lifter {group}-{i}",
                "sex": "M" if group >= 2 or i % 3 else "F",
                "age": round(age + rng.normal(0, 1.0), 1),
                "height": round(height + rng.normal(0, 1.5), 1),
                "weight": round(weight + rng.normal(0, 1.5), 1),
                "year": 2000 if i % 2 else 2004,
                "sport": "Weightlifting",
                "event": "Mixed",
                "medal": "Gold" if (group == 4 and i < 6) or (group == 1 and i == 0) else np.nan,
                "group": group,
            })
    rows.append({"id": 900, "name": "Sprinter", "sex": "M", "age": 24, "height": 180,
                 "weight": 75, "year": 2000, "sport": "Athletics", "event": "100m",
                 "medal": "Gold", "group": -1})
    rows.append({"id": 901, "name": "No age", "sex": "F", "age": np.nan, "height": 160,
                 "weight": 58, "year": 2004, "sport": "Weightlifting", "event": "Mixed",
                 "medal": np.nan, "group": -1})
    rows.append({"id": 902, "name": "No height", "sex": "M", "age": 25, "height": np.nan,
                 "weight": 90, "year": 2004, "sport": "Weightlifting", "event": "Mixed",
                 "medal": "Silver", "group": -1})
    return _frame(rows)


@pytest.fixture
def ten_athletes() -> pd.DataFrame:
    """Ten weightlifting entries: five near 50 kg (all F, no medals) and five
    near 95 kg (all M, three medalists)."""
    weights = [50, 52, 48, 95, 98, 93, 51, 97, 49, 96]
    heights = [150, 155, 148, 180, 185, 178, 153, 183, 149, 181]
    ages = [22, 25, 21, 30, 28, 31, 24, 29, 23, 27]
    medals = [np.nan, np.nan, np.nan, "Gold", "Silver", "Bronze", np.nan, np.nan, np.nan, np.nan]
    rows = []
    for i, (w, h, a, m) in enumerate(zip(weights, heights, ages, medals)):
        rows.append({
            "id": i, "name": f"Athlete {i}", "sex": "F" if w < 70 else "M",
            "age": a, "height": h, "weight": w, "year": 2016,
            "sport": "Weightlifting", "event": "Mixed", "medal": m,
        })
    return _frame(rows)


@pytest.fixture
def ten_records(ten_athletes) -> pd.DataFrame:
    records, _ = prepare_athletes(ten_athletes, sport="Weightlifting")
    return records


@pytest.fixture
def light_ids():
    return [0, 1, 2, 6, 8]


@pytest.fixture
def heavy_ids():
    return [3, 4, 5, 7, 9]
