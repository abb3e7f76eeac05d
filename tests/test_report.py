"""Tests for the written interpretation and CSV reports."""

import pandas as pd
import pytest

from olympic_archetypes.config import ARCHETYPE_NAMES
from olympic_archetypes.pipeline import run_analysis
from olympic_archetypes.report import narrate, save_reports


@pytest.fixture
def result(raw_results):
    return run_analysis(raw_results)


def test_narrate_mentions_every_archetype(result):
    text = narrate(result)

    assert text.startswith("# Weightlifting: 5 athlete archetypes")
    for name in ARCHETYPE_NAMES:
        assert f"**{name}**" in text
    assert "2 dropped for missing age/height/weight/sex" in text
    assert "Super heavy elites win medals most often (50.0%)" in text


def test_narrate_lists_lightest_first(result):
    text = narrate(result)
    positions = [text.index(f"**{name}**") for name in ARCHETYPE_NAMES]
    assert positions == sorted(positions)


def test_save_reports(result, tmp_path):
    paths = save_reports(result, tmp_path / "reports")

    for path in paths.values():
        assert path.exists()

    assignments = pd.read_csv(paths["assignments"], index_col="entry_id")
    assert len(assignments) == 60
    assert set(assignments["archetype"]) == set(ARCHETYPE_NAMES)

    clusters = pd.read_csv(paths["cluster_summary"], index_col="cluster")
    assert clusters["count"].sum() == 60
    assert set(clusters["archetype"]) == set(ARCHETYPE_NAMES)

    summary = pd.read_csv(paths["archetype_summary"], index_col="archetype")
    assert summary.index.tolist() == result.summary.order

    drops = pd.read_csv(paths["drop_report"]).set_index("item")["rows"]
    assert drops["dropped_missing"] == 2

    assert paths["interpretation"].read_text(encoding="utf-8") == narrate(result)
