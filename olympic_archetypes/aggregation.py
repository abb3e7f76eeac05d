"""
Aggregation module for archetype outcomes.

Computes medal rate and sex composition per archetype for reporting.
"""

from dataclasses import dataclass
from typing import List

import pandas as pd

from .utils import join_on_entry_id


@dataclass(frozen=True)
class ArchetypeSummary:
    """Per-archetype statistics and the medal-rate ordering used for rendering."""

    table: pd.DataFrame
    order: List[str]

    @property
    def sex_categories(self) -> List[str]:
        return [c for c in self.table.columns if c.startswith("share_")]


def _categories(archetypes: pd.Series) -> list:
    if isinstance(archetypes.dtype, pd.CategoricalDtype):
        return list(archetypes.cat.categories)
    return sorted(archetypes.unique().tolist())


def _join_archetypes(columns: pd.DataFrame, archetypes: pd.Series) -> pd.DataFrame:
    # Plain object keys; empty archetypes are restored by reindexing on the categories
    joined = join_on_entry_id(columns, archetypes.rename("archetype"))
    joined["archetype"] = joined["archetype"].astype(object)
    return joined


def medal_rates(records: pd.DataFrame, archetypes: pd.Series) -> pd.DataFrame:
    """
    Fraction of medalists per archetype.

    Args:
        records: Athlete records with a boolean `medalist` column
        archetypes: Archetype name per entry_id

    Returns:
        DataFrame indexed by archetype with count, medalists and medal_rate.
        An archetype with no members has a null medal_rate.
    """
    joined = _join_archetypes(records[["medalist"]], archetypes)
    categories = _categories(archetypes)

    counts = joined.groupby("archetype").size().reindex(categories, fill_value=0)
    medalists = (
        joined.groupby("archetype")["medalist"].sum()
        .reindex(categories, fill_value=0)
        .astype(int)
    )
    table = pd.DataFrame({"count": counts.astype(int), "medalists": medalists})
    table["medal_rate"] = (table["medalists"] / table["count"]).where(table["count"] > 0)
    table.index.name = "archetype"
    return table


def sex_composition(records: pd.DataFrame, archetypes: pd.Series) -> pd.DataFrame:
    """
    Share of each sex category per archetype.

    Every sex category seen anywhere in the batch gets a column, so a
    category absent from an archetype reports 0.0 rather than a gap.

    Returns:
        DataFrame indexed by archetype with one fraction column per sex;
        rows sum to 1 (null for an archetype with no members)
    """
    joined = _join_archetypes(records[["sex"]], archetypes)
    categories = _categories(archetypes)
    sexes = sorted(joined["sex"].unique().tolist())

    counts = (
        joined.groupby(["archetype", "sex"]).size()
        .unstack("sex", fill_value=0)
        .reindex(index=categories, columns=sexes, fill_value=0)
    )
    totals = counts.sum(axis=1)
    shares = counts.div(totals.where(totals > 0), axis=0)
    shares.index.name = "archetype"
    shares.columns = [f"share_{sex}" for sex in sexes]
    return shares


def summarize_archetypes(records: pd.DataFrame, archetypes: pd.Series) -> ArchetypeSummary:
    """
    Build the per-archetype summary consumed by the charts and reports.

    The order lists archetypes by ascending medal rate; archetypes with a
    null rate come last.
    """
    table = medal_rates(records, archetypes).join(sex_composition(records, archetypes))
    order = (
        table["medal_rate"]
        .sort_values(ascending=True, na_position="last", kind="mergesort")
        .index.tolist()
    )
    return ArchetypeSummary(table=table, order=order)
