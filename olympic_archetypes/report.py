"""
Reporting module: CSV outputs and the written interpretation of a run.
"""

from pathlib import Path
from typing import Dict, Union

import pandas as pd

from .pipeline import AnalysisResult
from .utils import ensure_dir_exists


def _describe_sex_mix(row: pd.Series, sex_columns) -> str:
    parts = [
        f"{row[col]:.0%} {col.replace('share_', '')}"
        for col in sex_columns if pd.notna(row[col])
    ]
    return ", ".join(parts) if parts else "no members"


def narrate(result: AnalysisResult) -> str:
    """
    Plain-text interpretation of an analysis run.

    Covers the variance captured by the projection, a profile line per
    archetype (lightest first), the best and worst medal rates, and how many
    rows were dropped.
    """
    config = result.config
    evr = result.projection.explained_variance_ratio
    table = result.summary.table
    sex_columns = result.summary.sex_categories
    drops = result.drop_report

    lines = [
        f"# {config.sport}: {len(result.archetype_map)} athlete archetypes",
        "",
        f"{drops.n_kept:,} entries analysed "
        f"({drops.n_dropped_missing:,} dropped for missing "
        f"{'/'.join(list(config.features) + ['sex'])}).",
        f"The first two principal components explain "
        f"{evr.iloc[:2].sum():.1%} of the variance "
        f"({', '.join(f'{name} {v:.1%}' for name, v in evr.items())}).",
        "",
        "## Archetypes (lightest first)",
        "",
    ]

    for cluster, name in result.archetype_map.items():
        stats = result.cluster_summary.loc[cluster]
        row = table.loc[name]
        rate = "n/a" if pd.isna(row["medal_rate"]) else f"{row['medal_rate']:.1%}"
        lines.append(
            f"- **{name}** (n={int(row['count'])}): "
            f"age {stats['age_mean']:.1f}, weight {stats['weight_mean']:.1f} kg"
            + (f", height {stats['height_mean']:.1f} cm" if "height_mean" in stats else "")
            + f"; medal rate {rate}; {_describe_sex_mix(row, sex_columns)}."
        )

    rated = table["medal_rate"].dropna()
    if len(rated) > 0:
        best = rated.idxmax()
        worst = rated.idxmin()
        lines += [
            "",
            f"{best} win medals most often ({rated[best]:.1%}); "
            f"{worst} least often ({rated[worst]:.1%}).",
        ]

    return "\n".join(lines) + "\n"


def save_reports(result: AnalysisResult,
                 reports_dir: Union[str, Path]) -> Dict[str, Path]:
    """
    Write the run outputs to CSV files and the interpretation to Markdown.

    Returns:
        Dict of output name -> written path
    """
    out = ensure_dir_exists(reports_dir)
    paths = {
        "assignments": out / "archetype_assignments.csv",
        "cluster_summary": out / "cluster_summary.csv",
        "archetype_summary": out / "archetype_summary.csv",
        "drop_report": out / "drop_report.csv",
        "interpretation": out / "interpretation.md",
    }

    table = result.output_table()
    table.to_csv(paths["assignments"])

    cluster_summary = result.cluster_summary.round(3)
    cluster_summary["archetype"] = pd.Series(result.archetype_map)
    cluster_summary.to_csv(paths["cluster_summary"])

    result.summary.table.loc[result.summary.order].round(4).to_csv(paths["archetype_summary"])
    result.drop_report.as_frame().to_csv(paths["drop_report"], index=False)
    paths["interpretation"].write_text(narrate(result), encoding="utf-8")
    return paths
