"""
Visualization module for archetype analysis.

Functions to plot the projected athletes by archetype, archetype outcomes,
and the k selection curves.
"""

from pathlib import Path
from typing import List, Optional, Union

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .aggregation import ArchetypeSummary


def save_figure(fig: plt.Figure, output_path: Union[str, Path], dpi: int = 150) -> Path:
    """Save a figure as PNG, creating parent directories, and close it."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_archetype_map(table: pd.DataFrame,
                       order: Optional[List[str]] = None,
                       col_wrap: int = 4,
                       title: str = "Athletes by Archetype (PCA)") -> plt.Figure:
    """
    Scatter of PC1/PC2 coloured by archetype, one panel per Olympic year.

    Args:
        table: Output table with PC1, PC2, archetype and year columns
        order: Archetype order for the legend and palette
        col_wrap: Panels per row
        title: Figure title

    Returns:
        Matplotlib Figure object
    """
    if order is None:
        order = list(table["archetype"].cat.categories)
    plot_df = table.assign(archetype=table["archetype"].astype(str))
    grid = sns.relplot(
        data=plot_df, x="PC1", y="PC2",
        hue="archetype", hue_order=order,
        col="year", col_wrap=min(col_wrap, plot_df["year"].nunique()),
        palette="viridis", alpha=0.6, s=20, height=2.8,
    )
    grid.set_titles("{col_name}")
    grid.figure.suptitle(title, y=1.02)
    return grid.figure


def plot_archetype_outcomes(summary: ArchetypeSummary,
                            title: str = "Archetype Outcomes") -> plt.Figure:
    """
    Side-by-side bars: medal rate (ascending) and sex composition, same order.

    Args:
        summary: Output of summarize_archetypes

    Returns:
        Matplotlib Figure object
    """
    table = summary.table.loc[summary.order]
    shares = table[summary.sex_categories].fillna(0.0)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(11, 0.6 * len(table) + 2), sharey=True)

    ax1.barh(table.index, table["medal_rate"].fillna(0.0), color=sns.color_palette("viridis", len(table)))
    ax1.set_xlabel("Medal rate")
    ax1.set_xlim(0, max(0.05, table["medal_rate"].max(skipna=True) * 1.15))
    ax1.set_title("Medal Rate")

    left = pd.Series(0.0, index=table.index)
    colors = sns.color_palette("Set2", len(shares.columns))
    for color, col in zip(colors, shares.columns):
        ax2.barh(table.index, shares[col], left=left, color=color, label=col.replace("share_", ""))
        left = left + shares[col]
    ax2.set_xlim(0, 1)
    ax2.set_xlabel("Share")
    ax2.set_title("Sex Composition")
    ax2.legend(title="Sex", loc="lower right")

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_elbow_curve(scan: pd.DataFrame) -> plt.Figure:
    """Plot inertia and silhouette per k (output of clustering.scan_k)."""
    ks = scan.index.tolist()
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(10, 4))
    ax1.plot(ks, scan["inertia"], "bo-")
    ax1.set_xlabel("k"); ax1.set_ylabel("Inertia"); ax1.set_title("Elbow Curve")
    ax2.plot(ks, scan["silhouette"], "go-")
    ax2.set_xlabel("k"); ax2.set_ylabel("Silhouette"); ax2.set_title("Silhouette Scores")
    fig.tight_layout()
    return fig
