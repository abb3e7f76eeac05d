"""
Olympic Athlete Archetypes - clustering analysis for one sport
"""

import os

import typer

from olympic_archetypes.clustering import scan_k
from olympic_archetypes.config import (
    AnalysisConfig, DATA_PATH, DATA_URL, FIGURES_DIR, K_MEANS_RANGE,
    N_CLUSTERS, RANDOM_STATE, REPORTS_DIR, TARGET_SPORT,
)
from olympic_archetypes.data_loader import download_dataset, load_athletes
from olympic_archetypes.errors import AnalysisError, DataRetrievalError, MissingFieldError
from olympic_archetypes.pipeline import run_analysis
from olympic_archetypes.report import narrate, save_reports
from olympic_archetypes.visualization import (
    plot_archetype_map, plot_archetype_outcomes, plot_elbow_curve, save_figure,
)

app = typer.Typer(add_completion=False)


@app.command()
def main(
    sport: str = typer.Option(TARGET_SPORT, help="Sport to analyse"),
    k: int = typer.Option(N_CLUSTERS, "--k", help="Number of archetypes"),
    seed: int = typer.Option(RANDOM_STATE, help="Random seed for k-means"),
    data_path: str = typer.Option(DATA_PATH, help="Local CSV cache"),
    url: str = typer.Option(DATA_URL, help="Dataset URL"),
    reports_dir: str = typer.Option(REPORTS_DIR, help="Output directory for CSV reports"),
    figures_dir: str = typer.Option(FIGURES_DIR, help="Output directory for charts"),
    scan: bool = typer.Option(False, "--scan-k", help="Also plot inertia/silhouette across k"),
    force_download: bool = typer.Option(False, help="Re-download the dataset"),
):
    print("=" * 60)
    print(f"Olympic Athlete Archetypes - {sport}")
    print("=" * 60)

    os.makedirs(reports_dir, exist_ok=True)
    os.makedirs(figures_dir, exist_ok=True)

    # 1. Load data
    print("\n[1/4] Loading data...")
    try:
        path = download_dataset(url=url, path=data_path, force=force_download)
        raw = load_athletes(path)
        print(f"  Loaded {len(raw):,} athlete-event entries from {path}")
    except (DataRetrievalError, MissingFieldError) as e:
        print(f"  ERROR: {e}")
        raise typer.Exit(code=1)

    # 2. Run analysis
    print(f"\n[2/4] Clustering {sport} athletes (k={k}, seed={seed})...")
    config = AnalysisConfig(sport=sport, n_clusters=k, random_state=seed)
    try:
        result = run_analysis(raw, config)
    except AnalysisError as e:
        print(f"  ERROR: {e}")
        raise typer.Exit(code=1)

    drops = result.drop_report
    print(f"  Kept {drops.n_kept:,} entries; dropped {drops.n_dropped_missing:,} with missing features")
    for col, n in drops.missing_by_column.items():
        print(f"    missing {col}: {n:,}")
    evr = result.projection.explained_variance_ratio
    print(f"  PCA: {', '.join(f'{name} {v:.1%}' for name, v in evr.items())}")
    print(f"  K-means converged in {result.clusters.n_iter} iterations (inertia={result.clusters.inertia:.1f})")

    # 3. Reports
    print("\n[3/4] Writing reports...")
    for out in save_reports(result, reports_dir).values():
        print(f"  Saved: {out}")

    # 4. Charts
    print("\n[4/4] Generating charts...")
    table = result.output_table()
    order = list(result.archetypes.cat.categories)
    charts = [
        (plot_archetype_map(table, order), "archetype_map.png"),
        (plot_archetype_outcomes(result.summary), "archetype_outcomes.png"),
    ]
    if scan:
        charts.append((plot_elbow_curve(scan_k(result.projection.scores, K_MEANS_RANGE, seed)),
                       "elbow_curve.png"))
    for fig, filename in charts:
        print(f"  Saved: {save_figure(fig, os.path.join(figures_dir, filename))}")

    print(f"\n{'=' * 60}")
    print(narrate(result))
    print("=" * 60)
    print(f"Analysis complete! Results in: {reports_dir}/")


if __name__ == "__main__":
    app()
