"""
Streamlit Dashboard - Olympic Athlete Archetypes
Run with: streamlit run app.py
"""

import streamlit as st
import pandas as pd
import plotly.express as px
from plotly.subplots import make_subplots
import plotly.graph_objects as go

from olympic_archetypes.config import (
    AnalysisConfig, DATA_PATH, N_CLUSTERS, RANDOM_STATE, TARGET_SPORT,
)
from olympic_archetypes.data_loader import download_dataset, list_sports, load_athletes
from olympic_archetypes.errors import AnalysisError
from olympic_archetypes.pipeline import run_analysis
from olympic_archetypes.report import narrate

st.set_page_config(page_title="Olympic Archetypes", layout="wide")


@st.cache_data
def load_data_cached(path: str) -> pd.DataFrame:
    return load_athletes(download_dataset(path=path))


def show_setup_instructions(error: Exception):
    st.error(f"Dataset not available: {error}")
    st.markdown("""
    ### Setup Instructions
    1. **Download the data:** `python setup_olympics_data.py`
    2. **Refresh this page**
    """)


def plot_map(table: pd.DataFrame, order: list) -> go.Figure:
    years = sorted(table["year"].unique())
    fig = px.scatter(
        table.assign(archetype=table["archetype"].astype(str)),
        x="PC1", y="PC2", color="archetype",
        facet_col="year", facet_col_wrap=4,
        category_orders={"archetype": order, "year": years},
        hover_data=["name", "sex", "age", "height", "weight", "medal"],
        color_discrete_sequence=px.colors.qualitative.Set2,
        opacity=0.6,
    )
    fig.for_each_annotation(lambda a: a.update(text=a.text.split("=")[-1]))
    fig.update_layout(height=260 * ((len(years) + 3) // 4) + 120,
                      legend=dict(orientation="h", yanchor="bottom", y=-0.15))
    return fig


def plot_outcomes(summary) -> go.Figure:
    table = summary.table.loc[summary.order]
    fig = make_subplots(rows=1, cols=2, shared_yaxes=True,
                        subplot_titles=("Medal Rate", "Sex Composition"))
    fig.add_trace(go.Bar(x=table["medal_rate"], y=table.index, orientation="h",
                         name="Medal rate", marker_color="#66c2a5",
                         text=table["medal_rate"].map(lambda v: f"{v:.1%}" if pd.notna(v) else "n/a")),
                  row=1, col=1)
    colors = px.colors.qualitative.Set2[1:]
    for color, col in zip(colors, summary.sex_categories):
        fig.add_trace(go.Bar(x=table[col], y=table.index, orientation="h",
                             name=col.replace("share_", ""), marker_color=color),
                      row=1, col=2)
    fig.update_layout(barmode="stack", height=120 + 60 * len(table))
    fig.update_xaxes(tickformat=".0%")
    return fig


def main():
    st.title("🏅 Olympic Athlete Archetypes")

    try:
        raw = load_data_cached(DATA_PATH)
    except AnalysisError as e:
        show_setup_instructions(e)
        return

    # Sidebar controls
    st.sidebar.header("Scope")
    sports = list_sports(raw)
    sport = st.sidebar.selectbox(
        "Sport", sports,
        index=sports.index(TARGET_SPORT) if TARGET_SPORT in sports else 0,
    )
    st.sidebar.header("Clustering")
    k = st.sidebar.slider("Number of Archetypes", min_value=2, max_value=8, value=N_CLUSTERS)
    seed = st.sidebar.number_input("Random seed", value=RANDOM_STATE, step=1)

    try:
        result = run_analysis(raw, AnalysisConfig(sport=sport, n_clusters=k, random_state=int(seed)))
    except AnalysisError as e:
        st.warning(f"Cannot analyse {sport}: {e}")
        return

    drops = result.drop_report
    st.sidebar.markdown("---")
    st.sidebar.caption(f"**{drops.n_kept:,}** entries • **{drops.n_dropped_missing:,}** dropped for missing values")

    table = result.output_table()
    order = list(result.archetypes.cat.categories)
    evr = result.projection.explained_variance_ratio

    tab1, tab2, tab3 = st.tabs(["📊 Archetypes", "📝 Interpretation", "💾 Export"])

    with tab1:
        st.subheader(f"{sport}: {k} Archetypes")
        st.caption(f"PC1 {evr.iloc[0]:.1%} • PC2 {evr.iloc[1]:.1%} of variance")
        st.plotly_chart(plot_map(table, order), use_container_width=True)
        st.plotly_chart(plot_outcomes(result.summary), use_container_width=True)

        profile = result.cluster_summary.copy()
        profile.index = [result.archetype_map[c] for c in profile.index]
        st.dataframe(profile.round(2), use_container_width=True)

    with tab2:
        st.markdown(narrate(result))

    with tab3:
        st.markdown(f"**{len(table)} rows ready for export**")
        st.dataframe(table.head(20), use_container_width=True)
        col1, col2 = st.columns(2)
        with col1:
            st.download_button("📥 Assignments (CSV)", table.to_csv(),
                               "archetype_assignments.csv", "text/csv")
        with col2:
            st.download_button("📥 Archetype Summary (CSV)",
                               result.summary.table.loc[result.summary.order].to_csv(),
                               "archetype_summary.csv", "text/csv")


if __name__ == "__main__":
    main()
