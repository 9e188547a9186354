"""
Line-by-line commenting convention: each block explains its purpose and, when helpful, includes example data
structures so that the matrix page flow can be understood by reading downward.
"""

# Import __future__ annotations so forward references can be used in type hints.
from __future__ import annotations

# Import pandas to render the ranking table.
import pandas as pd
# Import Streamlit to render the page.
import streamlit as st

# Import constants and helpers required by the matrix page from the core module.
from telematics_dashboard_core import (
    # PLOTLY_CONFIG: shared Plotly configuration like {"displaylogo": False, "responsive": True}.
    PLOTLY_CONFIG,
    # SIGNIFICANCE_THRESHOLD: |rho| cut-off for a meaningful relationship, 0.25.
    SIGNIFICANCE_THRESHOLD,
    # compute_overview: KPI payload including the list of insignificant pairs.
    compute_overview,
    # plot_correlation_heatmap: 4x4 heatmap of Spearman coefficients.
    plot_correlation_heatmap,
)
# Import snapshot_or_stop to obtain the loaded data or stop with an error.
from telematics_dashboard_ui import snapshot_or_stop


# Render the page title "Matrix".
st.title("Matrix")

# Load the snapshot; it holds the records and the six correlation entries sorted by |rho|.
snapshot = snapshot_or_stop()
# Derive the KPI payload, e.g., {"significant_pairs": 4, "insignificant_entries": [...]}.
overview = compute_overview(snapshot)

st.subheader("Full Correlation Matrix")
st.markdown(
    f"All pairs of research variables. Correlations with |ρ| < {SIGNIFICANCE_THRESHOLD} are not significant."
)

# Place the heatmap and the ranking side by side.
left, right = st.columns(2)

with left:
    st.markdown("### Spearman Correlation Matrix")
    st.plotly_chart(
        plot_correlation_heatmap(snapshot.correlation_table),
        config=PLOTLY_CONFIG,
        width="stretch",
    )

with right:
    st.markdown("### Correlation Ranking (All Pairs)")
    # One row per pair in the engine's order, e.g., {"Pair": "Psychological Dependency ↔ Social Alienation", "ρ": 0.512}.
    ranking = pd.DataFrame(
        [
            {
                "Pair": f"{entry.label_a} ↔ {entry.label_b}",
                "ρ": entry.rho,
                "Status": "✓ Significant" if entry.significant else f"✗ Not significant (|ρ| < {SIGNIFICANCE_THRESHOLD})",
            }
            for entry in snapshot.correlation_table
        ]
    )
    st.dataframe(ranking, width="stretch", hide_index=True)

# Call out the weak relationships only when there are any.
insignificant = overview["insignificant_entries"]
if insignificant:
    st.warning("Insignificant correlations found")
    for column, entry in zip(st.columns(len(insignificant)), insignificant):
        with column:
            st.metric(f"{entry.label_a} ↔ {entry.label_b}", f"ρ = {entry.rho:.3f}")
            st.caption("This relationship is too weak to be considered meaningful.")
