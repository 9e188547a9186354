from __future__ import annotations

import streamlit as st

from telematics_dashboard_core import (
    PLOTLY_CONFIG,
    correlation_lookup,
    plot_score_scatter,
    records_to_frame,
)
from telematics_dashboard_ui import snapshot_or_stop, usage_group_filter


st.title("Correlation")

snapshot = snapshot_or_stop()
frame = records_to_frame(snapshot.records)
filtered, _ = usage_group_filter(frame)

st.subheader("Correlation Analysis")
st.markdown("Relationships between the main research variables, based on the survey data.")

PANELS = [
    (
        "dependency",
        "alienation",
        "1. Dependency vs Alienation",
        "**Insight:** the higher the dependency (FOMO), the higher the social alienation.",
    ),
    (
        "intensity",
        "competence",
        "2. Intensity vs Face-to-Face Competence",
        "**Paradox:** heavy users still report good face-to-face competence.",
    ),
]

for column, (x, y, title, insight) in zip(st.columns(2), PANELS):
    rho, significant = correlation_lookup(snapshot.correlation_table, x, y)
    with column:
        st.markdown(f"### {title}")
        st.caption(f"ρ = {rho:.2f} ({'significant' if significant else 'not significant'}, all respondents)")
        if filtered.empty:
            st.info("No respondents match the current selection.")
        else:
            st.plotly_chart(plot_score_scatter(filtered, x, y), config=PLOTLY_CONFIG, width="stretch")
        st.markdown(insight)
