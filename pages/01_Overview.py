from __future__ import annotations

import streamlit as st

from telematics_dashboard_core import (
    PLOTLY_CONFIG,
    compute_overview,
    plot_average_scores,
    plot_usage_groups,
    records_to_frame,
)
from telematics_dashboard_ui import snapshot_or_stop


st.title("Overview")

snapshot = snapshot_or_stop()
overview = compute_overview(snapshot)
frame = records_to_frame(snapshot.records)

kpi_columns = st.columns(4)
kpi_columns[0].metric("Total Respondents", overview["respondents"])
kpi_columns[1].metric("Heavy User Share", f"{overview['heavy_user_share']:.1f}%", help="> 6 hours per day")
kpi_columns[2].metric(
    "Avg Alienation Score",
    f"{overview['average_scores']['alienation']:.2f}",
    help="Scale 1-5",
)
kpi_columns[3].metric(
    "Significant Correlations",
    overview["significant_pairs"],
    help=f"out of {overview['total_pairs']} pairs",
)

left, right = st.columns(2)

with left:
    st.markdown("### Digital Intensity Profile")
    st.plotly_chart(plot_usage_groups(frame), config=PLOTLY_CONFIG, width="stretch")

with right:
    st.markdown("### Average Score per Variable")
    st.plotly_chart(plot_average_scores(frame), config=PLOTLY_CONFIG, width="stretch")

st.markdown("### Summary Statistics")
st.dataframe(frame[["intensity", "dependency", "competence", "alienation"]].describe().T, width="stretch")
