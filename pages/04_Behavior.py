from __future__ import annotations

import streamlit as st

from telematics_dashboard_core import (
    PLOTLY_CONFIG,
    plot_individual_profiles,
    records_to_frame,
)
from telematics_dashboard_ui import snapshot_or_stop, usage_group_filter


st.title("Behavior")

snapshot = snapshot_or_stop()
frame = records_to_frame(snapshot.records)
filtered, _ = usage_group_filter(frame)

st.subheader("Digital Behavior Analysis")
st.markdown("Individual profiles compared across the main research variables.")

left, right = st.columns([3, 2])

with left:
    st.markdown("### Individual Profiles (Sample)")
    st.caption("Scores of the first 15 respondents in the current selection.")
    if filtered.empty:
        st.info("No respondents match the current selection.")
    else:
        st.plotly_chart(plot_individual_profiles(filtered), config=PLOTLY_CONFIG, width="stretch")
    st.caption("*Respondents with high dependency tend to show high alienation.")

with right:
    st.markdown("### Research Conclusions")
    st.markdown(
        """
        * **Dependency → Alienation:** the stronger the FOMO and digital anxiety, the stronger the sense of isolation.
        * **Digital paradox:** heavy usage does not lower face-to-face competence.
        * **Implication:** the issue is psychological dependency, not usage duration.
        * **Recommendation:** interventions should target the emotional side (FOMO, anxiety) rather than screen time.
        """
    )

    st.markdown("### Variables")
    groups = snapshot.schema.groups
    st.markdown(
        f"""
        * **Dependency** ({len(groups['dependency'])} items): notifications, anxiety, escapism, FOMO, habit.
        * **Social Alienation** ({len(groups['alienation'])} items): avoiding F2F talk, shallow interaction,
          online over offline, awkwardness, empathy.
        * **Face-to-Face Competence** ({len(groups['competence'])} items): presenting, eye contact, body language,
          preferring direct discussion.
        * **Digital Intensity** ({len(groups['intensity'])} items): duration, social media, messaging, access, academics.
        """
    )
