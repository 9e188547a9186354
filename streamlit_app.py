import logging
import os

import streamlit as st

from telematics_dashboard_core import RANK_METHOD, SIGNIFICANCE_THRESHOLD, compute_overview, records_to_frame
from telematics_dashboard_ui import snapshot_or_stop

st.set_page_config(
    page_title="Telematics Impact Analytics",
    page_icon="📊",
    layout="wide",
)

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=os.getenv("TELEMATICS_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
    )


def main() -> None:
    st.title("Telematics Impact Analytics")
    snapshot = snapshot_or_stop()
    overview = compute_overview(snapshot)

    st.caption(
        f"Research dashboard · N={overview['respondents']} · loaded {snapshot.loaded_at:%Y-%m-%d %H:%M} UTC"
    )
    st.markdown(
        f"""
        This dashboard scores each survey respondent on four constructs (digital intensity, psychological dependency,
        face-to-face competence and social alienation) and relates them with Spearman's rank correlation. Pairs with
        |ρ| ≥ {SIGNIFICANCE_THRESHOLD} are treated as significant (ranking mode: `{RANK_METHOD}`).

        Use the pages in the sidebar:

        * **Overview**: headline KPIs and score distributions.
        * **Correlation**: the two key relationships as scatter plots.
        * **Matrix**: the full correlation matrix and pair ranking.
        * **Behavior**: individual profiles and research conclusions.
        """
    )

    st.markdown("### Respondent Preview")
    st.dataframe(records_to_frame(snapshot.records).head(20), width="stretch")


if __name__ == "__main__":
    main()
