"""UI helper module: cached data loading, the reload control and the usage-group filter shared by every page."""

# Enable future-style annotations to keep type hints concise.
from __future__ import annotations

import logging

import pandas as pd
# Import Streamlit to render sidebar controls.
import streamlit as st

from telematics_dashboard_core import (
    DATA_SOURCE,
    RANK_METHOD,
    SCHEMA_NAME,
    DatasetSnapshot,
    NoDataError,
    get_schema,
    load_snapshot,
)


logger = logging.getLogger(__name__)

# Session state key that preserves the multi-select choice across reruns.
FILTER_STATE_KEY = "usage_group_filter"


@st.cache_data(show_spinner=False)
def cached_snapshot(source: str, schema_name: str, method: str) -> DatasetSnapshot:
    """Load the snapshot once per argument combination; arguments are plain strings so Streamlit can hash them."""
    return load_snapshot(source, get_schema(schema_name), method)


def snapshot_or_stop() -> DatasetSnapshot:
    """
    Return the current snapshot, or render the error state and stop the page.

    Example return:
        DatasetSnapshot(records=(...120 records...), correlation_table=(...6 entries...), source="data/data_survey.csv")
    """

    # A reload discards the cached snapshot so the next call rebuilds it from scratch.
    if st.sidebar.button("Reload data"):
        logger.info("Reload requested; clearing cached snapshot")
        cached_snapshot.clear()

    try:
        with st.spinner("Loading data..."):
            snapshot = cached_snapshot(DATA_SOURCE, SCHEMA_NAME, RANK_METHOD)
    except NoDataError as exc:
        st.error(f"Error loading data: {exc}")
        st.caption(f"Make sure the survey file exists at `{DATA_SOURCE}` or set TELEMATICS_DATA_SOURCE.")
        st.stop()

    st.sidebar.caption(f"N = {len(snapshot.records)} respondents · {snapshot.source}")
    return snapshot


def usage_group_filter(frame: pd.DataFrame) -> tuple[pd.DataFrame, list[str]]:
    """
    Filter the respondent table according to the sidebar usage-group selection.

    Example argument:
        frame["usage_label"] -> ["Heavy (>6 h/day)", "Moderate/Light (<6 h/day)", ...]
    Example return:
        (filtered_frame, selection) where selection = ["Heavy (>6 h/day)"]
    """

    # Collect the usage labels present in the data, skipping missing values.
    available_groups = sorted(frame["usage_label"].dropna().unique().tolist())
    # Add a sidebar heading so users recognize the control cluster.
    st.sidebar.header("Usage Group Filter")
    if not available_groups:
        st.sidebar.info("No usage group data available; showing all respondents.")
        return frame, available_groups

    # Use the prior session-state selection if it still matches the data; otherwise default to all groups.
    default_selection = [
        group for group in st.session_state.get(FILTER_STATE_KEY, available_groups) if group in available_groups
    ]

    selection = st.sidebar.multiselect(
        "Select usage groups",
        options=available_groups,
        default=default_selection or available_groups,
        key=FILTER_STATE_KEY,
    )

    # If all options are cleared, inform the user and revert to showing every respondent.
    if not selection:
        st.sidebar.info("No usage groups selected; showing all respondents.")
        selection = available_groups

    return frame[frame["usage_label"].isin(selection)], selection
