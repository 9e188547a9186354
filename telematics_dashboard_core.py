"""
Core module annotations: the constants, data types and functions below turn the survey CSV into scored respondent
records, rank-correlate the four research variables, and build the Plotly figures used by the dashboard pages.
"""

# Allow future-style annotations such as list[str] even on older Python versions.
from __future__ import annotations

# Loggers follow the module name so the entry script controls verbosity.
import logging
# Environment variables override the configuration defaults below.
import os
# Numeric cell values are pulled out of raw CSV text with regular expressions.
import re
# Immutable record types for respondents, correlation entries, and snapshots.
from dataclasses import asdict, dataclass, field
# Read-only views keep schema mappings immutable after construction.
from types import MappingProxyType
# Snapshots remember when they were loaded.
from datetime import datetime, timezone
# Enumerate unordered variable pairs in a fixed order.
from itertools import combinations
# Represent filesystem locations in a cross-platform way.
from pathlib import Path
# Provide type hints for iterable, mapping and sequence parameters.
from typing import Iterable, Mapping, Optional, Sequence

# Numerical routines used for the rank arithmetic.
import numpy as np
# Pandas supplies ranking helpers and the tabular structures the charts consume.
import pandas as pd
# Plotly Express builds quick exploratory charts.
import plotly.express as px
# Plotly Graph Objects is the common return type of every chart builder.
import plotly.graph_objects as go
# Remote CSV sources are fetched over HTTP.
import requests


logger = logging.getLogger(__name__)

# Location of the survey CSV: a local path such as data/data_survey.csv or an http(s) URL.
DATA_SOURCE: str = os.getenv("TELEMATICS_DATA_SOURCE", "data/data_survey.csv").strip()

# Seconds to wait for a remote CSV before giving up; the fetch is never retried.
FETCH_TIMEOUT_SECONDS: float = float(os.getenv("TELEMATICS_FETCH_TIMEOUT", "10"))

# Name of the column layout to apply, "default" or "variant" (the latter adds the boldness item).
SCHEMA_NAME: str = os.getenv("TELEMATICS_SCHEMA", "default").strip().lower()

# Ranking mode for Spearman: "first" keeps the legacy ordering of ties, "average" uses tie-averaged ranks.
RANK_METHOD: str = os.getenv("TELEMATICS_RANK_METHOD", "first").strip().lower()

# A correlation counts as significant when |rho| reaches this magnitude (boundary included).
SIGNIFICANCE_THRESHOLD: float = 0.25

# The four research variables in their fixed enumeration order.
CORE_VARIABLES: tuple[str, ...] = ("intensity", "dependency", "competence", "alienation")

# Display labels for each research variable, e.g., "dependency" -> "Psychological Dependency".
VARIABLE_LABELS: dict[str, str] = {
    "intensity": "Digital Intensity",
    "dependency": "Psychological Dependency",
    "competence": "Face-to-Face Competence",
    "alienation": "Social Alienation",
}

# Bar and marker colors per variable, shared by every chart for a consistent palette.
VARIABLE_COLORS: dict[str, str] = {
    "intensity": "#ef4444",
    "dependency": "#f59e0b",
    "competence": "#3b82f6",
    "alienation": "#10b981",
}

# Usage group identifiers assigned by the daily-duration item.
HEAVY_USER = "HeavyUser"
MODERATE_OR_LIGHT = "ModerateOrLight"

# Display labels for the usage groups.
USAGE_GROUP_LABELS: dict[str, str] = {
    HEAVY_USER: "Heavy (>6 h/day)",
    MODERATE_OR_LIGHT: "Moderate/Light (<6 h/day)",
}

# Usage group colors for the donut and scatter charts.
USAGE_GROUP_COLORS: dict[str, str] = {
    HEAVY_USER: "#ef4444",
    MODERATE_OR_LIGHT: "#3b82f6",
}

# Supported ranking modes for spearman().
RANK_METHODS: tuple[str, ...] = ("first", "average")

# Shared Plotly configuration turns off the logo and enables responsive resizing.
PLOTLY_CONFIG: dict[str, object] = {
    "displaylogo": False,
    "responsive": True,
}

# Split on commas followed by an even number of double quotes up to the end of the line.
_CSV_SPLIT = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')
# Leading integer of a cell, tolerant of surrounding whitespace and trailing characters.
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class NoDataError(Exception):
    """Raised when a load attempt yields no usable data; the message is meant for display."""


class FetchFailedError(NoDataError):
    """The CSV resource could not be retrieved."""


class EmptyOrMalformedError(NoDataError):
    """The CSV resource was retrieved but produced zero valid respondent records."""


@dataclass(frozen=True)
class ScoreSchema:
    """
    Declarative mapping from research variables to the zero-based CSV columns they are built from.

    Example:
        groups={"intensity": (2, 4, 5, 18, 19), ...}, raw_columns={"boldness": 11}
    """

    groups: Mapping[str, tuple[int, ...]]
    raw_columns: Mapping[str, int] = field(default_factory=dict)
    usage_column: int = 2
    heavy_threshold: int = 4
    value_range: Optional[tuple[int, int]] = (1, 5)
    decimals: int = 2

    def __post_init__(self) -> None:
        # Freeze private copies so neither the caller nor later code can edit the column layout in place.
        object.__setattr__(self, "groups", MappingProxyType({name: tuple(group) for name, group in self.groups.items()}))
        object.__setattr__(self, "raw_columns", MappingProxyType(dict(self.raw_columns)))
        missing = [name for name in CORE_VARIABLES if name not in self.groups]
        unknown = [name for name in self.groups if name not in CORE_VARIABLES]
        if missing or unknown:
            raise ValueError(f"Schema groups must cover exactly {CORE_VARIABLES}; missing={missing}, unknown={unknown}")
        unsupported = [name for name in self.raw_columns if name != "boldness"]
        if unsupported:
            raise ValueError(f"Unsupported raw columns: {unsupported}")
        empty = [name for name, group in self.groups.items() if not group]
        if empty:
            raise ValueError(f"Schema groups need at least one column: {empty}")
        indices = [index for group in self.groups.values() for index in group]
        indices += list(self.raw_columns.values()) + [self.usage_column]
        if any(index < 0 for index in indices):
            raise ValueError("Column indices must be zero or positive.")
        if self.value_range is not None and self.value_range[0] > self.value_range[1]:
            raise ValueError(f"Invalid value range: {self.value_range}")

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from plain dicts (Streamlit caches snapshots by pickling).
        return (
            ScoreSchema,
            (
                dict(self.groups),
                dict(self.raw_columns),
                self.usage_column,
                self.heavy_threshold,
                self.value_range,
                self.decimals,
            ),
        )


# Legacy survey layout: 23 columns where column 2 (daily duration) also drives the usage group.
DEFAULT_SCHEMA = ScoreSchema(
    groups={
        "intensity": (2, 4, 5, 18, 19),
        "dependency": (3, 6, 20, 21, 22),
        "competence": (7, 8, 9, 10),
        "alienation": (13, 14, 15, 16, 17),
    },
)

# Variant instrument: the same groups plus the single boldness item in column 11.
VARIANT_SCHEMA = ScoreSchema(groups=dict(DEFAULT_SCHEMA.groups), raw_columns={"boldness": 11})

# Schemas selectable through TELEMATICS_SCHEMA.
SCHEMAS: dict[str, ScoreSchema] = {
    "default": DEFAULT_SCHEMA,
    "variant": VARIANT_SCHEMA,
}


@dataclass(frozen=True)
class RespondentRecord:
    id: int
    intensity: float
    dependency: float
    competence: float
    alienation: float
    usage_group: str
    boldness: Optional[int] = None


@dataclass(frozen=True)
class CorrelationEntry:
    variable_a: str
    variable_b: str
    label_a: str
    label_b: str
    rho: float
    significant: bool


@dataclass(frozen=True)
class DatasetSnapshot:
    """
    Everything the pages read for one data load: the parsed records and their correlation table.

    A reload builds a new snapshot; an existing one is never modified.
    """

    records: tuple[RespondentRecord, ...]
    correlation_table: tuple[CorrelationEntry, ...]
    source: str
    schema: ScoreSchema = DEFAULT_SCHEMA
    method: str = "first"
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def get_schema(name: str) -> ScoreSchema:
    try:
        return SCHEMAS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown schema {name!r}; expected one of {sorted(SCHEMAS)}") from None


def _check_method(method: str) -> None:
    if method not in RANK_METHODS:
        raise ValueError(f"Unknown rank method {method!r}; expected one of {RANK_METHODS}")


def split_csv_line(line: str) -> list[str]:
    """
    Split one CSV line on commas that sit outside double-quoted spans.

    Example:
        '1,"Jakarta, ID",4' -> ['1', '"Jakarta, ID"', '4']
    """

    # Quotes are kept on the fields; numeric columns never carry them.
    return _CSV_SPLIT.split(line)


def parse_cell(values: Sequence[str], index: int, value_range: Optional[tuple[int, int]] = (1, 5)) -> int:
    """
    Read the integer survey answer at ``index``, defaulting to 0.

    Example:
        parse_cell(["x", " 4 "], 1) -> 4; parse_cell(["x"], 5) -> 0; parse_cell(["9"], 0) -> 0
    """

    # Missing fields (short rows) default to 0.
    if index >= len(values):
        return 0
    # Accept the leading integer of the cell, e.g. "4\r" or "4 (often)".
    match = _LEADING_INT.match(values[index])
    if match is None:
        return 0
    value = int(match.group(1))
    # Answers outside the instrument's scale count as invalid, not as extreme scores.
    if value_range is not None and not value_range[0] <= value <= value_range[1]:
        return 0
    return value


def _composite(values: Sequence[str], columns: Iterable[int], schema: ScoreSchema) -> float:
    columns = list(columns)
    # A line without any cell has no defined mean.
    if not values:
        return float("nan")
    total = sum(parse_cell(values, index, schema.value_range) for index in columns)
    return round(total / len(columns), schema.decimals)


def _score_row(line: str, row_id: int, schema: ScoreSchema) -> RespondentRecord:
    # Blank lines produce no cells so every composite comes out as NaN.
    values = split_csv_line(line) if line.strip() else []
    scores = {name: _composite(values, columns, schema) for name, columns in schema.groups.items()}
    # The daily-duration item is both part of intensity and the usage-group classifier.
    duration = parse_cell(values, schema.usage_column, schema.value_range)
    usage_group = HEAVY_USER if duration >= schema.heavy_threshold else MODERATE_OR_LIGHT
    boldness = None
    if "boldness" in schema.raw_columns:
        boldness = parse_cell(values, schema.raw_columns["boldness"], schema.value_range)
    return RespondentRecord(id=row_id, usage_group=usage_group, boldness=boldness, **scores)


def parse(csv_text: str, schema: ScoreSchema = DEFAULT_SCHEMA) -> tuple[RespondentRecord, ...]:
    """
    Convert raw survey CSV text into scored respondent records.

    Example argument:
        "Timestamp,Name,Q1,...\\n2024-01-01,A,5,3,4,..."
    Example return item:
        RespondentRecord(id=1, intensity=4.2, dependency=3.6, competence=3.75, alienation=2.4, usage_group="HeavyUser")
    """

    # Drop surrounding whitespace so a trailing newline does not create an empty respondent.
    # Only "\n" ends a respondent; a trailing "\r" is ignored by parse_cell, and other line
    # separators (U+0085, U+2028, ...) may legitimately appear inside free-text fields.
    lines = csv_text.strip().split("\n")
    # The first line is a header; its wording is irrelevant because columns are addressed by index.
    data_lines = lines[1:]
    # Ids follow the line position before filtering, so dropped rows leave gaps.
    scored = [_score_row(line, position, schema) for position, line in enumerate(data_lines, start=1)]
    # Rows without a computable intensity (blank lines) are dropped; zero-defaulted rows stay.
    records = tuple(record for record in scored if not np.isnan(record.intensity))
    dropped = len(scored) - len(records)
    if dropped:
        logger.debug("Dropped %d blank row(s) out of %d", dropped, len(scored))
    return records


def rank(values: Sequence[float], method: str = "first") -> np.ndarray:
    """
    Rank values starting at 1 for the smallest.

    With ``method="first"`` equal values get consecutive ranks in input order (stable sort); with
    ``method="average"`` they share their mean rank.

    Example:
        rank([3, 1, 3]) -> [2., 1., 3.]; rank([3, 1, 3], "average") -> [2.5, 1., 2.5]
    """

    _check_method(method)
    return pd.Series(values, dtype="float64").rank(method=method).to_numpy()


def spearman(x: Sequence[float], y: Sequence[float], method: str = "first") -> float:
    """
    Spearman's rank correlation of two aligned sequences.

    Mismatched lengths and fewer than two observations return 0.0. The legacy ``"first"`` mode uses the
    non-tie-corrected formula rho = 1 - 6 * sum(d^2) / (n * (n^2 - 1)); ``"average"`` computes the Pearson
    correlation of tie-averaged ranks and returns 0.0 when either side is constant.

    Example:
        spearman([1, 2, 3], [1, 2, 3]) -> 1.0; spearman([1, 2, 3], [3, 2, 1]) -> -1.0
    """

    _check_method(method)
    n = len(x)
    # Degenerate inputs have a defined value instead of dividing by zero.
    if n != len(y) or n < 2:
        return 0.0
    rank_x = rank(x, method)
    rank_y = rank(y, method)
    if method == "first":
        # Sum of squared rank differences, e.g. d = [0, 1, -1] -> 2.
        d_squared = float(np.sum((rank_x - rank_y) ** 2))
        rho = 1 - (6 * d_squared) / (n * (n * n - 1))
    else:
        if np.std(rank_x) == 0 or np.std(rank_y) == 0:
            return 0.0
        rho = float(np.corrcoef(rank_x, rank_y)[0, 1])
    # Guard against floating-point drift past the theoretical bounds.
    return float(np.clip(rho, -1.0, 1.0))


def correlation_matrix(
    records: Sequence[RespondentRecord],
    method: str = "first",
    threshold: float = SIGNIFICANCE_THRESHOLD,
) -> tuple[CorrelationEntry, ...]:
    """
    Correlate every unordered pair of the four research variables.

    Example return item:
        CorrelationEntry("dependency", "alienation", "Psychological Dependency", "Social Alienation", 0.512, True)
    """

    _check_method(method)
    if not records:
        return ()
    entries: list[CorrelationEntry] = []
    # combinations() yields each unordered pair exactly once in a fixed order.
    for variable_a, variable_b in combinations(CORE_VARIABLES, 2):
        x = [getattr(record, variable_a) for record in records]
        y = [getattr(record, variable_b) for record in records]
        rho = round(spearman(x, y, method), 3)
        entries.append(
            CorrelationEntry(
                variable_a=variable_a,
                variable_b=variable_b,
                label_a=VARIABLE_LABELS[variable_a],
                label_b=VARIABLE_LABELS[variable_b],
                rho=rho,
                significant=abs(rho) >= threshold,
            )
        )
    # sorted() is stable, so equal magnitudes keep their enumeration order.
    return tuple(sorted(entries, key=lambda entry: abs(entry.rho), reverse=True))


def correlation_lookup(table: Iterable[CorrelationEntry], variable_a: str, variable_b: str) -> tuple[float, bool]:
    """Return ``(rho, significant)`` for a pair in either order; the diagonal is ``(1.0, True)``."""

    if variable_a == variable_b:
        return 1.0, True
    for entry in table:
        if {entry.variable_a, entry.variable_b} == {variable_a, variable_b}:
            return entry.rho, entry.significant
    return 0.0, False


def correlation_frame(table: Iterable[CorrelationEntry]) -> pd.DataFrame:
    """
    Expand the pair list into a square matrix labelled with the variable display names.

    Example return:
        4x4 DataFrame with 1.0 on the diagonal and df.loc["Social Alienation", "Digital Intensity"] == 0.31
    """

    table = list(table)
    labels = [VARIABLE_LABELS[name] for name in CORE_VARIABLES]
    values = [
        [correlation_lookup(table, row, column)[0] for column in CORE_VARIABLES]
        for row in CORE_VARIABLES
    ]
    return pd.DataFrame(values, index=labels, columns=labels)


def read_csv_text(source: str, timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    """
    Read the full CSV text from a local path or an http(s) URL.

    Raises FetchFailedError when the resource is missing, answers with a non-success status, or the transport
    fails, and EmptyOrMalformedError when the bytes are not UTF-8. There is no retry.
    """

    if source.lower().startswith(("http://", "https://")):
        logger.info("Fetching survey CSV from %s", source)
        try:
            response = requests.get(source, timeout=timeout)
        except requests.RequestException as exc:
            logger.warning("Fetching %s failed: %s", source, exc)
            raise FetchFailedError(f"Could not fetch the CSV file: {exc}") from exc
        if not response.ok:
            logger.warning("Fetching %s returned status %s", source, response.status_code)
            raise FetchFailedError(f"CSV file not found (HTTP {response.status_code}).")
        # The survey export is UTF-8 regardless of what the server advertises; invalid bytes are
        # rejected here just as they are for local files.
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EmptyOrMalformedError(f"CSV file at {source} is not valid UTF-8 text.") from exc

    path = Path(source)
    logger.info("Reading survey CSV from %s", path)
    if not path.is_file():
        logger.warning("CSV file %s does not exist", path)
        raise FetchFailedError(f"CSV file not found at {path}.")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise EmptyOrMalformedError(f"CSV file {path} is not valid UTF-8 text.") from exc
    except OSError as exc:
        logger.warning("Reading %s failed: %s", path, exc)
        raise FetchFailedError(f"Could not read the CSV file: {exc}") from exc


def load_snapshot(
    source: Optional[str] = None,
    schema: Optional[ScoreSchema] = None,
    method: Optional[str] = None,
) -> DatasetSnapshot:
    """
    Run the whole pipeline once: read the CSV, score respondents, and rank-correlate the variables.

    Example argument:
        source="data/data_survey.csv"
    Example return:
        DatasetSnapshot(records=(RespondentRecord(id=1, ...), ...), correlation_table=(CorrelationEntry(...), ...))
    """

    # Fall back to the configured defaults, e.g. TELEMATICS_DATA_SOURCE and TELEMATICS_SCHEMA.
    source = source or DATA_SOURCE
    schema = schema or get_schema(SCHEMA_NAME)
    method = method or RANK_METHOD
    _check_method(method)

    csv_text = read_csv_text(source)
    records = parse(csv_text, schema)
    # An empty result is reported the same way as a failed fetch.
    if not records:
        logger.warning("No respondent records found in %s", source)
        raise EmptyOrMalformedError("The CSV data is empty or has the wrong format.")

    table = correlation_matrix(records, method)
    logger.info(
        "Loaded %d respondents from %s; %d of %d correlations significant",
        len(records),
        source,
        sum(entry.significant for entry in table),
        len(table),
    )
    return DatasetSnapshot(records=records, correlation_table=table, source=source, schema=schema, method=method)


def records_to_frame(records: Iterable[RespondentRecord]) -> pd.DataFrame:
    """
    Tabulate records for charts and tables.

    Example return row:
        {"id": 1, "intensity": 4.2, ..., "usage_group": "HeavyUser", "boldness": None, "usage_label": "Heavy (>6 h/day)"}
    """

    columns = ["id", *CORE_VARIABLES, "usage_group", "boldness"]
    frame = pd.DataFrame([asdict(record) for record in records], columns=columns)
    frame["usage_label"] = frame["usage_group"].map(USAGE_GROUP_LABELS)
    return frame


def compute_overview(snapshot: DatasetSnapshot) -> dict[str, object]:
    """
    KPI payload for the overview page.

    Example return:
        {"respondents": 120, "heavy_users": 84, "heavy_user_share": 70.0, "average_scores": {"intensity": 3.91, ...},
         "significant_pairs": 4, "total_pairs": 6, "insignificant_entries": [CorrelationEntry(...), ...]}
    """

    records = snapshot.records
    respondents = len(records)
    heavy_users = sum(record.usage_group == HEAVY_USER for record in records)
    # Averages over an empty snapshot fall back to 0 rather than NaN.
    average_scores = {
        name: round(float(np.mean([getattr(record, name) for record in records])), 2) if respondents else 0.0
        for name in CORE_VARIABLES
    }
    table = snapshot.correlation_table
    return {
        "respondents": respondents,
        "heavy_users": heavy_users,
        "heavy_user_share": round(heavy_users / respondents * 100, 1) if respondents else 0.0,
        "average_scores": average_scores,
        "significant_pairs": sum(entry.significant for entry in table),
        "total_pairs": len(table),
        "insignificant_entries": [entry for entry in table if not entry.significant],
    }


def plot_usage_groups(frame: pd.DataFrame) -> go.Figure:
    counts = frame["usage_group"].value_counts()
    groups = [HEAVY_USER, MODERATE_OR_LIGHT]
    fig = px.pie(
        names=[USAGE_GROUP_LABELS[group] for group in groups],
        values=[int(counts.get(group, 0)) for group in groups],
        color=[USAGE_GROUP_LABELS[group] for group in groups],
        color_discrete_map={USAGE_GROUP_LABELS[group]: USAGE_GROUP_COLORS[group] for group in groups},
        hole=0.6,
    )
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0), legend=dict(orientation="h"))
    return fig


def plot_average_scores(frame: pd.DataFrame) -> go.Figure:
    """
    Horizontal bar chart of the mean score of each research variable on the 0-5 scale.

    Example:
        frame["alienation"].mean() = 2.84 -> bar "Social Alienation" of length 2.84
    """

    # One row per variable with its label, mean, and palette color.
    averages = pd.DataFrame(
        {
            "Variable": [VARIABLE_LABELS[name] for name in CORE_VARIABLES],
            "Score": [round(float(frame[name].mean()), 2) if len(frame) else 0.0 for name in CORE_VARIABLES],
        }
    )
    fig = px.bar(
        averages,
        x="Score",
        y="Variable",
        orientation="h",
        color="Variable",
        color_discrete_map={VARIABLE_LABELS[name]: VARIABLE_COLORS[name] for name in CORE_VARIABLES},
        range_x=[0, 5],
        text="Score",
    )
    # The legend repeats the y-axis labels, so hide it.
    fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=40, b=0))
    return fig


def plot_score_scatter(frame: pd.DataFrame, x: str, y: str) -> go.Figure:
    """
    Scatter two research variables against each other, one marker per respondent.

    Example:
        plot_score_scatter(frame, "dependency", "alienation")
    """

    fig = px.scatter(
        frame,
        x=x,
        y=y,
        color="usage_label",
        color_discrete_map={USAGE_GROUP_LABELS[group]: color for group, color in USAGE_GROUP_COLORS.items()},
        hover_data=["id"],
        opacity=0.6,
        range_x=[0.5, 5.5],
        range_y=[0.5, 5.5],
        labels={x: VARIABLE_LABELS[x], y: VARIABLE_LABELS[y], "usage_label": "Usage group"},
    )
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0))
    return fig


def plot_correlation_heatmap(table: Iterable[CorrelationEntry]) -> go.Figure:
    """
    Heatmap of the Spearman matrix; insignificant pairs are labelled "n.s." in their cell text.

    Example cell texts:
        "0.51" for a significant pair, "0.12 (n.s.)" otherwise, "1.00" on the diagonal
    """

    table = list(table)
    corr = correlation_frame(table)
    # Significance per cell in the same layout as corr; the diagonal is always significant.
    significant = [
        [correlation_lookup(table, row, column)[1] for column in CORE_VARIABLES]
        for row in CORE_VARIABLES
    ]
    text = [
        [f"{value:.2f}" if flag else f"{value:.2f} (n.s.)" for value, flag in zip(values, flags)]
        for values, flags in zip(corr.to_numpy().tolist(), significant)
    ]
    fig = px.imshow(
        corr,
        aspect="auto",
        color_continuous_scale="RdBu",
        zmin=-1,
        zmax=1,
        labels=dict(color="Spearman ρ"),
    )
    fig.update_traces(text=text, texttemplate="%{text}", hovertemplate="%{y} vs %{x}: %{text}<extra></extra>")
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0))
    return fig


def plot_individual_profiles(frame: pd.DataFrame, limit: int = 15) -> go.Figure:
    """
    Grouped horizontal bars comparing dependency, alienation and competence for the first respondents.

    Example:
        limit=15 -> one bar group per respondent id 1..15
    """

    variables = ["dependency", "alienation", "competence"]
    # Melt to a tidy format with id, Variable, Score columns.
    tidy = frame.head(limit).melt(id_vars="id", value_vars=variables, var_name="Variable", value_name="Score")
    tidy["Variable"] = tidy["Variable"].map(VARIABLE_LABELS)
    tidy["id"] = tidy["id"].astype(str)
    fig = px.bar(
        tidy,
        x="Score",
        y="id",
        color="Variable",
        orientation="h",
        barmode="group",
        range_x=[0, 5],
        color_discrete_map={VARIABLE_LABELS[name]: VARIABLE_COLORS[name] for name in variables},
        labels={"id": "Respondent"},
    )
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0), yaxis=dict(autorange="reversed"))
    return fig
