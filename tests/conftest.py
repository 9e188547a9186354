"""Shared fixtures for building survey CSV text."""
import pytest

HEADER = ",".join(f"Q{i}" for i in range(23))


def make_row(default="1", **cells):
    """Build a 23-column CSV line; ``cells`` maps ``c<index>`` to a cell value."""
    values = [default] * 23
    for key, value in cells.items():
        values[int(key[1:])] = str(value)
    return ",".join(values)


@pytest.fixture
def row():
    return make_row


@pytest.fixture
def survey_file(tmp_path):
    """Write CSV lines (header prepended) to a temporary file and return its path as a string."""

    def _write(*lines, header=HEADER):
        path = tmp_path / "data_survey.csv"
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return str(path)

    return _write
