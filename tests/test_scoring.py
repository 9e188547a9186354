"""Tests for CSV splitting, cell parsing and composite scoring."""
import math
import pickle

import pytest

from telematics_dashboard_core import (
    DEFAULT_SCHEMA,
    HEAVY_USER,
    MODERATE_OR_LIGHT,
    VARIANT_SCHEMA,
    ScoreSchema,
    get_schema,
    parse,
    parse_cell,
    split_csv_line,
)


class TestSplitCsvLine:
    def test_plain_fields(self):
        assert split_csv_line("1,2,3") == ["1", "2", "3"]

    def test_quoted_field_keeps_inner_comma(self):
        assert split_csv_line('1,"Jakarta, ID",4') == ["1", '"Jakarta, ID"', "4"]

    def test_empty_fields(self):
        assert split_csv_line("1,,3") == ["1", "", "3"]


class TestParseCell:
    def test_integer(self):
        assert parse_cell(["x", " 4 "], 1) == 4

    def test_missing_field(self):
        assert parse_cell(["x"], 5) == 0

    def test_non_numeric(self):
        assert parse_cell(["Sangat Setuju"], 0) == 0

    def test_leading_integer(self):
        assert parse_cell(["4.7"], 0) == 4
        assert parse_cell(["3\r"], 0) == 3

    def test_out_of_range(self):
        assert parse_cell(["9"], 0) == 0
        assert parse_cell(["-2"], 0) == 0

    def test_no_range(self):
        assert parse_cell(["9"], 0, value_range=None) == 9


class TestCompositeScores:
    def test_intensity_from_its_columns(self, row):
        text = "h\n" + row(c2=5, c4=5, c5=5, c18=5, c19=5)
        (record,) = parse(text)
        assert record.intensity == 5.00
        assert record.dependency == 1.00
        assert record.competence == 1.00
        assert record.alienation == 1.00

    def test_mean_is_rounded(self, row):
        # (3 + 4 + 4 + 1) / 4 = 3.0, (2 + 1 + 1 + 1 + 1) / 5 = 1.2
        (record,) = parse("h\n" + row(c7=3, c8=4, c9=4, c13=2))
        assert record.competence == 3.0
        assert record.alienation == 1.2
        (record,) = parse("h\n" + row(c7=2, c8=2, c9=2, c10=1))
        assert record.competence == 1.75

    def test_bad_cell_depresses_average(self, row):
        (record,) = parse("h\n" + row(default="5", c3="n/a"))
        assert record.dependency == 4.0

    def test_usage_group_threshold(self, row):
        (moderate,) = parse("h\n" + row(c2=3))
        (heavy,) = parse("h\n" + row(c2=4))
        assert moderate.usage_group == MODERATE_OR_LIGHT
        assert heavy.usage_group == HEAVY_USER

    def test_duration_also_feeds_intensity(self, row):
        (record,) = parse("h\n" + row(c2=3, c4=5, c5=5, c18=5, c19=5))
        assert record.intensity == 4.6
        assert record.usage_group == MODERATE_OR_LIGHT

    def test_quoted_field_does_not_shift_columns(self, row):
        line = row(c1='"Doe, Jane"', c7=5, c8=5, c9=5, c10=5)
        (record,) = parse("h\n" + line)
        assert record.competence == 5.0

    def test_no_boldness_by_default(self, row):
        (record,) = parse("h\n" + row())
        assert record.boldness is None

    def test_variant_schema_boldness(self, row):
        (record,) = parse("h\n" + row(c11=4), VARIANT_SCHEMA)
        assert record.boldness == 4
        assert record.intensity == 1.0


class TestRowFiltering:
    def test_short_row_kept_with_zero_scores(self):
        records = parse("h\na,b,c")
        assert len(records) == 1
        assert records[0].intensity == 0.0
        assert records[0].usage_group == MODERATE_OR_LIGHT

    def test_blank_line_dropped(self, row):
        records = parse("h\n" + row() + "\n   \n" + row())
        assert len(records) == 2

    def test_ids_not_renumbered(self, row):
        records = parse("h\n" + row() + "\n\n" + row(c2=5))
        assert [record.id for record in records] == [1, 3]

    def test_header_only(self):
        assert parse("Q0,Q1,Q2\n") == ()

    def test_empty_text(self):
        assert parse("") == ()

    def test_file_order_preserved(self, row):
        records = parse("h\n" + "\n".join(row(c13=v) for v in (5, 1, 3)))
        assert [record.alienation for record in records] == [1.8, 1.0, 1.4]

    @pytest.mark.parametrize("separator", ["\x85", "\u2028", "\x0c", "\x1e"])
    def test_unicode_separator_inside_field_stays_one_row(self, row, separator):
        line = row(c1=f"\"Doe{separator}Jane\"", c13=5)
        (record,) = parse("h\n" + line)
        assert record.id == 1
        assert record.dependency == 1.0
        assert record.alienation == 1.8

    def test_crlf_line_endings(self, row):
        records = parse("h\r\n" + row(c22=5) + "\r\n" + row(c22=5) + "\r\n")
        assert len(records) == 2
        assert all(record.dependency == 1.8 for record in records)
        assert not any(math.isnan(record.intensity) for record in records)


class TestScoreSchema:
    def test_default_groups(self):
        assert DEFAULT_SCHEMA.groups["intensity"] == (2, 4, 5, 18, 19)
        assert DEFAULT_SCHEMA.groups["dependency"] == (3, 6, 20, 21, 22)
        assert DEFAULT_SCHEMA.groups["competence"] == (7, 8, 9, 10)
        assert DEFAULT_SCHEMA.groups["alienation"] == (13, 14, 15, 16, 17)

    def test_missing_group_rejected(self):
        with pytest.raises(ValueError):
            ScoreSchema(groups={"intensity": (0,)})

    def test_unknown_raw_column_rejected(self):
        with pytest.raises(ValueError):
            ScoreSchema(groups=dict(DEFAULT_SCHEMA.groups), raw_columns={"courage": 1})

    def test_empty_group_rejected(self):
        with pytest.raises(ValueError):
            ScoreSchema(groups=dict(DEFAULT_SCHEMA.groups, alienation=()))

    def test_negative_index_rejected(self):
        groups = dict(DEFAULT_SCHEMA.groups, competence=(-1,))
        with pytest.raises(ValueError):
            ScoreSchema(groups=groups)

    def test_custom_groups(self):
        schema = ScoreSchema(
            groups={"intensity": (0,), "dependency": (1,), "competence": (2,), "alienation": (3,)},
            usage_column=0,
        )
        (record,) = parse("h\n4,3,2,1", schema)
        assert (record.intensity, record.dependency, record.competence, record.alienation) == (4, 3, 2, 1)
        assert record.usage_group == HEAVY_USER

    def test_groups_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_SCHEMA.groups["intensity"] = (0,)
        with pytest.raises(TypeError):
            VARIANT_SCHEMA.raw_columns["boldness"] = 0

    def test_caller_dict_changes_do_not_leak(self, row):
        groups = {"intensity": [0], "dependency": (1,), "competence": (2,), "alienation": (3,)}
        schema = ScoreSchema(groups=groups, usage_column=0)
        groups["intensity"].append(1)
        groups["alienation"] = (0,)
        assert schema.groups["intensity"] == (0,)
        assert schema.groups["alienation"] == (3,)

    def test_schema_survives_pickling(self):
        restored = pickle.loads(pickle.dumps(VARIANT_SCHEMA))
        assert restored == VARIANT_SCHEMA
        assert dict(restored.raw_columns) == {"boldness": 11}
        with pytest.raises(TypeError):
            restored.groups["intensity"] = (0,)

    def test_get_schema(self):
        assert get_schema("Variant") is VARIANT_SCHEMA
        with pytest.raises(ValueError):
            get_schema("legacy")
