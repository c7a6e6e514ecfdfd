"""
Tests for StandardTable and TimeNormalizer.

Tests age grading, category normalization and record exclusion.
"""

import pytest

from kona_slots.features.qualifying import (
    FinisherRecord,
    StandardTable,
    TimeNormalizer,
    gender_of,
    normalize_category,
)
from kona_slots.shared.constants import KONA_STANDARDS_2026


# =============================================================================
# Test Data
# =============================================================================

MIXED_FIELD = [
    FinisherRecord(place=1, name="Ana", category="F30-34", gender="F", raw_time_seconds=34000),
    FinisherRecord(place=2, name="Ben", category="30-34", gender="M", raw_time_seconds=34500),
    FinisherRecord(place=3, name="Cai", category="M30-34", raw_time_seconds=0),
    FinisherRecord(place=4, name="Dee", category="F80-84", gender="F", raw_time_seconds=50000),
    FinisherRecord(place=5, name="Eli", category="X30-34", raw_time_seconds=40000),
    FinisherRecord(place=6, name="Fay", category="30-34", gender=None, raw_time_seconds=41000),
    FinisherRecord(place=7, name="Gus", category="M45-49", raw_time_seconds=None),
    FinisherRecord(place=8, name="Hal", category="M45-49", gender="F", raw_time_seconds=42000),
]


# =============================================================================
# Test Gender / Category Parsing
# =============================================================================

class TestCategoryParsing:
    """Tests for gender_of and normalize_category."""

    def test_gender_from_first_character(self):
        """Gender comes from the category prefix."""
        assert gender_of("M30-34") == "M"
        assert gender_of("F75-79") == "F"

    def test_lowercase_prefix_accepted(self):
        """Lowercase prefixes are accepted."""
        assert gender_of("f40-44") == "F"

    def test_unknown_prefix_rejected(self):
        """Prefixes other than M/F give no gender."""
        assert gender_of("X30-34") is None
        assert gender_of("30-34") is None

    def test_empty_category(self):
        """Empty or missing categories give no gender."""
        assert gender_of("") is None
        assert gender_of(None) is None

    def test_prefixed_category_kept(self):
        """A prefixed category ignores the gender field."""
        assert normalize_category("M30-34", "F") == "M30-34"

    def test_bare_band_gets_gender_prefix(self):
        """A bare age band takes its prefix from the gender field."""
        assert normalize_category("30-34", "F") == "F30-34"
        assert normalize_category(" 40-44 ", "m") == "M40-44"

    def test_bare_band_without_gender(self):
        """A bare band without a usable gender is rejected."""
        assert normalize_category("30-34", None) is None
        assert normalize_category("30-34", "X") is None


# =============================================================================
# Test StandardTable
# =============================================================================

class TestStandardTable:
    """Tests for the immutable standard table."""

    def test_kona_table_contents(self):
        """Built-in table holds the published multipliers."""
        table = StandardTable.kona_2026()

        assert len(table) == len(KONA_STANDARDS_2026)
        assert table["M30-34"] == 1.0
        assert table["F40-44"] == 0.8707

    def test_tbd_categories_absent(self):
        """Categories without a published standard are missing."""
        table = StandardTable.kona_2026()

        assert "F80-84" not in table
        assert table.multiplier("F85-89") is None

    def test_all_multipliers_in_range(self):
        """Every built-in multiplier lies in (0, 1]."""
        for value in StandardTable.kona_2026().values():
            assert 0 < value <= 1

    @pytest.mark.parametrize("bad", [0.0, -0.5, 1.01])
    def test_rejects_out_of_range_multiplier(self, bad):
        """Multipliers outside (0, 1] raise ValueError."""
        with pytest.raises(ValueError):
            StandardTable({"M30-34": bad})

    def test_table_is_not_mutable(self):
        """Item assignment is refused."""
        table = StandardTable({"M30-34": 1.0})

        with pytest.raises(TypeError):
            table["M30-34"] = 0.5

    def test_source_dict_changes_do_not_leak(self):
        """The table copies its source mapping."""
        source = {"M30-34": 1.0}
        table = StandardTable(source)
        source["M30-34"] = 0.5

        assert table["M30-34"] == 1.0

    def test_independent_tables_coexist(self):
        """A revised table leaves the built-in one alone."""
        revised = StandardTable({"M30-34": 0.99}, name="revision")

        assert revised["M30-34"] == 0.99
        assert StandardTable.kona_2026()["M30-34"] == 1.0

    def test_sort_key_follows_table_order(self):
        """Categories sort in table order, unknown ones last."""
        table = StandardTable.kona_2026()
        ordered = sorted(["M40-44", "F18-24", "M18-24", "Z"], key=table.sort_key)

        assert ordered == ["M18-24", "F18-24", "M40-44", "Z"]


# =============================================================================
# Test Grading
# =============================================================================

class TestGrade:
    """Tests for TimeNormalizer.grade."""

    def test_reference_category_unchanged(self):
        """M30-34 has multiplier 1.0."""
        normalizer = TimeNormalizer(StandardTable.kona_2026())
        assert normalizer.grade(36000, "M30-34") == 36000

    def test_multiplier_applied_without_rounding(self):
        """Graded times keep their fraction."""
        normalizer = TimeNormalizer(StandardTable.kona_2026())
        assert normalizer.grade(36001, "F40-44") == pytest.approx(36001 * 0.8707)

    def test_round_trip_for_every_category(self):
        """Dividing by the multiplier gives back the raw time."""
        table = StandardTable.kona_2026()
        normalizer = TimeNormalizer(table)

        for category, multiplier in table.items():
            graded = normalizer.grade(40321, category)
            assert graded / multiplier == pytest.approx(40321)

    def test_unknown_category_excluded(self):
        """No standard means no graded time."""
        normalizer = TimeNormalizer(StandardTable.kona_2026())
        assert normalizer.grade(36000, "F80-84") is None

    def test_zero_time_excluded(self):
        """Zero or missing times are not graded."""
        normalizer = TimeNormalizer(StandardTable.kona_2026())
        assert normalizer.grade(0, "M30-34") is None
        assert normalizer.grade(None, "M30-34") is None

    def test_bare_band_graded_with_gender(self):
        """A bare band plus gender grades like the prefixed category."""
        normalizer = TimeNormalizer(StandardTable.kona_2026())

        assert normalizer.grade(36000, "40-44", "F") == normalizer.grade(36000, "F40-44")
        assert normalizer.grade(36000, "40-44") is None

    def test_agrees_with_normalize_on_unprefixed_table_key(self):
        """A table key without M/F prefix is excluded by both paths."""
        normalizer = TimeNormalizer(StandardTable({"X30-34": 1.0, "M30-34": 1.0}))
        records = [
            FinisherRecord(place=1, name="Eli", category="X30-34", raw_time_seconds=40000),
            FinisherRecord(place=2, name="Ben", category="M30-34", raw_time_seconds=40000),
        ]

        result = normalizer.normalize(records)

        assert normalizer.grade(40000, "X30-34") is None
        assert [e.reason for e in result.excluded] == ["unknown_gender"]
        assert [
            normalizer.grade(r.raw_time_seconds, r.category, r.gender) is not None
            for r in records
        ] == [False, True]


# =============================================================================
# Test Normalization
# =============================================================================

class TestNormalize:
    """Tests for TimeNormalizer.normalize."""

    def test_graded_and_excluded_split(self):
        """Records land in exactly one of graded or excluded."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize(MIXED_FIELD)

        assert [r.name for r in result.graded] == ["Ana", "Ben", "Hal"]
        assert [e.record.name for e in result.excluded] == ["Cai", "Dee", "Eli", "Fay", "Gus"]

    def test_exclusion_reasons(self):
        """Each excluded record carries its reason."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize(MIXED_FIELD)
        reasons = {e.record.name: e.reason for e in result.excluded}

        assert reasons == {
            "Cai": "unparsed_time",
            "Dee": "no_standard",
            "Eli": "unknown_gender",
            "Fay": "unknown_gender",
            "Gus": "unparsed_time",
        }

    def test_bare_band_normalized(self):
        """A bare band with gender becomes a prefixed category."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize(MIXED_FIELD)
        ben = result.graded[1]

        assert ben.category == "M30-34"
        assert ben.gender == "M"

    def test_gender_derived_from_category(self):
        """Category prefix wins over a conflicting gender field."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize(MIXED_FIELD)
        hal = result.graded[2]

        assert hal.gender == "M"
        assert hal.multiplier == 0.9401

    def test_positions_follow_input_order(self):
        """Positions index the input list, excluded records included."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize(MIXED_FIELD)

        assert [r.position for r in result.graded] == [0, 1, 7]

    def test_graded_time(self):
        """Graded time is raw time times the multiplier."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize(MIXED_FIELD)
        ana = result.graded[0]

        assert ana.graded_time_seconds == pytest.approx(34000 * 0.8977)
        assert ana.raw_time_seconds == 34000

    def test_empty_input(self):
        """Empty input gives an empty result."""
        result = TimeNormalizer(StandardTable.kona_2026()).normalize([])

        assert result.graded == []
        assert result.excluded == []
