"""
Comprehensive test suite for content verification.

Tests all validation cases:
- Catalog errors (NO_PUZZLES, DUPLICATE_PUZZLE_ID)
- Entry errors (EMPTY_WORD, NON_CANONICAL_WORD, SHORT_WORD, DUPLICATE_WORD)
- List errors (CROSSWORD_NOT_ALLOWED, BONUS_NOT_ALLOWED, WORD_IN_BOTH_LISTS, ALLOWED_ORPHAN)
- Playability errors (NOT_ON_WHEEL, THRESHOLD_ORDER, THRESHOLD_RANGE, CROSSWORD_NO_SLOT)
- Ladder errors (UNKNOWN_UNLOCK_PUZZLE)
- Warnings (GRID_WORD_UNLISTED)
"""

import pytest

from bonus_rush.puzzle import Content, parse_content
from bonus_rush.verifiers import ValidationResult, verify_content


def make_content(tier_overrides=None, wheel="RNAB", extra_puzzles=(), unlocks=None):
    tier = {
        "grid": ["BAR", "A##", "N##"],
        "crossword_words": ["BAR", "BAN"],
        "allowed_words": ["BAR", "BAN", "BRA", "NAB"],
    }
    tier.update(tier_overrides or {})
    data = {
        "puzzles": [{"id": 1, "wheel_letters": wheel, "tiers": {"Bronze": tier}}, *extra_puzzles],
        "ladder": {"unlocks": unlocks if unlocks is not None else [{"puzzle_id": 1, "unlock_date": "2026-01-26"}]},
    }
    return parse_content(data)


def codes(result: ValidationResult):
    return [e.code for e in result.errors]


class TestValidContent:
    """Test cases for valid content."""

    def test_minimal_content(self):
        """A consistent single tier passes with no warnings."""
        result = verify_content(make_content())
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.puzzles_checked == 1
        assert result.tiers_checked == 1

    def test_bundled_content(self, bundled_content):
        """The shipped puzzles pass cleanly."""
        result = verify_content(bundled_content)
        assert result.valid is True, [str(e) for e in result.errors]
        assert result.warnings == []
        assert result.puzzles_checked == 4
        assert result.tiers_checked == 12

    def test_explicit_bonus_list(self):
        """An explicit bonus list that covers allowed passes."""
        result = verify_content(make_content({"bonus_words": ["BRA", "NAB"]}))
        assert result.valid is True


class TestCatalogErrors:
    """Test catalog-level errors."""

    def test_no_puzzles(self):
        result = verify_content(Content())
        assert result.valid is False
        assert codes(result) == ["NO_PUZZLES"]

    def test_duplicate_puzzle_id(self):
        duplicate = {"id": 1, "wheel_letters": "RNAB", "tiers": {"Bronze": {"grid": ["BAR"]}}}
        result = verify_content(make_content(extra_puzzles=[duplicate]))
        assert "DUPLICATE_PUZZLE_ID" in codes(result)
        assert result.puzzles_checked == 1


class TestEntryErrors:
    """Test word list entry errors."""

    def test_empty_entry(self):
        result = verify_content(make_content({"allowed_words": ["BAR", "BAN", "BRA", "NAB", "!!"]}))
        assert "EMPTY_WORD" in codes(result)

    def test_lowercase_entry(self):
        result = verify_content(make_content({"allowed_words": ["bar", "BAN", "BRA", "NAB"]}))
        errors = [e for e in result.errors if e.code == "NON_CANONICAL_WORD"]
        assert len(errors) == 1
        assert errors[0].word == "bar"
        assert errors[0].puzzle_id == 1

    def test_short_word(self):
        result = verify_content(make_content({"allowed_words": ["BAR", "BAN", "BRA", "NAB", "AB"]}))
        assert "SHORT_WORD" in codes(result)

    def test_duplicate_word(self):
        result = verify_content(make_content({"allowed_words": ["BAR", "BAN", "BRA", "NAB", "BAR"]}))
        assert "DUPLICATE_WORD" in codes(result)


class TestListErrors:
    """Test consistency between the word lists."""

    def test_crossword_not_allowed(self):
        result = verify_content(make_content({"allowed_words": ["BAR", "BRA", "NAB"]}))
        assert "CROSSWORD_NOT_ALLOWED" in codes(result)

    def test_bonus_not_allowed(self):
        result = verify_content(make_content({"bonus_words": ["BRA", "NAB", "RAN"]}))
        assert "BONUS_NOT_ALLOWED" in codes(result)

    def test_word_in_both_lists(self):
        result = verify_content(make_content({"bonus_words": ["BRA", "NAB", "BAR"]}))
        assert "WORD_IN_BOTH_LISTS" in codes(result)

    def test_allowed_orphan(self):
        result = verify_content(make_content({"bonus_words": ["BRA"]}))
        errors = [e for e in result.errors if e.code == "ALLOWED_ORPHAN"]
        assert [e.word for e in errors] == ["NAB"]


class TestPlayabilityErrors:
    """Test wheel, threshold and grid checks."""

    def test_not_on_wheel(self):
        result = verify_content(make_content(wheel="RAB"))
        words = sorted(e.word for e in result.errors if e.code == "NOT_ON_WHEEL")
        assert words == ["BAN", "NAB"]

    def test_tier_wheel_override(self):
        """A tier's own wheel is what its words are checked against."""
        result = verify_content(make_content({"wheel_letters": "BAR"}))
        assert "NOT_ON_WHEEL" in codes(result)

    def test_threshold_order(self):
        thresholds = {"one_star": 0.8, "two_star": 0.5, "three_star": 1.0}
        result = verify_content(make_content({"star_thresholds": thresholds}))
        assert "THRESHOLD_ORDER" in codes(result)

    def test_percent_threshold_range(self):
        thresholds = {"one_star": 0.4, "two_star": 0.6, "three_star": 1.5}
        result = verify_content(make_content({"star_thresholds": thresholds}))
        assert "THRESHOLD_RANGE" in codes(result)

    def test_count_threshold_range(self):
        thresholds = {"one_star": 1, "two_star": 2, "three_star": 20, "unit": "count"}
        result = verify_content(make_content({"star_thresholds": thresholds}))
        assert "THRESHOLD_RANGE" in codes(result)

    def test_count_thresholds_within_range(self):
        thresholds = {"one_star": 1, "two_star": 2, "three_star": 4, "unit": "count"}
        assert verify_content(make_content({"star_thresholds": thresholds})).valid is True

    def test_crossword_without_slot(self):
        result = verify_content(make_content({"crossword_words": ["BAR", "BAN", "NAB"]}))
        errors = [e for e in result.errors if e.code == "CROSSWORD_NO_SLOT"]
        assert [e.word for e in errors] == ["NAB"]

    def test_unlisted_grid_word_warns(self):
        """A fillable grid word missing from crossword_words is a warning only."""
        result = verify_content(make_content({"crossword_words": ["BAR"]}))
        assert result.valid is True
        assert [w.code for w in result.warnings] == ["GRID_WORD_UNLISTED"]
        assert result.warnings[0].word == "BAN"


class TestLadderErrors:
    """Test calendar checks."""

    def test_unknown_unlock_puzzle(self):
        unlocks = [
            {"puzzle_id": 1, "unlock_date": "2026-01-26"},
            {"puzzle_id": 5, "unlock_date": "2026-02-02"},
        ]
        result = verify_content(make_content(unlocks=unlocks))
        assert codes(result) == ["UNKNOWN_UNLOCK_PUZZLE"]
        assert result.errors[0].puzzle_id == 5


class TestErrorFormatting:
    """Test how findings read."""

    @pytest.mark.parametrize("overrides,prefix", [
        ({"allowed_words": ["bar", "BAN", "BRA", "NAB"]}, "Puzzle 1 Bronze: "),
    ])
    def test_str_includes_context(self, overrides, prefix):
        result = verify_content(make_content(overrides))
        assert str(result.errors[0]).startswith(prefix)

    def test_catalog_context(self):
        result = verify_content(Content())
        assert str(result.errors[0]) == "Content: No puzzles found in content"
