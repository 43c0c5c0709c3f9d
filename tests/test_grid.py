"""
Tests for slot discovery, word placement and grid parsing.
"""

from bonus_rush.puzzle import (
    Direction,
    Slot,
    build_run_grid,
    can_place_word,
    find_matching_slot,
    get_slots,
    get_slots_cached,
    parse_grid,
    parse_grid_rows,
    place_word,
    slot_word,
)
from bonus_rush.utils.grid_visualizer import render_found_words, render_grid


BARN_GRID = parse_grid_rows([
    "#BAR#B",
    "#R#A#R",
    "BARN#A",
    "A####N",
    "NAB###",
])


def h(row, col, length):
    return Slot(row=row, col=col, length=length, direction=Direction.HORIZONTAL)


def v(row, col, length):
    return Slot(row=row, col=col, length=length, direction=Direction.VERTICAL)


class TestGetSlots:
    """Test slot discovery order and run boundaries."""

    def test_single_row_example(self):
        """'#BAR#B' has exactly one horizontal slot at columns 1-3."""
        slots = get_slots([list("#BAR#B")])
        assert slots == [h(0, 1, 3)]

    def test_discovery_order(self):
        """Horizontal slots row by row, then vertical slots column by column."""
        assert get_slots(BARN_GRID) == [
            h(0, 1, 3),
            h(2, 0, 4),
            h(4, 0, 3),
            v(2, 0, 3),
            v(0, 1, 3),
            v(0, 3, 3),
            v(0, 5, 4),
        ]

    def test_single_cells_are_not_slots(self):
        """Runs of length 1 are ignored."""
        assert get_slots([["A", "#", "B"]]) == []

    def test_ragged_rows_count_missing_cells_as_blocked(self):
        """A short row ends vertical runs."""
        grid = [["A", "B"], ["C"]]
        assert get_slots(grid) == [h(0, 0, 2), v(0, 0, 2)]

    def test_empty_grid(self):
        """No rows means no slots."""
        assert get_slots([]) == []

    def test_cached_matches_uncached(self):
        """The memoized variant returns the same slots."""
        assert get_slots_cached(BARN_GRID) == get_slots(BARN_GRID)
        assert get_slots_cached(BARN_GRID) == get_slots_cached(BARN_GRID)

    def test_slot_word(self):
        """slot_word reads template letters under a slot."""
        assert slot_word(BARN_GRID, v(0, 5, 4)) == "BRAN"
        assert slot_word(BARN_GRID, h(2, 0, 4)) == "BARN"

    def test_slot_cells(self):
        """cells() lists coordinates in reading order."""
        assert v(0, 5, 3).cells() == [(0, 5), (1, 5), (2, 5)]
        assert h(4, 0, 2).cells() == [(4, 0), (4, 1)]


class TestRunGrid:
    """Test building run grids from templates."""

    def test_letters_cleared_blocks_kept(self):
        """Only '#' survives from the template."""
        run_grid = build_run_grid([list("#BAR#B")])
        assert run_grid == [["#", "", "", "", "#", ""]]

    def test_fixed_letters_kept(self):
        """Fixed cells keep their template letter."""
        run_grid = build_run_grid(BARN_GRID, fixed_letters=[(2, 0)])
        assert run_grid[2][0] == "B"
        assert run_grid[0][1] == ""


class TestPlacement:
    """Test can_place_word and place_word."""

    def test_place_example_word(self):
        """Placing BAR fills exactly the three slot cells."""
        template = [list("#BAR#B")]
        run_grid = build_run_grid(template)
        slot = find_matching_slot(template, run_grid, "BAR")
        assert slot == h(0, 1, 3)

        placed = place_word(run_grid, "BAR", slot)
        assert placed == [["#", "B", "A", "R", "#", ""]]

    def test_place_does_not_mutate_input(self):
        """place_word returns a new grid."""
        run_grid = build_run_grid(BARN_GRID)
        before = [list(row) for row in run_grid]
        place_word(run_grid, "BAR", h(0, 1, 3))
        assert run_grid == before

    def test_length_mismatch(self):
        """A word must match the slot length."""
        run_grid = build_run_grid(BARN_GRID)
        assert can_place_word(run_grid, "BARN", h(0, 1, 3)) is False

    def test_conflicting_letter(self):
        """An existing different letter blocks placement."""
        run_grid = place_word(build_run_grid(BARN_GRID), "BAR", h(0, 1, 3))
        assert can_place_word(run_grid, "NAB", h(0, 1, 3)) is False

    def test_matching_intersection_allowed(self):
        """A shared letter that agrees is fine."""
        run_grid = place_word(build_run_grid(BARN_GRID), "BAR", h(0, 1, 3))
        assert can_place_word(run_grid, "BRA", v(0, 1, 3)) is True

    def test_blocked_cell(self):
        """A slot covering a blocked cell cannot be filled."""
        run_grid = build_run_grid(BARN_GRID)
        assert can_place_word(run_grid, "BAR", h(0, 0, 3)) is False

    def test_out_of_range_cell(self):
        """A slot running off the grid cannot be filled."""
        run_grid = build_run_grid([list("AB")])
        assert can_place_word(run_grid, "ABC", h(0, 0, 3)) is False

    def test_unplaceable_returns_copy(self):
        """A failed placement returns an unmodified copy."""
        run_grid = place_word(build_run_grid(BARN_GRID), "BAR", h(0, 1, 3))
        result = place_word(run_grid, "NAB", h(0, 1, 3))
        assert result == run_grid
        assert result is not run_grid


class TestFindMatchingSlot:
    """Test slot lookup for crossword words."""

    def test_vertical_word(self):
        """BRAN is the vertical slot in column 5."""
        run_grid = build_run_grid(BARN_GRID)
        assert find_matching_slot(BARN_GRID, run_grid, "bran") == v(0, 5, 4)

    def test_word_not_in_template(self):
        """A word no slot spells has no match."""
        run_grid = build_run_grid(BARN_GRID)
        assert find_matching_slot(BARN_GRID, run_grid, "ARB") is None

    def test_conflicting_run_grid(self):
        """A slot whose run cells disagree is skipped."""
        template = [list("BAR")]
        run_grid = [["B", "U", "R"]]
        assert find_matching_slot(template, run_grid, "BAR") is None


class TestParsing:
    """Test authored grid notation."""

    def test_parse_grid_rows_strings(self):
        """String rows become character lists."""
        assert parse_grid_rows(["#A", "B#"]) == [["#", "A"], ["B", "#"]]

    def test_parse_grid_rows_none_cells(self):
        """None cells become empty strings."""
        assert parse_grid_rows([["A", None]]) == [["A", ""]]

    def test_parse_grid_block(self):
        """A <grid> block parses one row per line."""
        block = """
        <grid>
        #BAR#B
        #R#A#R
        </grid>
        """
        assert parse_grid(block) == [list("#BAR#B"), list("#R#A#R")]

    def test_parse_grid_keeps_space_cells(self):
        """Leading and trailing spaces are empty cells, not padding."""
        grid = parse_grid("..#\n AB\nCD ")
        assert grid == [[".", ".", "#"], [" ", "A", "B"], ["C", "D", " "]]
        slots = get_slots(grid)
        assert Slot(row=1, col=0, length=3, direction=Direction.HORIZONTAL) in slots
        assert Slot(row=0, col=0, length=3, direction=Direction.VERTICAL) in slots

    def test_parse_grid_indented_block(self):
        """Only the indentation shared by every row is removed."""
        block = """
            #AB
             CD
        """
        assert parse_grid(block) == [list("#AB"), list(" CD")]


class TestRendering:
    """Test the text renderer."""

    def test_render_grid(self):
        """Blocked cells show '#', empty cells '.'."""
        assert render_grid([["#", "B"], ["", "a"]]) == "# B\n. A"

    def test_render_with_coordinates(self):
        """Coordinates add a header row and row numbers."""
        rendered = render_grid([["A", "B"]], show_coordinates=True)
        assert rendered.splitlines() == ["   0 1", " 0 A B"]

    def test_render_found_words(self):
        """Found words are listed sorted, '-' when none."""
        assert render_found_words(["BAR", "BAN"], []) == "Crossword (2): BAN, BAR\nBonus (0): -"
