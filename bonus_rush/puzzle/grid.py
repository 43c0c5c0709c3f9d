"""Slot discovery and word placement over crossword grids."""

from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .models import BLOCKED_CELL, EMPTY_MARKERS, Direction, Grid, Slot
from .normalize import normalize_word


def is_blocked(cell: Optional[str]) -> bool:
    return cell is None or cell == BLOCKED_CELL


def is_empty(cell: Optional[str]) -> bool:
    return cell is not None and (cell in EMPTY_MARKERS or not normalize_word(cell))


def cell_at(grid: Sequence[Sequence[str]], row: int, col: int) -> Optional[str]:
    """Cell value, or None when (row, col) falls outside the ragged grid."""
    if row < 0 or col < 0 or row >= len(grid):
        return None
    line = grid[row]
    if col >= len(line):
        return None
    return line[col]


def grid_shape(grid: Sequence[Sequence[str]]) -> Tuple[int, int]:
    """(rows, cols) where cols is the longest row."""
    return len(grid), max((len(row) for row in grid), default=0)


def copy_grid(grid: Sequence[Sequence[str]]) -> Grid:
    return [list(row) for row in grid]


def get_slots(grid: Sequence[Sequence[str]]) -> List[Slot]:
    """Derive every fillable slot from a template grid.

    Horizontal slots come first, row by row, then vertical slots column by
    column. Blocked and missing cells separate runs; runs shorter than two
    cells are not slots.
    """
    rows, cols = grid_shape(grid)
    slots: List[Slot] = []

    for row in range(rows):
        col = 0
        while col < cols:
            if is_blocked(cell_at(grid, row, col)):
                col += 1
                continue
            start = col
            while col < cols and not is_blocked(cell_at(grid, row, col)):
                col += 1
            if col - start >= 2:
                slots.append(Slot(row=row, col=start, length=col - start, direction=Direction.HORIZONTAL))

    for col in range(cols):
        row = 0
        while row < rows:
            if is_blocked(cell_at(grid, row, col)):
                row += 1
                continue
            start = row
            while row < rows and not is_blocked(cell_at(grid, row, col)):
                row += 1
            if row - start >= 2:
                slots.append(Slot(row=start, col=col, length=row - start, direction=Direction.VERTICAL))

    return slots


@lru_cache(maxsize=256)
def _slots_for_frozen(frozen: Tuple[Tuple[str, ...], ...]) -> Tuple[Slot, ...]:
    return tuple(get_slots(frozen))


def get_slots_cached(grid: Sequence[Sequence[str]]) -> List[Slot]:
    """``get_slots`` memoized on the grid's contents."""
    return list(_slots_for_frozen(tuple(tuple(row) for row in grid)))


def slot_word(grid: Sequence[Sequence[str]], slot: Slot) -> str:
    """Normalized letters currently under ``slot``."""
    letters = [cell_at(grid, row, col) or "" for row, col in slot.cells()]
    return normalize_word("".join(letters))


def build_run_grid(template: Sequence[Sequence[str]], fixed_letters: Sequence[Tuple[int, int]] = ()) -> Grid:
    """Fresh run grid: blocked cells kept, fixed letters kept, everything else empty."""
    fixed = {(int(r), int(c)) for r, c in fixed_letters}
    run_grid: Grid = []
    for r, line in enumerate(template):
        run_row = []
        for c, cell in enumerate(line):
            if is_blocked(cell):
                run_row.append(BLOCKED_CELL)
            elif (r, c) in fixed and not is_empty(cell):
                run_row.append(normalize_word(cell))
            else:
                run_row.append("")
        run_grid.append(run_row)
    return run_grid


def can_place_word(grid: Sequence[Sequence[str]], word: str, slot: Slot) -> bool:
    """True if ``word`` fits ``slot`` without contradicting letters already in the grid."""
    letters = normalize_word(word)
    if len(letters) != slot.length:
        return False

    for (row, col), incoming in zip(slot.cells(), letters):
        current = cell_at(grid, row, col)
        if is_blocked(current):
            return False
        if is_empty(current):
            continue
        if normalize_word(current) != incoming:
            return False

    return True


def place_word(grid: Sequence[Sequence[str]], word: str, slot: Slot) -> Grid:
    """Return a copy of ``grid`` with ``word`` written into ``slot``.

    When the word cannot be placed the copy is returned unmodified.
    """
    next_grid = copy_grid(grid)
    if not can_place_word(grid, word, slot):
        return next_grid

    for (row, col), letter in zip(slot.cells(), normalize_word(word)):
        next_grid[row][col] = letter
    return next_grid


def find_matching_slot(
    template: Sequence[Sequence[str]],
    run_grid: Sequence[Sequence[str]],
    word: str,
) -> Optional[Slot]:
    """First template slot spelling ``word`` that is still open in the run grid."""
    normalized = normalize_word(word)
    if len(normalized) < 2:
        return None

    for slot in get_slots_cached(template):
        if slot.length != len(normalized):
            continue
        if slot_word(template, slot) != normalized:
            continue
        if can_place_word(run_grid, normalized, slot):
            return slot
    return None


def grid_letters(grid: Sequence[Sequence[str]]) -> List[str]:
    """One string per row with '#' for blocked and '.' for empty cells."""
    rows, cols = grid_shape(grid)
    lines = []
    for row in range(rows):
        chars = []
        for col in range(cols):
            cell = cell_at(grid, row, col)
            if is_blocked(cell):
                chars.append(BLOCKED_CELL)
            elif is_empty(cell):
                chars.append(".")
            else:
                chars.append(normalize_word(cell)[:1])
        lines.append("".join(chars))
    return lines
