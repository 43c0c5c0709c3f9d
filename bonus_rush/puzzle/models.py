"""Data models for puzzle content: grids, slots, tiers and the unlock calendar."""

from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .normalize import normalize_words
from .parsing import parse_grid_rows, parse_wheel


# A grid is a list of rows of cell strings: "#" blocked, "" / " " / "." / "_"
# empty, anything else a letter.
Grid = List[List[str]]

BLOCKED_CELL = "#"
EMPTY_MARKERS = frozenset({"", " ", ".", "_"})


class Direction(str, Enum):
    """Slot orientation."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class TierName(str, Enum):
    """Difficulty bands within a puzzle, lowest first."""

    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"


TIER_ORDER: Tuple[TierName, ...] = (TierName.BRONZE, TierName.SILVER, TierName.GOLD)


def tier_index(tier: TierName) -> int:
    """Position of ``tier`` in the fixed tier order."""
    return TIER_ORDER.index(TierName(tier))


def parse_tier(value) -> Optional[TierName]:
    """Resolve a tier name case-insensitively, or None if unknown."""
    if isinstance(value, TierName):
        return value
    if not isinstance(value, str):
        return None
    for tier in TIER_ORDER:
        if tier.value.lower() == value.strip().lower():
            return tier
    return None


class Slot(BaseModel):
    """A maximal run of fillable cells (length >= 2) in one orientation."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    length: int = Field(..., ge=2)
    direction: Direction

    def cells(self) -> List[Tuple[int, int]]:
        """(row, col) of every covered cell, in reading order."""
        if self.direction == Direction.HORIZONTAL:
            return [(self.row, self.col + i) for i in range(self.length)]
        return [(self.row + i, self.col) for i in range(self.length)]


class StarThresholds(BaseModel):
    """Found-word thresholds for one, two and three stars.

    ``unit="percent"`` expresses thresholds as fractions of the tier's total
    word count; ``unit="count"`` as absolute word counts.
    """

    one_star: float = Field(..., ge=0)
    two_star: float = Field(..., ge=0)
    three_star: float = Field(..., ge=0)
    unit: Literal["percent", "count"] = "percent"

    def is_ordered(self) -> bool:
        return self.one_star <= self.two_star <= self.three_star


class TierConfig(BaseModel):
    """Grid, word lists and thresholds for one tier of a puzzle."""

    grid: Grid
    crossword_words: List[str] = Field(default_factory=list)
    bonus_words: Optional[List[str]] = None
    allowed_words: List[str] = Field(default_factory=list)
    star_thresholds: StarThresholds = Field(
        default_factory=lambda: StarThresholds(one_star=0.4, two_star=0.66, three_star=1.0)
    )
    fixed_letters: List[Tuple[int, int]] = Field(default_factory=list)
    wheel_letters: Optional[List[str]] = None

    @field_validator("grid", mode="before")
    @classmethod
    def _split_row_strings(cls, value):
        return parse_grid_rows(value)

    @field_validator("wheel_letters", mode="before")
    @classmethod
    def _split_wheel_override(cls, value):
        return parse_wheel(value)

    @property
    def derived_bonus_words(self) -> List[str]:
        """Bonus words as authored, or allowed minus crossword when omitted."""
        if self.bonus_words is not None:
            return normalize_words(self.bonus_words)
        crossword = set(normalize_words(self.crossword_words))
        return [w for w in normalize_words(self.allowed_words) if w not in crossword]

    @property
    def total_words(self) -> int:
        return len(normalize_words(self.allowed_words))


class PuzzleConfig(BaseModel):
    """A puzzle: its wheel and one configuration per tier."""

    id: int
    title: str = ""
    wheel_letters: List[str]
    tiers: Dict[TierName, TierConfig]

    @field_validator("wheel_letters", mode="before")
    @classmethod
    def _split_wheel_string(cls, value):
        return parse_wheel(value)

    @field_validator("tiers")
    @classmethod
    def _require_tiers(cls, value: Dict[TierName, TierConfig]) -> Dict[TierName, TierConfig]:
        if not value:
            raise ValueError("a puzzle needs at least one tier")
        return value

    def tier_names(self) -> List[TierName]:
        """Tiers this puzzle defines, in tier order."""
        return [tier for tier in TIER_ORDER if tier in self.tiers]

    def previous_tier(self, tier: TierName) -> Optional[TierName]:
        """The tier played before ``tier`` in this puzzle, if any."""
        names = self.tier_names()
        index = names.index(tier)
        return names[index - 1] if index > 0 else None

    def wheel_for(self, tier: TierName) -> List[str]:
        override = self.tiers[tier].wheel_letters
        return list(override) if override else list(self.wheel_letters)


class UnlockRecord(BaseModel):
    """Calendar entry opening a puzzle on a given date."""

    puzzle_id: int
    unlock_date: date
    label: Optional[str] = None
    coming_soon_window_days: Optional[int] = Field(default=None, ge=0)


class LadderConfig(BaseModel):
    """Weekly unlock calendar."""

    week_starts_on: Optional[date] = None
    unlocks: List[UnlockRecord] = Field(default_factory=list)

    def unlock_for(self, puzzle_id: int) -> Optional[UnlockRecord]:
        for record in self.unlocks:
            if record.puzzle_id == puzzle_id:
                return record
        return None


class Content(BaseModel):
    """All authored data: puzzles in ladder order plus the calendar."""

    puzzles: List[PuzzleConfig] = Field(default_factory=list)
    ladder: LadderConfig = Field(default_factory=LadderConfig)
