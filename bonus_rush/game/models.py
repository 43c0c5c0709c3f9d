"""
Pydantic models for the progression layer.

This module contains the persisted records (progress, inventory), the
results handed back to callers (unlock status, mastery, submit and run
summaries) and the settings object. The logic classes (ProgressStore,
UnlockEngine, PuzzleSession, GameService) live in their own files.
"""

from datetime import date
from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..puzzle.classify import AlreadyFound, BonusFound, CrosswordFill, Rejected
from ..puzzle.models import Grid, TierName


def _to_int(value, default: int = 0) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return int(number)


class TierProgress(BaseModel):
    """Best result for one puzzle tier. Both fields only ever grow."""
    best_found: int = 0
    best_stars: int = 0

    @field_validator("best_found", mode="before")
    @classmethod
    def _clamp_found(cls, value) -> int:
        return max(0, _to_int(value))

    @field_validator("best_stars", mode="before")
    @classmethod
    def _clamp_stars(cls, value) -> int:
        return max(0, min(3, _to_int(value)))

    def merge(self, other: "TierProgress") -> "TierProgress":
        """Pointwise maximum; commutative, so write order never matters."""
        return TierProgress(
            best_found=max(self.best_found, other.best_found),
            best_stars=max(self.best_stars, other.best_stars),
        )


INVENTORY_COUNTERS = (
    "coins",
    "hints",
    "wildlife_tokens",
    "portrait_progress",
    "premium_portrait_drops",
)


class InventoryDelta(BaseModel):
    """Signed change to apply to the inventory."""
    model_config = ConfigDict(frozen=True)

    coins: int = 0
    hints: int = 0
    wildlife_tokens: int = 0
    portrait_progress: int = 0
    premium_portrait_drops: int = 0

    def is_empty(self) -> bool:
        return all(getattr(self, name) == 0 for name in INVENTORY_COUNTERS)


class Inventory(BaseModel):
    """Named counters, never negative."""
    coins: int = 500
    hints: int = 3
    wildlife_tokens: int = 0
    portrait_progress: int = 0
    premium_portrait_drops: int = 0

    @field_validator(*INVENTORY_COUNTERS, mode="before")
    @classmethod
    def _clamp_counter(cls, value) -> int:
        return max(0, _to_int(value))

    def apply(self, delta: InventoryDelta) -> "Inventory":
        """Add ``delta`` counter by counter, clamping each result at zero."""
        return Inventory(**{
            name: max(0, getattr(self, name) + getattr(delta, name))
            for name in INVENTORY_COUNTERS
        })


# Seeded the first time no inventory record exists
DEFAULT_INVENTORY = Inventory()
# Seeded by a full progress reset
RESET_INVENTORY = Inventory(coins=1000, hints=0)


class RewardClaim(BaseModel):
    """Outcome of claiming the reward for one run."""
    run_id: str
    applied: bool
    delta: InventoryDelta
    inventory: Inventory


class SessionPolicy(BaseModel):
    """Debug and demo inputs to unlock evaluation."""
    model_config = ConfigDict(frozen=True)

    bypass_unlocks: bool = False
    date_offset_days: int = 0


class UnlockState(str, Enum):
    UNLOCKED = "UNLOCKED"
    COMING_SOON = "COMING_SOON"
    LOCKED = "LOCKED"


class LockReason(str, Enum):
    PREREQUISITE_UNMET = "PREREQUISITE_UNMET"
    WEEKLY_GATE = "WEEKLY_GATE"


class UnlockStatus(BaseModel):
    """Derived gate state for a puzzle or a puzzle tier."""
    kind: Literal["unlock_status"] = "unlock_status"
    puzzle_id: int
    tier: Optional[TierName] = None
    state: UnlockState
    reason: Optional[LockReason] = None
    prerequisite_met: bool
    weekly_gate_met: bool
    unlock_date: Optional[date] = None
    days_until_unlock: int = 0

    @property
    def is_unlocked(self) -> bool:
        return self.state == UnlockState.UNLOCKED


class NotFound(BaseModel):
    """A caller asked for a puzzle or tier that does not exist."""
    kind: Literal["not_found"] = "not_found"
    puzzle_id: int
    tier: Optional[TierName] = None

    @property
    def message(self) -> str:
        if self.tier is None:
            return f"Puzzle {self.puzzle_id} not found"
        return f"Puzzle {self.puzzle_id} has no {self.tier.value} tier"


class MasterySummary(BaseModel):
    """Tier and stars shown for a puzzle on the ladder."""
    puzzle_id: int
    display_tier: TierName
    display_stars: int = 0
    is_mastered: bool = False


class LadderEntry(BaseModel):
    """One rung of the ladder."""
    puzzle_id: int
    title: str = ""
    label: Optional[str] = None
    status: UnlockStatus
    tiers: Dict[TierName, UnlockStatus] = Field(default_factory=dict)
    mastery: MasterySummary


class SubmitResult(BaseModel):
    """State of a run after one submitted word."""
    classification: Union[CrosswordFill, BonusFound, AlreadyFound, Rejected] = Field(..., discriminator="kind")
    found_count: int = 0
    total_words: int = 0
    stars: int = 0
    run_grid: Grid = Field(default_factory=list)
    is_complete: bool = False

    @property
    def accepted(self) -> bool:
        return self.classification.kind in ("crossword_fill", "bonus_found")


class RunSummary(BaseModel):
    """Final result of a finished run."""
    run_id: str
    puzzle_id: int
    tier: TierName
    found_count: int
    total_words: int
    stars: int
    crossword_words: List[str] = Field(default_factory=list)
    bonus_words: List[str] = Field(default_factory=list)
    progress: TierProgress
    reward: RewardClaim
    missing_words: List[str] = Field(default_factory=list)


class GameSettings(BaseModel):
    """Tunable gameplay settings, optionally loaded from YAML."""
    start_seconds: int = Field(default=60, ge=1)
    coming_soon_window_days: int = Field(default=7, ge=0)
    min_word_length: int = Field(default=3, ge=1)
    reward_video_seconds: int = 30
    reward_video_limit: int = 3
    coin_extension_seconds: int = 30
    coin_cost_by_tier: Dict[TierName, int] = Field(default_factory=lambda: {
        TierName.BRONZE: 50,
        TierName.SILVER: 100,
        TierName.GOLD: 150,
    })
    purchase_extension_seconds: int = 60
