"""Puzzle solving: normalization, slots, placement, wheel checks and classification."""

from .models import (
    BLOCKED_CELL,
    TIER_ORDER,
    Content,
    Direction,
    Grid,
    LadderConfig,
    PuzzleConfig,
    Slot,
    StarThresholds,
    TierConfig,
    TierName,
    UnlockRecord,
    parse_tier,
    tier_index,
)
from .normalize import normalize_word, normalize_words
from .parsing import parse_grid, parse_grid_rows
from .grid import (
    build_run_grid,
    can_place_word,
    find_matching_slot,
    get_slots,
    get_slots_cached,
    place_word,
    slot_word,
)
from .wheel import count_letters, is_valid_against_wheel
from .classify import (
    MIN_WORD_LENGTH,
    AlreadyFound,
    BonusFound,
    Classification,
    CrosswordFill,
    Rejected,
    RejectReason,
    WordListCache,
    WordLists,
    classify_word,
)
from .content import Catalog, DEFAULT_CONTENT_PATH, load_content, parse_content

__all__ = [
    # Models
    "BLOCKED_CELL",
    "TIER_ORDER",
    "Content",
    "Direction",
    "Grid",
    "LadderConfig",
    "PuzzleConfig",
    "Slot",
    "StarThresholds",
    "TierConfig",
    "TierName",
    "UnlockRecord",
    "parse_tier",
    "tier_index",
    # Normalization and parsing
    "normalize_word",
    "normalize_words",
    "parse_grid",
    "parse_grid_rows",
    # Slots and placement
    "build_run_grid",
    "can_place_word",
    "find_matching_slot",
    "get_slots",
    "get_slots_cached",
    "place_word",
    "slot_word",
    # Wheel
    "count_letters",
    "is_valid_against_wheel",
    # Classification
    "MIN_WORD_LENGTH",
    "AlreadyFound",
    "BonusFound",
    "Classification",
    "CrosswordFill",
    "Rejected",
    "RejectReason",
    "WordListCache",
    "WordLists",
    "classify_word",
    # Content
    "Catalog",
    "DEFAULT_CONTENT_PATH",
    "load_content",
    "parse_content",
]
