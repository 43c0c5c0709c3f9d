"""Classification of submitted words into crossword fills, bonus words or rejections."""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..utils.logger import get_logger
from .grid import find_matching_slot
from .models import PuzzleConfig, Slot, TierConfig, TierName
from .normalize import normalize_word, normalize_words
from .wheel import is_valid_against_wheel


logger = get_logger(__name__)

MIN_WORD_LENGTH = 3


class RejectReason(str, Enum):
    """Why a submitted word was not accepted."""

    EMPTY = "EMPTY"
    NOT_ALLOWED = "NOT_ALLOWED"
    TOO_SHORT = "TOO_SHORT"
    NOT_ON_WHEEL = "NOT_ON_WHEEL"
    TIME_EXPIRED = "TIME_EXPIRED"


REJECT_MESSAGES: Dict[RejectReason, str] = {
    RejectReason.EMPTY: "Build a word first.",
    RejectReason.NOT_ALLOWED: "Word is not in this puzzle's list.",
    RejectReason.TOO_SHORT: "Words must be at least 3 letters.",
    RejectReason.NOT_ON_WHEEL: "Word uses letters that are not on the wheel.",
    RejectReason.TIME_EXPIRED: "Time is up.",
}


class CrosswordFill(BaseModel):
    """The word fills a crossword slot."""
    kind: Literal["crossword_fill"] = "crossword_fill"
    word: str
    slot: Slot


class BonusFound(BaseModel):
    """The word counts as a bonus word.

    ``fallback`` is set when a crossword word had no open slot left.
    """
    kind: Literal["bonus_found"] = "bonus_found"
    word: str
    fallback: bool = False


class AlreadyFound(BaseModel):
    """The word was found earlier in this run; nothing changes."""
    kind: Literal["already_found"] = "already_found"
    word: str


class Rejected(BaseModel):
    """The word was refused."""
    kind: Literal["rejected"] = "rejected"
    word: str = ""
    reason: RejectReason

    @property
    def message(self) -> str:
        return REJECT_MESSAGES[self.reason]


Classification = Union[CrosswordFill, BonusFound, AlreadyFound, Rejected]


class WordLists(BaseModel):
    """Normalized word sets for one puzzle tier."""

    model_config = ConfigDict(frozen=True)

    allowed: FrozenSet[str]
    crossword: FrozenSet[str]
    bonus: FrozenSet[str]

    @classmethod
    def from_tier(cls, tier: TierConfig) -> "WordLists":
        return cls(
            allowed=frozenset(normalize_words(tier.allowed_words)),
            crossword=frozenset(normalize_words(tier.crossword_words)),
            bonus=frozenset(tier.derived_bonus_words),
        )

    @property
    def total(self) -> int:
        return len(self.allowed)


class WordListCache:
    """Normalized word lists keyed by (puzzle id, tier).

    Entries live until ``invalidate`` is called when content is reloaded.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[int, TierName], WordLists] = {}

    def get(self, puzzle: PuzzleConfig, tier: TierName) -> WordLists:
        key = (puzzle.id, TierName(tier))
        lists = self._entries.get(key)
        if lists is None:
            lists = WordLists.from_tier(puzzle.tiers[key[1]])
            self._entries[key] = lists
        return lists

    def invalidate(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def classify_word(
    raw: str,
    *,
    lists: WordLists,
    found: Iterable[str],
    template: Sequence[Sequence[str]],
    run_grid: Sequence[Sequence[str]],
    wheel: Iterable[str],
    min_length: int = MIN_WORD_LENGTH,
) -> Classification:
    """
    Resolve a submitted word against the tier's lists and the current run grid.

    Checks run in a fixed order: empty input, already found, not allowed,
    too short, not buildable from the wheel. A crossword word whose slot is
    no longer open is demoted to a bonus word rather than refused.

    Args:
        raw: The word as typed or traced on the wheel
        lists: Normalized word sets for the tier
        found: Words already found this run (crossword and bonus)
        template: The tier's template grid
        run_grid: The current run grid
        wheel: Letters on the wheel
        min_length: Global minimum word length

    Returns:
        One of CrosswordFill, BonusFound, AlreadyFound or Rejected
    """
    word = normalize_word(raw)
    if not word:
        return Rejected(word="", reason=RejectReason.EMPTY)

    if word in set(found):
        return AlreadyFound(word=word)

    if word not in lists.allowed:
        return Rejected(word=word, reason=RejectReason.NOT_ALLOWED)

    if len(word) < min_length:
        return Rejected(word=word, reason=RejectReason.TOO_SHORT)

    if not is_valid_against_wheel(word, wheel):
        return Rejected(word=word, reason=RejectReason.NOT_ON_WHEEL)

    if word in lists.crossword:
        slot: Optional[Slot] = find_matching_slot(template, run_grid, word)
        if slot is not None:
            return CrosswordFill(word=word, slot=slot)
        logger.warning("Crossword word %s has no open slot; counting it as a bonus word", word)
        return BonusFound(word=word, fallback=True)

    return BonusFound(word=word)
