import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..puzzle.classify import BonusFound, CrosswordFill, Rejected, RejectReason, WordLists, classify_word
from ..puzzle.grid import build_run_grid, place_word
from ..puzzle.models import Grid, PuzzleConfig, TierConfig, TierName
from ..puzzle.normalize import normalize_word, normalize_words
from ..utils.logger import get_logger
from .clock import Clock
from .models import GameSettings, InventoryDelta, RunSummary, SubmitResult
from .rewards import compute_reward
from .stars import compute_stars
from .store import ProgressStore
from .timer import RunTimer


logger = get_logger(__name__)


class PuzzleSession(BaseModel):
    """
    One attempt at a puzzle tier.

    Owns the mutable run grid and the words found so far. Only the derived
    tier progress is persisted; the grid is dropped when the run ends.

    Attributes:
        puzzle: The puzzle being played
        tier: Which tier of the puzzle
        lists: Normalized word sets for the tier
        store: Persisted progress, inventory and timers
        timer: Countdown for this puzzle tier
        run_id: Identifier used to claim the completion reward once
        run_grid: Current grid, starting from the template with letters cleared
        crossword_words: Words placed into the crossword, in order found
        bonus_words: Bonus words, in order found
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    puzzle: PuzzleConfig
    tier: TierName
    lists: WordLists
    store: ProgressStore
    timer: RunTimer
    settings: GameSettings = Field(default_factory=GameSettings)
    run_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    run_grid: Grid = Field(default_factory=list)
    crossword_words: List[str] = Field(default_factory=list)
    bonus_words: List[str] = Field(default_factory=list)
    reward_videos_used: int = 0
    purchase_used: bool = False
    summary: Optional[RunSummary] = None

    def model_post_init(self, __context) -> None:
        """Build the run grid from the template when none was supplied."""
        if not self.run_grid:
            self.run_grid = build_run_grid(self.tier_config.grid, self.tier_config.fixed_letters)

    @classmethod
    def create(
        cls,
        puzzle: PuzzleConfig,
        tier: TierName,
        lists: WordLists,
        store: ProgressStore,
        clock: Clock,
        settings: Optional[GameSettings] = None,
    ) -> "PuzzleSession":
        """
        Factory method to start a run with its timer.

        A timer left running by an earlier, interrupted session for the same
        puzzle tier is resumed rather than reset.

        Args:
            puzzle: The puzzle to play
            tier: Which tier to play
            lists: Normalized word lists for the tier
            store: Persisted state
            clock: Source of "now" for the timer
            settings: Gameplay settings (defaults if omitted)

        Returns:
            A new PuzzleSession with a running timer
        """
        settings = settings or GameSettings()
        tier = TierName(tier)
        timer = RunTimer(store, clock, puzzle.id, tier)
        timer.start(settings.start_seconds)
        return cls(puzzle=puzzle, tier=tier, lists=lists, store=store, timer=timer, settings=settings)

    @property
    def tier_config(self) -> TierConfig:
        return self.puzzle.tiers[self.tier]

    @property
    def wheel(self) -> List[str]:
        return self.puzzle.wheel_for(self.tier)

    @property
    def found_words(self) -> List[str]:
        """Crossword and bonus words, deduplicated."""
        return normalize_words(self.crossword_words + self.bonus_words)

    @property
    def found_count(self) -> int:
        return len(self.found_words)

    @property
    def total_words(self) -> int:
        return self.lists.total

    @property
    def stars(self) -> int:
        return compute_stars(self.found_count, self.tier_config.star_thresholds, self.total_words)

    @property
    def is_complete(self) -> bool:
        return self.total_words > 0 and self.found_count >= self.total_words

    @property
    def is_finished(self) -> bool:
        return self.summary is not None

    @property
    def missing_words(self) -> List[str]:
        found = set(self.found_words)
        return sorted(word for word in self.lists.allowed if word not in found)

    @property
    def remaining_seconds(self) -> int:
        return self.timer.remaining_seconds() or 0

    def submit_word(self, raw: str) -> SubmitResult:
        """
        Classify a submitted word and apply it to the run.

        Crossword fills are written into the run grid, bonus words into the
        bonus list. Every accepted word records progress immediately, so a
        run abandoned halfway still keeps its best.

        Args:
            raw: The word as entered

        Returns:
            SubmitResult with the classification and the updated run state
        """
        if self.is_finished or self.timer.is_expired():
            classification = Rejected(word=normalize_word(raw), reason=RejectReason.TIME_EXPIRED)
        else:
            classification = classify_word(
                raw,
                lists=self.lists,
                found=self.found_words,
                template=self.tier_config.grid,
                run_grid=self.run_grid,
                wheel=self.wheel,
                min_length=self.settings.min_word_length,
            )

        if isinstance(classification, CrosswordFill):
            self.run_grid = place_word(self.run_grid, classification.word, classification.slot)
            self.crossword_words.append(classification.word)
        elif isinstance(classification, BonusFound):
            self.bonus_words.append(classification.word)

        if isinstance(classification, (CrosswordFill, BonusFound)):
            self.store.record_run(self.puzzle.id, self.tier, self.found_count, self.stars)

        return SubmitResult(
            classification=classification,
            found_count=self.found_count,
            total_words=self.total_words,
            stars=self.stars,
            run_grid=[list(row) for row in self.run_grid],
            is_complete=self.is_complete,
        )

    def extend_with_reward_video(self) -> bool:
        """Add time for a watched reward video, up to the per-run limit."""
        if self.is_finished or self.reward_videos_used >= self.settings.reward_video_limit:
            return False
        self.reward_videos_used += 1
        self.timer.extend(self.settings.reward_video_seconds)
        return True

    def extend_with_coins(self) -> bool:
        """Spend coins (cost depends on the tier) for extra time."""
        if self.is_finished:
            return False
        cost = self.settings.coin_cost_by_tier.get(self.tier, 0)
        if self.store.get_inventory().coins < cost:
            return False
        self.store.update_inventory(InventoryDelta(coins=-cost))
        self.timer.extend(self.settings.coin_extension_seconds)
        return True

    def extend_with_purchase(self) -> bool:
        """One-time purchased extension per run."""
        if self.is_finished or self.purchase_used:
            return False
        self.purchase_used = True
        self.timer.extend(self.settings.purchase_extension_seconds)
        return True

    def finish(self) -> RunSummary:
        """
        End the run: record progress, claim the reward once, clear the timer.

        Calling finish again returns the same summary without a second claim.
        """
        if self.summary is not None:
            return self.summary

        stars = self.stars
        progress = self.store.record_run(self.puzzle.id, self.tier, self.found_count, stars)
        reward = self.store.claim_reward(self.run_id, compute_reward(self.tier, stars))
        self.timer.clear()

        self.summary = RunSummary(
            run_id=self.run_id,
            puzzle_id=self.puzzle.id,
            tier=self.tier,
            found_count=self.found_count,
            total_words=self.total_words,
            stars=stars,
            crossword_words=list(self.crossword_words),
            bonus_words=list(self.bonus_words),
            progress=progress,
            reward=reward,
            missing_words=self.missing_words,
        )
        logger.info(
            "Run %s finished: puzzle=%s tier=%s found=%s/%s stars=%s",
            self.run_id, self.puzzle.id, self.tier.value, self.found_count, self.total_words, stars,
        )
        return self.summary

    def get_state(self) -> dict:
        """
        Get the current run state as a dictionary.

        Returns:
            Dictionary containing run state
        """
        return {
            "run_id": self.run_id,
            "puzzle_id": self.puzzle.id,
            "tier": self.tier.value,
            "found": self.found_count,
            "total": self.total_words,
            "stars": self.stars,
            "remaining_seconds": self.remaining_seconds,
            "is_complete": self.is_complete,
            "is_finished": self.is_finished,
        }
