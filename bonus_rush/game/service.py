from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import ContentLoadError
from ..puzzle.classify import WordListCache
from ..puzzle.content import Catalog, load_content
from ..puzzle.models import Content, TierName, parse_tier
from ..utils.logger import get_logger
from .clock import Clock, SystemClock
from .models import GameSettings, Inventory, LadderEntry, NotFound, SessionPolicy, UnlockStatus
from .session import PuzzleSession
from .store import JsonFileStore, KeyValueStore, MemoryStore, ProgressStore
from .unlock import UnlockEngine, effective_date, policy_from_store


logger = get_logger(__name__)


def load_settings(settings_path: Optional[str | Path] = None) -> GameSettings:
    """
    Load gameplay settings from a YAML file.

    Args:
        settings_path: Path to the YAML file; defaults are used when omitted

    Returns:
        Validated GameSettings
    """
    if settings_path is None:
        return GameSettings()

    path = Path(settings_path)
    if not path.exists():
        raise ContentLoadError(f"Settings file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return GameSettings(**data)
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        raise ContentLoadError(f"Invalid settings in {path}: {e}") from e


class GameService:
    """
    Top-level facade for the game.

    Coordinates the catalog, the persisted state and the unlock rules, and
    hands out PuzzleSession objects for unlocked puzzle tiers.

    Attributes:
        catalog: Loaded content, looked up by puzzle id
        store: Typed persisted state
        clock: Source of "now" for timers and the weekly calendar
        settings: Gameplay settings
        word_lists: Normalized word lists per (puzzle id, tier)
        unlocks: Gating and mastery rules
    """

    def __init__(
        self,
        content: Content,
        store: Union[KeyValueStore, ProgressStore, None] = None,
        clock: Optional[Clock] = None,
        settings: Optional[GameSettings] = None,
    ) -> None:
        if store is None:
            store = MemoryStore()
        self.store = store if isinstance(store, ProgressStore) else ProgressStore(store)
        self.clock = clock or SystemClock()
        self.settings = settings or GameSettings()
        self.word_lists = WordListCache()
        self.catalog = Catalog(content)
        self.unlocks = UnlockEngine(self.catalog, self.store, self.settings.coming_soon_window_days)

    @classmethod
    def create(
        cls,
        content_path: Optional[str | Path] = None,
        store_path: Optional[str | Path] = None,
        settings_path: Optional[str | Path] = None,
        clock: Optional[Clock] = None,
    ) -> "GameService":
        """
        Factory method to build a service from files on disk.

        Args:
            content_path: Puzzle content YAML (bundled content by default)
            store_path: JSON file for persisted state (in memory when omitted)
            settings_path: Gameplay settings YAML (defaults when omitted)
            clock: Clock override, the system clock by default

        Returns:
            Configured GameService instance
        """
        content = load_content(content_path)
        kv: KeyValueStore = JsonFileStore(store_path) if store_path else MemoryStore()
        return cls(content, kv, clock=clock, settings=load_settings(settings_path))

    def reload(self, content: Content) -> None:
        """Swap in new content and drop every cached word list."""
        self.catalog = Catalog(content)
        self.word_lists.invalidate()
        self.unlocks = UnlockEngine(self.catalog, self.store, self.settings.coming_soon_window_days)
        logger.info("Content reloaded: %d puzzles", len(self.catalog.puzzles))

    def policy(self) -> SessionPolicy:
        return policy_from_store(self.store)

    def today(self) -> date:
        return effective_date(self.clock, self.policy())

    def ladder(self) -> List[LadderEntry]:
        return self.unlocks.ladder(self.today(), self.policy())

    def puzzle_status(self, puzzle_id: int) -> Union[UnlockStatus, NotFound]:
        return self.unlocks.puzzle_status(puzzle_id, self.today(), self.policy())

    def tier_status(self, puzzle_id: int, tier: TierName) -> Union[UnlockStatus, NotFound]:
        return self.unlocks.tier_status(puzzle_id, tier, self.today(), self.policy())

    def start_run(self, puzzle_id: int, tier: TierName) -> Union[PuzzleSession, UnlockStatus, NotFound]:
        """
        Start a run on a puzzle tier.

        Args:
            puzzle_id: Which puzzle
            tier: Which tier

        Returns:
            A PuzzleSession when the tier is unlocked, the locking
            UnlockStatus when it is not, or NotFound for unknown ids
        """
        status = self.tier_status(puzzle_id, tier)
        if isinstance(status, NotFound):
            return status
        tier = parse_tier(tier)
        if not status.is_unlocked:
            logger.info("Puzzle %s %s is locked: %s", puzzle_id, tier.value, status.reason)
            return status

        puzzle = self.catalog.require(puzzle_id, tier)
        session = PuzzleSession.create(
            puzzle=puzzle,
            tier=tier,
            lists=self.word_lists.get(puzzle, tier),
            store=self.store,
            clock=self.clock,
            settings=self.settings,
        )
        logger.debug("Started run %s on puzzle %s %s", session.run_id, puzzle_id, session.tier.value)
        return session

    def inventory(self) -> Inventory:
        return self.store.get_inventory()

    def set_demo_mode(self, enabled: bool) -> None:
        self.store.set_demo_mode(enabled)

    def advance_days(self, days: int) -> int:
        """Shift the debug calendar offset by ``days``; returns the new offset."""
        offset = self.store.debug_day_offset() + int(days)
        self.store.set_debug_day_offset(offset)
        logger.debug("Debug day offset now %d (today=%s)", offset, self.clock.now().date() + timedelta(days=offset))
        return offset

    def reset_all_progress(self) -> None:
        """Clear progress, claims and timers, and seed the reset inventory."""
        self.store.reset_all(self.catalog.timer_keys())
