"""Run timers stored as wall-clock end timestamps."""

import math

from ..puzzle.models import TierName
from .clock import Clock, now_ms
from .store import ProgressStore


class RunTimer:
    """
    Countdown for one puzzle tier.

    Only the end timestamp (ms) is persisted, so the remaining time survives
    reloads and suspension without drifting: remaining = max(0, end - now).
    """

    def __init__(self, store: ProgressStore, clock: Clock, puzzle_id: int, tier: TierName) -> None:
        self.store = store
        self.clock = clock
        self.puzzle_id = puzzle_id
        self.tier = TierName(tier)

    def start(self, seconds: int) -> int:
        """
        Start the countdown unless one is already running.

        Returns:
            Remaining seconds after starting (or resuming)
        """
        remaining = self.remaining_seconds()
        if remaining is not None and remaining > 0:
            return remaining
        self._write_remaining(seconds)
        return seconds

    def remaining_seconds(self) -> int | None:
        """Seconds left, 0 once expired, or None when no timer is stored."""
        end = self.store.timer_end(self.puzzle_id, self.tier)
        if end is None:
            return None
        remaining = max(0, math.ceil((end - now_ms(self.clock)) / 1000))
        if remaining == 0:
            self.store.clear_timer(self.puzzle_id, self.tier)
        return remaining

    def is_expired(self) -> bool:
        """True once time ran out or the stored end time is gone.

        The key is deleted when the countdown reaches zero, so a missing timer
        reads as expired. Clearing it from outside (a full progress reset)
        ends the run the same way.
        """
        remaining = self.remaining_seconds()
        return remaining is None or remaining == 0

    def extend(self, seconds: int) -> int:
        """Add ``seconds`` to what is left (restarting from zero when expired)."""
        remaining = self.remaining_seconds() or 0
        total = remaining + seconds
        self._write_remaining(total)
        return total

    def clear(self) -> None:
        self.store.clear_timer(self.puzzle_id, self.tier)

    def _write_remaining(self, seconds: int) -> None:
        if seconds <= 0:
            self.store.clear_timer(self.puzzle_id, self.tier)
            return
        self.store.set_timer_end(self.puzzle_id, self.tier, now_ms(self.clock) + seconds * 1000)
