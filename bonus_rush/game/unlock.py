"""Weekly and prerequisite gating for puzzles and tiers, plus mastery display."""

from datetime import date, timedelta
from typing import List, Optional, Union

from ..puzzle.content import Catalog
from ..puzzle.models import TierName, UnlockRecord, parse_tier
from .clock import Clock
from .models import (
    LadderEntry,
    LockReason,
    MasterySummary,
    NotFound,
    SessionPolicy,
    TierProgress,
    UnlockState,
    UnlockStatus,
)
from .store import ProgressStore


DEFAULT_COMING_SOON_WINDOW_DAYS = 7


def effective_date(clock: Clock, policy: SessionPolicy) -> date:
    """Today's date shifted by the policy's debug offset."""
    return clock.now().date() + timedelta(days=policy.date_offset_days)


def policy_from_store(store: ProgressStore) -> SessionPolicy:
    """Read the demo flag and the debug day offset from persisted state."""
    return SessionPolicy(bypass_unlocks=store.demo_mode(), date_offset_days=store.debug_day_offset())


class UnlockEngine:
    """
    Computes locked / coming soon / unlocked states.

    A puzzle opens when both gates pass: the weekly gate (today has reached
    its calendar unlock date) and the prerequisite gate (the previous puzzle
    has at least one star in some tier). A tier additionally needs the
    previous tier of the same puzzle to have at least one star. The engine
    is pure given a date: callers pass ``today`` explicitly.
    """

    def __init__(
        self,
        catalog: Catalog,
        store: ProgressStore,
        coming_soon_window_days: int = DEFAULT_COMING_SOON_WINDOW_DAYS,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.coming_soon_window_days = coming_soon_window_days

    def puzzle_status(
        self,
        puzzle_id: int,
        today: date,
        policy: SessionPolicy = SessionPolicy(),
    ) -> Union[UnlockStatus, NotFound]:
        if self.catalog.get(puzzle_id) is None:
            return NotFound(puzzle_id=puzzle_id)

        previous = self.catalog.previous_puzzle(puzzle_id)
        prerequisite_met = previous is None or self.store.best_stars(previous.id) >= 1
        return self._evaluate(puzzle_id, None, prerequisite_met, self.catalog.unlock_for(puzzle_id), today, policy)

    def tier_status(
        self,
        puzzle_id: int,
        tier: TierName,
        today: date,
        policy: SessionPolicy = SessionPolicy(),
    ) -> Union[UnlockStatus, NotFound]:
        puzzle = self.catalog.get(puzzle_id)
        resolved = parse_tier(tier)
        if puzzle is None or resolved is None:
            return NotFound(puzzle_id=puzzle_id)
        tier = resolved
        if tier not in puzzle.tiers:
            return NotFound(puzzle_id=puzzle_id, tier=tier)

        puzzle_status = self.puzzle_status(puzzle_id, today, policy)
        previous_tier = puzzle.previous_tier(tier)
        tier_prerequisite = (
            previous_tier is None
            or self.store.tier_progress(puzzle_id, previous_tier).best_stars >= 1
        )
        prerequisite_met = puzzle_status.prerequisite_met and tier_prerequisite
        return self._evaluate(puzzle_id, tier, prerequisite_met, self.catalog.unlock_for(puzzle_id), today, policy)

    def is_unlocked(self, puzzle_id: int, tier: Optional[TierName] = None, *, today: date,
                    policy: SessionPolicy = SessionPolicy()) -> bool:
        if tier is None:
            status = self.puzzle_status(puzzle_id, today, policy)
        else:
            status = self.tier_status(puzzle_id, tier, today, policy)
        return isinstance(status, UnlockStatus) and status.is_unlocked

    def lock_reason(self, puzzle_id: int, tier: Optional[TierName] = None, *, today: date,
                    policy: SessionPolicy = SessionPolicy()) -> Optional[LockReason]:
        if tier is None:
            status = self.puzzle_status(puzzle_id, today, policy)
        else:
            status = self.tier_status(puzzle_id, tier, today, policy)
        return status.reason if isinstance(status, UnlockStatus) else None

    def mastery(self, puzzle_id: int) -> Union[MasterySummary, NotFound]:
        """Highest tier with stars (Gold > Silver > Bronze), else the lowest tier at 0."""
        puzzle = self.catalog.get(puzzle_id)
        if puzzle is None:
            return NotFound(puzzle_id=puzzle_id)

        tiers = self.store.get_progress().get(puzzle_id, {})
        names = puzzle.tier_names()
        for tier in reversed(names):
            stars = tiers.get(tier, TierProgress()).best_stars
            if stars > 0:
                return MasterySummary(
                    puzzle_id=puzzle_id,
                    display_tier=tier,
                    display_stars=stars,
                    is_mastered=tier == TierName.GOLD and stars >= 3,
                )
        return MasterySummary(puzzle_id=puzzle_id, display_tier=names[0], display_stars=0)

    def ladder(self, today: date, policy: SessionPolicy = SessionPolicy()) -> List[LadderEntry]:
        entries = []
        for puzzle in self.catalog.puzzles:
            record = self.catalog.unlock_for(puzzle.id)
            entries.append(LadderEntry(
                puzzle_id=puzzle.id,
                title=puzzle.title,
                label=record.label if record else None,
                status=self.puzzle_status(puzzle.id, today, policy),
                tiers={tier: self.tier_status(puzzle.id, tier, today, policy) for tier in puzzle.tier_names()},
                mastery=self.mastery(puzzle.id),
            ))
        return entries

    def _evaluate(
        self,
        puzzle_id: int,
        tier: Optional[TierName],
        prerequisite_met: bool,
        record: Optional[UnlockRecord],
        today: date,
        policy: SessionPolicy,
    ) -> UnlockStatus:
        unlock_date = record.unlock_date if record else None
        days_until = (unlock_date - today).days if unlock_date else 0
        weekly_gate_met = unlock_date is None or days_until <= 0
        window = self.coming_soon_window_days
        if record is not None and record.coming_soon_window_days is not None:
            window = record.coming_soon_window_days

        reason: Optional[LockReason] = None
        if policy.bypass_unlocks or (prerequisite_met and weekly_gate_met):
            state = UnlockState.UNLOCKED
        else:
            # prerequisite is reported first when both gates fail
            reason = LockReason.PREREQUISITE_UNMET if not prerequisite_met else LockReason.WEEKLY_GATE
            if prerequisite_met and 0 < days_until <= window:
                state = UnlockState.COMING_SOON
            else:
                state = UnlockState.LOCKED

        return UnlockStatus(
            puzzle_id=puzzle_id,
            tier=tier,
            state=state,
            reason=reason,
            prerequisite_met=prerequisite_met,
            weekly_gate_met=weekly_gate_met,
            unlock_date=unlock_date,
            days_until_unlock=max(0, days_until),
        )
