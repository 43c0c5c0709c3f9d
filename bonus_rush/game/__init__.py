"""Progression layer for Bonus Rush: runs, unlocks, rewards and persisted state."""

from .models import (
    TierProgress,
    Inventory,
    InventoryDelta,
    RewardClaim,
    SessionPolicy,
    UnlockState,
    LockReason,
    UnlockStatus,
    NotFound,
    MasterySummary,
    LadderEntry,
    SubmitResult,
    RunSummary,
    GameSettings,
)
from .clock import Clock, SystemClock, FixedClock
from .stars import threshold_count, resolve_thresholds, compute_stars
from .rewards import REWARD_TABLE, compute_reward, apply_delta, reward_lines
from .store import KeyValueStore, MemoryStore, JsonFileStore, ProgressStore
from .timer import RunTimer
from .unlock import UnlockEngine, effective_date, policy_from_store
from .session import PuzzleSession
from .service import GameService, load_settings

__all__ = [
    "TierProgress",
    "Inventory",
    "InventoryDelta",
    "RewardClaim",
    "SessionPolicy",
    "UnlockState",
    "LockReason",
    "UnlockStatus",
    "NotFound",
    "MasterySummary",
    "LadderEntry",
    "SubmitResult",
    "RunSummary",
    "GameSettings",
    "Clock",
    "SystemClock",
    "FixedClock",
    "threshold_count",
    "resolve_thresholds",
    "compute_stars",
    "REWARD_TABLE",
    "compute_reward",
    "apply_delta",
    "reward_lines",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "ProgressStore",
    "RunTimer",
    "UnlockEngine",
    "effective_date",
    "policy_from_store",
    "PuzzleSession",
    "GameService",
    "load_settings",
]
