"""Persisted progress, inventory, reward claims and timers over an injected key-value store."""

import json
import math
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Protocol, Set, Tuple

from ..puzzle.models import TierName, parse_tier
from ..utils.logger import get_logger
from .models import (
    DEFAULT_INVENTORY,
    INVENTORY_COUNTERS,
    RESET_INVENTORY,
    Inventory,
    InventoryDelta,
    RewardClaim,
    TierProgress,
)


logger = get_logger(__name__)

PROGRESS_KEY = "bonus-rush.progress.v3"
INVENTORY_KEY = "bonus-rush.inventory.v1"
CLAIMED_RUNS_KEY = "bonus-rush.claimedRuns.v1"
TIMER_PREFIX = "bonus-rush.timerEndsAt"
DEMO_MODE_KEY = "bonus-rush.demoMode"
DEBUG_ADVANCE_DAYS_KEY = "bonus-rush.debugAdvanceDays"

ProgressState = Dict[int, Dict[TierName, TierProgress]]


class KeyValueStore(Protocol):
    """Raw string storage with get/set/delete semantics."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """All keys in one JSON object on disk, rewritten on every change."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store file %s: %s", self.path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring store file %s: expected a JSON object", self.path)
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2, sort_keys=True)

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if key in self.data:
            del self.data[key]
            self._flush()


def timer_key(puzzle_id: int, tier: TierName) -> str:
    return f"{TIMER_PREFIX}.{puzzle_id}.{TierName(tier).value}"


class ProgressStore:
    """
    Typed records over a raw key-value store.

    Reads are forgiving: malformed JSON counts as absent and out-of-range
    numbers are clamped. Progress writes merge by pointwise maximum, so runs
    recorded out of order can never lower a stored best.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def _read_json(self, key: str) -> Any:
        raw = self.kv.get(key)
        if raw is None or raw == "":
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed JSON under %s", key)
            return None

    def _write_json(self, key: str, value: Any) -> None:
        self.kv.set(key, json.dumps(value, sort_keys=True))

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    @staticmethod
    def _sanitize_progress(data: Any) -> ProgressState:
        if not isinstance(data, dict):
            return {}

        progress: ProgressState = {}
        for raw_id, tiers in data.items():
            try:
                puzzle_id = int(raw_id)
            except (TypeError, ValueError):
                continue
            if not isinstance(tiers, dict):
                continue
            for raw_tier, record in tiers.items():
                tier = parse_tier(raw_tier)
                if tier is None:
                    continue
                record = record if isinstance(record, dict) else {}
                progress.setdefault(puzzle_id, {})[tier] = TierProgress(
                    best_found=record.get("best_found", 0),
                    best_stars=record.get("best_stars", 0),
                )
        return progress

    def get_progress(self) -> ProgressState:
        return self._sanitize_progress(self._read_json(PROGRESS_KEY))

    def set_progress(self, progress: ProgressState) -> None:
        self._write_json(PROGRESS_KEY, {
            str(puzzle_id): {TierName(tier).value: record.model_dump() for tier, record in tiers.items()}
            for puzzle_id, tiers in progress.items()
        })

    def tier_progress(self, puzzle_id: int, tier: TierName) -> TierProgress:
        return self.get_progress().get(puzzle_id, {}).get(TierName(tier), TierProgress())

    def best_stars(self, puzzle_id: int) -> int:
        """Best stars over every tier of a puzzle."""
        tiers = self.get_progress().get(puzzle_id, {})
        return max((record.best_stars for record in tiers.values()), default=0)

    def record_run(self, puzzle_id: int, tier: TierName, found: int, stars: int) -> TierProgress:
        """Merge a run result into the stored best for puzzle x tier."""
        tier = TierName(tier)
        progress = self.get_progress()
        current = progress.get(puzzle_id, {}).get(tier, TierProgress())
        merged = current.merge(TierProgress(best_found=found, best_stars=stars))
        progress.setdefault(puzzle_id, {})[tier] = merged
        self.set_progress(progress)
        logger.debug(
            "record_run puzzle=%s tier=%s found=%s stars=%s -> best %s/%s",
            puzzle_id, tier.value, found, stars, merged.best_found, merged.best_stars,
        )
        return merged

    # ------------------------------------------------------------------
    # Inventory and reward claims
    # ------------------------------------------------------------------

    def _write_inventory(self, inventory: Inventory) -> None:
        self._write_json(INVENTORY_KEY, inventory.model_dump())

    def get_inventory(self) -> Inventory:
        """Stored inventory, seeding and persisting the default when missing or unreadable."""
        data = self._read_json(INVENTORY_KEY)
        if not isinstance(data, dict):
            inventory = DEFAULT_INVENTORY.model_copy()
        else:
            inventory = Inventory(**{
                name: data.get(name, getattr(DEFAULT_INVENTORY, name))
                for name in INVENTORY_COUNTERS
            })
        self._write_inventory(inventory)
        return inventory

    def update_inventory(self, delta: InventoryDelta) -> Inventory:
        inventory = self.get_inventory().apply(delta)
        self._write_inventory(inventory)
        return inventory

    def claimed_runs(self) -> Set[str]:
        data = self._read_json(CLAIMED_RUNS_KEY)
        if not isinstance(data, list):
            return set()
        return {str(run_id) for run_id in data}

    def claim_reward(self, run_id: str, delta: InventoryDelta) -> RewardClaim:
        """
        Apply the reward for ``run_id`` at most once.

        A repeated claim, or an empty delta, leaves the inventory untouched
        and reports ``applied=False``.
        """
        claimed = self.claimed_runs()
        if run_id in claimed or delta.is_empty():
            if run_id in claimed:
                logger.debug("Reward for run %s already claimed", run_id)
            return RewardClaim(run_id=run_id, applied=False, delta=delta, inventory=self.get_inventory())

        claimed.add(run_id)
        self._write_json(CLAIMED_RUNS_KEY, sorted(claimed))
        inventory = self.update_inventory(delta)
        logger.debug("Reward for run %s applied: %s", run_id, delta.model_dump())
        return RewardClaim(run_id=run_id, applied=True, delta=delta, inventory=inventory)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def timer_end(self, puzzle_id: int, tier: TierName) -> Optional[int]:
        """Stored end timestamp in ms, or None when no valid timer exists."""
        key = timer_key(puzzle_id, tier)
        raw = self.kv.get(key)
        if raw is None:
            return None
        try:
            value = float(raw)
        except (TypeError, ValueError):
            value = math.nan
        if not math.isfinite(value) or value <= 0:
            logger.warning("Clearing invalid timer value %r under %s", raw, key)
            self.kv.delete(key)
            return None
        return int(value)

    def set_timer_end(self, puzzle_id: int, tier: TierName, end_ms: int) -> None:
        self.kv.set(timer_key(puzzle_id, tier), str(int(end_ms)))

    def clear_timer(self, puzzle_id: int, tier: TierName) -> None:
        self.kv.delete(timer_key(puzzle_id, tier))

    # ------------------------------------------------------------------
    # Debug inputs
    # ------------------------------------------------------------------

    def demo_mode(self) -> bool:
        raw = self.kv.get(DEMO_MODE_KEY)
        return raw is not None and raw.strip().lower() in ("1", "true", "yes", "on")

    def set_demo_mode(self, enabled: bool) -> None:
        self.kv.set(DEMO_MODE_KEY, "true" if enabled else "false")

    def debug_day_offset(self) -> int:
        raw = self.kv.get(DEBUG_ADVANCE_DAYS_KEY)
        if raw is None:
            return 0
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return 0
        return int(value) if math.isfinite(value) else 0

    def set_debug_day_offset(self, days: int) -> None:
        self.kv.set(DEBUG_ADVANCE_DAYS_KEY, str(int(days)))

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset_all(self, timer_keys: Iterable[Tuple[int, TierName]] = ()) -> None:
        """Wipe progress and claims, seed the reset inventory and drop timers."""
        self.set_progress({})
        self.kv.delete(CLAIMED_RUNS_KEY)
        self._write_inventory(RESET_INVENTORY.model_copy())
        for puzzle_id, tier in timer_keys:
            self.clear_timer(puzzle_id, tier)
        logger.info("All progress reset")
