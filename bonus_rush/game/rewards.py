"""Reward table from (tier, stars) to an inventory delta."""

from typing import Dict, List, Tuple

from ..puzzle.models import TierName
from .models import Inventory, InventoryDelta


EMPTY_DELTA = InventoryDelta()

REWARD_TABLE: Dict[Tuple[TierName, int], InventoryDelta] = {
    (TierName.BRONZE, 1): InventoryDelta(coins=25),
    (TierName.BRONZE, 2): InventoryDelta(coins=50),
    (TierName.BRONZE, 3): InventoryDelta(coins=100, hints=1),
    (TierName.SILVER, 1): InventoryDelta(coins=50),
    (TierName.SILVER, 2): InventoryDelta(coins=100, hints=1),
    (TierName.SILVER, 3): InventoryDelta(coins=150, hints=1, wildlife_tokens=1),
    (TierName.GOLD, 1): InventoryDelta(coins=75),
    (TierName.GOLD, 2): InventoryDelta(coins=150, hints=1),
    (TierName.GOLD, 3): InventoryDelta(coins=200, hints=1, wildlife_tokens=1, portrait_progress=1),
}

# (counter, singular, plural) in display order
_REWARD_LABELS = (
    ("coins", "coin", "coins"),
    ("hints", "hint", "hints"),
    ("wildlife_tokens", "wildlife token", "wildlife tokens"),
    ("portrait_progress", "portrait progress", "portrait progress"),
    ("premium_portrait_drops", "premium portrait drop", "premium portrait drops"),
)


def compute_reward(tier: TierName, stars: int) -> InventoryDelta:
    """Inventory delta earned by finishing ``tier`` with ``stars`` stars.

    Total over every tier and 0..3 stars; out-of-range stars are clamped and
    zero stars earns nothing.
    """
    stars = max(0, min(3, int(stars)))
    if stars == 0:
        return EMPTY_DELTA
    return REWARD_TABLE[(TierName(tier), stars)]


def apply_delta(inventory: Inventory, delta: InventoryDelta) -> Inventory:
    """Add ``delta`` to ``inventory``, clamping every counter at zero."""
    return inventory.apply(delta)


def reward_lines(delta: InventoryDelta) -> List[str]:
    """Human-readable lines such as "+200 coins" for a delta."""
    lines = []
    for name, singular, plural in _REWARD_LABELS:
        amount = getattr(delta, name)
        if amount:
            label = singular if abs(amount) == 1 else plural
            lines.append(f"{amount:+d} {label}")
    return lines
