"""Star computation from found-word counts."""

import math
from typing import Tuple

from ..puzzle.models import StarThresholds


def threshold_count(total: int, pct: float) -> int:
    """ceil(total * pct), clamped to [0, total]."""
    # round first so 10 * 0.7 does not ceil to 8
    return max(0, min(total, math.ceil(round(total * pct, 9))))


def resolve_thresholds(thresholds: StarThresholds, total: int) -> Tuple[int, int, int]:
    """Turn percent or count thresholds into word counts for a tier of ``total`` words."""
    values = (thresholds.one_star, thresholds.two_star, thresholds.three_star)
    if thresholds.unit == "count":
        one, two, three = (max(0, min(total, int(v))) for v in values)
    else:
        one, two, three = (threshold_count(total, v) for v in values)
    return one, two, three


def compute_stars(found: int, thresholds: StarThresholds, total: int) -> int:
    """Stars earned for ``found`` words: 3, 2, 1 or 0."""
    one, two, three = resolve_thresholds(thresholds, total)
    if found >= three:
        return 3
    if found >= two:
        return 2
    if found >= one:
        return 1
    return 0
