"""Cascading error filtering for content validation errors."""

from typing import Dict, List, Optional, Tuple

from ..puzzle.models import TierName
from .models import ValidationError


# Cascade level constants
FATAL = 0  # Nothing to check: no puzzles, clashing puzzle ids
CRITICAL = 1  # Malformed word list entries
HIGH = 2  # Word lists disagree with each other
MEDIUM = 3  # Words the grid, wheel or thresholds cannot support
LOW = 4  # Ladder calendar problems

Scope = Tuple[Optional[int], Optional[TierName]]


def _filter_group(errors: List[ValidationError]) -> List[ValidationError]:
    by_level: Dict[int, List[ValidationError]] = {}
    for err in errors:
        by_level.setdefault(err.cascade_level, []).append(err)

    # Level 0 (FATAL): Show only these
    if FATAL in by_level:
        return by_level[FATAL]

    # Level 1 (CRITICAL): bad entries make every list comparison noisy
    if CRITICAL in by_level:
        return by_level[CRITICAL] + by_level.get(LOW, [])

    # Level 2 (HIGH): list mismatches, plus playability and ladder problems
    if HIGH in by_level:
        return by_level[HIGH] + by_level.get(MEDIUM, []) + by_level.get(LOW, [])

    return list(errors)


def filter_cascading_errors(
    errors: List[ValidationError],
    max_errors: int = 10
) -> List[ValidationError]:
    """
    Filter out cascading errors based on hierarchy.

    Errors are grouped by scope (puzzle id and tier) so a broken tier never
    hides findings about another. Within each scope:
    - Level 0 (FATAL) present → Show ONLY Level 0 errors
    - Level 1 (CRITICAL) present → Show Level 1 + Level 4
    - Level 2 (HIGH) present → Show Level 2 + Level 3 + Level 4
    - Otherwise → Show all errors

    A FATAL error without a scope hides every other error.

    Args:
        errors: List of validation errors to filter
        max_errors: Maximum number of errors kept per scope (default 10)

    Returns:
        Filtered list of errors, scopes in first-seen order
    """
    if not errors:
        return errors

    global_fatal = [e for e in errors if e.cascade_level == FATAL and e.puzzle_id is None]
    if global_fatal:
        return global_fatal[:max_errors]

    groups: Dict[Scope, List[ValidationError]] = {}
    for err in errors:
        groups.setdefault((err.puzzle_id, err.tier), []).append(err)

    result: List[ValidationError] = []
    for group in groups.values():
        kept = _filter_group(group)

        if len(kept) > max_errors:
            # Keep first max_errors-1, add summary for rest
            shown = kept[:max_errors - 1]
            num_hidden = len(kept) - len(shown)
            shown.append(ValidationError(
                code="ADDITIONAL_ERRORS",
                message=f"... and {num_hidden} more similar error{'s' if num_hidden > 1 else ''}. Fix the above first.",
                puzzle_id=kept[0].puzzle_id,
                tier=kept[0].tier,
                cascade_level=kept[0].cascade_level,
            ))
            kept = shown

        result.extend(kept)

    return result
