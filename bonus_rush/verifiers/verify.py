"""
Content verification module for validating authored Bonus Rush puzzles.

Validates:
1. Catalog rules (at least one puzzle, unique puzzle ids)
2. Word list entries (canonical uppercase, at least 3 letters, no duplicates)
3. List consistency (crossword and bonus words are allowed, disjoint, and cover allowed)
4. Playability (words buildable from the wheel, crossword words have a slot, thresholds sane)
5. Ladder calendar (unlock records point at known puzzles)
"""

from typing import List, Optional, Set, Tuple

from ..puzzle.classify import MIN_WORD_LENGTH
from ..puzzle.grid import get_slots, slot_word
from ..puzzle.models import Content, PuzzleConfig, TierName
from ..puzzle.normalize import normalize_word, normalize_words
from ..puzzle.wheel import is_valid_against_wheel
from .cascade import CRITICAL, FATAL, HIGH, LOW, MEDIUM
from .models import ValidationError, ValidationResult


def validate_word_list(
    words: List[str],
    label: str,
    puzzle_id: Optional[int] = None,
    tier: Optional[TierName] = None,
) -> Tuple[Set[str], List[ValidationError]]:
    """Check one authored list entry by entry; returns the normalized set and errors."""
    errors: List[ValidationError] = []
    seen: Set[str] = set()

    for raw in words:
        normalized = normalize_word(raw)
        if not normalized:
            errors.append(ValidationError(
                code="EMPTY_WORD",
                message=f"{label} contains an empty/invalid entry",
                puzzle_id=puzzle_id,
                tier=tier,
                word=str(raw),
                cascade_level=CRITICAL
            ))
            continue

        if normalized != raw:
            errors.append(ValidationError(
                code="NON_CANONICAL_WORD",
                message=f"{label} has non-uppercase or non-alpha value '{raw}'",
                puzzle_id=puzzle_id,
                tier=tier,
                word=str(raw),
                cascade_level=CRITICAL
            ))

        if len(normalized) < MIN_WORD_LENGTH:
            errors.append(ValidationError(
                code="SHORT_WORD",
                message=f"{label} contains word shorter than {MIN_WORD_LENGTH} letters: '{raw}'",
                puzzle_id=puzzle_id,
                tier=tier,
                word=normalized,
                cascade_level=CRITICAL
            ))

        if normalized in seen:
            errors.append(ValidationError(
                code="DUPLICATE_WORD",
                message=f"{label} has duplicate word '{raw}'",
                puzzle_id=puzzle_id,
                tier=tier,
                word=normalized,
                cascade_level=CRITICAL
            ))
        seen.add(normalized)

    return seen, errors


def validate_tier(puzzle: PuzzleConfig, tier: TierName) -> Tuple[List[ValidationError], List[ValidationError]]:
    """Validate one puzzle tier: its lists, wheel, thresholds and grid."""
    errors: List[ValidationError] = []
    warnings: List[ValidationError] = []
    config = puzzle.tiers[tier]

    def error(code: str, message: str, level: int, word: Optional[str] = None) -> None:
        errors.append(ValidationError(
            code=code, message=message, puzzle_id=puzzle.id, tier=tier, word=word, cascade_level=level
        ))

    allowed, list_errors = validate_word_list(config.allowed_words, "allowed_words", puzzle.id, tier)
    errors.extend(list_errors)
    crossword, list_errors = validate_word_list(config.crossword_words, "crossword_words", puzzle.id, tier)
    errors.extend(list_errors)
    if config.bonus_words is not None:
        bonus, list_errors = validate_word_list(config.bonus_words, "bonus_words", puzzle.id, tier)
        errors.extend(list_errors)
    else:
        bonus = set(config.derived_bonus_words)

    for word in sorted(crossword - allowed):
        error("CROSSWORD_NOT_ALLOWED", f"crossword_words contains '{word}' which is missing from allowed_words",
              HIGH, word)
    for word in sorted(bonus - allowed):
        error("BONUS_NOT_ALLOWED", f"bonus_words contains '{word}' which is missing from allowed_words",
              HIGH, word)
    for word in sorted(bonus & crossword):
        error("WORD_IN_BOTH_LISTS", f"word '{word}' cannot appear in both crossword_words and bonus_words",
              HIGH, word)
    for word in sorted(allowed - (crossword | bonus)):
        error("ALLOWED_ORPHAN", f"allowed_words includes '{word}' not present in crossword_words or bonus_words",
              HIGH, word)

    wheel = puzzle.wheel_for(tier)
    for word in normalize_words(config.allowed_words):
        if not is_valid_against_wheel(word, wheel):
            error("NOT_ON_WHEEL", f"allowed word '{word}' cannot be built from wheel letters {''.join(wheel)}",
                  MEDIUM, word)

    thresholds = config.star_thresholds
    if not thresholds.is_ordered():
        error("THRESHOLD_ORDER", "star thresholds must be ordered one_star <= two_star <= three_star", MEDIUM)
    if thresholds.unit == "percent" and thresholds.three_star > 1:
        error("THRESHOLD_RANGE", f"three_star ({thresholds.three_star}) cannot exceed 1", MEDIUM)
    elif thresholds.unit == "count" and thresholds.three_star > len(allowed):
        error("THRESHOLD_RANGE",
              f"three_star ({thresholds.three_star:g}) cannot exceed the word count ({len(allowed)})", MEDIUM)

    slot_words = {slot_word(config.grid, slot) for slot in get_slots(config.grid)}
    slot_words = {word for word in slot_words if len(word) >= MIN_WORD_LENGTH}
    for word in sorted(crossword - slot_words):
        error("CROSSWORD_NO_SLOT", f"crossword word '{word}' does not match any slot in the grid", MEDIUM, word)
    for word in sorted(slot_words - crossword):
        warnings.append(ValidationError(
            code="GRID_WORD_UNLISTED",
            message=f"grid has fillable word '{word}' not listed in crossword_words",
            puzzle_id=puzzle.id,
            tier=tier,
            word=word,
            cascade_level=MEDIUM
        ))

    return errors, warnings


def validate_ladder(content: Content) -> List[ValidationError]:
    """Unlock records must reference puzzles that exist."""
    errors: List[ValidationError] = []
    known = {puzzle.id for puzzle in content.puzzles}
    for record in content.ladder.unlocks:
        if record.puzzle_id not in known:
            errors.append(ValidationError(
                code="UNKNOWN_UNLOCK_PUZZLE",
                message=f"Ladder unlock references unknown puzzle id {record.puzzle_id}",
                puzzle_id=record.puzzle_id,
                cascade_level=LOW
            ))
    return errors


def verify_content(content: Content) -> ValidationResult:
    """
    Main verification function: validates loaded puzzle content.

    Returns a ValidationResult with:
    - valid: True if the content passes all checks
    - errors: List of validation errors
    - warnings: List of warnings (e.g., fillable grid words not listed)
    - puzzles_checked / tiers_checked: How much content was inspected
    """
    all_errors: List[ValidationError] = []
    all_warnings: List[ValidationError] = []

    if not content.puzzles:
        all_errors.append(ValidationError(
            code="NO_PUZZLES",
            message="No puzzles found in content",
            cascade_level=FATAL
        ))

    seen_ids: Set[int] = set()
    tiers_checked = 0
    for puzzle in content.puzzles:
        if puzzle.id in seen_ids:
            all_errors.append(ValidationError(
                code="DUPLICATE_PUZZLE_ID",
                message=f"Puzzle id {puzzle.id} is used more than once",
                puzzle_id=puzzle.id,
                cascade_level=FATAL
            ))
            continue
        seen_ids.add(puzzle.id)

        for tier in puzzle.tier_names():
            tier_errors, tier_warnings = validate_tier(puzzle, tier)
            all_errors.extend(tier_errors)
            all_warnings.extend(tier_warnings)
            tiers_checked += 1

    all_errors.extend(validate_ladder(content))

    return ValidationResult(
        valid=len(all_errors) == 0,
        errors=all_errors,
        warnings=all_warnings,
        puzzles_checked=len(seen_ids),
        tiers_checked=tiers_checked,
    )
