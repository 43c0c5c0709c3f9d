"""Data models for content verification."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..puzzle.models import TierName


class ValidationError(BaseModel):
    """A single content finding."""
    code: str
    message: str
    puzzle_id: Optional[int] = None
    tier: Optional[TierName] = None
    word: Optional[str] = None
    cascade_level: int = 0  # 0=FATAL, 1=CRITICAL, 2=HIGH, 3=MEDIUM, 4=LOW

    @property
    def context(self) -> str:
        if self.puzzle_id is None:
            return "Content"
        if self.tier is None:
            return f"Puzzle {self.puzzle_id}"
        return f"Puzzle {self.puzzle_id} {self.tier.value}"

    def __str__(self) -> str:
        return f"{self.context}: {self.message}"


class ValidationResult(BaseModel):
    """Result of content validation."""
    valid: bool
    errors: List[ValidationError] = Field(default_factory=list)
    warnings: List[ValidationError] = Field(default_factory=list)
    puzzles_checked: int = 0
    tiers_checked: int = 0
