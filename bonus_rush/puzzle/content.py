"""Loading authored puzzle content and looking puzzles up by id."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..errors import ContentLoadError, UnknownPuzzleError
from .models import Content, PuzzleConfig, TierConfig, TierName, UnlockRecord


DEFAULT_CONTENT_PATH = Path(__file__).resolve().parent.parent / "data" / "puzzles.yaml"


def load_content(content_path: Optional[str | Path] = None) -> Content:
    """Load puzzle content from a YAML file (the bundled puzzles by default)."""
    path = Path(content_path) if content_path else DEFAULT_CONTENT_PATH

    if not path.exists():
        raise ContentLoadError(f"Content file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ContentLoadError(f"Content file is not valid YAML: {path}: {e}") from e

    return parse_content(data or {}, source=str(path))


def parse_content(data: dict, source: str = "<memory>") -> Content:
    """Validate already-parsed content data."""
    try:
        return Content.model_validate(data)
    except ValidationError as e:
        raise ContentLoadError(f"Invalid content in {source}: {e}") from e


class Catalog:
    """Read-only view over loaded content in ladder order."""

    def __init__(self, content: Content) -> None:
        self.content = content
        self._by_id: Dict[int, PuzzleConfig] = {}
        for puzzle in content.puzzles:
            self._by_id.setdefault(puzzle.id, puzzle)

    @property
    def puzzles(self) -> List[PuzzleConfig]:
        return list(self.content.puzzles)

    def get(self, puzzle_id: int) -> Optional[PuzzleConfig]:
        return self._by_id.get(puzzle_id)

    def tier(self, puzzle_id: int, tier: TierName) -> Optional[Tuple[PuzzleConfig, TierConfig]]:
        puzzle = self.get(puzzle_id)
        if puzzle is None or tier not in puzzle.tiers:
            return None
        return puzzle, puzzle.tiers[tier]

    def require(self, puzzle_id: int, tier: Optional[TierName] = None) -> PuzzleConfig:
        """Strict lookup raising UnknownPuzzleError."""
        puzzle = self.get(puzzle_id)
        if puzzle is None:
            raise UnknownPuzzleError(f"Unknown puzzle id {puzzle_id}")
        if tier is not None and tier not in puzzle.tiers:
            raise UnknownPuzzleError(f"Puzzle {puzzle_id} has no {TierName(tier).value} tier")
        return puzzle

    def previous_puzzle(self, puzzle_id: int) -> Optional[PuzzleConfig]:
        """The puzzle just before ``puzzle_id`` in ladder order."""
        ids = [p.id for p in self.content.puzzles]
        if puzzle_id not in ids:
            return None
        index = ids.index(puzzle_id)
        return self.content.puzzles[index - 1] if index > 0 else None

    def unlock_for(self, puzzle_id: int) -> Optional[UnlockRecord]:
        return self.content.ladder.unlock_for(puzzle_id)

    def timer_keys(self) -> List[Tuple[int, TierName]]:
        return [(p.id, tier) for p in self.content.puzzles for tier in p.tier_names()]
