"""Exception hierarchy for Bonus Rush."""


class BonusRushError(Exception):
    """Base exception for engine failures."""


class ContentLoadError(BonusRushError):
    """Raised when a puzzle content file cannot be read or fails schema checks."""


class UnknownPuzzleError(BonusRushError):
    """Raised by strict catalog lookups when a puzzle or tier does not exist."""
