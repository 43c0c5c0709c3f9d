"""Content verification for Bonus Rush."""

from .verify import verify_content, validate_tier, validate_word_list, validate_ladder
from .models import ValidationError, ValidationResult
from .cascade import filter_cascading_errors

__all__ = [
    # Main verification
    "verify_content",
    "validate_tier",
    "validate_word_list",
    "validate_ladder",
    # Models
    "ValidationError",
    "ValidationResult",
    # Filtering
    "filter_cascading_errors",
]
