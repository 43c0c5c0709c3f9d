"""Letter-wheel multiset checks."""

from collections import Counter
from typing import Iterable

from .normalize import normalize_word


def count_letters(letters: Iterable[str]) -> Counter:
    """Multiset of normalized letters; multi-character entries count each letter."""
    counts: Counter = Counter()
    for letter in letters:
        counts.update(normalize_word(letter))
    return counts


def is_valid_against_wheel(word: str, wheel_letters: Iterable[str]) -> bool:
    """True if every letter of ``word`` is available on the wheel often enough.

    Order on the wheel is irrelevant; an empty normalized word is never valid.
    """
    normalized = normalize_word(word)
    if not normalized:
        return False

    available = count_letters(wheel_letters)
    used = Counter(normalized)
    return all(count <= available.get(letter, 0) for letter, count in used.items())
