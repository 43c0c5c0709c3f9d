"""Word normalization shared by every puzzle component."""

import re
from typing import Iterable, List, Optional

NON_LETTER_RE = re.compile(r"[^A-Z]")


def normalize_word(text: Optional[str]) -> str:
    """Uppercase ``text`` and drop everything outside A-Z."""
    if not text:
        return ""
    return NON_LETTER_RE.sub("", str(text).upper())


def normalize_words(words: Iterable[str]) -> List[str]:
    """Normalize a word list, dropping empty results and duplicates (first wins)."""
    seen = set()
    result: List[str] = []
    for word in words:
        normalized = normalize_word(word)
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result
