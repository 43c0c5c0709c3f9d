"""Parsing of authored grid and wheel notation."""

import re
import textwrap
from typing import Any, List

from .normalize import normalize_word


def extract_grid_content(text: str) -> str:
    """Extract content from between <grid> and </grid> tags."""
    match = re.search(r'<grid>(.*?)</grid>', text, re.DOTALL)
    if match:
        return match.group(1).strip('\n')
    return text.strip('\n')


def parse_grid_rows(rows: Any) -> Any:
    """
    Turn authored rows into a list of cell lists.

    Rows may be written as strings ("#BAR#B", one character per cell) or as
    lists of cell strings. A single multi-line string is split with
    ``parse_grid``. Anything else is returned as-is so schema validation can
    report it.
    """
    if isinstance(rows, str):
        return parse_grid(rows)
    if not isinstance(rows, list):
        return rows
    parsed = []
    for row in rows:
        if isinstance(row, str):
            parsed.append(list(row))
        elif isinstance(row, (list, tuple)):
            parsed.append(["" if cell is None else str(cell) for cell in row])
        else:
            parsed.append(row)
    return parsed


def parse_grid(text: str) -> List[List[str]]:
    """
    Parse a multi-line grid block, one row per line.

    Leading and trailing blank lines and the block's common indentation
    are dropped. Any other whitespace is kept, since " " marks an empty cell.
    """
    content = extract_grid_content(text)
    content = '\n'.join(line.rstrip('\r') for line in content.split('\n'))
    lines = textwrap.dedent(content).split('\n')
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return [list(line) for line in lines]


def parse_wheel(value: Any) -> Any:
    """Accept a wheel as "SAVED", "S A V E D" or a list of letters."""
    if isinstance(value, str):
        return [ch for ch in value if normalize_word(ch)]
    return value
