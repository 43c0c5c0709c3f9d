from typing import Iterable, List, Sequence

from ..puzzle.grid import grid_letters


def render_grid(grid: Sequence[Sequence[str]], show_coordinates: bool = False) -> str:
    """Render a run or template grid as text, '#' blocked and '.' empty."""
    lines = grid_letters(grid)
    if not lines:
        return ""

    if not show_coordinates:
        return '\n'.join(' '.join(line) for line in lines)

    width = max(len(line) for line in lines)
    header = '   ' + ' '.join(str(col % 10) for col in range(width))
    rendered = [header]
    for row, line in enumerate(lines):
        rendered.append(f"{row:>2} " + ' '.join(line.ljust(width, '#')))
    return '\n'.join(rendered)


def render_found_words(crossword: Iterable[str], bonus: Iterable[str]) -> str:
    """Two-line summary of the words found so far."""
    crossword_list: List[str] = sorted(crossword)
    bonus_list: List[str] = sorted(bonus)
    return '\n'.join([
        f"Crossword ({len(crossword_list)}): {', '.join(crossword_list) or '-'}",
        f"Bonus ({len(bonus_list)}): {', '.join(bonus_list) or '-'}",
    ])


if __name__ == '__main__':
    example = [
        ['#', 'B', 'A', 'R', '#', 'B'],
        ['#', 'R', '#', 'A', '#', 'R'],
        ['B', 'A', 'R', 'N', '#', 'A'],
        ['A', '#', '#', '#', '#', 'N'],
        ['N', 'A', 'B', '#', '#', '#'],
    ]

    print("Template grid:")
    print(render_grid(example, show_coordinates=True))
