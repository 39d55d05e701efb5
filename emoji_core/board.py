from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

Position = int  # 0..8, row-major
PlayerId = int  # 1 or 2
Line = Tuple[Position, Position, Position]

BOARD_SIZE = 9
SIDE = 3

# Enumeration order is the tie-break: the first complete line wins.
WIN_LINES: Tuple[Line, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
)


@dataclass(frozen=True)
class PlacedMark:
    """A symbol placed by a player on one cell."""
    position: Position
    symbol: str
    owner: PlayerId


Cells = Sequence[Optional[PlacedMark]]


def other_player(player: PlayerId) -> PlayerId:
    return 2 if player == 1 else 1


def is_valid_position(position: object) -> bool:
    # bool is an int subclass but never a board position
    return isinstance(position, int) and not isinstance(position, bool) and 0 <= position < BOARD_SIZE


def find_winning_line(cells: Cells) -> Optional[Tuple[PlayerId, Line]]:
    """Returns (owner, line) for the first line held entirely by one player, else None."""
    for line in WIN_LINES:
        a, b, c = (cells[i] for i in line)
        if a is None or b is None or c is None:
            continue
        if a.owner == b.owner == c.owner:
            return a.owner, line
    return None


def check_winner(cells: Cells) -> Optional[PlayerId]:
    found = find_winning_line(cells)
    return found[0] if found else None


def empty_positions(cells: Cells) -> List[Position]:
    return [i for i, cell in enumerate(cells) if cell is None]


def pretty(cells: Cells, vanishing: Optional[Position] = None, highlight: Iterable[Position] = ()) -> str:
    """Generates a human-readable 3x3 grid. Empty cells show their index,
    the vanishing cell is wrapped in parentheses, highlighted cells in brackets."""
    marked = set(highlight)
    rows: List[str] = []
    for r in range(SIDE):
        row: List[str] = []
        for c in range(SIDE):
            i = r * SIDE + c
            cell = cells[i]
            text = str(i) if cell is None else cell.symbol
            if i == vanishing:
                text = f'({text})'
            elif i in marked:
                text = f'[{text}]'
            row.append(text.center(5))
        rows.append('|'.join(row))
    return '\n' + '\n-----+-----+-----\n'.join(rows) + '\n'
