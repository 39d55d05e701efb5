from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Line, PlacedMark, PlayerId, Position


@dataclass(frozen=True)
class MatchSnapshot:
    """Read-only view of a match, everything a renderer needs."""
    cells: Tuple[Optional[PlacedMark], ...]  # length 9
    current_player: PlayerId
    winner: Optional[PlayerId]
    winning_line: Optional[Line]
    move_counts: Tuple[int, int]  # live marks of player 1, player 2
    vanishing: Optional[Position]
    vanish_remaining: float  # seconds
    categories: Tuple[str, str]
    max_marks: int

    def category_of(self, player: PlayerId) -> str:
        return self.categories[player - 1]

    def move_count(self, player: PlayerId) -> int:
        return self.move_counts[player - 1]

    def is_selectable(self, position: Position) -> bool:
        """Whether a click on this cell could be accepted (ignoring the self-refresh guard)."""
        return self.winner is None and self.cells[position] is None and position != self.vanishing
