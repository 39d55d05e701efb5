from __future__ import annotations

# Facade module that re-exports the emoji tic-tac-toe core.
# The Flask app and the tests import from here; single-responsibility
# modules live under emoji_core/*.

from emoji_core.board import (  # noqa: F401
    BOARD_SIZE,
    WIN_LINES,
    Line,
    PlacedMark,
    PlayerId,
    Position,
    check_winner,
    empty_positions,
    find_winning_line,
    is_valid_position,
    other_player,
    pretty,
)
from emoji_core.categories import EMOJI_CATEGORIES, CategoryProvider  # noqa: F401
from emoji_core.engine import MAX_MARKS, VANISH_DELAY_SECONDS, Match  # noqa: F401
from emoji_core.errors import (  # noqa: F401
    EmojiTicTacToeError,
    InvalidPositionError,
    MatchNotFound,
    UnknownCategoryError,
)
from emoji_core.state import MatchSnapshot  # noqa: F401
from emoji_core.timers import VanishScheduler, VanishTimer  # noqa: F401
