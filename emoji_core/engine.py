from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from .board import (
    BOARD_SIZE,
    Line,
    PlacedMark,
    PlayerId,
    Position,
    find_winning_line,
    is_valid_position,
    other_player,
)
from .categories import CategoryProvider
from .errors import InvalidPositionError
from .state import MatchSnapshot
from .timers import VanishScheduler, VanishTimer

logger = logging.getLogger(__name__)

MAX_MARKS = 3
VANISH_DELAY_SECONDS = 0.8


class Match:
    """
    One two-player match with the vanishing rule.

    Each player keeps at most MAX_MARKS marks. The 4th placement evicts the
    player's oldest mark: it leaves the history at once but stays on the board,
    unselectable, until its VanishTimer fires. Time only moves forward through
    tick() (or fire() for an externally delivered timer), so the match itself
    never runs anything in the background.
    """

    def __init__(
        self,
        player1_category: str,
        player2_category: str,
        provider: Optional[CategoryProvider] = None,
        clock: Callable[[], float] = time.monotonic,
        vanish_delay: float = VANISH_DELAY_SECONDS,
    ) -> None:
        self.provider = provider or CategoryProvider()
        # Unknown categories are a configuration error: fail before the first move.
        self.provider.require(player1_category)
        self.provider.require(player2_category)
        self.categories: Tuple[str, str] = (player1_category, player2_category)
        self.vanish_delay = float(vanish_delay)
        self._clock = clock
        self._scheduler = VanishScheduler()
        self._generation = 0
        self._clear()
        logger.info('match created: player 1 %r vs player 2 %r', player1_category, player2_category)

    def _clear(self) -> None:
        self._cells: List[Optional[PlacedMark]] = [None] * BOARD_SIZE
        self._histories: Dict[PlayerId, List[PlacedMark]] = {1: [], 2: []}
        self.current_player: PlayerId = 1
        self.winner: Optional[PlayerId] = None
        self.winning_line: Optional[Line] = None

    # ---- queries ----

    @property
    def cells(self) -> Tuple[Optional[PlacedMark], ...]:
        return tuple(self._cells)

    @property
    def pending_vanish(self) -> Optional[VanishTimer]:
        return self._scheduler.pending

    @property
    def vanishing(self) -> Optional[Position]:
        timer = self._scheduler.pending
        return timer.position if timer is not None else None

    def history(self, player: PlayerId) -> Tuple[PlacedMark, ...]:
        return tuple(self._histories[player])

    def category_of(self, player: PlayerId) -> str:
        return self.categories[player - 1]

    def snapshot(self) -> MatchSnapshot:
        timer = self._scheduler.pending
        return MatchSnapshot(
            cells=self.cells,
            current_player=self.current_player,
            winner=self.winner,
            winning_line=self.winning_line,
            move_counts=(len(self._histories[1]), len(self._histories[2])),
            vanishing=timer.position if timer is not None else None,
            vanish_remaining=timer.remaining(self._clock()) if timer is not None else 0.0,
            categories=self.categories,
            max_marks=MAX_MARKS,
        )

    # ---- moves ----

    def _rejection(self, position: Position) -> Optional[str]:
        if self.winner is not None:
            return 'match already won'
        history = self._histories[self.current_player]
        if len(history) >= MAX_MARKS and history[0].position == position:
            # A player may not replay onto the cell their own oldest mark is about to leave.
            return 'cannot refresh own oldest mark'
        if position == self.vanishing:
            return 'cell is vanishing'
        if self._cells[position] is not None:
            return 'cell occupied'
        return None

    def attempt_move(self, position: Position) -> bool:
        """Places a mark for the current player. Returns False (and changes nothing) if the move is rejected."""
        if not is_valid_position(position):
            raise InvalidPositionError(position)
        self.tick()

        reason = self._rejection(position)
        if reason is not None:
            logger.debug('player %d move to %d rejected: %s', self.current_player, position, reason)
            return False

        player = self.current_player
        symbol = self.provider.random_symbol(self.category_of(player))
        mark = PlacedMark(position=position, symbol=symbol, owner=player)
        self._cells[position] = mark
        history = self._histories[player]
        history.append(mark)

        if len(history) > MAX_MARKS:
            oldest = history.pop(0)
            self._schedule_vanish(player, oldest.position)

        # Judged on the board as placed; the evicted mark is still there.
        found = find_winning_line(self._cells)
        if found is not None:
            self.winner, self.winning_line = found
            logger.info('player %d wins on line %s', self.winner, self.winning_line)
            return True

        self.current_player = other_player(player)
        return True

    # ---- vanishing ----

    def _schedule_vanish(self, player: PlayerId, position: Position) -> None:
        timer = VanishTimer(
            player=player,
            position=position,
            due_at=self._clock() + self.vanish_delay,
            generation=self._generation,
        )
        superseded = self._scheduler.schedule(timer)
        if superseded is not None:
            # Only one cell may be mid-vanish: finish the older removal now.
            self._apply_vanish(superseded)

    def _apply_vanish(self, timer: VanishTimer) -> Optional[Position]:
        if timer.generation != self._generation:
            logger.debug('ignoring stale vanish timer %s', timer.key)
            return None
        mark = self._cells[timer.position]
        if mark is not None and mark.owner == timer.player and mark not in self._histories[timer.player]:
            self._cells[timer.position] = None
        return timer.position

    def tick(self, now: Optional[float] = None) -> Optional[Position]:
        """Fires the pending vanish timer if it is due. Returns the cleared cell, if any."""
        timer = self._scheduler.pop_due(self._clock() if now is None else now)
        if timer is None:
            return None
        return self._apply_vanish(timer)

    def fire(self, timer: VanishTimer) -> Optional[Position]:
        """Delivers a timer from an outside scheduler. Timers from before a reset are ignored."""
        if self._scheduler.pending == timer:
            self._scheduler.cancel()
            return self._apply_vanish(timer)
        if timer.generation != self._generation:
            logger.debug('ignoring stale vanish timer %s', timer.key)
        return None

    # ---- lifecycle ----

    def reset(self) -> None:
        """Empties the board and histories, player 1 to move. Categories are kept."""
        self._generation += 1
        self._scheduler.cancel()
        self._clear()
        logger.info('match reset')
