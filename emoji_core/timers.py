from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import PlayerId, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VanishTimer:
    """Single-shot removal of an evicted mark, keyed by (player, position)."""
    player: PlayerId
    position: Position
    due_at: float
    generation: int  # match generation it belongs to; bumped by reset()

    @property
    def key(self) -> Tuple[PlayerId, Position]:
        return self.player, self.position

    def is_due(self, now: float) -> bool:
        return now >= self.due_at

    def remaining(self, now: float) -> float:
        return max(0.0, self.due_at - now)


class VanishScheduler:
    """Holds at most one pending VanishTimer for a match.

    Scheduling while a timer is outstanding supersedes it: the old timer is
    handed back to the caller, which must apply it right away.
    """

    def __init__(self) -> None:
        self._pending: Optional[VanishTimer] = None

    @property
    def pending(self) -> Optional[VanishTimer]:
        return self._pending

    def schedule(self, timer: VanishTimer) -> Optional[VanishTimer]:
        superseded = self._pending
        if superseded is not None:
            logger.debug('vanish timer %s superseded by %s', superseded.key, timer.key)
        self._pending = timer
        logger.debug('vanish scheduled for player %d at cell %d (due %.3f)', timer.player, timer.position, timer.due_at)
        return superseded

    def pop_due(self, now: float) -> Optional[VanishTimer]:
        timer = self._pending
        if timer is None or not timer.is_due(now):
            return None
        self._pending = None
        return timer

    def cancel(self) -> Optional[VanishTimer]:
        timer, self._pending = self._pending, None
        if timer is not None:
            logger.debug('vanish timer %s cancelled', timer.key)
        return timer
