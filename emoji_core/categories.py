from __future__ import annotations

import random
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .errors import UnknownCategoryError

Symbol = str

# Category name -> ordered, non-empty symbol list. Names are the keys the
# selection UI sends back when a match starts.
EMOJI_CATEGORIES: Dict[str, Tuple[Symbol, ...]] = {
    'animals': ('🐶', '🐱', '🐭', '🐹', '🐰', '🦊', '🐻', '🐼', '🐨', '🐯', '🦁', '🐮'),
    'food': ('🍕', '🍔', '🍟', '🌭', '🍿', '🥓', '🍩', '🍪', '🍰', '🍦', '🍓', '🍉'),
    'faces': ('😀', '😂', '😍', '😎', '🤔', '😴', '😱', '🤩', '😇', '🥳', '😜', '🤠'),
    'nature': ('🌸', '🌻', '🌲', '🌵', '🍀', '🍁', '🌊', '🔥', '⛄', '🌈', '🌙', '⭐'),
    'sports': ('⚽', '🏀', '🏈', '⚾', '🎾', '🏐', '🏉', '🎱', '🏓', '🏸', '🥊', '⛳'),
    'space': ('🚀', '🛸', '🌍', '🪐', '☄️', '🌌', '👽', '🛰️', '🌕', '🌞', '🔭', '👾'),
}


class CategoryProvider:
    """Looks up symbol lists by category and draws random symbols from them."""

    def __init__(
        self,
        table: Optional[Mapping[str, Sequence[Symbol]]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        source = EMOJI_CATEGORIES if table is None else table
        self._table: Dict[str, Tuple[Symbol, ...]] = {}
        for name, symbols in source.items():
            if not symbols:
                raise ValueError(f'Category {name!r} has no symbols')
            self._table[name] = tuple(symbols)
        self._rng = rng or random.Random()

    def categories(self) -> Tuple[str, ...]:
        """Registered category names, in table order."""
        return tuple(self._table)

    def require(self, category: str) -> None:
        if category not in self._table:
            raise UnknownCategoryError(category)

    def symbols_for(self, category: str) -> Tuple[Symbol, ...]:
        self.require(category)
        return self._table[category]

    def random_symbol(self, category: str) -> Symbol:
        """Uniform draw with replacement; repeats are expected."""
        return self._rng.choice(self.symbols_for(category))

    def as_dict(self) -> Dict[str, Tuple[Symbol, ...]]:
        return dict(self._table)
