from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from .board import pretty
from .categories import CategoryProvider
from .engine import VANISH_DELAY_SECONDS, Match
from .errors import UnknownCategoryError


def _print_board(match: Match) -> None:
    snap = match.snapshot()
    print(pretty(snap.cells, snap.vanishing, snap.winning_line or ()))
    for player in (1, 2):
        print(f'Player {player} ({snap.category_of(player)}): {snap.move_count(player)}/{snap.max_marks}')


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Emoji tic-tac-toe with vanishing marks (hot-seat)')
    parser.add_argument('--p1', default='animals', help='Emoji category for player 1')
    parser.add_argument('--p2', default='food', help='Emoji category for player 2')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for emoji draws')
    parser.add_argument('--vanish-ms', type=int, default=int(VANISH_DELAY_SECONDS * 1000),
                        help='Grace interval before an evicted emoji disappears')
    parser.add_argument('--list-categories', action='store_true', help='Print the categories and exit')
    parser.add_argument('--log-level', default='WARNING', type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], help='Logging level')
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format='%(levelname)s %(name)s: %(message)s')
    provider = CategoryProvider(rng=random.Random(args.seed))

    if args.list_categories:
        for name, symbols in provider.as_dict().items():
            print(f'{name}: {" ".join(symbols)}')
        return 0

    try:
        match = Match(args.p1, args.p2, provider=provider, vanish_delay=args.vanish_ms / 1000.0)
    except UnknownCategoryError as e:
        parser.error(f'{e}; choose from {", ".join(provider.categories())}')

    print('Cells are numbered 0-8. Enter r to reset, q to quit.')
    while True:
        match.tick()
        _print_board(match)
        if match.winner is not None:
            print(f'Player {match.winner} wins!')
            return 0
        text = input(f"Player {match.current_player}'s move: ").strip().lower()
        if text == 'q':
            return 0
        if text == 'r':
            match.reset()
            continue
        try:
            position = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if not 0 <= position <= 8:
            print('Cells are 0-8. Try again.')
            continue
        if not match.attempt_move(position):
            print('That cell is not available. Try again.')


if __name__ == '__main__':
    raise SystemExit(main())
