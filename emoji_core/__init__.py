"""
Emoji Tic-Tac-Toe core Python package.

Pure game logic kept apart from the Flask app and the CLI so it can be
tested without a server.
Modules:
- categories.py: emoji table and random symbol selection
- board.py: PlacedMark, winning lines, win detection
- timers.py: VanishTimer, VanishScheduler
- state.py: MatchSnapshot
- engine.py: Match (turns, vanishing rule, wins)
"""
