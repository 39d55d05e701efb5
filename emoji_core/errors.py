"""
Exception types shared by the engine, the web app and the CLI.

Rejected moves are not errors: Match.attempt_move simply returns False.
"""


class EmojiTicTacToeError(Exception):
    """Base class for all game errors."""
    pass


class UnknownCategoryError(EmojiTicTacToeError, KeyError):
    """The category is not registered with the provider."""
    def __init__(self, category):
        self.category = category
        super().__init__(f"Unknown emoji category: {category!r}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class InvalidPositionError(EmojiTicTacToeError, ValueError):
    """Board position outside 0..8."""
    def __init__(self, position):
        self.position = position
        super().__init__(f"Position must be an int in 0..8, got {position!r}")


class MatchNotFound(EmojiTicTacToeError):
    """No live match under this id."""
    def __init__(self, match_id):
        self.match_id = match_id
        super().__init__(f"Match {match_id} not found")
