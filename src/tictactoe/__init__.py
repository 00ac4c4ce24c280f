"""tictactoe package.

Board rules, an alpha-beta game-tree search, strength-tiered move selection,
a turn-taking game controller, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .game_basics import empty_slots, get_winner, is_full, winning_line
from .policy import Strength, select_move
from .session import GameSession
from .solver import optimal_move

__all__ = [
    "empty_slots",
    "get_winner",
    "is_full",
    "winning_line",
    "Strength",
    "select_move",
    "optimal_move",
    "GameSession",
]
