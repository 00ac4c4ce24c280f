"""
Move selection by strength tier.

- LOW: uniform random over empty slots.
- MEDIUM: optimal search with probability 0.7, otherwise uniform random.
- HIGH: optimal search, deterministic.

Random draws come from an injected numpy Generator so games can be replayed
from a seed.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

import numpy as np

from .game_basics import O, check_board, check_mark, empty_slots
from .solver import optimal_move

OPTIMAL_PROBABILITY = 0.7


class Strength(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, text: str) -> "Strength":
        key = text.strip().lower()
        aliases = {"easy": "low", "hard": "high"}
        try:
            return cls(aliases.get(key, key))
        except ValueError:
            raise ValueError(f"Unknown strength: {text!r}") from None


def random_move(board: Sequence[int], rng: np.random.Generator) -> Optional[int]:
    moves = empty_slots(board)
    if not moves:
        return None
    return int(rng.choice(moves))


def select_move(
    board: Sequence[int],
    strength: Strength,
    computer_mark: int = O,
    rng: Optional[np.random.Generator] = None,
) -> Optional[int]:
    check_board(board)
    check_mark(computer_mark)
    if not isinstance(strength, Strength):
        raise ValueError(f"Unknown strength: {strength!r}")
    snapshot = tuple(board)
    if not empty_slots(snapshot):
        return None
    if rng is None:
        rng = np.random.default_rng()

    if strength is Strength.LOW:
        return random_move(snapshot, rng)
    if strength is Strength.MEDIUM:
        if rng.random() < OPTIMAL_PROBABILITY:
            return optimal_move(snapshot, computer_mark)
        return random_move(snapshot, rng)
    return optimal_move(snapshot, computer_mark)
