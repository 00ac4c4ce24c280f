"""
Self-play and evaluation of the move selector.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .game_basics import EMPTY, O, X, apply_move, empty_slots, get_winner, is_full, opponent
from .policy import Strength, random_move, select_move
from .solver import optimal_move


def play_game(
    strength_x: Optional[Strength],
    strength_o: Optional[Strength],
    rng: np.random.Generator,
) -> Tuple[int, List[int]]:
    """Play one game; a None strength is a uniformly random player.

    Returns (winner, moves) with winner 0 for a draw.
    """
    board = [EMPTY] * 9
    moves: List[int] = []
    player = X
    while get_winner(board) == EMPTY and not is_full(board):
        strength = strength_x if player == X else strength_o
        if strength is None:
            mv = random_move(board, rng)
        else:
            mv = select_move(board, strength, player, rng)
        board = apply_move(board, mv, player)
        moves.append(mv)
        player = opponent(player)
    return get_winner(board), moves


def evaluate(
    strength: Strength,
    games: int = 100,
    seed: Optional[int] = None,
    computer_mark: int = O,
) -> Dict[str, int]:
    """Play the engine against a uniformly random opponent."""
    rng = np.random.default_rng(seed)
    result = {"wins": 0, "draws": 0, "losses": 0}
    for _ in range(games):
        if computer_mark == X:
            w, _ = play_game(strength, None, rng)
        else:
            w, _ = play_game(None, strength, rng)
        if w == EMPTY:
            result["draws"] += 1
        elif w == computer_mark:
            result["wins"] += 1
        else:
            result["losses"] += 1
    logging.info("strength=%s games=%d %s", strength.value, games, result)
    return result


def worst_outcome(
    computer_mark: int = O,
    board: Optional[Sequence[int]] = None,
    to_move: int = X,
) -> int:
    """Worst result for the optimal engine over every opponent line of play.

    Starts from board (empty by default) with to_move on turn.
    1 if every line is won, 0 if the worst is a draw, -1 if some line loses.
    """
    def walk(board: List[int], player: int) -> int:
        w = get_winner(board)
        if w != EMPTY:
            return 1 if w == computer_mark else -1
        if is_full(board):
            return 0
        if player == computer_mark:
            mv = optimal_move(board, computer_mark)
            return walk(apply_move(board, mv, player), opponent(player))
        return min(walk(apply_move(board, mv, player), opponent(player)) for mv in empty_slots(board))

    start = [EMPTY] * 9 if board is None else list(board)
    return walk(start, to_move)
