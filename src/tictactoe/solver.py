"""
Exact game-tree search (depth-aware minimax with alpha-beta pruning), from the
computer's perspective.
Scoring:
- Computer wins score 10 - depth, opponent wins score depth - 10, full board 0.
- Shorter wins and longer losses are therefore preferred.
Tie-break policy:
- Root moves are tried in ascending index order; the first strictly highest
  score is kept, so equal scores resolve to the lowest index.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .game_basics import (
    EMPTY,
    check_board,
    check_mark,
    empty_slots,
    get_winner,
    is_full,
    opponent,
)

CENTER = 4
WIN_SCORE = 10


@dataclass
class SearchStats:
    nodes: int = 0


def minimax(
    board: Sequence[int],
    depth: int,
    maximizing: bool,
    computer_mark: int,
    alpha: float = -math.inf,
    beta: float = math.inf,
    stats: Optional[SearchStats] = None,
) -> int:
    if stats is not None:
        stats.nodes += 1
    w = get_winner(board)
    if w == computer_mark:
        return WIN_SCORE - depth
    if w != EMPTY:
        return depth - WIN_SCORE
    if is_full(board):
        return 0

    mark = computer_mark if maximizing else opponent(computer_mark)
    best = -math.inf if maximizing else math.inf
    for mv in empty_slots(board):
        child = list(board)
        child[mv] = mark
        score = minimax(child, depth + 1, not maximizing, computer_mark, alpha, beta, stats)
        if maximizing:
            best = max(best, score)
            alpha = max(alpha, score)
        else:
            best = min(best, score)
            beta = min(beta, score)
        if beta <= alpha:
            break
    return int(best)


def opening_move(board: Sequence[int]) -> Optional[int]:
    """Centre on the first two plies when it is free; None otherwise."""
    filled = 9 - len(empty_slots(board))
    if filled <= 1 and board[CENTER] == EMPTY:
        return CENTER
    return None


def score_moves(
    board: Sequence[int],
    computer_mark: int,
    stats: Optional[SearchStats] = None,
) -> Dict[int, int]:
    """Root score of every empty slot, in ascending index order."""
    check_board(board)
    check_mark(computer_mark)
    scores: Dict[int, int] = {}
    for mv in empty_slots(board):
        child = list(board)
        child[mv] = computer_mark
        scores[mv] = minimax(child, 0, False, computer_mark, stats=stats)
    return scores


def optimal_move(board: Sequence[int], computer_mark: int) -> Optional[int]:
    check_board(board)
    check_mark(computer_mark)
    moves = empty_slots(board)
    if not moves:
        return None
    book = opening_move(board)
    if book is not None:
        return book

    stats = SearchStats()
    best_move = moves[0]
    best_score = -math.inf
    for mv, score in score_moves(board, computer_mark, stats).items():
        if score > best_score:
            best_score = score
            best_move = mv
    logging.debug("searched %d nodes: move=%d score=%d", stats.nodes, best_move, best_score)
    return best_move
