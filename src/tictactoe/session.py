"""
Turn-taking controller for one round after another on a single board.

The controller owns the authoritative board and the running scores. It never
renders anything: every call returns a list of Event messages that a renderer
(the CLI, a GUI, a test) consumes in order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .game_basics import EMPTY, O, X, check_mark, get_winner, is_full, opponent, winning_line
from .policy import Strength, select_move
from .storage import Scores

ONE_PLAYER = "1player"
TWO_PLAYER = "2player"
DRAW = "draw"


@dataclass
class Event:
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)


class GameSession:
    def __init__(
        self,
        mode: str = ONE_PLAYER,
        strength: Strength = Strength.HIGH,
        computer_mark: int = O,
        scores: Optional[Scores] = None,
    ):
        if mode not in (ONE_PLAYER, TWO_PLAYER):
            raise ValueError(f"Unknown mode: {mode!r}")
        check_mark(computer_mark)
        self.mode = mode
        self.strength = strength
        self.computer_mark = computer_mark
        self.scores = scores if scores is not None else Scores()
        self.board: List[int] = [EMPTY] * 9
        self.current_player = X
        self.winner: Any = None
        self.winning_cells: Tuple[int, ...] = ()
        self.is_over = False

    @property
    def computer_to_move(self) -> bool:
        return (
            self.mode == ONE_PLAYER
            and not self.is_over
            and self.current_player == self.computer_mark
        )

    def reset(self) -> List[Event]:
        self.board = [EMPTY] * 9
        self.current_player = X
        self.winner = None
        self.winning_cells = ()
        self.is_over = False
        return [Event("game_reset", {"board": list(self.board)})]

    def play(self, index: int) -> List[Event]:
        """Apply a human move for the side to move."""
        reason = None
        if self.is_over:
            reason = "game is over"
        elif not 0 <= index < 9:
            reason = f"index {index} out of range"
        elif self.board[index] != EMPTY:
            reason = f"cell {index} is occupied"
        elif self.computer_to_move:
            reason = "computer to move"
        if reason is not None:
            return [Event("rejected", {"index": index, "reason": reason})]
        return self._apply(index)

    def computer_turn(self, rng: Optional[np.random.Generator] = None) -> List[Event]:
        if not self.computer_to_move:
            return []
        move = select_move(self.board, self.strength, self.computer_mark, rng)
        if move is None:
            return []
        return self._apply(move)

    def _apply(self, index: int) -> List[Event]:
        player = self.current_player
        self.board = list(self.board)
        self.board[index] = player
        self.current_player = opponent(player)
        events = [Event("move_made", {"index": index, "player": player, "board": list(self.board)})]

        w = get_winner(self.board)
        if w != EMPTY:
            events.append(self._finish(w, winning_line(self.board) or ()))
        elif is_full(self.board):
            events.append(self._finish(DRAW, ()))
        else:
            events.append(Event("turn_changed", {"player": self.current_player}))
        return events

    def _finish(self, winner: Any, cells: Tuple[int, ...]) -> Event:
        self.winner = winner
        self.winning_cells = tuple(cells)
        self.is_over = True
        if winner == DRAW:
            self.scores.draws += 1
        elif self.mode == ONE_PLAYER:
            if winner == self.computer_mark:
                self.scores.ai_wins += 1
            else:
                self.scores.player1_wins += 1
        elif winner == X:
            self.scores.player1_wins += 1
        else:
            self.scores.player2_wins += 1
        return Event("game_over", {"winner": winner, "winning_cells": list(self.winning_cells)})
