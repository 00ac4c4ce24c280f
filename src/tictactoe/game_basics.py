"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Teaching notes:
- State is a list of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- A "ply" is a half-move (one player's turn).
- Valid states have counts either equal (X to move) or X has one more (O to move).
- Everything here is pure: functions never mutate the board they are given.
"""
from typing import List, Optional, Sequence, Tuple

EMPTY = 0
X = 1
O = 2

WIN_PATTERNS = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
]


def check_board(board: Sequence[int]) -> None:
    """Raise ValueError unless board is 9 cells of 0/1/2."""
    if len(board) != 9:
        raise ValueError(f"Board must have 9 cells, got {len(board)}")
    for v in board:
        if v not in (EMPTY, X, O):
            raise ValueError(f"Invalid cell value: {v!r}")


def check_mark(mark: int) -> None:
    if mark not in (X, O):
        raise ValueError(f"Invalid mark: {mark!r} (expected 1 or 2)")


def opponent(mark: int) -> int:
    return O if mark == X else X


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> List[int]:
    return [int(cell) for cell in board_str]


def empty_slots(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def winning_line(board: Sequence[int]) -> Optional[Tuple[int, int, int]]:
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return pattern
    return None


def get_winner(board: Sequence[int]) -> int:
    line = winning_line(board)
    return board[line[0]] if line is not None else EMPTY


def is_full(board: Sequence[int]) -> bool:
    return EMPTY not in board


def is_draw(board: Sequence[int]) -> bool:
    return is_full(board) and get_winner(board) == EMPTY


def is_terminal(board: Sequence[int]) -> bool:
    return get_winner(board) != EMPTY or is_full(board)


def apply_move(board: Sequence[int], index: int, mark: int) -> List[int]:
    """Return a copy of board with mark placed at index."""
    if board[index] != EMPTY:
        raise ValueError(f"Cell {index} is already occupied")
    new_board = list(board)
    new_board[index] = mark
    return new_board


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    cells = list(board)
    return cells.count(X), cells.count(O)


def is_valid_state(board: Sequence[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False
    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))
    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def parse_board(raw: str) -> Optional[List[int]]:
    """Parse a 9-char 0/1/2 board string; None if malformed."""
    raw = raw.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        return None
    return deserialize_board(raw)


def render_board(board: Sequence[int], symbols: str = ".XO") -> str:
    rows = []
    for r in range(3):
        rows.append(' '.join(symbols[board[3 * r + c]] for c in range(3)))
    return '\n'.join(rows)
