import pytest

from tictactoe.game_basics import (
    apply_move,
    check_board,
    current_player,
    get_piece_counts,
    empty_slots,
    get_winner,
    is_draw,
    is_full,
    is_terminal,
    is_valid_state,
    parse_board,
    render_board,
    winning_line,
)


def test_empty_slots_ascending():
    b = [1, 0, 2, 0, 0, 1, 2, 0, 1]
    assert empty_slots(b) == [1, 3, 4, 7]
    assert empty_slots([0] * 9) == list(range(9))
    assert empty_slots([1, 2, 1, 1, 2, 2, 2, 1, 1]) == []


@pytest.mark.parametrize("line", [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
])
def test_every_line_detected(line):
    for mark in (1, 2):
        b = [0] * 9
        for i in line:
            b[i] = mark
        assert get_winner(b) == mark
        assert winning_line(b) == line


def test_no_winner():
    assert get_winner([0] * 9) == 0
    assert winning_line([0] * 9) is None
    # mixed line is not a win
    assert get_winner([1, 1, 2, 0, 0, 0, 0, 0, 0]) == 0


def test_first_line_reported_in_fixed_order():
    # row 0 and column 0 both complete: rows are scanned first
    b = [1, 1, 1, 1, 2, 2, 1, 2, 2]
    assert winning_line(b) == (0, 1, 2)


def test_full_and_draw():
    draw = [1, 1, 2, 2, 2, 1, 1, 2, 1]
    assert is_full(draw)
    assert is_draw(draw)
    assert is_terminal(draw)
    won_full = [1, 1, 1, 2, 2, 1, 2, 1, 2]
    assert is_full(won_full) and not is_draw(won_full)
    assert not is_full([0] * 9)
    assert not is_terminal([1, 0, 0, 0, 2, 0, 0, 0, 0])


def test_apply_move_returns_copy():
    b = [0] * 9
    nb = apply_move(b, 4, 1)
    assert nb[4] == 1
    assert b == [0] * 9
    with pytest.raises(ValueError):
        apply_move(nb, 4, 2)


def test_check_board_rejects_malformed():
    with pytest.raises(ValueError):
        check_board([0] * 8)
    with pytest.raises(ValueError):
        check_board([0] * 8 + [3])
    check_board([0] * 9)


def test_valid_state_and_turn_order():
    assert is_valid_state([0] * 9)
    assert current_player([0] * 9) == 1
    assert current_player([1, 0, 0, 0, 0, 0, 0, 0, 0]) == 2
    # O has more marks than X
    assert not is_valid_state([2, 2, 0, 1, 0, 0, 0, 0, 0])
    # both sides complete a line
    assert not is_valid_state([1, 1, 1, 2, 2, 2, 0, 0, 0])


def test_parse_and_render():
    assert parse_board("100020000") == [1, 0, 0, 0, 2, 0, 0, 0, 0]
    assert parse_board("12345678x") is None
    assert parse_board("0000") is None
    assert render_board(parse_board("100020000")) == "X . .\n. O .\n. . ."


def test_piece_counts_accepts_tuples():
    assert get_piece_counts((1, 2, 1, 0, 0, 0, 0, 0, 0)) == (2, 1)
