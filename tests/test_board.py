import numpy as np
import pytest

from falling_blocks.game import Board, Piece, TetrominoType


def _fill_row(board, row, token=1):
    board.cells[row, :] = token


def test_new_board_is_empty_with_default_dimensions():
    board = Board()
    assert board.cells.shape == (20, 10)
    assert not board.cells.any()
    assert board.find_full_rows() == []


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        Board(0, 10)


def test_is_occupied_bounds():
    board = Board()
    assert board.is_occupied(-1, 5)
    assert board.is_occupied(10, 5)
    assert board.is_occupied(3, 20)
    assert not board.is_occupied(3, 19)
    # Space above the board is open, but the side walls still extend upwards
    assert not board.is_occupied(3, -2)
    assert board.is_occupied(-1, -2)
    board.cells[4, 2] = 3
    assert board.is_occupied(2, 4)


def test_place_skips_cells_above_board():
    board = Board()
    board.place([(0, -1), (0, 0), (1, 0)], 5)
    assert board.cells[0, 0] == 5
    assert board.cells[0, 1] == 5
    assert np.count_nonzero(board.cells) == 2


def test_lock_writes_piece_token_and_reports_full_rows():
    board = Board()
    board.cells[19, :6] = 2
    piece = Piece(TetrominoType.I, x=6, y=19)
    rows = board.lock(piece)
    assert rows == [19]
    assert list(board.cells[19, 6:]) == [int(TetrominoType.I)] * 4


def test_find_full_rows_is_top_to_bottom():
    board = Board()
    for r in (12, 3, 19):
        _fill_row(board, r)
    board.cells[7, :9] = 1
    assert board.find_full_rows() == [3, 12, 19]


def test_remove_bottom_row_leaves_rows_above_in_place():
    board = Board()
    _fill_row(board, 19)
    board.cells[18, 4] = 6
    board.cells[10, 0] = 2
    board.remove_rows(board.find_full_rows())
    assert board.cells.shape == (20, 10)
    assert board.cells[19, 4] == 6
    assert board.cells[11, 0] == 2
    assert not board.cells[0].any()
    assert board.find_full_rows() == []


def test_remove_non_contiguous_rows_preserves_order():
    board = Board()
    for r in range(20):
        board.cells[r, 0] = r % 7 + 1
    _fill_row(board, 5, 3)
    _fill_row(board, 7, 4)
    before = board.clone_state()
    board.remove_rows([5, 7])

    remaining = [r for r in range(20) if r not in (5, 7)]
    assert board.cells.shape == (20, 10)
    assert not board.cells[:2].any()
    assert np.array_equal(board.cells[2:], before[remaining])


def test_remove_rows_ignores_duplicates_and_out_of_range():
    board = Board()
    _fill_row(board, 19)
    board.cells[18, 1] = 1
    board.remove_rows([19, 19, 25, -1])
    assert board.cells[19, 1] == 1
    assert np.count_nonzero(board.cells) == 1


def test_board_features():
    board = Board()
    assert board.get_max_height() == 0
    board.cells[15, 3] = 1
    board.cells[17, 3] = 1
    assert board.get_max_height() == 5
    assert board.count_holes() == 3
    assert board.filled_ratio() == pytest.approx(2 / 200)
