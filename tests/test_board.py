from dataclasses import FrozenInstanceError

import pytest

from minefield.board import (
    DIFFICULTIES,
    Cell,
    Difficulty,
    DifficultySettings,
    board_dimensions,
    board_from_mines,
    count_flags,
    count_revealed,
    create_empty_board,
    format_board,
    get_neighbors,
    mine_positions,
    replace_cells,
    update_cell,
)


def test_create_empty_board_shape_and_defaults():
    settings = DifficultySettings(rows=4, cols=6, mines=2)
    board = create_empty_board(settings)

    assert board_dimensions(board) == (4, 6)
    for r, row_cells in enumerate(board):
        for c, cell in enumerate(row_cells):
            assert (cell.row, cell.col) == (r, c)
            assert not cell.is_mine
            assert not cell.is_revealed
            assert not cell.is_flagged
            assert not cell.exploded
            assert cell.neighbor_count == 0


def test_create_empty_board_is_deterministic():
    settings = DIFFICULTIES[Difficulty.EASY]
    assert create_empty_board(settings) == create_empty_board(settings)


def test_canonical_difficulties():
    assert DIFFICULTIES[Difficulty.EASY] == DifficultySettings(9, 9, 10)
    assert DIFFICULTIES[Difficulty.MEDIUM] == DifficultySettings(16, 16, 40)
    assert DIFFICULTIES[Difficulty.HARD] == DifficultySettings(16, 30, 99)
    assert DIFFICULTIES[Difficulty.EASY].safe_cells == 71
    assert DIFFICULTIES[Difficulty.HARD].total_cells == 480


@pytest.mark.parametrize(
    "rows,cols,mines",
    [(0, 9, 1), (9, 0, 1), (9, 9, 0), (9, 9, -3), (9, 9, 72), (3, 3, 1)],
)
def test_settings_validation(rows, cols, mines):
    with pytest.raises(ValueError):
        DifficultySettings(rows=rows, cols=cols, mines=mines)


def test_settings_upper_bound_leaves_room_for_safe_zone():
    settings = DifficultySettings(rows=9, cols=9, mines=71)
    assert settings.safe_cells == 10


def test_cells_and_settings_are_immutable():
    with pytest.raises(FrozenInstanceError):
        Cell(0, 0).is_flagged = True
    with pytest.raises(FrozenInstanceError):
        DIFFICULTIES[Difficulty.EASY].mines = 1


def test_board_from_mines_counts():
    # M . .
    # . . .
    # . . M
    board = board_from_mines(3, 3, [(0, 0), (2, 2)])
    counts = [[cell.neighbor_count for cell in row] for row in board]
    assert counts == [
        [0, 1, 0],
        [1, 2, 1],
        [0, 1, 0],
    ]
    assert board[0][0].is_mine and board[2][2].is_mine
    assert mine_positions(board) == [(0, 0), (2, 2)]


def test_board_from_mines_rejects_outside_coordinates():
    with pytest.raises(ValueError):
        board_from_mines(3, 3, [(3, 0)])


def test_get_neighbors_in_scan_order():
    board = board_from_mines(3, 3, [])
    coords = [(n.row, n.col) for n in get_neighbors(board, 1, 1)]
    assert coords == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]


def test_replace_cells_copies_on_write():
    board = board_from_mines(3, 3, [(0, 0)])
    updated = update_cell(board, 1, 2, is_flagged=True)

    assert updated is not board
    assert updated[1][2].is_flagged
    assert not board[1][2].is_flagged
    # Untouched rows are shared between snapshots.
    assert updated[0] is board[0]
    assert updated[2] is board[2]
    assert count_flags(updated) == 1
    assert count_revealed(updated) == 0


def test_replace_cells_without_updates_returns_same_board():
    board = board_from_mines(2, 2, [])
    assert replace_cells(board, {}) is board


def test_format_board_symbols():
    board = board_from_mines(2, 3, [(0, 0)])
    board = update_cell(board, 0, 0, is_flagged=True)
    board = update_cell(board, 0, 1, is_revealed=True)

    text = format_board(board, color=False)
    lines = text.splitlines()
    assert len(lines) == 4
    assert lines[2].endswith("F  1  .")
    assert lines[3].endswith(".  .  .")

    full = format_board(board, reveal_all=True, color=False)
    assert full.splitlines()[2].endswith("M  1  0")


def test_format_board_marks_exploded_mine():
    board = board_from_mines(2, 2, [(1, 1)])
    board = update_cell(board, 1, 1, is_revealed=True, exploded=True)
    assert format_board(board, color=False).splitlines()[3].endswith(".  !")
