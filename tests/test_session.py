import random

import pytest

from minefield.board import (
    DIFFICULTIES,
    Difficulty,
    DifficultySettings,
    board_from_mines,
    iter_cells,
    mine_positions,
)
from minefield.engine import mark_exploded
from minefield.session import GameSession, GameStatus

from .helpers import with_state

EASY = DIFFICULTIES[Difficulty.EASY]


def started_session(lives=3, seed=1):
    session = GameSession(EASY, lives=lives, rng=random.Random(seed))
    session.click(4, 4)
    return session


def hidden_mine(session):
    return next(
        (cell.row, cell.col)
        for cell in iter_cells(session.board)
        if cell.is_mine and not cell.is_revealed and not cell.is_flagged
    )


def test_new_session_is_idle_with_empty_board():
    session = GameSession(EASY)
    assert session.status == GameStatus.IDLE
    assert session.lives == 3
    assert mine_positions(session.board) == []
    assert session.mines_left == 10
    assert session.hint() is None


def test_first_click_places_mines_and_starts_game():
    session = started_session()
    assert session.status == GameStatus.PLAYING
    assert len(mine_positions(session.board)) == 10
    assert session.board[4][4].is_revealed
    assert not session.board[4][4].is_mine


def test_session_rejects_bad_arguments():
    with pytest.raises(ValueError):
        GameSession(EASY, lives=0)
    session = GameSession(EASY)
    with pytest.raises(ValueError):
        session.click(9, 0)
    with pytest.raises(ValueError):
        session.toggle_flag(0, -1)


def test_mine_hit_with_lives_left_pauses_game():
    session = started_session(lives=3)
    r, c = hidden_mine(session)

    assert session.click(r, c) == GameStatus.HIT_MINE
    assert session.lives == 2
    assert session.pending_mine == (r, c)
    assert session.board[r][c].exploded
    assert session.board[r][c].is_revealed

    # Moves and hints are ignored while paused.
    before = session.board
    session.click(0, 0)
    assert session.board is before
    assert session.hint() is None

    assert session.continue_game() == GameStatus.PLAYING
    assert session.pending_mine is None

    # Clicking the exploded mine again does not cost another life.
    session.click(r, c)
    assert session.lives == 2
    assert session.status == GameStatus.PLAYING


def test_last_life_loses_and_reveals_all_mines():
    session = started_session(lives=1)
    r, c = hidden_mine(session)

    assert session.click(r, c) == GameStatus.LOST
    assert session.lives == 0
    assert session.is_over
    for cell in iter_cells(session.board):
        if cell.is_mine:
            assert cell.is_revealed
            assert cell.exploded == ((cell.row, cell.col) == (r, c))


def test_revealing_every_safe_cell_wins():
    session = started_session()
    for cell in list(iter_cells(session.board)):
        if not cell.is_mine:
            session.click(cell.row, cell.col)
    assert session.status == GameStatus.WON
    assert session.is_over

    # Finished games ignore further moves.
    assert not session.toggle_flag(*hidden_mine(session))


def test_exploded_mine_does_not_count_towards_a_win():
    # Mine at (4, 4) exploded earlier; (3, 3) and (3, 4) are the last hidden safe cells.
    hidden = {(3, 3), (3, 4), (4, 4)}
    board = board_from_mines(5, 5, [(4, 4)])
    board = with_state(board, revealed=[
        (r, c) for r in range(5) for c in range(5) if (r, c) not in hidden
    ])
    session = small_session(mark_exploded(board, 4, 4))

    assert session.click(3, 3) == GameStatus.PLAYING
    assert session.click(3, 4) == GameStatus.WON


def test_flags_toggle_and_block_reveals():
    session = started_session()
    r, c = hidden_mine(session)

    assert session.toggle_flag(r, c)
    assert session.flags_used == 1
    assert session.mines_left == 9

    assert session.click(r, c) == GameStatus.PLAYING
    assert session.lives == 3
    assert not session.board[r][c].is_revealed

    assert session.toggle_flag(r, c)
    assert session.flags_used == 0

    assert not session.toggle_flag(4, 4)


def test_flagging_before_first_click_is_allowed():
    session = GameSession(EASY, rng=random.Random(0))
    assert session.toggle_flag(0, 0)
    assert session.click(0, 0) == GameStatus.IDLE


def small_session(board, lives=3):
    settings = DifficultySettings(rows=5, cols=5, mines=1)
    session = GameSession(settings, lives=lives, rng=random.Random(0))
    session.board = board
    session.status = GameStatus.PLAYING
    return session


def test_chord_with_correct_flag_wins():
    board = with_state(board_from_mines(5, 5, [(0, 0)]), revealed=[(1, 1)], flagged=[(0, 0)])
    session = small_session(board)

    assert session.click(1, 1) == GameStatus.WON


def test_chord_with_wrong_flag_hits_mine():
    board = with_state(board_from_mines(5, 5, [(0, 0)]), revealed=[(1, 1)], flagged=[(0, 1)])
    session = small_session(board)

    assert session.click(1, 1) == GameStatus.HIT_MINE
    assert session.pending_mine == (0, 0)
    assert session.board[0][0].exploded
    assert session.lives == 2


def test_chord_with_mismatched_flags_is_ignored():
    board = with_state(board_from_mines(5, 5, [(0, 0)]), revealed=[(1, 1)])
    session = small_session(board)

    assert session.click(1, 1) == GameStatus.PLAYING
    assert session.board is board


def test_hint_is_stored_and_cleared_by_clicking_it():
    board = with_state(board_from_mines(5, 5, [(0, 0)]), revealed=[(1, 1)], flagged=[(0, 0)])
    board = with_state(board, revealed=[(0, 1)])
    session = small_session(board)

    hint = session.hint()
    assert hint is not None
    assert session.last_hint == hint
    assert hint.action == "reveal"

    session.click(hint.row, hint.col)
    assert session.last_hint is None


def test_reset_restores_idle_state():
    session = started_session()
    session.click(*hidden_mine(session))
    session.reset(DIFFICULTIES[Difficulty.MEDIUM])

    assert session.status == GameStatus.IDLE
    assert session.lives == 3
    assert session.pending_mine is None
    assert len(session.board) == 16
    assert mine_positions(session.board) == []
